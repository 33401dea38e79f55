"""
Unity iOS 导出后的 Xcode 工程后处理流程。

Unity 自行生成 Xcode 工程，无法预先配置框架与能力，只能在导出完成后
以后处理方式修改。整体流程：
1) 非 iOS 构建直接返回，不写任何文件。
2) 读取 `project.pbxproj` 并解析主 target。
3) 若资源目录里有唯一的 `dev.entitlements`，复制进工程并设置
   `CODE_SIGN_ENTITLEMENTS`；多于一个时整个流程失败。
4) 按变体链接 `UserNotifications.framework`，messaging 变体还会在
   `Info.plist` 中声明 remote-notification 后台模式（立即写回）。
5) 强制 `ENABLE_BITCODE = NO`（测试应用不提交商店）。
6) 覆盖写回 `project.pbxproj`。

失败不回滚：失败前已复制或写回的文件保持原样。
"""

from __future__ import annotations

import os

from . import xcode_project
from .capabilities import apply_variant_changes, detect_variants, normalize_variants
from .entitlements import add_entitlements
from .pipeline_utils import log_detail, log_step
from .types import BUILD_TARGET_IOS, PostprocessOptions

ENABLE_BITCODE = "ENABLE_BITCODE"


def on_postprocess_build(
    build_target: str,
    path: str,
    options: PostprocessOptions | None = None,
) -> None:
    """构建流水线导出完成后调用一次；未抛异常即视为成功。"""
    if (build_target or "").strip().lower() != BUILD_TARGET_IOS.lower():
        return

    opts = options or PostprocessOptions()
    verbose = opts.verbose

    project_path = xcode_project.project_path_for(path, opts.project_name)
    log_step(f"Loading xcode project: {project_path}")
    project = xcode_project.load_project(project_path)
    target = xcode_project.resolve_main_target(project, opts.project_name, opts.target_lookup)
    log_detail(f"Main target: {target.name} ({target.get_id()})", verbose=verbose)

    add_entitlements(
        project,
        target,
        path,
        assets_dir=opts.assets_dir,
        project_name=opts.project_name,
        verbose=verbose,
    )

    if opts.variants is None:
        variants = detect_variants(path)
    else:
        variants = normalize_variants(opts.variants)
    log_detail(f"Variants: {', '.join(sorted(variants)) or '(none)'}", verbose=verbose)
    apply_variant_changes(project, target, path, variants, verbose=verbose)

    xcode_project.set_build_property(project, target, ENABLE_BITCODE, "NO")

    xcode_project.save_project(project)
    log_step(f"Saved xcode project: {os.path.basename(os.path.dirname(project_path))}")

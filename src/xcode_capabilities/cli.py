"""
`unity-xcode-capabilities` 的命令行入口模块。

构建流水线在 Unity 导出 Xcode 工程后调用本命令，
参数整理为 `PostprocessOptions` 后交给 `on_postprocess_build`。
"""

import argparse
import os
from collections.abc import Sequence

from .pipeline_utils import log_step
from .postprocess import on_postprocess_build
from .types import (
    BUILD_TARGET_IOS,
    LOOKUP_AUTO,
    TARGET_LOOKUPS,
    UNITY_PROJECT_NAME,
    VARIANT_PATH_MARKERS,
    PostprocessOptions,
)


def build_parser() -> argparse.ArgumentParser:
    """构建并返回命令行参数解析器。"""
    p = argparse.ArgumentParser(
        prog="unity-xcode-capabilities",
        formatter_class=argparse.RawTextHelpFormatter,
        description=(
            "Post-process the Xcode project exported by Unity for iOS:\n"
            "copy dev.entitlements, link frameworks, patch Info.plist background modes\n"
            "and disable bitcode."
        ),
    )
    # 此处不设为 argparse 的 required，便于输出更可操作的缺参提示。
    p.add_argument("-p", "--path", default="", help="Exported Xcode project directory")
    p.add_argument(
        "-t",
        "--build-target",
        default=BUILD_TARGET_IOS,
        help=f"Platform that was built (default: {BUILD_TARGET_IOS}); other platforms are a no-op",
    )
    p.add_argument(
        "-a",
        "--assets-dir",
        default="",
        help="Unity Assets directory searched for dev.entitlements (default: ./Assets)",
    )
    p.add_argument(
        "--project-name",
        default=UNITY_PROJECT_NAME,
        help=f"Xcode project / app resource directory name (default: {UNITY_PROJECT_NAME})",
    )
    p.add_argument(
        "--variant",
        action="append",
        default=[],
        choices=sorted(VARIANT_PATH_MARKERS),
        help="Force a test app variant (repeatable). Default: detect from --path",
    )
    p.add_argument(
        "--target-lookup",
        default=LOOKUP_AUTO,
        choices=TARGET_LOOKUPS,
        help=(
            "How to resolve the main target:\n"
            "  auto        probe the project layout\n"
            "  main-target Unity 2019.3+ layout (application product target)\n"
            "  by-name     older layout (target named after the project)"
        ),
    )
    p.add_argument("--verbose", action="store_true", help="Verbose logging")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    """CLI 入口：解析参数、校验导出目录并执行后处理。"""
    parser = build_parser()
    ns = parser.parse_args(argv)

    def _abs(p: str) -> str:
        """将输入路径展开为绝对路径。"""
        return os.path.abspath(os.path.expanduser(p))

    if not ns.path:
        raise SystemExit(
            "Error: missing -p/--path.\n"
            "Hint: pass the directory Unity exported the Xcode project into.\n"
        )
    path = _abs(ns.path)
    if not os.path.isdir(path):
        raise SystemExit(f"Error: exported project directory not found: {path}")

    assets_dir = _abs(ns.assets_dir) if ns.assets_dir else os.path.join(os.getcwd(), "Assets")

    options = PostprocessOptions(
        assets_dir=assets_dir,
        project_name=ns.project_name or UNITY_PROJECT_NAME,
        variants=frozenset(ns.variant) if ns.variant else None,
        target_lookup=ns.target_lookup,
        verbose=bool(ns.verbose),
    )

    log_step(f"Post-processing {ns.build_target} build: {path}")
    on_postprocess_build(ns.build_target, path, options)
    return 0

from __future__ import annotations

"""
签名权限（`entitlements`）文件的查找、复制与工程登记。

entitlement 文件需事先在单独的 Xcode 工程中配置好能力后导出，
再以 `dev.entitlements` 的名字放进 Unity 工程的资源目录。
"""

import os
from collections.abc import Sequence

from pbxproj import XcodeProject

from . import xcode_project
from .pipeline_utils import copy_file, log_detail, log_step
from .types import UNITY_PROJECT_NAME

ENTITLEMENT_MARKER = "dev"
ENTITLEMENT_FILE_NAME = "dev.entitlements"
CODE_SIGN_ENTITLEMENTS = "CODE_SIGN_ENTITLEMENTS"


def find_entitlement_candidates(assets_dir: str) -> list[str]:
    """在资源目录中查找名字含 `dev` 且路径含 `dev.entitlements` 的文件。"""
    if not os.path.isdir(assets_dir):
        return []

    out: list[str] = []
    for root, _dirs, files in os.walk(assets_dir):
        for name in files:
            # `.meta` 是 Unity 的附属文件，不算资源。
            if name.endswith(".meta"):
                continue
            if ENTITLEMENT_MARKER not in name:
                continue
            p = os.path.join(root, name)
            if ENTITLEMENT_FILE_NAME in p:
                out.append(p)
    out.sort()
    return out


def select_entitlement(candidates: Sequence[str]) -> str:
    """从候选中选出唯一的 entitlement；没有则返回空串，多个则报错。"""
    if not candidates:
        return ""
    if len(candidates) > 1:
        found = "\n  - ".join(candidates)
        raise SystemExit(
            "Error: multiple entitlements found; refusing to pick one.\n"
            f"  - {found}\n"
            f"Keep exactly one {ENTITLEMENT_FILE_NAME} under the assets directory."
        )
    return candidates[0]


def add_entitlements(
    project: XcodeProject,
    target,
    path: str,
    *,
    assets_dir: str,
    project_name: str = UNITY_PROJECT_NAME,
    verbose: bool = False,
) -> str:
    """复制 entitlement 到导出目录并登记到主 target，返回工程内相对路径。"""
    candidates = find_entitlement_candidates(assets_dir)
    entitlement_path = select_entitlement(candidates)
    # 只有部分 API 需要 entitlement，找不到不算错误。
    if not entitlement_path:
        log_step("No entitlement file found.")
        return ""
    log_step(f"Entitlement file found: {entitlement_path}")

    file_name = os.path.basename(entitlement_path)
    relative_destination = f"{project_name}/{file_name}"
    copy_file(entitlement_path, os.path.join(path, relative_destination), verbose=verbose)
    xcode_project.add_file(project, relative_destination)
    # 仅登记文件不够，还需让构建设置指向它。
    xcode_project.set_build_property(project, target, CODE_SIGN_ENTITLEMENTS, relative_destination)
    log_detail(f"{CODE_SIGN_ENTITLEMENTS} = {relative_destination}", verbose=verbose)
    log_step("Added entitlement to xcode project.")
    return relative_destination

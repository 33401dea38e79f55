"""
按示例应用变体修补工程能力：链接系统框架、声明后台模式。
"""

from __future__ import annotations

import os
from collections.abc import Iterable

from pbxproj import XcodeProject

from . import xcode_project
from .pipeline_utils import log_detail, log_step
from .plist_edit import array_add_string, load_plist, plist_format, save_plist
from .types import VARIANT_AUTH, VARIANT_MESSAGING, VARIANT_PATH_MARKERS

USER_NOTIFICATIONS_FRAMEWORK = "UserNotifications.framework"
BACKGROUND_MODES_KEY = "UIBackgroundModes"
REMOTE_NOTIFICATION_MODE = "remote-notification"


def detect_variants(path: str) -> frozenset[str]:
    """按输出路径子串识别变体；两个变体可能同时命中。"""
    return frozenset(v for v, marker in VARIANT_PATH_MARKERS.items() if marker in path)


def normalize_variants(variants: Iterable[str]) -> frozenset[str]:
    """校验显式指定的变体名。"""
    out = frozenset(v.strip().lower() for v in variants)
    unknown = sorted(out - set(VARIANT_PATH_MARKERS))
    if unknown:
        raise SystemExit(
            f"Error: unknown variant: {', '.join(unknown)}. "
            f"Expected one of: {', '.join(sorted(VARIANT_PATH_MARKERS))}"
        )
    return out


def add_framework(project: XcodeProject, target, framework: str, *, verbose: bool = False) -> None:
    log_step(f"Adding framework to xcode project: {framework}.")
    added = xcode_project.add_framework(project, target, framework)
    if not added:
        log_detail(f"{framework} already linked by {target.name}", verbose=verbose)
    log_step("Finished adding framework.")


def enable_remote_notification(path: str, *, verbose: bool = False) -> None:
    """在 `Info.plist` 的后台模式数组里追加 remote-notification 并立即写回。"""
    log_step(f"Adding {REMOTE_NOTIFICATION_MODE} to {BACKGROUND_MODES_KEY}")
    plist_path = os.path.join(path, "Info.plist")
    fmt = plist_format(plist_path)
    info = load_plist(plist_path)
    array_add_string(info, BACKGROUND_MODES_KEY, REMOTE_NOTIFICATION_MODE)
    save_plist(plist_path, info, fmt)
    log_detail(f"{BACKGROUND_MODES_KEY} = {info[BACKGROUND_MODES_KEY]}", verbose=verbose)
    log_step(f"Finished adding {REMOTE_NOTIFICATION_MODE}.")


def make_changes_for_messaging(
    project: XcodeProject, target, path: str, *, verbose: bool = False
) -> None:
    log_step("Messaging testapp detected.")
    add_framework(project, target, USER_NOTIFICATIONS_FRAMEWORK, verbose=verbose)
    enable_remote_notification(path, verbose=verbose)
    log_step("Finished making messaging-specific changes.")


def make_changes_for_auth(project: XcodeProject, target, *, verbose: bool = False) -> None:
    log_step("Auth testapp detected.")
    add_framework(project, target, USER_NOTIFICATIONS_FRAMEWORK, verbose=verbose)
    log_step("Finished making auth-specific changes.")


def apply_variant_changes(
    project: XcodeProject,
    target,
    path: str,
    variants: Iterable[str],
    *,
    verbose: bool = False,
) -> None:
    """依次执行 messaging 与 auth 的修改，两者互不排斥。"""
    selected = set(variants)
    if VARIANT_MESSAGING in selected:
        make_changes_for_messaging(project, target, path, verbose=verbose)
    if VARIANT_AUTH in selected:
        make_changes_for_auth(project, target, verbose=verbose)

"""
Unity 导出的 Xcode 工程（`project.pbxproj`）读写与修改工具。

所有修改都通过 `pbxproj` 库的对象模型完成，写回时覆盖原文件。
"""

from __future__ import annotations

import os

from pbxproj import XcodeProject
from pbxproj.pbxextensions import FileOptions
from pbxproj.pbxsections import PBXBuildFile

from .types import (
    LOOKUP_AUTO,
    LOOKUP_BY_NAME,
    LOOKUP_MAIN_TARGET,
    TARGET_LOOKUPS,
    UNITY_FRAMEWORK_TARGET,
    UNITY_PROJECT_NAME,
)

_APPLICATION_PRODUCT = "com.apple.product-type.application"
_SYSTEM_FRAMEWORKS_DIR = "System/Library/Frameworks"
_TREE_SDKROOT = "SDKROOT"
_TREE_SOURCE_ROOT = "SOURCE_ROOT"


def project_path_for(path: str, project_name: str = UNITY_PROJECT_NAME) -> str:
    """由导出目录推导 `project.pbxproj` 路径。"""
    return os.path.join(path, f"{project_name}.xcodeproj", "project.pbxproj")


def load_project(project_path: str) -> XcodeProject:
    """解析工程文件；文件缺失或格式错误时由底层异常直接抛出。"""
    return XcodeProject.load(project_path)


def save_project(project: XcodeProject) -> None:
    """覆盖写回读取时的同一路径。"""
    project.save()


def _native_targets(project: XcodeProject) -> list:
    return [t for t in project.objects.get_targets() if t.isa == "PBXNativeTarget"]


def _has_target(project: XcodeProject, name: str) -> bool:
    return any(t.name == name for t in project.objects.get_targets())


def _main_target_from_product_type(project: XcodeProject, project_name: str):
    """2019.3+ 布局：取产物类型为应用的 target，多个时按工程名消歧。"""
    apps = [t for t in _native_targets(project) if t["productType"] == _APPLICATION_PRODUCT]
    if len(apps) == 1:
        return apps[0]
    for target in apps:
        if target.name == project_name:
            return target
    return None


def _main_target_by_name(project: XcodeProject, project_name: str):
    """旧布局：主 target 与工程同名。"""
    for target in project.objects.get_targets(project_name):
        return target
    return None


def resolve_main_target(
    project: XcodeProject,
    project_name: str = UNITY_PROJECT_NAME,
    lookup: str = LOOKUP_AUTO,
):
    """解析主构建 target；两种查找方式应得到同一个逻辑 target。"""
    if lookup not in TARGET_LOOKUPS:
        raise SystemExit(
            f"Error: unknown target lookup: {lookup}. Expected one of: {', '.join(TARGET_LOOKUPS)}"
        )

    if lookup == LOOKUP_AUTO:
        # 存在 UnityFramework target 即为 2019.3+ 的工程结构。
        lookup = LOOKUP_MAIN_TARGET if _has_target(project, UNITY_FRAMEWORK_TARGET) else LOOKUP_BY_NAME

    if lookup == LOOKUP_MAIN_TARGET:
        target = _main_target_from_product_type(project, project_name)
    else:
        target = _main_target_by_name(project, project_name)

    if target is None:
        found = ", ".join(t.name for t in project.objects.get_targets()) or "(none)"
        raise SystemExit(
            f"Error: main target not found (lookup: {lookup}, project: {project_name}). "
            f"Available targets: {found}"
        )
    return target


def set_build_property(project: XcodeProject, target, name: str, value: str) -> None:
    """在 target 的全部构建配置上设置同一构建属性。"""
    project.set_flags(name, value, target_name=target.name)


def get_build_properties(project: XcodeProject, target, name: str) -> list:
    """返回 target 各构建配置上该属性的取值（缺失为 `None`）。"""
    return [
        conf.buildSettings[name]
        for conf in project.objects.get_configurations_on_targets(target.name)
    ]


def _file_ref_name(file_ref) -> str:
    name = file_ref["name"]
    if name:
        return name
    return os.path.basename(file_ref["path"] or "")


def target_links_framework(project: XcodeProject, target, framework: str) -> bool:
    """判断 target 的 Frameworks 构建阶段是否已引用该框架。"""
    for phase_id in target["buildPhases"] or []:
        phase = project.objects[phase_id]
        if phase.isa != "PBXFrameworksBuildPhase":
            continue
        for build_file_id in phase["files"] or []:
            file_ref_id = project.objects[build_file_id]["fileRef"]
            if file_ref_id and _file_ref_name(project.objects[file_ref_id]) == framework:
                return True
    return False


def add_framework(project: XcodeProject, target, framework: str) -> bool:
    """将系统框架以必需方式加入 target 的链接依赖；已链接时不做修改，返回是否新增。

    其他 target（如 UnityFramework）已引用同一 SDK 框架时复用其文件引用，
    只为当前 target 新增构建文件。
    """
    if target_links_framework(project, target, framework):
        return False

    framework_path = f"{_SYSTEM_FRAMEWORKS_DIR}/{framework}"
    existing = project.get_files_by_path(framework_path, tree=_TREE_SDKROOT)
    if existing:
        build_file = PBXBuildFile.create(existing[0])
        project.objects[build_file.get_id()] = build_file
        phases = [
            project.objects[phase_id]
            for phase_id in target["buildPhases"] or []
            if project.objects[phase_id].isa == "PBXFrameworksBuildPhase"
        ]
        if not phases:
            phases = target.get_or_create_build_phase("PBXFrameworksBuildPhase")
        for phase in phases:
            phase.add_build_file(build_file)
        return True

    group = project.get_or_create_group("Frameworks")
    project.add_file(
        framework_path,
        parent=group,
        tree=_TREE_SDKROOT,
        target_name=target.name,
        force=True,
        file_options=FileOptions(weak=False, embed_framework=False),
    )
    return True


def add_file(project: XcodeProject, relative_path: str) -> None:
    """以 SOURCE_ROOT 为根登记文件引用，不加入任何构建阶段；已登记时跳过。"""
    if project.get_files_by_path(relative_path, tree=_TREE_SOURCE_ROOT):
        return
    project.add_file(
        relative_path,
        tree=_TREE_SOURCE_ROOT,
        force=False,
        file_options=FileOptions(create_build_files=False, ignore_unknown_type=True),
    )

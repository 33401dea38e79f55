"""
后处理流程共享的轻量类型与常量定义。
"""

from dataclasses import dataclass

# 仅处理 iOS 导出；其他平台的回调直接跳过。
BUILD_TARGET_IOS = "iOS"

# iOS Resolver 约定的工程名：既是 `.xcodeproj` 名，也是应用资源子目录名。
UNITY_PROJECT_NAME = "Unity-iPhone"
UNITY_FRAMEWORK_TARGET = "UnityFramework"

VARIANT_MESSAGING = "messaging"
VARIANT_AUTH = "auth"

# 输出路径中用于识别示例应用的子串。
VARIANT_PATH_MARKERS = {
    VARIANT_MESSAGING: "FirebaseMessaging",
    VARIANT_AUTH: "FirebaseAuth",
}

LOOKUP_AUTO = "auto"
LOOKUP_MAIN_TARGET = "main-target"
LOOKUP_BY_NAME = "by-name"
TARGET_LOOKUPS = (LOOKUP_AUTO, LOOKUP_MAIN_TARGET, LOOKUP_BY_NAME)


@dataclass(frozen=True)
class PostprocessOptions:
    """一次后处理调用的全部输入选项。"""

    # Unity 工程的资源目录（`Assets/`），用于搜索 entitlement 文件。
    assets_dir: str = "Assets"
    project_name: str = UNITY_PROJECT_NAME
    # `None` 表示按输出路径子串自动识别变体。
    variants: frozenset[str] | None = None
    # `target_lookup` 主 target 解析方式：
    # - `auto`：按工程结构探测。
    # - `main-target`：2019.3+ 布局，取应用类型的 target。
    # - `by-name`：旧布局，按工程名查找。
    target_lookup: str = LOOKUP_AUTO
    verbose: bool = False

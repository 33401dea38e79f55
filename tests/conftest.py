import plistlib
from pathlib import Path

import pytest

_UNITY_FRAMEWORK_OBJECTS = {
    "PBXFileReference": """
		A10000000000000000000031 /* UnityFramework.framework */ = {isa = PBXFileReference; explicitFileType = wrapper.framework; includeInIndex = 0; path = UnityFramework.framework; sourceTree = BUILT_PRODUCTS_DIR; };
""",
    "PBXFrameworksBuildPhase": """
		A10000000000000000000021 /* Frameworks */ = {
			isa = PBXFrameworksBuildPhase;
			buildActionMask = 2147483647;
			files = (
			);
			runOnlyForDeploymentPostprocessing = 0;
		};
""",
    "PBXNativeTarget": """
		A10000000000000000000020 /* UnityFramework */ = {
			isa = PBXNativeTarget;
			buildConfigurationList = A10000000000000000000024 /* Build configuration list for PBXNativeTarget "UnityFramework" */;
			buildPhases = (
				A10000000000000000000021 /* Frameworks */,
			);
			buildRules = (
			);
			dependencies = (
			);
			name = UnityFramework;
			productName = UnityFramework;
			productReference = A10000000000000000000031 /* UnityFramework.framework */;
			productType = "com.apple.product-type.framework";
		};
""",
    "XCBuildConfiguration": """
		A10000000000000000000025 /* Debug */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				ENABLE_BITCODE = YES;
				PRODUCT_NAME = UnityFramework;
			};
			name = Debug;
		};
		A10000000000000000000026 /* Release */ = {
			isa = XCBuildConfiguration;
			buildSettings = {
				ENABLE_BITCODE = YES;
				PRODUCT_NAME = UnityFramework;
			};
			name = Release;
		};
""",
    "XCConfigurationList": """
		A10000000000000000000024 /* Build configuration list for PBXNativeTarget "UnityFramework" */ = {
			isa = XCConfigurationList;
			buildConfigurations = (
				A10000000000000000000025 /* Debug */,
				A10000000000000000000026 /* Release */,
			);
			defaultConfigurationIsVisible = 0;
			defaultConfigurationName = Release;
		};
""",
}


def _unity_pbxproj(*, modern: bool) -> str:
    """生成 Unity 导出工程的最小 `project.pbxproj` 文本。"""
    extra = _UNITY_FRAMEWORK_OBJECTS if modern else {}
    framework_product = (
        "\n\t\t\t\tA10000000000000000000031 /* UnityFramework.framework */," if modern else ""
    )
    framework_target = (
        "\n\t\t\t\tA10000000000000000000020 /* UnityFramework */," if modern else ""
    )
    return f"""// !$*UTF8*$!
{{
	archiveVersion = 1;
	classes = {{
	}};
	objectVersion = 51;
	objects = {{

/* Begin PBXFileReference section */
		A10000000000000000000030 /* ProductName.app */ = {{isa = PBXFileReference; explicitFileType = wrapper.application; includeInIndex = 0; path = ProductName.app; sourceTree = BUILT_PRODUCTS_DIR; }};{extra.get("PBXFileReference", "")}
/* End PBXFileReference section */

/* Begin PBXFrameworksBuildPhase section */
		A10000000000000000000011 /* Frameworks */ = {{
			isa = PBXFrameworksBuildPhase;
			buildActionMask = 2147483647;
			files = (
			);
			runOnlyForDeploymentPostprocessing = 0;
		}};{extra.get("PBXFrameworksBuildPhase", "")}
/* End PBXFrameworksBuildPhase section */

/* Begin PBXGroup section */
		A10000000000000000000003 = {{
			isa = PBXGroup;
			children = (
				A10000000000000000000005 /* Frameworks */,
				A10000000000000000000004 /* Products */,
			);
			sourceTree = "<group>";
		}};
		A10000000000000000000004 /* Products */ = {{
			isa = PBXGroup;
			children = (
				A10000000000000000000030 /* ProductName.app */,{framework_product}
			);
			name = Products;
			sourceTree = "<group>";
		}};
		A10000000000000000000005 /* Frameworks */ = {{
			isa = PBXGroup;
			children = (
			);
			name = Frameworks;
			sourceTree = "<group>";
		}};
/* End PBXGroup section */

/* Begin PBXNativeTarget section */
		A10000000000000000000010 /* Unity-iPhone */ = {{
			isa = PBXNativeTarget;
			buildConfigurationList = A10000000000000000000014 /* Build configuration list for PBXNativeTarget "Unity-iPhone" */;
			buildPhases = (
				A10000000000000000000013 /* Sources */,
				A10000000000000000000012 /* Resources */,
				A10000000000000000000011 /* Frameworks */,
			);
			buildRules = (
			);
			dependencies = (
			);
			name = "Unity-iPhone";
			productName = "Unity-iPhone";
			productReference = A10000000000000000000030 /* ProductName.app */;
			productType = "com.apple.product-type.application";
		}};{extra.get("PBXNativeTarget", "")}
/* End PBXNativeTarget section */

/* Begin PBXProject section */
		A10000000000000000000001 /* Project object */ = {{
			isa = PBXProject;
			attributes = {{
			}};
			buildConfigurationList = A10000000000000000000002 /* Build configuration list for PBXProject "Unity-iPhone" */;
			compatibilityVersion = "Xcode 3.2";
			developmentRegion = en;
			hasScannedForEncodings = 0;
			knownRegions = (
				en,
			);
			mainGroup = A10000000000000000000003;
			productRefGroup = A10000000000000000000004 /* Products */;
			projectDirPath = "";
			projectRoot = "";
			targets = (
				A10000000000000000000010 /* Unity-iPhone */,{framework_target}
			);
		}};
/* End PBXProject section */

/* Begin PBXResourcesBuildPhase section */
		A10000000000000000000012 /* Resources */ = {{
			isa = PBXResourcesBuildPhase;
			buildActionMask = 2147483647;
			files = (
			);
			runOnlyForDeploymentPostprocessing = 0;
		}};
/* End PBXResourcesBuildPhase section */

/* Begin PBXSourcesBuildPhase section */
		A10000000000000000000013 /* Sources */ = {{
			isa = PBXSourcesBuildPhase;
			buildActionMask = 2147483647;
			files = (
			);
			runOnlyForDeploymentPostprocessing = 0;
		}};
/* End PBXSourcesBuildPhase section */

/* Begin XCBuildConfiguration section */
		A10000000000000000000006 /* Debug */ = {{
			isa = XCBuildConfiguration;
			buildSettings = {{
				SDKROOT = iphoneos;
			}};
			name = Debug;
		}};
		A10000000000000000000007 /* Release */ = {{
			isa = XCBuildConfiguration;
			buildSettings = {{
				SDKROOT = iphoneos;
			}};
			name = Release;
		}};
		A10000000000000000000015 /* Debug */ = {{
			isa = XCBuildConfiguration;
			buildSettings = {{
				ENABLE_BITCODE = YES;
				PRODUCT_NAME = ProductName;
			}};
			name = Debug;
		}};
		A10000000000000000000016 /* Release */ = {{
			isa = XCBuildConfiguration;
			buildSettings = {{
				ENABLE_BITCODE = YES;
				PRODUCT_NAME = ProductName;
			}};
			name = Release;
		}};{extra.get("XCBuildConfiguration", "")}
/* End XCBuildConfiguration section */

/* Begin XCConfigurationList section */
		A10000000000000000000002 /* Build configuration list for PBXProject "Unity-iPhone" */ = {{
			isa = XCConfigurationList;
			buildConfigurations = (
				A10000000000000000000006 /* Debug */,
				A10000000000000000000007 /* Release */,
			);
			defaultConfigurationIsVisible = 0;
			defaultConfigurationName = Release;
		}};
		A10000000000000000000014 /* Build configuration list for PBXNativeTarget "Unity-iPhone" */ = {{
			isa = XCConfigurationList;
			buildConfigurations = (
				A10000000000000000000015 /* Debug */,
				A10000000000000000000016 /* Release */,
			);
			defaultConfigurationIsVisible = 0;
			defaultConfigurationName = Release;
		}};{extra.get("XCConfigurationList", "")}
/* End XCConfigurationList section */
	}};
	rootObject = A10000000000000000000001 /* Project object */;
}}
"""


def write_unity_export(export_dir: Path, *, modern: bool = True, info: dict | None = None) -> Path:
    """在 `export_dir` 下写出 Unity 导出的 Xcode 工程与 `Info.plist`。"""
    proj_dir = export_dir / "Unity-iPhone.xcodeproj"
    proj_dir.mkdir(parents=True, exist_ok=True)
    (export_dir / "Unity-iPhone").mkdir(exist_ok=True)
    pbxproj = proj_dir / "project.pbxproj"
    pbxproj.write_text(_unity_pbxproj(modern=modern), encoding="utf-8")

    if info is None:
        info = {
            "CFBundleIdentifier": "com.google.firebase.unity.testapp",
            "CFBundlePackageType": "APPL",
        }
    (export_dir / "Info.plist").write_bytes(plistlib.dumps(info))
    return pbxproj


def snapshot_tree(root: Path) -> dict[str, bytes]:
    return {str(p.relative_to(root)): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


@pytest.fixture
def export_dir(tmp_path) -> Path:
    d = tmp_path / "FirebaseMessaging" / "ios_build"
    write_unity_export(d)
    return d


@pytest.fixture
def assets_dir(tmp_path) -> Path:
    d = tmp_path / "UnityProject" / "Assets"
    d.mkdir(parents=True)
    return d

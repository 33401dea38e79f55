"""
`Info.plist` 读写与数组追加工具。

设计原则：
- 写回时保持原文件格式（XML 或 Binary）与键顺序。
- 只做追加，不删除已有键。
"""

from __future__ import annotations

import plistlib
from typing import Any

_BINARY_MAGIC = b"bplist00"


def load_plist(path: str) -> Any:
    """从磁盘读取 plist（自动识别 XML/Binary）并返回对象。"""
    with open(path, "rb") as f:
        return plistlib.load(f)


def plist_format(path: str) -> plistlib.PlistFormat:
    """根据文件头判断 plist 格式。"""
    with open(path, "rb") as f:
        head = f.read(len(_BINARY_MAGIC))
    return plistlib.FMT_BINARY if head == _BINARY_MAGIC else plistlib.FMT_XML


def save_plist(path: str, obj: Any, fmt: plistlib.PlistFormat = plistlib.FMT_XML) -> None:
    """按指定格式将对象写回磁盘。"""
    data = plistlib.dumps(obj, fmt=fmt, sort_keys=False)
    with open(path, "wb") as f:
        f.write(data)


def _get_or_create_array(root: Any, key: str) -> list:
    """获取或创建顶层数组节点，不是数组时抛出类型错误。"""
    if not isinstance(root, dict):
        raise TypeError("plist root is not a dict")
    if not key:
        raise ValueError("empty key")
    if key not in root or root[key] is None:
        root[key] = []
    if not isinstance(root[key], list):
        raise TypeError(f"target is not an array: {key}")
    return root[key]


def array_add_string(root: Any, key: str, value: str) -> None:
    """向目标数组追加一个字符串元素（不去重）。"""
    arr = _get_or_create_array(root, key)
    arr.append(value)

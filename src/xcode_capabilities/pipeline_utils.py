from __future__ import annotations

"""
流程通用工具：进度输出与文件复制。
"""

import os
import shutil

LOG_PREFIX = "[xcode-capabilities]"


def log_step(message: str) -> None:
    """输出简洁的流程阶段提示。"""
    print(f"{LOG_PREFIX} {message}")


def log_detail(message: str, *, verbose: bool = False) -> None:
    """仅在 verbose 模式下输出细节。"""
    if verbose:
        print(f"{LOG_PREFIX}   {message}")


def copy_file(src: str, dst: str, *, verbose: bool = False) -> None:
    """复制单个文件，必要时创建目标目录；已存在的目标文件会被覆盖。"""
    log_detail(f"+ cp {src} {dst}", verbose=verbose)
    parent = os.path.dirname(dst)
    if parent:
        os.makedirs(parent, exist_ok=True)
    shutil.copyfile(src, dst)

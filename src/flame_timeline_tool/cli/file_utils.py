"""
文件处理工具模块
"""

import os
from pathlib import Path

TRACE_SUFFIXES = ('.json', '.json.gz')


def validate_input_file(file_path: str) -> Path:
    """
    检查输入 trace 文件

    Args:
        file_path: 文件路径

    Returns:
        Path: 文件路径

    Raises:
        ValueError: 文件不存在或不是 JSON 文件
    """
    if not os.path.isfile(file_path):
        raise ValueError(f"文件不存在: {file_path}")

    if not file_path.lower().endswith(TRACE_SUFFIXES):
        raise ValueError(f"文件不是 JSON 格式: {file_path}")

    return Path(file_path)


def output_base_name(file_path: Path) -> str:
    """输出文件的基础名称，去掉 .json / .json.gz 后缀"""
    name = file_path.name
    for suffix in sorted(TRACE_SUFFIXES, key=len, reverse=True):
        if name.lower().endswith(suffix):
            return name[:-len(suffix)]
    return file_path.stem

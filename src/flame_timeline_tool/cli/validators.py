# -*- coding: utf-8 -*-
"""
CLI验证器模块
"""

from typing import List

VALID_OUTPUT_FORMATS = ('json', 'csv', 'xlsx', 'png')


def validate_output_formats(format_spec: str) -> List[str]:
    """
    验证输出格式组合

    Args:
        format_spec: 逗号分隔的输出格式，例如 "json,xlsx"

    Returns:
        List[str]: 去重后的格式列表，保持输入顺序

    Raises:
        ValueError: 如果格式为空或不支持
    """
    if not format_spec or not format_spec.strip():
        raise ValueError("输出格式不能为空")

    formats = []
    for fmt in format_spec.split(','):
        fmt = fmt.strip().lower()
        if not fmt:
            raise ValueError("输出格式不能为空字符串")
        if fmt not in VALID_OUTPUT_FORMATS:
            raise ValueError(f"不支持的输出格式: {fmt}。支持的格式: {', '.join(VALID_OUTPUT_FORMATS)}")
        if fmt not in formats:
            formats.append(fmt)
    return formats

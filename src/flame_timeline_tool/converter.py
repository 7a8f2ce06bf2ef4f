# -*- coding: utf-8 -*-
"""
转换流程：原始事件 -> 调用栈快照 -> 区间 -> 时间线文档
"""

from pathlib import Path
from typing import Iterable, Union
import logging

from .models import TimelineDocument, TraceEvent
from .stack_reconstructor import reconstruct_stacks
from .interval_builder import IntervalBuilder
from .tables import FrameTable, StringTable
from .parser import parse_trace_file

logger = logging.getLogger(__name__)


def convert_events(events: Iterable[TraceEvent]) -> TimelineDocument:
    """
    将事件序列转换为时间线文档

    Args:
        events: 按时间排序的原始事件

    Returns:
        TimelineDocument: 转换结果
    """
    snapshots_by_context = reconstruct_stacks(events)

    document = TimelineDocument()
    frame_table = FrameTable()
    builder = IntervalBuilder(frame_table, document.time_range)
    document.threads = builder.build_all(snapshots_by_context)

    # 栈帧表必须先于字符串表导出
    string_table = StringTable()
    document.frames = frame_table.export(string_table)
    document.strings = string_table.export()

    logger.info(
        f"生成 {len(document.threads)} 个线程, {document.total_intervals} 个区间, "
        f"{len(document.frames)} 个栈帧, {len(document.strings)} 个字符串"
    )
    return document


def convert_trace_file(file_path: Union[str, Path]) -> TimelineDocument:
    """读取 trace 文件并转换为时间线文档"""
    return convert_events(parse_trace_file(file_path))

# -*- coding: utf-8 -*-
"""
将调用栈快照转换为带边界的时间区间
"""

from typing import Dict, List, Optional, Sequence
import logging

from .models import Frame, IntervalEvent, StackSnapshot, TimeRange
from .tables import FrameTable

logger = logging.getLogger(__name__)

THREAD_LABEL_PREFIX = 'G'


def thread_label(context_id: int) -> str:
    """上下文 id 对应的线程标签，例如 G1"""
    return f"{THREAD_LABEL_PREFIX}{context_id}"


class IntervalBuilder:
    """区间构建器，构建过程中填充栈帧表并更新全局时间范围"""

    def __init__(self, frame_table: FrameTable, time_range: Optional[TimeRange] = None):
        self.frame_table = frame_table
        self.time_range = time_range if time_range is not None else TimeRange()

    def build(self, snapshots: Sequence[StackSnapshot]) -> List[IntervalEvent]:
        """
        为单个上下文构建区间

        Args:
            snapshots: 该上下文按时间排序的快照序列

        Returns:
            List[IntervalEvent]: 区间列表，空栈的快照不产生区间
        """
        intervals = []
        for i, snapshot in enumerate(snapshots):
            if not snapshot.stack:
                continue

            interval = IntervalEvent(start_ns=snapshot.time_ns, label=snapshot.stack[0])
            # 最后一个快照没有后继，end_ns 保持为 0
            if i + 1 < len(snapshots):
                interval.end_ns = snapshots[i + 1].time_ns
                interval.bounded = True
                if interval.end_ns > self.time_range.end_ns:
                    self.time_range.end_ns = interval.end_ns

            for method in snapshot.stack[1:]:
                interval.stack.append(self.frame_table.lookup(Frame(method=method)))
            intervals.append(interval)
        return intervals

    def build_all(self, snapshots_by_context: Dict[int, Sequence[StackSnapshot]]) -> Dict[str, List[IntervalEvent]]:
        """
        为所有上下文构建区间

        Args:
            snapshots_by_context: 上下文 id -> 快照序列

        Returns:
            Dict[str, List[IntervalEvent]]: 线程标签 -> 区间列表
        """
        threads = {}
        for context_id in sorted(snapshots_by_context):
            intervals = self.build(snapshots_by_context[context_id])
            if not intervals:
                logger.debug(f"上下文 {context_id} 没有非空调用栈，跳过")
                continue
            threads[thread_label(context_id)] = intervals
            logger.debug(f"上下文 {context_id} 生成 {len(intervals)} 个区间")
        return threads

# -*- coding: utf-8 -*-
"""
Trace 时间线数据模型定义
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Tuple

PHASE_BEGIN = 'B'
PHASE_END = 'E'

FORMAT_VERSION = '1.2'


@dataclass
class TraceEvent:
    """原始 trace 事件数据模型（Chrome trace 格式）"""
    name: str
    ph: str
    ts: float
    pid: int
    tid: int = 0
    args: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_begin(self) -> bool:
        """判断是否为区间开始事件"""
        return self.ph == PHASE_BEGIN

    @property
    def is_end(self) -> bool:
        """判断是否为区间结束事件"""
        return self.ph == PHASE_END

    @property
    def is_stack_event(self) -> bool:
        """只有 B/E 事件参与调用栈重建"""
        return self.is_begin or self.is_end


@dataclass(frozen=True)
class StackSnapshot:
    """某一时刻某个执行上下文的完整调用栈（最外层在前）"""
    time_ns: int
    stack: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Frame:
    """栈帧描述，所有字段都参与相等性比较"""
    filename: str = ''
    package: str = ''
    class_name: str = ''
    method: str = ''
    line: int = 0


@dataclass
class IntervalEvent:
    """时间线中的一个区间"""
    start_ns: int
    label: str
    end_ns: int = 0
    stack: List[int] = field(default_factory=list)
    # 有后继快照时为 True；开放区间的 end_ns 保持为 0，不参与序列化
    bounded: bool = field(default=False, compare=False)

    def to_dict(self) -> Dict[str, Any]:
        """转换为输出格式"""
        return {
            'startNs': self.start_ns,
            'endNs': self.end_ns,
            'label': self.label,
            'stack': list(self.stack),
        }


@dataclass
class TimeRange:
    """全局时间范围"""
    start_ns: int = 0
    end_ns: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {'startNs': self.start_ns, 'endNs': self.end_ns}


@dataclass
class TimelineDocument:
    """最终输出文档"""
    threads: Dict[str, List[IntervalEvent]] = field(default_factory=dict)
    time_range: TimeRange = field(default_factory=TimeRange)
    frames: List[List[int]] = field(default_factory=list)
    strings: List[str] = field(default_factory=list)
    version: str = FORMAT_VERSION

    @property
    def total_intervals(self) -> int:
        """区间总数"""
        return sum(len(intervals) for intervals in self.threads.values())

    def frame_method(self, frame_idx: int) -> str:
        """根据栈帧索引解析出方法名"""
        method_idx = self.frames[frame_idx][3]
        return self.strings[method_idx]

    def to_dict(self) -> Dict[str, Any]:
        """转换为可直接序列化为 JSON 的字典"""
        return {
            'threads': {
                thread: [interval.to_dict() for interval in intervals]
                for thread, intervals in self.threads.items()
            },
            'timeRange': self.time_range.to_dict(),
            'frames': [list(row) for row in self.frames],
            'strings': list(self.strings),
            'version': self.version,
        }

"""
时间工具函数
"""

import logging

logger = logging.getLogger(__name__)


def micros_to_nanos(ts: float) -> int:
    """
    将微秒时间戳转换为纳秒整数

    Args:
        ts: 微秒时间戳（trace 中的 ts 字段）

    Returns:
        int: 纳秒时间戳
    """
    # 先截断到整微秒再放大，同一微秒内的事件合并到同一个快照
    return int(ts) * 1000


def nanos_to_millis(nanoseconds: int) -> float:
    """纳秒转换为毫秒（用于图表坐标轴）"""
    return nanoseconds / 1_000_000.0

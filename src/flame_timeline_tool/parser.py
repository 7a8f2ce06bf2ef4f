"""
Chrome trace JSON 解析器
"""

import json
import gzip
import math
from pathlib import Path
from typing import Dict, List, Any, Optional, Union
import logging

from .models import TraceEvent

logger = logging.getLogger(__name__)


def _parse_event(event_data: Any) -> Optional[TraceEvent]:
    """
    解析单个事件

    Args:
        event_data: 事件数据字典

    Returns:
        TraceEvent: 解析后的事件对象，如果解析失败返回 None
    """
    if not isinstance(event_data, dict):
        logger.warning(f"跳过非对象事件: {event_data!r}")
        return None

    try:
        name = event_data.get('name') or ''
        ph = event_data.get('ph') or ''
        ts = float(event_data.get('ts') or 0.0)
        pid = int(event_data.get('pid') or 0)
        tid = int(event_data.get('tid') or 0)
        args = event_data.get('args') or {}
    except (TypeError, ValueError, OverflowError) as e:
        logger.warning(f"解析事件失败: {e}")
        return None

    # json 模块接受 NaN / Infinity，这类时间戳无法转换为纳秒
    if not math.isfinite(ts):
        logger.warning(f"跳过时间戳无效的事件: ts={ts!r}")
        return None

    return TraceEvent(name=str(name), ph=str(ph), ts=ts, pid=pid, tid=tid, args=args)


def _extract_raw_events(data: Any) -> List[Dict[str, Any]]:
    """支持两种顶层格式：事件数组，或带 traceEvents 字段的对象"""
    if isinstance(data, list):
        return data
    if isinstance(data, dict) and isinstance(data.get('traceEvents'), list):
        return data['traceEvents']
    raise ValueError("不支持的 trace 格式: 顶层必须是事件数组或包含 traceEvents 数组的对象")


def parse_events(raw_events: List[Any]) -> List[TraceEvent]:
    """解析原始事件列表，无法解析的事件被跳过"""
    events = []
    for raw_event in raw_events:
        event = _parse_event(raw_event)
        if event is not None:
            events.append(event)

    skipped = len(raw_events) - len(events)
    if skipped:
        logger.warning(f"跳过 {skipped} 个无法解析的事件")
    return events


def parse_trace_data(data: Union[bytes, str]) -> List[TraceEvent]:
    """
    解析内存中的 trace JSON 数据

    Args:
        data: JSON 文本或字节

    Returns:
        List[TraceEvent]: 事件列表

    Raises:
        ValueError: JSON 无效或顶层格式不支持
    """
    try:
        loaded = json.loads(data)
    except json.JSONDecodeError as e:
        raise ValueError(f"无效的 JSON: {e}") from e
    return parse_events(_extract_raw_events(loaded))


def parse_trace_file(file_path: Union[str, Path]) -> List[TraceEvent]:
    """
    解析 trace JSON 文件，.gz 文件自动解压

    Args:
        file_path: JSON 文件路径

    Returns:
        List[TraceEvent]: 事件列表

    Raises:
        FileNotFoundError: 文件不存在
        ValueError: JSON 无效或顶层格式不支持
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"文件不存在: {file_path}")

    open_func = gzip.open if file_path.suffix == '.gz' else open
    with open_func(file_path, 'rb') as f:
        data = f.read()

    events = parse_trace_data(data)
    logger.info(f"从 {file_path} 读取到 {len(events)} 个事件")
    return events

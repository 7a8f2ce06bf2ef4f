# -*- coding: utf-8 -*-
"""
基于 B/E 事件的调用栈重建

每个执行上下文（pid）独立维护一个调用栈：B 事件入栈，E 事件出栈。
相同时间戳的多个事件合并到同一个快照中，时间戳变化时快照被封存。
"""

from typing import Dict, Iterable, List, Optional, Sequence
import logging

from .models import StackSnapshot, TraceEvent
from .utils.time import micros_to_nanos

logger = logging.getLogger(__name__)


class UnbalancedStackError(ValueError):
    """E 事件到达时调用栈为空"""

    def __init__(self, context_id: int, time_ns: int, label: str = ''):
        self.context_id = context_id
        self.time_ns = time_ns
        self.label = label
        super().__init__(
            f"上下文 {context_id} 在 {time_ns} ns 收到结束事件 '{label}'，但调用栈为空"
        )


class SnapshotBuilder:
    """可变的快照累加器，封存后得到不可变的 StackSnapshot"""

    def __init__(self, time_ns: int, stack: Sequence[str] = ()):
        self.time_ns = time_ns
        # 复制上一快照的栈，避免两个快照共享同一个列表
        self.stack: List[str] = list(stack)

    def push(self, label: str):
        self.stack.append(label)

    def pop(self, context_id: int, label: str = '') -> str:
        """弹出栈顶元素，栈为空时抛出 UnbalancedStackError"""
        if not self.stack:
            raise UnbalancedStackError(context_id, self.time_ns, label)
        return self.stack.pop()

    def seal(self) -> StackSnapshot:
        return StackSnapshot(time_ns=self.time_ns, stack=tuple(self.stack))


class StackReconstructor:
    """调用栈重建器"""

    def __init__(self):
        self._sealed: Dict[int, List[StackSnapshot]] = {}
        self._open: Dict[int, SnapshotBuilder] = {}
        self.ignored_events = 0

    def feed(self, event: TraceEvent):
        """
        处理单个事件

        Args:
            event: 原始 trace 事件，非 B/E 事件会被忽略
        """
        if not event.is_stack_event:
            self.ignored_events += 1
            return

        context_id = event.pid
        time_ns = micros_to_nanos(event.ts)
        builder = self._current_builder(context_id, time_ns)

        if event.is_begin:
            builder.push(event.name)
        else:
            builder.pop(context_id, event.name)

    def feed_all(self, events: Iterable[TraceEvent]):
        for event in events:
            self.feed(event)

    def _current_builder(self, context_id: int, time_ns: int) -> SnapshotBuilder:
        """获取当前可变快照，时间戳不同时封存旧快照并创建新快照"""
        builder: Optional[SnapshotBuilder] = self._open.get(context_id)
        if builder is not None and builder.time_ns == time_ns:
            return builder

        snapshots = self._sealed.setdefault(context_id, [])
        if builder is None:
            new_builder = SnapshotBuilder(time_ns)
        else:
            snapshots.append(builder.seal())
            new_builder = SnapshotBuilder(time_ns, builder.stack)
        self._open[context_id] = new_builder
        return new_builder

    def finish(self) -> Dict[int, List[StackSnapshot]]:
        """
        封存所有未封存的快照

        Returns:
            Dict[int, List[StackSnapshot]]: 按上下文 id 升序排列的快照序列
        """
        for context_id, builder in self._open.items():
            self._sealed[context_id].append(builder.seal())
            if builder.stack:
                logger.warning(
                    f"上下文 {context_id} 在 trace 结束时仍有 {len(builder.stack)} 层未结束: "
                    f"{builder.stack}"
                )
        self._open.clear()

        result = {context_id: self._sealed[context_id] for context_id in sorted(self._sealed)}
        logger.info(f"调用栈重建完成，共 {len(result)} 个上下文，忽略 {self.ignored_events} 个非 B/E 事件")
        return result


def reconstruct_stacks(events: Iterable[TraceEvent]) -> Dict[int, List[StackSnapshot]]:
    """
    从事件序列重建每个上下文的调用栈快照

    Args:
        events: 按时间排序的原始事件

    Returns:
        Dict[int, List[StackSnapshot]]: 上下文 id -> 快照序列
    """
    reconstructor = StackReconstructor()
    reconstructor.feed_all(events)
    return reconstructor.finish()

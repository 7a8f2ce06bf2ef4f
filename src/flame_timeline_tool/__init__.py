"""
Flame Timeline Tool Package
"""

from .models import TraceEvent, StackSnapshot, Frame, IntervalEvent, TimeRange, TimelineDocument
from .tables import StringTable, FrameTable
from .stack_reconstructor import StackReconstructor, UnbalancedStackError, reconstruct_stacks
from .interval_builder import IntervalBuilder, thread_label
from .parser import parse_trace_data, parse_trace_file
from .converter import convert_events, convert_trace_file

__all__ = [
    'TraceEvent',
    'StackSnapshot',
    'Frame',
    'IntervalEvent',
    'TimeRange',
    'TimelineDocument',
    'StringTable',
    'FrameTable',
    'StackReconstructor',
    'UnbalancedStackError',
    'reconstruct_stacks',
    'IntervalBuilder',
    'thread_label',
    'parse_trace_data',
    'parse_trace_file',
    'convert_events',
    'convert_trace_file',
]

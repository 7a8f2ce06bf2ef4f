"""
工具函数模块
"""

from .time import micros_to_nanos, nanos_to_millis

__all__ = ['micros_to_nanos', 'nanos_to_millis']

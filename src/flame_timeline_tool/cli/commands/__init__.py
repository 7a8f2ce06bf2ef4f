"""
CLI命令模块
"""

from .convert import ConvertCommand

__all__ = ['ConvertCommand']

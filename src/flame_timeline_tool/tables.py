# -*- coding: utf-8 -*-
"""
字典编码表：字符串表和栈帧表

两张表都是只追加的：值第一次出现时分配下一个索引，之后索引不再改变。
"""

from typing import Dict, List
import logging

from .models import Frame

logger = logging.getLogger(__name__)


class StringTable:
    """字符串去重表"""

    def __init__(self):
        # dict 保持插入顺序，索引即插入序号
        self._strings: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self._strings)

    def lookup(self, value: str) -> int:
        """
        插入或查询字符串

        Args:
            value: 字符串

        Returns:
            int: 该字符串的索引
        """
        idx = self._strings.get(value)
        if idx is None:
            idx = len(self._strings)
            self._strings[value] = idx
        return idx

    def export(self) -> List[str]:
        """按索引顺序导出所有字符串"""
        return list(self._strings)


class FrameTable:
    """栈帧去重表"""

    def __init__(self):
        self._frames: Dict[Frame, int] = {}

    def __len__(self) -> int:
        return len(self._frames)

    def lookup(self, frame: Frame) -> int:
        """
        插入或查询栈帧，按所有字段判断相等

        Args:
            frame: 栈帧

        Returns:
            int: 该栈帧的索引
        """
        idx = self._frames.get(frame)
        if idx is None:
            idx = len(self._frames)
            self._frames[frame] = idx
        return idx

    def export(self, string_table: StringTable) -> List[List[int]]:
        """
        导出栈帧表，字符串字段解析为字符串表索引

        注意：字符串表在这里被填充，所以必须先导出栈帧表再导出字符串表。

        Args:
            string_table: 字符串表

        Returns:
            List[List[int]]: 每行为 [filename, package, class, method, line]
        """
        rows = []
        for frame in self._frames:
            rows.append([
                string_table.lookup(frame.filename),
                string_table.lookup(frame.package),
                string_table.lookup(frame.class_name),
                string_table.lookup(frame.method),
                frame.line,
            ])
        logger.debug(f"导出 {len(rows)} 个栈帧，字符串表大小 {len(string_table)}")
        return rows

#!/usr/bin/env python3
"""
Flame Timeline Tool 使用示例
"""

from pathlib import Path

from flame_timeline_tool import convert_trace_file
from flame_timeline_tool.presenter import intervals_to_dataframe


def main():
    """简单的使用示例"""
    print("=== Flame Timeline Tool 使用示例 ===\n")

    trace_file = Path(__file__).parent / "data" / "example_trace.json"

    # 1. 转换 trace 文件
    print("1. 转换 trace 文件...")
    document = convert_trace_file(trace_file)
    print(f"   线程数: {len(document.threads)}, 区间数: {document.total_intervals}\n")

    # 2. 打印区间表
    print("2. 区间表:")
    print(intervals_to_dataframe(document).to_string(index=False))
    print()

    # 3. 字典编码表
    print("3. 栈帧表 / 字符串表:")
    print(f"   frames: {document.frames}")
    print(f"   strings: {document.strings}")
    print(f"   timeRange: {document.time_range.to_dict()}")


if __name__ == "__main__":
    main()

"""
结果输出模块：JSON 文档、CSV/Excel 表格、时间线图
"""

import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union
import logging

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pandas as pd

from .models import TimelineDocument
from .utils.time import nanos_to_millis

logger = logging.getLogger(__name__)

INTERVAL_COLUMNS = ['thread', 'start_ns', 'end_ns', 'duration_ns', 'label', 'depth', 'stack']
TABLE_FORMATS = ('csv', 'xlsx')


def document_to_json(document: TimelineDocument, indent: Optional[int] = 2) -> str:
    """将时间线文档序列化为 JSON 文本"""
    return json.dumps(document.to_dict(), indent=indent, ensure_ascii=False)


def write_json(document: TimelineDocument, output: Union[str, Path, None] = None) -> Optional[Path]:
    """
    写出 JSON 文档

    Args:
        document: 时间线文档
        output: 输出路径，None 或 '-' 表示标准输出

    Returns:
        Optional[Path]: 写出的文件路径，标准输出时返回 None
    """
    text = document_to_json(document)
    if output is None or str(output) == '-':
        sys.stdout.write(text + '\n')
        sys.stdout.flush()
        return None

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(text + '\n')
    return output_path


def _interval_rows(document: TimelineDocument) -> List[Dict[str, Any]]:
    rows = []
    for thread, intervals in document.threads.items():
        for interval in intervals:
            methods = [document.frame_method(idx) for idx in interval.stack]
            rows.append({
                'thread': thread,
                'start_ns': interval.start_ns,
                'end_ns': interval.end_ns,
                # 开放区间没有持续时间
                'duration_ns': interval.end_ns - interval.start_ns if interval.bounded else None,
                'label': interval.label,
                'depth': len(interval.stack) + 1,
                'stack': ';'.join(methods),
            })
    return rows


def intervals_to_dataframe(document: TimelineDocument) -> pd.DataFrame:
    """
    将区间展开为表格，每行一个区间

    Args:
        document: 时间线文档

    Returns:
        pd.DataFrame: 区间表
    """
    df = pd.DataFrame(_interval_rows(document), columns=INTERVAL_COLUMNS)
    df['duration_ns'] = df['duration_ns'].astype('Int64')
    return df


def write_tables(document: TimelineDocument, output_dir: Union[str, Path], base_name: str,
                 formats: Sequence[str] = TABLE_FORMATS) -> List[Path]:
    """
    生成区间表格文件 (CSV和Excel)

    Args:
        document: 时间线文档
        output_dir: 输出目录
        base_name: 基础文件名
        formats: 需要生成的格式，支持 csv, xlsx

    Returns:
        List[Path]: 生成的文件路径列表
    """
    df = intervals_to_dataframe(document)
    if df.empty:
        logger.warning("没有区间数据可供输出")

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)

    files = []
    if 'csv' in formats:
        csv_file = output_path / f"{base_name}_intervals.csv"
        df.to_csv(csv_file, index=False, encoding='utf-8')
        files.append(csv_file)
        logger.info(f"生成 CSV 文件: {csv_file}")

    if 'xlsx' in formats:
        excel_file = output_path / f"{base_name}_intervals.xlsx"
        with pd.ExcelWriter(excel_file, engine='openpyxl') as writer:
            df.to_excel(writer, sheet_name='intervals', index=False)
        files.append(excel_file)
        logger.info(f"生成 Excel 文件: {excel_file}")

    return files


def plot_timeline(document: TimelineDocument, output_path: Union[str, Path]) -> Path:
    """
    绘制火焰图风格的时间线，每个线程一条泳道，每层调用栈一行

    Args:
        document: 时间线文档
        output_path: PNG 文件路径

    Returns:
        Path: 生成的图片路径
    """
    plt.rcParams['font.sans-serif'] = ['DejaVu Sans', 'Arial', 'sans-serif']
    plt.rcParams['axes.unicode_minus'] = False

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    # 每个线程的泳道高度 = 最大调用栈深度
    lane_depths = {
        thread: max((len(interval.stack) + 1 for interval in intervals), default=1)
        for thread, intervals in document.threads.items()
    }
    total_rows = sum(lane_depths.values()) or 1

    fig, ax = plt.subplots(figsize=(14, max(3, total_rows * 0.4 + 1)))
    cmap = matplotlib.colormaps['tab20']
    colors: Dict[str, Any] = {}

    lane_base = 0
    yticks, yticklabels = [], []
    for thread, intervals in document.threads.items():
        yticks.append(lane_base)
        yticklabels.append(thread)
        for interval in intervals:
            # 开放区间没有结束时间，不绘制
            if not interval.bounded:
                continue
            left = nanos_to_millis(interval.start_ns)
            width = nanos_to_millis(interval.end_ns - interval.start_ns)
            names = [interval.label] + [document.frame_method(idx) for idx in interval.stack]
            for depth, name in enumerate(names):
                if name not in colors:
                    colors[name] = cmap(len(colors) % cmap.N)
                ax.barh(lane_base + depth, width, left=left, height=0.9,
                        color=colors[name], edgecolor='white', linewidth=0.5)
        lane_base += lane_depths[thread] + 1

    ax.set_yticks(yticks)
    ax.set_yticklabels(yticklabels)
    ax.invert_yaxis()
    ax.set_xlabel('Time (ms)')
    ax.set_title('Timeline')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    logger.info(f"生成时间线图: {output_path}")
    return output_path

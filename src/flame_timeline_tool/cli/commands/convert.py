"""
转换命令模块
"""

import sys
import time
from pathlib import Path

from ..validators import validate_output_formats
from ..file_utils import validate_input_file, output_base_name
from ...converter import convert_trace_file
from ...presenter import write_json, write_tables, plot_timeline, TABLE_FORMATS


def _status(message: str):
    # 标准输出可能用于 JSON，进度信息统一写到 stderr
    print(message, file=sys.stderr)


class ConvertCommand:
    """转换命令处理器"""

    def run(self, args) -> int:
        """运行 trace 转换"""
        _status("=== Trace 转换 ===")
        _status(f"输入文件: {args.file}")
        _status(f"输出格式: {args.output_format}")

        try:
            formats = validate_output_formats(args.output_format)
            input_path = validate_input_file(args.file)
        except ValueError as e:
            _status(f"错误: {e}")
            return 1

        try:
            start_time = time.time()
            document = convert_trace_file(input_path)
            _status(f"线程数: {len(document.threads)}, 区间数: {document.total_intervals}, "
                    f"栈帧数: {len(document.frames)}")

            generated_files = []
            if 'json' in formats:
                json_file = write_json(document, args.output)
                if json_file is not None:
                    generated_files.append(json_file)

            output_dir = Path(args.output_dir)
            base_name = output_base_name(input_path)
            table_formats = [fmt for fmt in formats if fmt in TABLE_FORMATS]
            if table_formats:
                generated_files.extend(write_tables(document, output_dir, base_name, table_formats))
            if 'png' in formats:
                generated_files.append(plot_timeline(document, output_dir / f"{base_name}_timeline.png"))

            total_time = time.time() - start_time
            _status(f"转换完成，总耗时: {total_time:.2f} 秒")
            if generated_files:
                _status("生成的文件:")
                for file_path in generated_files:
                    _status(f"  {file_path}")
            return 0

        except Exception as e:
            _status(f"错误: {e}")
            import traceback
            traceback.print_exc()
            return 1

"""
CLI主模块
"""

import argparse
import logging
import sys
from .commands import ConvertCommand


def parse_arguments(argv=None):
    """解析命令行参数"""
    parser = argparse.ArgumentParser(
        description="Flame Timeline Tool - 将 B/E 事件 trace 转换为火焰图时间线",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例用法:
  # 转换并输出 JSON 到标准输出
  flame-timeline-tool convert trace.json

  # 输出 JSON 到文件
  flame-timeline-tool convert trace.json --output timeline.json

  # 同时生成区间表格和时间线图
  flame-timeline-tool convert trace.json.gz --output timeline.json --output-format json,csv,xlsx,png --output-dir out
        """
    )

    subparsers = parser.add_subparsers(dest='command', help='可用命令')

    convert_parser = subparsers.add_parser('convert', help='将 trace 文件转换为时间线 JSON')
    convert_parser.add_argument('file', help='trace JSON 文件路径 (支持 .json.gz)')
    convert_parser.add_argument('--output', default='-',
                                help='JSON 输出路径，"-" 表示标准输出 (默认: -)')
    convert_parser.add_argument('--output-format', default='json',
                                help='输出格式，逗号分隔: json, csv, xlsx, png (默认: json)')
    convert_parser.add_argument('--output-dir', default='.',
                                help='表格和图片的输出目录 (默认: 当前目录)')
    convert_parser.add_argument('--verbose', action='store_true',
                                help='输出调试日志 (默认: False)')

    return parser.parse_args(argv)


def main(argv=None):
    """主函数"""
    args = parse_arguments(argv)

    if not args.command:
        print("错误: 请指定命令 (convert)", file=sys.stderr)
        print("使用 --help 查看帮助信息", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, 'verbose', False) else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr,
    )

    if args.command == 'convert':
        command = ConvertCommand()
        return command.run(args)
    else:
        print(f"错误: 未知命令: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Flame Timeline Tool 主入口
支持 python3 -m flame_timeline_tool 调用
"""

import sys

from .cli.main import main

if __name__ == "__main__":
    sys.exit(main())

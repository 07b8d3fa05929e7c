#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
MergeVFS Archive 模块

提供归档解码、过滤与公共前缀省略。
"""

from .reader import ArchiveReader

__all__ = [
    "ArchiveReader",
]

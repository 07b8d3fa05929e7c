#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
MergeVFS 核心模块

提供条目数据结构、导入结果和进度跟踪。
"""

from .schema import (
    Entry, EntrySet,
    ARCHIVE_SUFFIX, METADATA_ROOT, DEFAULT_LIST_BATCH_SIZE
)
from .batch import ImportResult, ProgressInfo, ProgressTracker, ProgressCallback

__all__ = [
    "Entry",
    "EntrySet",
    "ARCHIVE_SUFFIX",
    "METADATA_ROOT",
    "DEFAULT_LIST_BATCH_SIZE",
    # 结果与进度
    "ImportResult",
    "ProgressInfo",
    "ProgressTracker",
    "ProgressCallback",
]

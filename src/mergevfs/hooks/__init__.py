#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
MergeVFS Hooks 模块

提供目标存储与归档解码的抽象接口及内置实现。
"""

from .base import FileStore, ArchiveDecoder
from .zip_decoder import ZipArchiveDecoder
from .memory import MemoryStore, MemoryDirectory, MemoryFile
from .local import LocalStore

__all__ = [
    # 基类
    "FileStore",
    "ArchiveDecoder",
    # 解码
    "ZipArchiveDecoder",
    # 存储
    "MemoryStore",
    "MemoryDirectory",
    "MemoryFile",
    "LocalStore",
]

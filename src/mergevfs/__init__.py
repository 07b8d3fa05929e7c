#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
MergeVFS - 将文件、目录与 zip 归档导入/合并到虚拟文件树

支持 Import Mode (新建子树) 和 Merge Mode (省略包装目录后并入)
"""

__version__ = "0.1.0"

# 异常类
from .exceptions import (
    MergeVFSError,
    DecodeError,
    ReadError,
    ListError,
    WriteError,
)

# 数据结构
from .core import Entry, EntrySet, ImportResult, ProgressInfo

# 工具函数
from .utils import (
    normalize_path,
    is_hidden,
    is_archive_name,
    split_dir_segments,
    common_prefix,
    strip_prefix,
)

# 输入来源
from .sources import (
    LeafSource,
    DirectorySource,
    DirectoryReader,
    BytesSource,
    MemoryDirectorySource,
    LocalFileSource,
    LocalDirectorySource,
    from_path,
)

# 归档
from .archive import ArchiveReader

# 遍历、写入与协调
from .traversal import Traverser
from .pipeline import WriteMode, WritePipeline
from .importer import Importer

# Hooks
from .hooks import (
    FileStore,
    ArchiveDecoder,
    ZipArchiveDecoder,
    MemoryStore,
    LocalStore,
)

__all__ = [
    # 版本
    "__version__",
    # 异常
    "MergeVFSError",
    "DecodeError",
    "ReadError",
    "ListError",
    "WriteError",
    # 数据结构
    "Entry",
    "EntrySet",
    "ImportResult",
    "ProgressInfo",
    # 工具
    "normalize_path",
    "is_hidden",
    "is_archive_name",
    "split_dir_segments",
    "common_prefix",
    "strip_prefix",
    # 来源
    "LeafSource",
    "DirectorySource",
    "DirectoryReader",
    "BytesSource",
    "MemoryDirectorySource",
    "LocalFileSource",
    "LocalDirectorySource",
    "from_path",
    # 归档
    "ArchiveReader",
    # 流程
    "Traverser",
    "WriteMode",
    "WritePipeline",
    "Importer",
    # Hooks
    "FileStore",
    "ArchiveDecoder",
    "ZipArchiveDecoder",
    "MemoryStore",
    "LocalStore",
]

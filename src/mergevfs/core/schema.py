#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
MergeVFS 数据结构定义

定义 Entry、EntrySet 等核心数据结构。
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, List, Optional


# ==================== 常量定义 ====================

# 受支持的归档后缀 (大小写不敏感)
ARCHIVE_SUFFIX = ".zip"

# 归档工具生成的资源分支目录
METADATA_ROOT = "__MACOSX"

# 目录分页列举的默认批大小
DEFAULT_LIST_BATCH_SIZE = 100


# ==================== 条目 ====================

@dataclass
class Entry:
    """
    导入条目

    一个命名单元 (文件或目录)。目录路径以 / 结尾且不携带内容，
    文件必须携带内容。
    """
    path: str
    is_directory: bool = False
    content: Optional[bytes] = None

    def __post_init__(self):
        if self.is_directory:
            if self.content is not None:
                raise ValueError(f"目录条目不能携带内容: {self.path!r}")
        else:
            if self.content is None:
                raise ValueError(f"文件条目缺少内容: {self.path!r}")
            if not self.path.strip("/\\"):
                raise ValueError(f"文件条目路径为空: {self.path!r}")

    @classmethod
    def file(cls, path: str, content: bytes) -> 'Entry':
        return cls(path=path, is_directory=False, content=content)

    @classmethod
    def directory(cls, path: str) -> 'Entry':
        if not path.endswith("/"):
            path = path + "/"
        return cls(path=path, is_directory=True)

    def with_path(self, path: str) -> 'Entry':
        """返回仅路径不同的新条目"""
        return Entry(path=path, is_directory=self.is_directory, content=self.content)


# ==================== 条目集合 ====================

class EntrySet:
    """
    有序条目集合

    路径 -> Entry 的映射，迭代顺序即插入顺序 (归档或遍历的原始枚举顺序)。
    后续写入流水线依赖该顺序实现 "目录先于文件"。
    重复添加同一路径时原位替换，保留原始位置。
    """

    def __init__(self, entries: Optional[Iterable[Entry]] = None):
        self._entries: 'OrderedDict[str, Entry]' = OrderedDict()
        if entries:
            for entry in entries:
                self.add(entry)

    def add(self, entry: Entry) -> None:
        self._entries[entry.path] = entry

    def get(self, path: str) -> Optional[Entry]:
        return self._entries.get(path)

    def paths(self) -> List[str]:
        return list(self._entries.keys())

    def entries(self) -> List[Entry]:
        return list(self._entries.values())

    def filter(self, predicate: Callable[[Entry], bool]) -> 'EntrySet':
        """按条件筛选，返回保持原顺序的新集合"""
        return EntrySet(e for e in self._entries.values() if predicate(e))

    def __contains__(self, path: str) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"EntrySet({self.paths()!r})"

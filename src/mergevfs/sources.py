#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
输入来源

三类输入形态：
- LeafSource: 携带字节的单个文件 (有名字)
- DirectorySource: 可分页列举子项的递归目录句柄
- 以上两者组成的列表

内置内存实现与本地文件系统实现。
"""

import asyncio
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .core.schema import DEFAULT_LIST_BATCH_SIZE
from .exceptions import ListError, ReadError


class LeafSource(ABC):
    """单个文件来源"""

    @property
    @abstractmethod
    def name(self) -> str:
        """声明的文件名"""
        pass

    @abstractmethod
    async def read(self) -> bytes:
        """
        读取全部内容

        Raises:
            ReadError: 来源不可读
        """
        pass


class DirectoryReader(ABC):
    """
    目录读取器

    每次调用 read_entries() 返回下一批子项，返回空列表表示已列举完毕。
    """

    @abstractmethod
    async def read_entries(self) -> List['Source']:
        pass


class DirectorySource(ABC):
    """递归目录句柄"""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def create_reader(self) -> DirectoryReader:
        pass


Source = Union[LeafSource, DirectorySource, Sequence[Union[LeafSource, DirectorySource]]]


# ==================== 内存实现 ====================

class BytesSource(LeafSource):
    """内存字节来源"""

    def __init__(self, name: str, data: bytes):
        self._name = name
        self._data = data

    @property
    def name(self) -> str:
        return self._name

    async def read(self) -> bytes:
        await asyncio.sleep(0)
        return self._data

    def __repr__(self) -> str:
        return f"BytesSource({self._name!r}, {len(self._data)} bytes)"


class _ListReader(DirectoryReader):
    """按固定批大小分页返回已知子项"""

    def __init__(self, children: List['Source'], batch_size: int):
        self._children = children
        self._batch_size = max(1, batch_size)
        self._offset = 0

    async def read_entries(self) -> List['Source']:
        await asyncio.sleep(0)
        batch = self._children[self._offset:self._offset + self._batch_size]
        self._offset += len(batch)
        return batch


class MemoryDirectorySource(DirectorySource):
    """内存目录来源"""

    def __init__(
        self,
        name: str,
        children: Sequence[Union[LeafSource, DirectorySource]],
        batch_size: int = DEFAULT_LIST_BATCH_SIZE
    ):
        self._name = name
        self._children = list(children)
        self._batch_size = batch_size

    @property
    def name(self) -> str:
        return self._name

    def create_reader(self) -> DirectoryReader:
        return _ListReader(self._children, self._batch_size)

    def __repr__(self) -> str:
        return f"MemoryDirectorySource({self._name!r}, {len(self._children)} children)"


# ==================== 本地文件系统实现 ====================

class LocalFileSource(LeafSource):
    """本地文件来源"""

    def __init__(self, path: Union[str, Path], name: Optional[str] = None):
        self._path = Path(path)
        self._name = name or self._path.name

    @property
    def name(self) -> str:
        return self._name

    async def read(self) -> bytes:
        try:
            return await asyncio.to_thread(self._path.read_bytes)
        except OSError as e:
            raise ReadError(str(self._path), e) from e


class _LocalDirectoryReader(DirectoryReader):
    """首次调用时列举目录 (按名称排序)，之后分批返回"""

    def __init__(self, path: Path, batch_size: int):
        self._path = path
        self._batch_size = batch_size
        self._pending: Optional[_ListReader] = None

    def _scan(self) -> List['Source']:
        children: List[Source] = []
        with os.scandir(self._path) as it:
            for entry in sorted(it, key=lambda e: e.name):
                if entry.is_dir():
                    children.append(LocalDirectorySource(entry.path, self._batch_size))
                else:
                    children.append(LocalFileSource(entry.path))
        return children

    async def read_entries(self) -> List['Source']:
        if self._pending is None:
            try:
                children = await asyncio.to_thread(self._scan)
            except OSError as e:
                raise ListError(str(self._path), e) from e
            self._pending = _ListReader(children, self._batch_size)
        return await self._pending.read_entries()


class LocalDirectorySource(DirectorySource):
    """本地目录来源"""

    def __init__(self, path: Union[str, Path], batch_size: int = DEFAULT_LIST_BATCH_SIZE):
        self._path = Path(path)
        self._batch_size = batch_size

    @property
    def name(self) -> str:
        return self._path.name

    def create_reader(self) -> DirectoryReader:
        return _LocalDirectoryReader(self._path, self._batch_size)


def from_path(path: Union[str, Path], batch_size: int = DEFAULT_LIST_BATCH_SIZE) -> Union[LeafSource, DirectorySource]:
    """根据本地路径类型构造对应来源"""
    path = Path(path)
    if path.is_dir():
        return LocalDirectorySource(path, batch_size)
    return LocalFileSource(path)

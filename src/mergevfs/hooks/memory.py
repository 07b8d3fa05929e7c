#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
内存虚拟文件存储

FileStore 的内存实现：目录树完全保存在内存中，
适合作为编辑器文件树的后端，也用于测试观察写入顺序。
"""

import asyncio
from collections import OrderedDict
from typing import List, Optional, Tuple, Union

from .base import FileStore
from ..utils import split_segments


class MemoryFile:
    """内存文件节点"""

    def __init__(self, name: str, parent: 'MemoryDirectory', content: bytes = b""):
        self.name = name
        self.parent = parent
        self.content = content

    @property
    def path(self) -> str:
        return f"{self.parent.path}{self.name}"

    def __repr__(self) -> str:
        return f"MemoryFile({self.path!r})"


class MemoryDirectory:
    """内存目录节点，子项按创建顺序保存"""

    def __init__(self, name: str = "", parent: Optional['MemoryDirectory'] = None):
        self.name = name
        self.parent = parent
        self.children: 'OrderedDict[str, Union[MemoryDirectory, MemoryFile]]' = OrderedDict()

    @property
    def path(self) -> str:
        """以 / 结尾的完整路径，根目录为空串"""
        if self.parent is None:
            return ""
        return f"{self.parent.path}{self.name}/"

    def __repr__(self) -> str:
        return f"MemoryDirectory({self.path!r})"


Node = Union[MemoryDirectory, MemoryFile]


class MemoryStore(FileStore):
    """
    内存存储

    每个写操作都会让出一次事件循环，模拟外部存储的挂起点。
    已完成的操作按顺序记录在 history 中 (("mkdir", 路径) 或 ("write", 路径))。
    """

    def __init__(self):
        self._root = MemoryDirectory()
        self.history: List[Tuple[str, str]] = []

    def root(self) -> MemoryDirectory:
        return self._root

    async def create_directory(self, directory: MemoryDirectory, path: str) -> MemoryDirectory:
        await asyncio.sleep(0)

        node = directory
        for name in split_segments(path):
            child = node.children.get(name)
            if child is None:
                child = MemoryDirectory(name, node)
                node.children[name] = child
            elif isinstance(child, MemoryFile):
                raise NotADirectoryError(f"'{child.path}' 是文件")
            node = child

        self.history.append(("mkdir", node.path))
        return node

    async def create_file(self, directory: MemoryDirectory, path: str, content: bytes) -> MemoryFile:
        await asyncio.sleep(0)

        segments = split_segments(path)
        if not segments:
            raise ValueError(f"非法文件路径: {path!r}")

        parent = directory
        for name in segments[:-1]:
            child = parent.children.get(name)
            if child is None:
                raise FileNotFoundError(f"目录不存在: '{parent.path}{name}/'")
            if isinstance(child, MemoryFile):
                raise NotADirectoryError(f"'{child.path}' 是文件")
            parent = child

        name = segments[-1]
        existing = parent.children.get(name)
        if isinstance(existing, MemoryDirectory):
            raise IsADirectoryError(f"'{existing.path}' 是目录")

        node = MemoryFile(name, parent, content)
        parent.children[name] = node
        self.history.append(("write", node.path))
        return node

    # ==================== 查询 API ====================

    def lookup(self, path: str) -> Optional[Node]:
        """按路径查找节点，不存在返回 None"""
        node: Node = self._root
        for name in split_segments(path):
            if not isinstance(node, MemoryDirectory):
                return None
            node = node.children.get(name)
            if node is None:
                return None
        return node

    def exists(self, path: str) -> bool:
        return self.lookup(path) is not None

    def is_dir(self, path: str) -> bool:
        return isinstance(self.lookup(path), MemoryDirectory)

    def read(self, path: str) -> bytes:
        """
        读取文件内容

        Raises:
            FileNotFoundError: 路径不存在或不是文件
        """
        node = self.lookup(path)
        if not isinstance(node, MemoryFile):
            raise FileNotFoundError(f"路径不存在: {path}")
        return node.content

    def list_all(self) -> List[str]:
        """列出所有文件路径 (深度优先，按创建顺序)"""
        result = []

        def walk(directory: MemoryDirectory) -> None:
            for child in directory.children.values():
                if isinstance(child, MemoryDirectory):
                    walk(child)
                else:
                    result.append(child.path)

        walk(self._root)
        return result

    @property
    def display_name(self) -> str:
        return "memory"

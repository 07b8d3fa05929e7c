#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
条目遍历

将异构输入 (单文件、文件列表、递归目录句柄及其混合) 展开为
扁平、有序的条目列表。输入形态在 traverse() 入口处一次性分派。
"""

import asyncio
import logging
from typing import Awaitable, Callable, List, Optional, Sequence

from .core.schema import Entry
from .exceptions import ListError, MergeVFSError, ReadError
from .sources import DirectorySource, LeafSource, Source
from .utils import is_archive_name, join_path

logger = logging.getLogger(__name__)


# 归档展开回调: (归档在树中的路径, 原始字节) -> 已定位好的条目
ArchiveExpander = Callable[[str, bytes], Awaitable[List[Entry]]]


class Traverser:
    """
    条目遍历器

    名称以归档后缀结尾的文件不会作为普通文件展开，
    而是交给 expand_archive 回调处理；未提供回调时按普通文件处理。
    """

    def __init__(self, expand_archive: Optional[ArchiveExpander] = None):
        self._expand_archive = expand_archive

    async def traverse(self, source: Source, base: str = "") -> List[Entry]:
        """
        展开输入

        Args:
            source: 单个来源或来源列表
            base: 结果路径的前缀目录

        Returns:
            按列举顺序排列的条目

        Raises:
            ReadError: 文件来源不可读
            ListError: 目录列举失败
            DecodeError: 嵌套归档解码失败
        """
        if isinstance(source, LeafSource):
            return await self._traverse_leaf(source, base)
        if isinstance(source, DirectorySource):
            return await self._traverse_directory(source, base)
        if isinstance(source, (list, tuple)):
            return await self._traverse_collection(source, base)
        raise TypeError(f"不支持的输入类型: {type(source).__name__}")

    async def _traverse_leaf(self, leaf: LeafSource, base: str) -> List[Entry]:
        path = join_path(base, leaf.name)
        try:
            data = await leaf.read()
        except MergeVFSError:
            raise
        except Exception as e:
            raise ReadError(path, e) from e

        if self._expand_archive is not None and is_archive_name(leaf.name):
            logger.debug(f"展开归档: {path}")
            return await self._expand_archive(path, data)

        return [Entry.file(path, data)]

    async def list_children(self, source: DirectorySource, path: str) -> List[Source]:
        """
        列举目录的全部直接子项

        反复调用 read_entries() 直到返回空批次。
        """
        reader = source.create_reader()
        children: List[Source] = []
        while True:
            try:
                batch = await reader.read_entries()
            except MergeVFSError:
                raise
            except Exception as e:
                raise ListError(path, e) from e
            if not batch:
                break
            children.extend(batch)
        return children

    async def _traverse_directory(self, source: DirectorySource, base: str) -> List[Entry]:
        path = join_path(base, source.name)
        children = await self.list_children(source, path)
        logger.debug(f"目录 {path}/: {len(children)} 个子项")
        return await self._traverse_collection(children, path)

    async def _traverse_collection(self, sources: Sequence[Source], base: str) -> List[Entry]:
        results = await asyncio.gather(
            *(self.traverse(source, base) for source in sources),
            return_exceptions=True
        )

        # 任一子项失败即整体失败，不返回部分结果
        for result in results:
            if isinstance(result, BaseException):
                raise result

        return [entry for result in results for entry in result]

#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
导入 / 合并协调器

两个入口：
- import_into: 输入成为新的子树，归档内容按原路径写入以归档名命名的目录
- merge_into: 输入作为同级内容并入目标目录，归档内容省略公共前缀

两者都是：取得有序条目 → 过滤隐藏条目 → (合并模式省略前缀) → 写入流水线。
遍历或解码失败时，该输入不会发生任何写入。
"""

import logging
from functools import partial
from typing import Any, Iterable, List, Optional

from .archive.reader import ArchiveReader
from .core.batch import ImportResult, ProgressCallback
from .core.schema import Entry
from .hooks.base import ArchiveDecoder, FileStore
from .pipeline import WriteMode, WritePipeline
from .sources import LeafSource, Source
from .traversal import Traverser
from .utils import archive_root_name, is_hidden, join_path, parent_path

logger = logging.getLogger(__name__)


class Importer:
    """
    导入协调器

    Example:
        >>> store = MemoryStore()
        >>> importer = Importer(store)
        >>> await importer.merge_into(store.root(), BytesSource("proj.zip", data))
    """

    def __init__(
        self,
        store: FileStore,
        decoder: Optional[ArchiveDecoder] = None,
        progress_callback: Optional[ProgressCallback] = None
    ):
        """
        初始化协调器

        Args:
            store: 目标存储
            decoder: 归档解码器，默认 ZipArchiveDecoder
            progress_callback: 每完成一次写入调用一次
        """
        self._store = store
        self._archive_reader = ArchiveReader(decoder)
        self._progress_callback = progress_callback

    @property
    def store(self) -> FileStore:
        return self._store

    # ==================== 入口 ====================

    async def import_into(self, directory: Any, source: Source) -> ImportResult:
        """以新子树的方式导入，归档内容不省略前缀"""
        return await self._run(directory, source, merge=False)

    async def merge_into(self, directory: Any, source: Source) -> ImportResult:
        """以同级内容的方式合并，归档内容省略公共前缀"""
        return await self._run(directory, source, merge=True)

    async def import_file(self, directory: Any, file: LeafSource) -> ImportResult:
        return await self.import_into(directory, file)

    async def import_file_list(self, directory: Any, files: Iterable[LeafSource]) -> ImportResult:
        return await self.import_into(directory, list(files))

    async def merge_file(self, directory: Any, file: LeafSource) -> ImportResult:
        return await self.merge_into(directory, file)

    async def merge_file_list(self, directory: Any, files: Iterable[LeafSource]) -> ImportResult:
        return await self.merge_into(directory, list(files))

    # ==================== 内部流程 ====================

    async def _run(self, directory: Any, source: Source, merge: bool) -> ImportResult:
        action = "merge" if merge else "import"

        # 互不相关的顶层输入各自独立遍历、写入，并发进行
        if isinstance(source, (list, tuple)):
            inputs = list(source)
            mode = WriteMode.PARALLEL
        else:
            inputs = [source]
            mode = WriteMode.SEQUENTIAL

        logger.debug(f"{action}: {len(inputs)} 个顶层输入 ({mode.value})")
        pipeline = WritePipeline(self._store, mode, self._progress_callback)
        result = await pipeline.run_inputs(
            directory, [partial(self.collect, item, merge) for item in inputs]
        )

        logger.info(
            f"{action} 完成: {result.files_written} 个文件, "
            f"{result.directories_created} 个目录, 耗时 {result.elapsed_time:.3f}s"
        )
        return result

    async def collect(self, source: Source, merge: bool = False) -> List[Entry]:
        """
        取得单个输入的全部待写条目 (不写入)

        Args:
            source: 输入
            merge: 是否为合并模式

        Returns:
            已过滤隐藏条目、按写入顺序排列的条目
        """
        traverser = Traverser(expand_archive=partial(self._expand_archive, merge=merge))
        entries = await traverser.traverse(source)
        return [entry for entry in entries if not is_hidden(entry.path)]

    async def _expand_archive(self, path: str, data: bytes, merge: bool) -> List[Entry]:
        """
        展开归档并定位到目标子树

        合并模式写入归档所在目录；导入模式写入 <所在目录>/<归档名去扩展名>。
        """
        entry_set = self._archive_reader.read(data, elide_prefix=merge, name=path)

        if merge:
            root = parent_path(path)
            entries = []
        else:
            root = join_path(parent_path(path), archive_root_name(path))
            entries = [Entry.directory(root)]

        for entry in entry_set:
            entries.append(entry.with_path(join_path(root, entry.path)))
        return entries

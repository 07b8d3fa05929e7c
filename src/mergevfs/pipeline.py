#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
有序写入流水线

把条目序列应用到目标存储。单个输入的条目总是严格按序逐个等待，
首个失败即中止，已写入的不回滚。

多个顶层输入之间的调度由 WriteMode 显式指定：
- SEQUENTIAL: 输入逐个处理，首个失败的输入之后的输入不再处理
- PARALLEL: 每个输入一个并发分支，全部结束后报告按完成顺序的首个失败
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Iterable, List, Optional

from .core.batch import ImportResult, ProgressCallback, ProgressTracker
from .core.schema import Entry
from .exceptions import WriteError
from .hooks.base import FileStore
from .utils import normalize_path, parent_path

logger = logging.getLogger(__name__)


# 单个顶层输入的条目生成函数，在该输入的分支内被调用
EntryProducer = Callable[[], Awaitable[Iterable[Entry]]]


class WriteMode(Enum):
    """顶层输入之间的调度方式"""
    SEQUENTIAL = "sequential"   # 单个输入 (含归档): 逐个等待
    PARALLEL = "parallel"       # 互不相关的多个输入: 并发


class WritePipeline:
    """
    写入流水线

    文件条目总是先创建父目录 (幂等) 再创建文件。
    """

    def __init__(
        self,
        store: FileStore,
        mode: WriteMode = WriteMode.SEQUENTIAL,
        progress_callback: Optional[ProgressCallback] = None
    ):
        self._store = store
        self._mode = mode
        self._progress_callback = progress_callback

    @property
    def mode(self) -> WriteMode:
        return self._mode

    async def run(self, directory: Any, entries: Iterable[Entry]) -> ImportResult:
        """
        按序写入一个输入的全部条目

        Args:
            directory: 目标目录句柄
            entries: 有序条目

        Returns:
            ImportResult 写入统计

        Raises:
            WriteError: 存储拒绝了某次创建
        """
        entries = list(entries)
        tracker = ProgressTracker(len(entries), self._progress_callback)
        result = ImportResult()

        for entry in entries:
            await self._write_entry(directory, entry, result, tracker)

        result.elapsed_time = tracker.finish()
        logger.debug(
            f"写入完成: {result.files_written} 个文件, "
            f"{result.directories_created} 个目录"
        )
        return result

    async def run_inputs(self, directory: Any, producers: Iterable[EntryProducer]) -> ImportResult:
        """
        按 mode 调度多个顶层输入

        每个输入先调用其 producer 取得条目 (遍历、解码失败时该输入不写入)，
        再按序写入。

        Args:
            directory: 目标目录句柄
            producers: 每个顶层输入一个条目生成函数

        Returns:
            所有输入的写入统计汇总
        """
        branches = (self._run_branch(directory, producer) for producer in producers)

        if self._mode is WriteMode.PARALLEL:
            return await self.fan_out(branches)

        result = ImportResult()
        for branch in branches:
            result.merge(await branch)
        return result

    async def _run_branch(self, directory: Any, producer: EntryProducer) -> ImportResult:
        entries = await producer()
        return await self.run(directory, entries)

    async def _write_entry(
        self,
        directory: Any,
        entry: Entry,
        result: ImportResult,
        tracker: ProgressTracker
    ) -> None:
        path = normalize_path(entry.path)
        try:
            if entry.is_directory:
                await self._store.create_directory(directory, path)
                result.directories_created += 1
            else:
                parent = parent_path(path)
                if parent:
                    await self._store.create_directory(directory, parent)
                await self._store.create_file(directory, path, entry.content)
                result.files_written += 1
        except WriteError:
            raise
        except Exception as e:
            raise WriteError(path, e) from e

        result.written_paths.append(path)
        tracker.update(path)
        logger.debug(f"已写入: {path}")

    @staticmethod
    async def fan_out(branches: Iterable[Awaitable[Optional[ImportResult]]]) -> ImportResult:
        """
        并发执行多个分支

        等待所有分支结束；若有失败，抛出按完成顺序的第一个失败，
        已成功分支的写入保留。

        Returns:
            所有分支结果的汇总
        """
        failures: List[Exception] = []

        async def settle(branch: Awaitable[Optional[ImportResult]]) -> Optional[ImportResult]:
            try:
                return await branch
            except Exception as e:
                failures.append(e)
                return None

        results = await asyncio.gather(*(settle(branch) for branch in branches))

        merged = ImportResult()
        for result in results:
            if isinstance(result, ImportResult):
                merged.merge(result)

        if failures:
            for extra in failures[1:]:
                logger.warning(f"并发分支同样失败: {extra}")
            raise failures[0]

        return merged

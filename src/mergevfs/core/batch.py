#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
导入结果与进度回调

提供导入统计、进度回调的通用工具。
"""

from dataclasses import dataclass, field
from typing import Callable, List, Optional
import time


@dataclass
class ProgressInfo:
    """
    进度信息

    传递给进度回调函数的数据结构。
    """
    current: int              # 当前已完成写入数
    total: int                # 本批写入总数
    current_path: str         # 刚完成写入的路径
    elapsed_time: float       # 已耗时 (秒)

    @property
    def progress(self) -> float:
        """进度百分比 (0.0 - 1.0)"""
        if self.total == 0:
            return 0.0
        return self.current / self.total


@dataclass
class ImportResult:
    """
    导入操作结果

    包含写入统计和已写入路径 (按完成顺序)。
    """
    files_written: int = 0
    directories_created: int = 0
    elapsed_time: float = 0.0
    written_paths: List[str] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return self.files_written + self.directories_created

    def merge(self, other: 'ImportResult') -> 'ImportResult':
        """合并另一个结果 (并行分支汇总用)"""
        self.files_written += other.files_written
        self.directories_created += other.directories_created
        self.elapsed_time = max(self.elapsed_time, other.elapsed_time)
        self.written_paths.extend(other.written_paths)
        return self


# 进度回调函数类型
ProgressCallback = Callable[[ProgressInfo], None]


class ProgressTracker:
    """
    进度跟踪器

    封装进度计算和回调调用逻辑。每完成一次写入调用一次回调。
    """

    def __init__(self, total: int, callback: Optional[ProgressCallback] = None):
        self._total = total
        self._callback = callback
        self._current = 0
        self._start_time = time.time()

    def update(self, path: str) -> None:
        self._current += 1
        if self._callback:
            self._callback(ProgressInfo(
                current=self._current,
                total=self._total,
                current_path=path,
                elapsed_time=time.time() - self._start_time
            ))

    def finish(self) -> float:
        """完成并返回总耗时"""
        return time.time() - self._start_time

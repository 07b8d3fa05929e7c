#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
本地目录存储

FileStore 的本地文件系统实现，目录句柄即 pathlib.Path。
阻塞 I/O 通过 asyncio.to_thread 执行。
"""

import asyncio
import os
from pathlib import Path
from typing import Union

from .base import FileStore
from ..utils import split_segments


class LocalStore(FileStore):
    """
    本地存储

    所有写入限制在 root_dir 之内，包含 .. 或越界的路径会被拒绝。
    """

    def __init__(self, root_dir: Union[str, Path]):
        self._root = Path(root_dir).resolve()

    def root(self) -> Path:
        return self._root

    def _resolve(self, directory: Path, path: str) -> Path:
        segments = split_segments(path)
        if any(s == ".." for s in segments):
            raise ValueError(f"路径越界: {path!r}")
        target = Path(directory).joinpath(*segments).resolve()
        if target != self._root and self._root not in target.parents:
            raise ValueError(f"路径越界: {path!r}")
        return target

    async def create_directory(self, directory: Path, path: str) -> Path:
        target = self._resolve(directory, path)
        await asyncio.to_thread(os.makedirs, target, exist_ok=True)
        return target

    async def create_file(self, directory: Path, path: str, content: bytes) -> Path:
        if not split_segments(path):
            raise ValueError(f"非法文件路径: {path!r}")
        target = self._resolve(directory, path)
        if not target.parent.is_dir():
            raise FileNotFoundError(f"目录不存在: {target.parent}")
        await asyncio.to_thread(target.write_bytes, content)
        return target

    @property
    def display_name(self) -> str:
        return f"local:{self._root}"

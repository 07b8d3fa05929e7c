#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
pytest 全局配置

提供共享 fixtures 和测试用存储。
"""

import asyncio
import io
import zipfile
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import pytest

from mergevfs.hooks.memory import MemoryStore


# ==================== 路径常量 ====================

# 项目根目录
PROJECT_ROOT = Path(__file__).parent.parent


# ==================== 自定义 Markers ====================

def pytest_configure(config):
    """注册自定义 markers"""
    config.addinivalue_line("markers", "slow: 耗时较长的测试")


# ==================== 测试用存储 ====================

class ObservingStore(MemoryStore):
    """
    记录每个操作开始与结束的内存存储

    events 中依次记录 ("start"|"end", "mkdir"|"write", 路径)，
    max_in_flight 为同时挂起的最大操作数。
    """

    def __init__(self):
        super().__init__()
        self.events: List[Tuple[str, str, str]] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def _observe(self, op: str, path: str, call):
        self.events.append(("start", op, path))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            return await call
        finally:
            self.in_flight -= 1
            self.events.append(("end", op, path))

    async def create_directory(self, directory, path):
        return await self._observe("mkdir", path, super().create_directory(directory, path))

    async def create_file(self, directory, path, content):
        return await self._observe("write", path, super().create_file(directory, path, content))

    def index(self, kind: str, op: str, path: str) -> int:
        return self.events.index((kind, op, path))


class FailingStore(MemoryStore):
    """对指定路径的文件写入抛出 PermissionError 的内存存储"""

    def __init__(self, fail_paths: Iterable[str]):
        super().__init__()
        self.fail_paths = set(fail_paths)
        self.attempted: List[str] = []

    async def create_file(self, directory, path, content):
        self.attempted.append(path)
        await asyncio.sleep(0)
        if path in self.fail_paths:
            raise PermissionError(f"拒绝写入: {path}")
        return await super().create_file(directory, path, content)


# ==================== 基础 Fixtures ====================

@pytest.fixture
def memory_store():
    """空的 MemoryStore"""
    return MemoryStore()


@pytest.fixture
def observing_store():
    """ObservingStore 实例"""
    return ObservingStore()


def build_zip(members: Iterable[Tuple[str, Optional[bytes]]]) -> bytes:
    """
    按给定顺序构建 zip 字节

    content 为 None 的成员写为目录条目。
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, content in members:
            if content is None:
                zf.writestr(zipfile.ZipInfo(name), b"")
            else:
                zf.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture
def make_zip():
    """返回 build_zip 工厂函数"""
    return build_zip


@pytest.fixture
def project_zip() -> bytes:
    """
    带包装目录的典型归档

    proj/ 下包含源码、README 以及需要被过滤的隐藏与元数据条目。
    """
    return build_zip([
        ("proj/", None),
        ("proj/src/", None),
        ("proj/src/a.raml", b"#%RAML 1.0\ntitle: A"),
        ("proj/README", b"readme"),
        ("proj/.git/", None),
        ("proj/.git/config", b"[core]"),
        ("__MACOSX/", None),
        ("__MACOSX/proj/._README", b"\x00\x05"),
    ])


@pytest.fixture
def sample_tree(tmp_path) -> tuple:
    """
    创建本地测试目录

    Returns:
        (目录路径, 文件内容字典)
    """
    root = tmp_path / "docs"
    files = {
        "api.raml": b"#%RAML 1.0",
        "types/user.raml": b"type: object",
        "types/nested/deep.txt": b"deep",
        "中文文件.txt": "这是中文内容测试".encode("utf-8"),
    }

    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)

    return root, files

#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
MergeVFS 工具函数

提供路径处理、隐藏条目过滤、公共前缀计算等纯函数。
"""

import os
from typing import List, Optional, Sequence, Tuple

from .core.schema import ARCHIVE_SUFFIX, METADATA_ROOT


def normalize_path(path: str) -> str:
    """
    路径规范化

    1. 反斜杠统一为正斜杠
    2. 合并连续斜杠
    3. 移除开头斜杠 (统一为相对路径)
    4. 保留末尾斜杠 (目录标记)

    Args:
        path: 原始路径

    Returns:
        规范化后的路径

    Examples:
        >>> normalize_path("proj\\\\src\\\\a.raml")
        'proj/src/a.raml'
        >>> normalize_path("/proj//src/")
        'proj/src/'
        >>> normalize_path("/")
        ''
    """
    # 反斜杠 → 正斜杠
    path = path.replace("\\", "/")

    # 合并连续斜杠
    while "//" in path:
        path = path.replace("//", "/")

    path = path.lstrip("/")
    return path


def split_segments(path: str) -> List[str]:
    """拆分为非空路径段"""
    return [s for s in normalize_path(path).split("/") if s]


def split_path(full_path: str) -> Tuple[str, str, str]:
    """
    拆分完整路径为 (目录, 文件名, 扩展名)

    文件名不含扩展名，扩展名包含点号。

    Examples:
        >>> split_path("uploads/proj.zip")
        ('uploads', 'proj', '.zip')
        >>> split_path("README")
        ('', 'README', '')
    """
    normalized = normalize_path(full_path).rstrip("/")
    dir_part = os.path.dirname(normalized)
    name, ext = os.path.splitext(os.path.basename(normalized))
    return dir_part, name, ext


def parent_path(path: str) -> str:
    """目录部分，顶层路径返回空串"""
    return split_path(path)[0]


def join_path(*parts: str) -> str:
    """
    拼接路径

    忽略空段；最后一段以分隔符结尾时保留目录标记。

    Examples:
        >>> join_path("", "docs", "a.txt")
        'docs/a.txt'
        >>> join_path("docs", "sub/")
        'docs/sub/'
    """
    cleaned = [normalize_path(p).strip("/") for p in parts]
    joined = "/".join(c for c in cleaned if c)
    if joined and parts and parts[-1].endswith(("/", "\\")):
        joined += "/"
    return joined


# ==================== 过滤 ====================

def is_hidden(path: str) -> bool:
    """
    是否为隐藏条目

    除最后一段外任一路径段以 . 开头，或位于归档元数据根目录下。
    目录路径以分隔符结尾，其最后一段为空串，因此目录自身的名字也参与判断。

    Examples:
        >>> is_hidden("proj/.git/config")
        True
        >>> is_hidden(".git/")
        True
        >>> is_hidden("proj/.env")
        False
        >>> is_hidden("__MACOSX/proj/._a.raml")
        True
    """
    parts = path.replace("\\", "/").split("/")
    if any(part.startswith(".") for part in parts[:-1]):
        return True
    segments = split_segments(path)
    return bool(segments) and segments[0] == METADATA_ROOT


def is_archive_name(name: str) -> bool:
    """按名称后缀 (大小写不敏感) 判断是否为受支持的归档"""
    return name.lower().endswith(ARCHIVE_SUFFIX)


def archive_root_name(name: str) -> str:
    """
    归档的根目录名：去掉目录部分与扩展名

    Examples:
        >>> archive_root_name("uploads/Proj.ZIP")
        'Proj'
    """
    _, stem, ext = split_path(name)
    if ext.lower() == ARCHIVE_SUFFIX:
        return stem
    return stem + ext


# ==================== 公共前缀 ====================

def split_dir_segments(path: str) -> List[str]:
    """
    除最后一段外的所有路径段

    顶层路径返回空列表；目录路径 (a/b/) 去掉的是末尾空段，返回 [a, b]。
    """
    parts = normalize_path(path).split("/")
    return [s for s in parts[:-1] if s]


def common_prefix(paths: Sequence[str]) -> List[str]:
    """
    计算所有路径目录部分共享的前导段

    以第一条路径的目录段作为候选前缀，随后每条路径从长度 1 的前导切片开始
    逐步比较，首个不一致处将候选截断为其之前的部分。
    任一顶层路径 (无目录段) 都会使前缀塌缩为空。

    Examples:
        >>> common_prefix(["a/b/x.txt", "a/b/y.txt"])
        ['a', 'b']
        >>> common_prefix(["a/x.txt", "b/y.txt"])
        []
        >>> common_prefix(["x.txt", "a/b/y.txt"])
        []
    """
    prefix: Optional[List[str]] = None

    for path in paths:
        segments = split_dir_segments(path)
        if prefix is None:
            prefix = segments
            continue

        length = min(len(prefix), len(segments))
        for i in range(1, length + 1):
            if segments[:i] != prefix[:i]:
                prefix = segments[:i - 1]
                break
        else:
            prefix = prefix[:length]

        if not prefix:
            break

    return prefix or []


def strip_prefix(path: str, prefix: Sequence[str]) -> Optional[str]:
    """
    从路径前端移除前缀段

    Returns:
        剩余路径；若什么都不剩 (条目就是被省略的包装目录本身) 返回 None。
        不以该前缀开头的路径原样 (规范化后) 返回。

    Examples:
        >>> strip_prefix("proj/src/a.raml", ["proj"])
        'src/a.raml'
        >>> strip_prefix("proj/", ["proj"]) is None
        True
    """
    normalized = normalize_path(path)
    prefix = list(prefix)
    if not prefix:
        return normalized or None

    parts = normalized.split("/")
    if parts[:len(prefix)] != prefix:
        return normalized

    rest = "/".join(parts[len(prefix):])
    return rest or None

#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
MergeVFS 异常定义

所有异常均继承自 MergeVFSError，便于统一捕获。
"""

from typing import Optional


class MergeVFSError(Exception):
    """MergeVFS 基础异常"""
    pass


class DecodeError(MergeVFSError):
    """
    归档解码异常

    当输入字节不是受支持格式的合法归档时抛出。
    """
    def __init__(self, message: str, name: Optional[str] = None):
        self.name = name
        if name:
            message = f"归档 '{name}' 解码失败: {message}"
        super().__init__(message)


class ReadError(MergeVFSError):
    """
    读取异常

    当外部字节来源 (文件、内存数据) 无法读取时抛出。
    """
    def __init__(self, name: str, cause: Optional[BaseException] = None):
        self.name = name
        self.cause = cause
        message = f"无法读取 '{name}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ListError(MergeVFSError):
    """
    目录列举异常

    当目录句柄的子项列举失败时抛出。
    """
    def __init__(self, name: str, cause: Optional[BaseException] = None):
        self.name = name
        self.cause = cause
        message = f"无法列举目录 '{name}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class WriteError(MergeVFSError):
    """
    写入异常

    当目标存储拒绝创建操作时抛出 (名称冲突、配额、非法路径等)。
    """
    def __init__(self, path: str, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        message = f"写入 '{path}' 失败"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)

#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Hook 基类定义

定义目标存储与归档解码的抽象接口。核心只通过这些接口与外部协作。
"""

from abc import ABC, abstractmethod
from typing import Any, Iterable

from ..core.schema import Entry


class FileStore(ABC):
    """
    虚拟文件存储钩子

    目录句柄对核心不透明，仅在 root() / create_directory() 与
    create_file() 之间传递。
    """

    @abstractmethod
    def root(self) -> Any:
        """
        根目录句柄

        Returns:
            存储的根目录句柄
        """
        pass

    @abstractmethod
    async def create_directory(self, directory: Any, path: str) -> Any:
        """
        创建目录

        幂等：目录已存在时不得失败。中间目录一并创建。

        Args:
            directory: 父目录句柄
            path: 相对路径 (可带末尾斜杠)

        Returns:
            新建 (或已存在) 目录的句柄
        """
        pass

    @abstractmethod
    async def create_file(self, directory: Any, path: str, content: bytes) -> Any:
        """
        创建文件

        路径上的父目录必须已存在；同名文件被覆盖。

        Args:
            directory: 父目录句柄
            path: 相对路径
            content: 文件内容

        Returns:
            新建文件的句柄
        """
        pass

    @property
    def display_name(self) -> str:
        """
        可读名称 (用于日志)

        默认返回类名，子类可覆盖提供更友好的名称。
        """
        return type(self).__name__


class ArchiveDecoder(ABC):
    """
    归档解码钩子

    将原始字节解码为按归档枚举顺序排列的条目。
    """

    @property
    @abstractmethod
    def suffix(self) -> str:
        """
        支持的文件后缀 (含点号，小写)
        """
        pass

    @abstractmethod
    def decode(self, data: bytes) -> Iterable[Entry]:
        """
        解码归档

        Args:
            data: 归档原始字节

        Returns:
            条目序列，顺序与归档内的枚举顺序一致

        Raises:
            DecodeError: 字节不是合法的归档
        """
        pass

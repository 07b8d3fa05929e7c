#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
归档读取器

将归档原始字节解码为有序条目集合，并负责隐藏条目过滤与公共前缀省略。
"""

import logging
from typing import Optional

from ..core.schema import EntrySet
from ..hooks.base import ArchiveDecoder
from ..hooks.zip_decoder import ZipArchiveDecoder
from ..utils import common_prefix, is_hidden, strip_prefix
from ..exceptions import DecodeError

logger = logging.getLogger(__name__)


class ArchiveReader:
    """
    归档读取器

    包装一个 ArchiveDecoder，默认使用 ZipArchiveDecoder。
    """

    def __init__(self, decoder: Optional[ArchiveDecoder] = None):
        self._decoder = decoder or ZipArchiveDecoder()

    @property
    def decoder(self) -> ArchiveDecoder:
        return self._decoder

    def decode(self, data: bytes, name: Optional[str] = None) -> EntrySet:
        """
        解码归档

        Args:
            data: 归档原始字节
            name: 归档名 (仅用于错误信息)

        Returns:
            按归档枚举顺序排列的条目集合

        Raises:
            DecodeError: 字节不是合法的归档
        """
        try:
            return EntrySet(self._decoder.decode(data))
        except DecodeError as e:
            if name and not e.name:
                raise DecodeError(str(e), name) from e
            raise

    def sanitize(self, entry_set: EntrySet) -> EntrySet:
        """移除所有隐藏条目与元数据目录条目"""
        return entry_set.filter(lambda entry: not is_hidden(entry.path))

    def elide(self, entry_set: EntrySet) -> EntrySet:
        """
        省略公共前缀

        所有条目共享的包装目录被移除；包装目录自身的条目被丢弃。
        """
        prefix = common_prefix(entry_set.paths())
        if not prefix:
            return entry_set

        logger.debug(f"省略公共前缀: {'/'.join(prefix)}/")

        result = EntrySet()
        for entry in entry_set:
            path = strip_prefix(entry.path, prefix)
            if path is None:
                continue
            result.add(entry.with_path(path))
        return result

    def read(self, data: bytes, elide_prefix: bool = False, name: Optional[str] = None) -> EntrySet:
        """
        解码 → 过滤 → (省略前缀)

        Args:
            data: 归档原始字节
            elide_prefix: 是否省略公共前缀 (合并模式)
            name: 归档名 (仅用于日志与错误信息)
        """
        decoded = self.decode(data, name)
        entries = self.sanitize(decoded)
        if elide_prefix:
            entries = self.elide(entries)

        logger.debug(
            f"归档 {name or '<bytes>'}: 解码 {len(decoded)} 个条目, "
            f"保留 {len(entries)} 个"
        )
        return entries

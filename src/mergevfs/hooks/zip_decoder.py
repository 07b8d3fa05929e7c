#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Zip 归档解码

基于标准库 zipfile 的 ArchiveDecoder 实现。
"""

import io
import logging
import zipfile
from typing import List

from .base import ArchiveDecoder
from ..core.schema import ARCHIVE_SUFFIX, Entry
from ..exceptions import DecodeError

logger = logging.getLogger(__name__)


class ZipArchiveDecoder(ArchiveDecoder):
    """
    Zip 解码器

    按中央目录顺序一次性读出全部成员，
    损坏的成员在任何写入发生之前即报错。
    """

    @property
    def suffix(self) -> str:
        return ARCHIVE_SUFFIX

    def decode(self, data: bytes) -> List[Entry]:
        entries = []
        try:
            with zipfile.ZipFile(io.BytesIO(data)) as zf:
                for info in zf.infolist():
                    # 部分打包工具以反斜杠作分隔符
                    name = info.filename.replace("\\", "/")
                    if name.endswith("/"):
                        entries.append(Entry(path=name, is_directory=True))
                    else:
                        entries.append(Entry(path=name, content=zf.read(info)))
        except (zipfile.BadZipFile, zipfile.LargeZipFile,
                NotImplementedError, EOFError, OSError, ValueError) as e:
            raise DecodeError(str(e) or type(e).__name__) from e

        logger.debug(f"zip 解码完成: {len(entries)} 个成员")
        return entries

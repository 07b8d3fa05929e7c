#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Archive 模块测试

测试 ZipArchiveDecoder 与 ArchiveReader 的解码、过滤和前缀省略。
"""

import pytest

from mergevfs.archive import ArchiveReader
from mergevfs.core.schema import Entry, EntrySet
from mergevfs.exceptions import DecodeError, MergeVFSError
from mergevfs.hooks.base import ArchiveDecoder
from mergevfs.hooks.zip_decoder import ZipArchiveDecoder


# ==================== 测试用解码 Hook ====================

class ListDecoder(ArchiveDecoder):
    """把固定条目列表当作归档内容的解码器 (测试用)"""

    def __init__(self, entries):
        self.entries = entries
        self.calls = 0

    @property
    def suffix(self) -> str:
        return ".zip"

    def decode(self, data: bytes):
        self.calls += 1
        return list(self.entries)


# ==================== EntrySet 测试 ====================

class TestEntrySet:
    """EntrySet 数据结构测试"""

    def test_preserves_insertion_order(self):
        names = ["z.txt", "a/", "a/m.txt", "b.txt"]
        entry_set = EntrySet(
            Entry.directory(n) if n.endswith("/") else Entry.file(n, b"x")
            for n in names
        )
        assert entry_set.paths() == names

    def test_replace_keeps_position(self):
        entry_set = EntrySet([Entry.file("a", b"1"), Entry.file("b", b"2")])
        entry_set.add(Entry.file("a", b"3"))

        assert entry_set.paths() == ["a", "b"]
        assert entry_set.get("a").content == b"3"

    def test_filter_returns_new_set(self):
        entry_set = EntrySet([Entry.file("a", b"1"), Entry.file("b", b"2")])
        filtered = entry_set.filter(lambda e: e.path != "a")

        assert filtered.paths() == ["b"]
        assert len(entry_set) == 2

    def test_entry_invariants(self):
        with pytest.raises(ValueError):
            Entry(path="dir/", is_directory=True, content=b"x")
        with pytest.raises(ValueError):
            Entry(path="a.txt", is_directory=False, content=None)
        with pytest.raises(ValueError):
            Entry.file("/", b"x")

    def test_directory_marker_added(self):
        assert Entry.directory("proj").path == "proj/"
        assert Entry.directory("proj/").path == "proj/"


# ==================== ZipArchiveDecoder 测试 ====================

class TestZipArchiveDecoder:
    """ZipArchiveDecoder 测试"""

    def test_decode_preserves_order(self, make_zip):
        data = make_zip([
            ("b.txt", b"b"),
            ("dir/", None),
            ("dir/a.txt", b"a"),
        ])
        entries = ZipArchiveDecoder().decode(data)

        assert [e.path for e in entries] == ["b.txt", "dir/", "dir/a.txt"]
        assert [e.is_directory for e in entries] == [False, True, False]
        assert entries[2].content == b"a"

    def test_backslash_separators(self, make_zip):
        """以反斜杠结尾的成员是目录"""
        data = make_zip([
            ("proj\\", b""),
            ("proj\\src\\a.txt", b"a"),
        ])
        entries = ZipArchiveDecoder().decode(data)

        assert [(e.path, e.is_directory) for e in entries] == [
            ("proj/", True),
            ("proj/src/a.txt", False),
        ]
        assert entries[0].content is None

    def test_binary_content(self, make_zip):
        payload = bytes(range(256))
        entries = ZipArchiveDecoder().decode(make_zip([("img.png", payload)]))
        assert entries[0].content == payload

    def test_invalid_bytes(self):
        with pytest.raises(DecodeError):
            ZipArchiveDecoder().decode(b"definitely not a zip")

    def test_truncated_archive(self, make_zip):
        data = make_zip([("a.txt", b"hello" * 100)])
        with pytest.raises(DecodeError):
            ZipArchiveDecoder().decode(data[:len(data) // 2])

    def test_empty_bytes(self):
        with pytest.raises(DecodeError):
            ZipArchiveDecoder().decode(b"")

    def test_decode_error_is_library_error(self):
        with pytest.raises(MergeVFSError):
            ZipArchiveDecoder().decode(b"PK\x03\x04broken")

    def test_suffix(self):
        assert ZipArchiveDecoder().suffix == ".zip"


# ==================== ArchiveReader 测试 ====================

class TestArchiveReader:
    """ArchiveReader 测试"""

    def test_default_decoder(self):
        assert isinstance(ArchiveReader().decoder, ZipArchiveDecoder)

    def test_sanitize(self, project_zip):
        reader = ArchiveReader()
        entries = reader.sanitize(reader.decode(project_zip))

        assert entries.paths() == [
            "proj/",
            "proj/src/",
            "proj/src/a.raml",
            "proj/README",
        ]

    def test_elide_wrapper_directory(self, project_zip):
        reader = ArchiveReader()
        entries = reader.elide(reader.sanitize(reader.decode(project_zip)))

        # proj/ 自身被丢弃
        assert entries.paths() == ["src/", "src/a.raml", "README"]
        assert entries.get("README").content == b"readme"

    def test_elide_without_common_prefix(self, make_zip):
        reader = ArchiveReader()
        data = make_zip([("a/x.txt", b"x"), ("b/y.txt", b"y")])
        entries = reader.read(data, elide_prefix=True)

        assert entries.paths() == ["a/x.txt", "b/y.txt"]

    def test_elide_with_top_level_file(self, make_zip):
        reader = ArchiveReader()
        data = make_zip([("x.txt", b"x"), ("a/b/y.txt", b"y")])
        entries = reader.read(data, elide_prefix=True)

        assert entries.paths() == ["x.txt", "a/b/y.txt"]

    def test_elide_multi_segment_prefix(self, make_zip):
        reader = ArchiveReader()
        data = make_zip([("a/b/x.txt", b"x"), ("a/b/y.txt", b"y")])
        entries = reader.read(data, elide_prefix=True)

        assert entries.paths() == ["x.txt", "y.txt"]

    def test_elide_keeps_paths_differing_at_first_segment(self, make_zip):
        data = make_zip([("a/b/x.txt", b"x"), ("c/b/y.txt", b"y")])
        entries = ArchiveReader().read(data, elide_prefix=True)

        assert entries.paths() == ["a/b/x.txt", "c/b/y.txt"]

    def test_read_without_elision(self, project_zip):
        entries = ArchiveReader().read(project_zip, elide_prefix=False)
        assert entries.paths()[0] == "proj/"
        assert "proj/.git/config" not in entries

    def test_metadata_does_not_block_elision(self, project_zip):
        """__MACOSX 先被过滤，否则会让公共前缀塌缩"""
        entries = ArchiveReader().read(project_zip, elide_prefix=True)
        assert "README" in entries

    def test_decode_error_carries_name(self):
        with pytest.raises(DecodeError) as exc_info:
            ArchiveReader().decode(b"garbage", name="uploads/proj.zip")
        assert exc_info.value.name == "uploads/proj.zip"
        assert "uploads/proj.zip" in str(exc_info.value)

    def test_custom_decoder(self):
        decoder = ListDecoder([
            Entry.directory("wrap/"),
            Entry.file("wrap/a.txt", b"a"),
            Entry.file("wrap/.hidden/b.txt", b"b"),
        ])
        entries = ArchiveReader(decoder).read(b"ignored", elide_prefix=True)

        assert decoder.calls == 1
        assert entries.paths() == ["a.txt"]

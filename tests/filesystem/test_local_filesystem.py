"""Tests for the local file system backend and change records."""

import pytest

from surgeon.filesystem.changes import CreateFile, Remove, Rename
from surgeon.filesystem.local import LocalFileSystem


class TestLocalFileSystem:
    """Tests for LocalFileSystem."""

    @pytest.fixture
    def fs(self):
        return LocalFileSystem()

    def test_read_dir_sorted(self, fs, tmp_path):
        (tmp_path / "b.txt").write_text("")
        (tmp_path / "a.txt").write_text("")
        (tmp_path / "sub").mkdir()
        assert fs.read_dir(str(tmp_path)) == ["a.txt", "b.txt", "sub"]

    def test_read_dir_missing(self, fs, tmp_path):
        with pytest.raises(FileNotFoundError):
            fs.read_dir(str(tmp_path / "missing"))

    def test_read_dir_on_file(self, fs, tmp_path):
        path = tmp_path / "file.txt"
        path.write_text("")
        with pytest.raises(NotADirectoryError):
            fs.read_dir(str(path))

    def test_write_then_read(self, fs, tmp_path):
        path = str(tmp_path / "out.txt")
        fs.write_file(path, "héllo\n")
        assert fs.read_file(path) == "héllo\n"
        assert fs.exists(path)

    def test_crlf_preserved(self, fs, tmp_path):
        path = tmp_path / "win.txt"
        path.write_bytes(b"a\r\nb\r\n")
        assert fs.read_file(str(path)) == "a\r\nb\r\n"

    def test_remove(self, fs, tmp_path):
        path = tmp_path / "gone.txt"
        path.write_text("x")
        fs.remove(str(path))
        assert not path.exists()
        assert not fs.exists(str(path))

    def test_equality(self):
        assert LocalFileSystem() == LocalFileSystem()
        assert hash(LocalFileSystem()) == hash(LocalFileSystem())


class TestChanges:
    """Tests for file system change records."""

    def test_create(self):
        assert CreateFile("/a.go", "pkg").to_dict() == {
            "change": "create",
            "file": "/a.go",
            "content": "pkg",
        }

    def test_remove(self):
        assert Remove("/a.go").to_dict() == {"change": "delete", "path": "/a.go"}

    def test_rename(self):
        assert Rename("/a.go", "b.go").to_dict() == {
            "change": "rename",
            "from": "/a.go",
            "to": "b.go",
        }

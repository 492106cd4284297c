"""Tests for app.storage.backends.local module."""

import pytest

from app.storage.backends import LocalStorageBackend, StorageBackend


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


@pytest.fixture
def backend():
    return LocalStorageBackend()


def test_is_storage_backend(backend):
    assert isinstance(backend, StorageBackend)


class TestLocalWrites:
    """Tests for write_file() and write_stream()."""

    @pytest.mark.asyncio
    async def test_write_file_creates_parents(self, backend, tmp_path):
        target = tmp_path / "a" / "b" / "file.bin"
        await backend.write_file(str(target), b"data")
        assert target.read_bytes() == b"data"

    @pytest.mark.asyncio
    async def test_write_stream_returns_size(self, backend, tmp_path):
        target = tmp_path / "stream.bin"
        size = await backend.write_stream(str(target), _chunks(b"abc", b"", b"defg"))
        assert size == 7
        assert target.read_bytes() == b"abcdefg"

    @pytest.mark.asyncio
    async def test_write_stream_overwrites(self, backend, tmp_path):
        target = tmp_path / "stream.bin"
        target.write_bytes(b"old content")
        await backend.write_stream(str(target), _chunks(b"new"))
        assert target.read_bytes() == b"new"


class TestLocalDirectories:
    """Tests for directory operations."""

    @pytest.mark.asyncio
    async def test_make_directory_is_idempotent(self, backend, tmp_path):
        target = tmp_path / "x" / "y"
        await backend.make_directory(str(target))
        await backend.make_directory(str(target))
        assert target.is_dir()

    @pytest.mark.asyncio
    async def test_delete_directory_recursive(self, backend, tmp_path):
        (tmp_path / "x" / "y").mkdir(parents=True)
        (tmp_path / "x" / "y" / "f.txt").write_text("f")
        await backend.delete_directory(str(tmp_path / "x"))
        assert not (tmp_path / "x").exists()

    @pytest.mark.asyncio
    async def test_list_directories_sorted(self, backend, tmp_path):
        (tmp_path / "zeta").mkdir()
        (tmp_path / "alpha").mkdir()
        (tmp_path / "file.txt").write_text("f")
        assert await backend.list_directories(str(tmp_path)) == ["alpha", "zeta"]

    @pytest.mark.asyncio
    async def test_list_directories_missing_raises(self, backend, tmp_path):
        with pytest.raises(FileNotFoundError):
            await backend.list_directories(str(tmp_path / "missing"))


class TestLocalFiles:
    """Tests for file deletion and listing."""

    @pytest.mark.asyncio
    async def test_delete_file(self, backend, tmp_path):
        target = tmp_path / "f.txt"
        target.write_text("f")
        await backend.delete_file(str(target))
        assert not await backend.exists(str(target))

    @pytest.mark.asyncio
    async def test_delete_missing_file_raises(self, backend, tmp_path):
        with pytest.raises(FileNotFoundError):
            await backend.delete_file(str(tmp_path / "missing.txt"))

    @pytest.mark.asyncio
    async def test_list_files_order(self, backend, tmp_path):
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "a.txt").write_text("a")
        (tmp_path / "z.txt").write_text("z")
        (tmp_path / "b.txt").write_text("b")

        files = await backend.list_files(str(tmp_path))

        assert files == [
            str(tmp_path / "b.txt"),
            str(tmp_path / "z.txt"),
            str(tmp_path / "sub" / "a.txt"),
        ]

    @pytest.mark.asyncio
    async def test_list_files_missing_raises(self, backend, tmp_path):
        with pytest.raises(FileNotFoundError):
            await backend.list_files(str(tmp_path / "missing"))

"""Unit tests for the command line interface.

Tests for app/cli.py - storage commands run against a temporary web root.

Run with:
    pytest tests/unit/test_cli.py -v
    pytest tests/unit/test_cli.py -v -m fast
"""

from pathlib import Path

import httpx
import pytest
from click.testing import CliRunner

from app import __version__
from app.cli import main
from app.storage.fetch import RemoteFetcher

runner = CliRunner()


@pytest.fixture
def cli_env(monkeypatch, web_root: Path, content_root: Path) -> Path:
    """Point the CLI settings at the temporary roots."""
    monkeypatch.setenv("WEB_ROOT_PATH", str(web_root))
    monkeypatch.setenv("CONTENT_ROOT_PATH", str(content_root))
    return web_root


@pytest.mark.fast
class TestListCommand:
    """Tests for `assets list`."""

    def test_lists_requested_page(self, cli_env, tenant_root):
        """Test paging options select the page shown."""
        tenant_root.mkdir(parents=True)
        for i in range(1, 13):
            (tenant_root / f"file{i:02d}.txt").write_text(str(i))

        result = runner.invoke(main, ["list", "--tenant", "acme", "--page", "2", "--page-size", "5"])

        assert result.exit_code == 0
        assert "12 total, page 2/3" in result.output
        assert "file06.txt" in result.output
        assert "file10.txt" in result.output
        assert "file05.txt" not in result.output
        assert "file11.txt" not in result.output

    def test_filter(self, cli_env, tenant_root):
        """Test the title filter."""
        tenant_root.mkdir(parents=True)
        (tenant_root / "cat.png").write_text("c")
        (tenant_root / "dog.png").write_text("d")

        result = runner.invoke(main, ["list", "--tenant", "acme", "--filter", "CAT"])

        assert result.exit_code == 0
        assert "cat.png" in result.output
        assert "dog.png" not in result.output

    def test_empty(self, cli_env):
        """Test listing an empty tenant."""
        result = runner.invoke(main, ["list", "--tenant", "acme"])
        assert result.exit_code == 0
        assert "No assets found." in result.output

    def test_invalid_tenant(self, cli_env):
        """Test unsafe tenant slugs exit with status 1."""
        result = runner.invoke(main, ["list", "--tenant", "../other"])
        assert result.exit_code == 1
        assert "Invalid tenant slug" in result.output


@pytest.mark.fast
class TestFolderCommands:
    """Tests for `assets mkdir` and `assets rmdir`."""

    def test_mkdir_then_rmdir(self, cli_env, tenant_root):
        """Test folder lifecycle from the command line."""
        created = runner.invoke(main, ["mkdir", "posts/2024", "--tenant", "acme"])
        assert created.exit_code == 0
        assert (tenant_root / "posts" / "2024").is_dir()

        removed = runner.invoke(main, ["rmdir", "posts", "--tenant", "acme"])
        assert removed.exit_code == 0
        assert not (tenant_root / "posts").exists()

    def test_mkdir_without_tenant_uses_shared_root(self, cli_env):
        """Test commands without --tenant use the shared root."""
        result = runner.invoke(main, ["mkdir", "shared"])
        assert result.exit_code == 0
        assert (cli_env / "data" / "shared").is_dir()


@pytest.mark.fast
class TestFileCommands:
    """Tests for `assets upload`, `assets rm` and `assets fetch`."""

    def test_upload(self, cli_env, tenant_root, tmp_path):
        """Test storing a local file."""
        source = tmp_path / "cat.png"
        source.write_bytes(b"image-bytes")

        result = runner.invoke(main, ["upload", str(source), "--path", "posts", "--tenant", "acme"])

        assert result.exit_code == 0
        assert "data/acme/posts/cat.png" in result.output
        assert (tenant_root / "posts" / "cat.png").read_bytes() == b"image-bytes"

    def test_upload_missing_local_file(self, cli_env, tmp_path):
        """Test click rejects a missing source file."""
        result = runner.invoke(main, ["upload", str(tmp_path / "missing.png")])
        assert result.exit_code == 2

    def test_rm(self, cli_env, tenant_root):
        """Test deleting a stored file by its URL path."""
        tenant_root.mkdir(parents=True)
        (tenant_root / "cat.png").write_bytes(b"x")

        result = runner.invoke(main, ["rm", "data/acme/cat.png", "--tenant", "acme"])

        assert result.exit_code == 0
        assert not (tenant_root / "cat.png").exists()

    def test_rm_missing_file(self, cli_env):
        """Test deleting a missing file exits with status 1."""
        result = runner.invoke(main, ["rm", "missing.png", "--tenant", "acme"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_fetch_upstream_error(self, cli_env, tenant_root, monkeypatch):
        """Test remote fetch failures exit with status 1."""
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(404)))
        monkeypatch.setattr(
            "app.storage.service.RemoteFetcher",
            lambda timeout=None: RemoteFetcher(timeout=timeout, client=client),
        )

        result = runner.invoke(main, ["fetch", "https://example.com/cat.png", "--tenant", "acme"])

        assert result.exit_code == 1
        assert "Error" in result.output
        assert not (tenant_root / "cat.png").exists()


@pytest.mark.fast
class TestMiscCommands:
    """Tests for `assets themes` and `--version`."""

    def test_themes(self, cli_env, content_root):
        """Test installed themes are printed."""
        (content_root / "Views" / "Themes" / "standard").mkdir(parents=True)

        result = runner.invoke(main, ["themes"])

        assert result.exit_code == 0
        assert "standard" in result.output

    def test_no_themes(self, cli_env):
        """Test a missing theme directory."""
        result = runner.invoke(main, ["themes"])
        assert result.exit_code == 0
        assert "No themes installed." in result.output

    def test_version(self):
        """Test version option."""
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

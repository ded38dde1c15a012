"""Tests for the output writer (staging, swap, passthrough files)."""

from __future__ import annotations

import os

import pytest

from mcp_static_registry.errors import WriteError
from mcp_static_registry.output.writer import copy_static_files, write_site
from mcp_static_registry.render.endpoints import ContentKind, RenderedFile


def _files():
    return [
        RenderedFile("v0.1/servers/index.json", ContentKind.JSON, '{"servers": []}'),
        RenderedFile("v0.1/servers/index.html", ContentKind.HTML, "<html></html>"),
        RenderedFile("index.html", ContentKind.HTML, "<html>home</html>"),
    ]


def _staging_dirs(parent):
    return [name for name in os.listdir(parent) if ".staging-" in name]


# ── write_site ───────────────────────────────────────────────────────────


class TestWriteSite:
    def test_writes_tree(self, tmp_path):
        out = tmp_path / "dist"
        result = write_site(_files(), str(out))
        assert (out / "v0.1" / "servers" / "index.json").read_text(encoding="utf-8") == '{"servers": []}'
        assert (out / "index.html").read_text(encoding="utf-8") == "<html>home</html>"
        assert result.json_files == 1
        assert result.html_files == 2
        assert result.copied_files == ()
        assert result.total_files == 3
        assert result.output_dir == str(out)

    def test_no_staging_left_behind(self, tmp_path):
        write_site(_files(), str(tmp_path / "dist"))
        assert _staging_dirs(tmp_path) == []

    def test_replaces_stale_content(self, tmp_path):
        out = tmp_path / "dist"
        (out / "v0.1" / "servers" / "removed").mkdir(parents=True)
        (out / "v0.1" / "servers" / "removed" / "index.json").write_text("{}", encoding="utf-8")
        (out / "stale.txt").write_text("old", encoding="utf-8")

        write_site(_files(), str(out))

        assert not (out / "stale.txt").exists()
        assert not (out / "v0.1" / "servers" / "removed").exists()
        assert (out / "index.html").exists()

    def test_replaces_file_at_output_path(self, tmp_path):
        out = tmp_path / "dist"
        out.write_text("not a directory", encoding="utf-8")
        write_site(_files(), str(out))
        assert out.is_dir()

    def test_creates_missing_parent(self, tmp_path):
        out = tmp_path / "nested" / "site"
        write_site(_files(), str(out))
        assert (out / "index.html").exists()

    def test_output_is_world_readable(self, tmp_path):
        out = tmp_path / "dist"
        write_site(_files(), str(out))
        assert os.stat(out).st_mode & 0o755 == 0o755

    def test_exact_bytes(self, tmp_path):
        out = tmp_path / "dist"
        content = '{\n  "name": "Café"\n}'
        write_site([RenderedFile("a/index.json", ContentKind.JSON, content)], str(out))
        assert (out / "a" / "index.json").read_bytes() == content.encode("utf-8")

    @pytest.mark.parametrize("bad_path", ["../escape/index.json", "v0.1/../../escape.json"])
    def test_escaping_path_rejected(self, tmp_path, bad_path):
        out = tmp_path / "dist"
        out.mkdir()
        (out / "keep.txt").write_text("previous build", encoding="utf-8")

        files = _files() + [RenderedFile(bad_path, ContentKind.JSON, "{}")]
        with pytest.raises(WriteError) as exc_info:
            write_site(files, str(out))

        assert "escapes the output directory" in str(exc_info.value)
        assert (out / "keep.txt").read_text(encoding="utf-8") == "previous build"
        assert not (tmp_path / "escape").exists()
        assert not (tmp_path / "escape.json").exists()
        assert _staging_dirs(tmp_path) == []

    def test_failed_write_keeps_previous_build(self, tmp_path):
        out = tmp_path / "dist"
        out.mkdir()
        (out / "keep.txt").write_text("previous build", encoding="utf-8")

        # A file and a directory at the same path cannot both be written.
        files = [
            RenderedFile("a", ContentKind.JSON, "{}"),
            RenderedFile("a/index.json", ContentKind.JSON, "{}"),
        ]
        with pytest.raises(WriteError):
            write_site(files, str(out))

        assert (out / "keep.txt").read_text(encoding="utf-8") == "previous build"
        assert _staging_dirs(tmp_path) == []


# ── Passthrough files ────────────────────────────────────────────────────


class TestStaticFiles:
    def test_copies_present_files(self, tmp_path):
        static = tmp_path / "static"
        static.mkdir()
        (static / ".nojekyll").write_text("", encoding="utf-8")
        (static / "robots.txt").write_text("User-agent: *\n", encoding="utf-8")
        out = tmp_path / "dist"

        result = write_site(
            _files(),
            str(out),
            static_dir=str(static),
            static_files=[".nojekyll", "robots.txt"],
        )

        assert result.copied_files == (".nojekyll", "robots.txt")
        assert (out / ".nojekyll").exists()
        assert (out / "robots.txt").read_text(encoding="utf-8") == "User-agent: *\n"

    def test_missing_files_skipped(self, tmp_path):
        static = tmp_path / "static"
        static.mkdir()
        (static / "robots.txt").write_text("x", encoding="utf-8")
        dest = tmp_path / "dest"
        dest.mkdir()

        copied = copy_static_files(str(static), [".nojekyll", "robots.txt"], str(dest))

        assert copied == ["robots.txt"]
        assert not (dest / ".nojekyll").exists()

    def test_no_static_dir(self, tmp_path):
        assert copy_static_files(None, ["robots.txt"], str(tmp_path)) == []

    def test_directory_with_static_name_skipped(self, tmp_path):
        static = tmp_path / "static"
        (static / "robots.txt").mkdir(parents=True)
        assert copy_static_files(str(static), ["robots.txt"], str(tmp_path)) == []


# ── Output directory ownership ───────────────────────────────────────────


class TestOutputDirGuard:
    def _seed(self, directory):
        directory.mkdir(parents=True, exist_ok=True)
        (directory / "mcp-registry.json").write_text('{"servers": []}', encoding="utf-8")
        (directory / "README.md").write_text("keep me", encoding="utf-8")

    def _assert_intact(self, directory):
        assert (directory / "mcp-registry.json").read_text(encoding="utf-8") == '{"servers": []}'
        assert (directory / "README.md").read_text(encoding="utf-8") == "keep me"
        assert not (directory / "index.html").exists()

    def test_working_directory_refused(self, tmp_path, monkeypatch):
        self._seed(tmp_path)
        monkeypatch.chdir(tmp_path)
        with pytest.raises(WriteError, match="dedicated output directory"):
            write_site(_files(), ".")
        self._assert_intact(tmp_path)
        assert _staging_dirs(tmp_path.parent) == []

    def test_ancestor_of_working_directory_refused(self, tmp_path, monkeypatch):
        work = tmp_path / "repo" / "sub"
        work.mkdir(parents=True)
        monkeypatch.chdir(work)
        with pytest.raises(WriteError):
            write_site(_files(), str(tmp_path / "repo"))
        assert work.is_dir()

    def test_directory_holding_protected_file_refused(self, tmp_path):
        site = tmp_path / "site"
        self._seed(site)
        with pytest.raises(WriteError, match="mcp-registry.json"):
            write_site(_files(), str(site), protected_paths=[str(site / "mcp-registry.json")])
        self._assert_intact(site)

    def test_static_dir_refused(self, tmp_path):
        site = tmp_path / "site"
        self._seed(site)
        with pytest.raises(WriteError):
            write_site(_files(), str(site), static_dir=str(site / "public"))
        self._assert_intact(site)

    def test_symlink_to_protected_path_refused(self, tmp_path):
        site = tmp_path / "site"
        self._seed(site)
        link = tmp_path / "dist"
        link.symlink_to(site, target_is_directory=True)
        with pytest.raises(WriteError):
            write_site(_files(), str(link), protected_paths=[str(site / "mcp-registry.json")])
        self._assert_intact(site)

    def test_sibling_directory_allowed(self, tmp_path):
        self._seed(tmp_path / "src")
        write_site(
            _files(),
            str(tmp_path / "dist"),
            protected_paths=[str(tmp_path / "src" / "mcp-registry.json")],
        )
        assert (tmp_path / "dist" / "index.html").exists()
        self._assert_intact(tmp_path / "src")


class TestSymlinkedOutput:
    def test_writes_through_link(self, tmp_path):
        target = tmp_path / "www" / "site"
        target.mkdir(parents=True)
        (target / "stale.txt").write_text("old", encoding="utf-8")
        link = tmp_path / "dist"
        link.symlink_to(target, target_is_directory=True)

        result = write_site(_files(), str(link))

        assert link.is_symlink()
        assert os.path.realpath(link) == os.path.realpath(target)
        assert (target / "index.html").read_text(encoding="utf-8") == "<html>home</html>"
        assert not (target / "stale.txt").exists()
        assert result.output_dir == str(link)
        assert _staging_dirs(tmp_path / "www") == []

    def test_dangling_link_target_created(self, tmp_path):
        target = tmp_path / "www" / "site"
        link = tmp_path / "dist"
        link.symlink_to(target, target_is_directory=True)

        write_site(_files(), str(link))

        assert link.is_symlink()
        assert (target / "v0.1" / "servers" / "index.json").exists()

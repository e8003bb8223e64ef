"""Tests for the shared file walker."""

import os

import pytest

from readyscan.walker import count_files, extension_filter, read_lines, relative_path, walk_files


class TestWalkFiles:
    def test_sorted_and_pruned(self, tmp_dir_with_files):
        root = tmp_dir_with_files({
            "b.py": "",
            "a/z.js": "",
            "a/y.py": "",
            "node_modules/pkg/index.js": "",
            "src/.git/HEAD": "",
            "dist/app.js": "",
        })
        paths = [relative_path(p, root) for p in walk_files(root)]
        # a directory's own files come before its subdirectories
        assert paths == ["b.py", "a/y.py", "a/z.js"]

    def test_restartable(self, tmp_dir_with_files):
        root = tmp_dir_with_files({"one.py": "", "two.py": ""})
        assert list(walk_files(root)) == list(walk_files(root))

    def test_accept_filter(self, tmp_dir_with_files):
        root = tmp_dir_with_files({
            "app.py": "",
            "README.md": "",
            ".env": "",
            ".env.production": "",
            "yarn.lock": "",
        })
        accept = extension_filter({".py", ".lock"}, env_files=True, skip_suffixes=(".lock",))
        names = sorted(p.name for p in walk_files(root, accept))
        assert names == [".env", ".env.production", "app.py"]

    def test_extra_skip_dirs(self, tmp_dir_with_files):
        root = tmp_dir_with_files({"fixtures/a.py": "", "src/b.py": ""})
        paths = [relative_path(p, root) for p in walk_files(root, skip_dirs={"fixtures"})]
        assert paths == ["src/b.py"]

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_broken_symlink_is_skipped(self, tmp_dir_with_files):
        root = tmp_dir_with_files({"real.py": "x = 1\n"})
        os.symlink(root / "missing.py", root / "dangling.py")
        assert [p.name for p in walk_files(root)] == ["real.py"]

    @pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root ignores permissions")
    def test_unsearchable_directory_is_skipped(self, tmp_dir_with_files):
        root = tmp_dir_with_files({"locked/a.py": "x = 1\n", "ok.py": "y = 2\n"})
        locked = root / "locked"
        locked.chmod(0o444)
        try:
            assert [p.name for p in walk_files(root)] == ["ok.py"]
        finally:
            locked.chmod(0o755)

    def test_count_files(self, tmp_dir_with_files):
        root = tmp_dir_with_files({
            "a.py": "",
            "docs/guide.md": "",
            "logo.png": "",
            "node_modules/x/index.js": "",
            ".next/cache.json": "",
        })
        assert count_files(root) == 3

    def test_count_empty_dir(self, tmp_path):
        assert count_files(tmp_path) == 0


class TestReadLines:
    def test_reads_lines(self, tmp_path):
        f = tmp_path / "a.txt"
        f.write_text("one\ntwo\n")
        assert read_lines(f) == ["one", "two"]

    def test_invalid_utf8_is_tolerated(self, tmp_path):
        f = tmp_path / "blob.js"
        f.write_bytes(b"ok\n\xff\xfe bad\n")
        lines = read_lines(f)
        assert lines is not None
        assert lines[0] == "ok"

    def test_unreadable_returns_none(self, tmp_path):
        assert read_lines(tmp_path / "missing.py") is None

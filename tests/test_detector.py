"""Tests for stack detection."""

import errno
from pathlib import Path

import pytest

from stack_scanner import detector
from stack_scanner.detector import detect
from stack_scanner.errors import InputError

from conftest import write_files


class TestDetect:
    """Test detect()."""

    def test_empty_directory(self, temp_dir):
        """Test that no profile matches an empty tree and that is not an error."""
        assert detect(temp_dir) == set()

    def test_missing_root(self, tmp_path):
        """Test that a missing root is an InputError."""
        with pytest.raises(InputError):
            detect(tmp_path / "missing")

    def test_unlistable_root(self, temp_dir, monkeypatch):
        """Test that a root that cannot be listed is an InputError."""

        def denied(self):
            raise PermissionError(errno.EACCES, "Permission denied", str(self))

        monkeypatch.setattr(Path, "iterdir", denied)
        with pytest.raises(InputError, match="cannot list directory"):
            detect(temp_dir)

    @pytest.mark.parametrize(
        "files, expected",
        [
            ({"next.config.mjs": "export default {}"}, "nextjs"),
            ({"package.json": '{"dependencies": {"next": "14.0.0"}}'}, "nextjs"),
            ({"vite.config.ts": "export default {}"}, "vite"),
            ({"bun.lockb": ""}, "bun"),
            ({"bunfig.toml": ""}, "bun"),
            ({"package.json": '{"dependencies": {"express": "^4"}}'}, "express"),
            ({"manage.py": ""}, "django"),
            ({"mysite/settings.py": "DEBUG = False"}, "django"),
            ({"requirements.txt": "FastAPI==0.110\n"}, "fastapi"),
            ({"requirements-dev.txt": "fastapi\n"}, "fastapi"),
            ({"pyproject.toml": 'dependencies = ["fastapi"]'}, "fastapi"),
            ({"Dockerfile": "FROM python:3.12"}, "docker"),
            ({"compose.yaml": "services: {}"}, "docker"),
            ({"convex/schema.ts": ""}, "convex"),
        ],
    )
    def test_single_profile(self, temp_dir, files, expected):
        """Test each detection predicate on its own."""
        write_files(temp_dir, files)
        assert detect(temp_dir) == {expected}

    def test_profiles_are_independent(self, temp_dir):
        """Test that several profiles can be active at once."""
        write_files(temp_dir, {
            "package.json": '{"dependencies": {"next": "14", "express": "4"}}',
            "Dockerfile": "FROM node:20",
            "convex/users.ts": "",
        })
        assert detect(temp_dir) == {"nextjs", "express", "docker", "convex"}

    def test_express_substring_needs_quotes(self, temp_dir):
        """Test that only the quoted package name counts."""
        write_files(temp_dir, {"package.json": '{"dependencies": {"express-validator": "7"}}'})
        assert "express" not in detect(temp_dir)

    def test_manifest_only_checked_at_root(self, temp_dir):
        """Test that nested manifests do not trigger detection."""
        write_files(temp_dir, {"tools/requirements.txt": "fastapi"})
        assert detect(temp_dir) == set()

    def test_settings_in_skipped_dir_ignored(self, temp_dir):
        """Test that the anywhere search honors the exclusion list."""
        write_files(temp_dir, {"node_modules/pkg/settings.py": ""})
        assert detect(temp_dir) == set()

    def test_settings_in_user_excluded_dir_ignored(self, temp_dir):
        """Test that the anywhere search honors user exclusions."""
        write_files(temp_dir, {"legacy/settings.py": ""})
        assert detect(temp_dir, exclude=["legacy"]) == set()

    def test_each_manifest_read_once(self, temp_dir, monkeypatch):
        """Test that package.json is read once even though two profiles inspect it."""
        write_files(temp_dir, {"package.json": '{"dependencies": {"express": "4"}}'})
        reads = []
        original = detector._read_manifest

        def counting(path):
            reads.append(path.name)
            return original(path)

        monkeypatch.setattr(detector, "_read_manifest", counting)
        assert detect(temp_dir) == {"express"}
        assert reads.count("package.json") == 1

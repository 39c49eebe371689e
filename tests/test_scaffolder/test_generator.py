"""Tests for the project generator (walrus_starter.scaffolder.generator).

Covers the ordered generation steps, refusal paths that must not write, and
the interrupt/cleanup contract with :class:`GenerationTracker`.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from unittest.mock import patch

import pytest

from walrus_starter.config import Settings
from walrus_starter.scaffolder import file_ops
from walrus_starter.scaffolder.generator import (
    GenerationTracker,
    ProjectGenerator,
    cleanup_interrupted,
)


@pytest.fixture
def tracker() -> GenerationTracker:
    return GenerationTracker()


@pytest.fixture
def generator(tracker: GenerationTracker) -> ProjectGenerator:
    return ProjectGenerator(settings=Settings(), tracker=tracker)


def _snapshot(root: Path) -> dict[str, bytes]:
    return {str(p.relative_to(root)): p.read_bytes() for p in sorted(root.rglob("*")) if p.is_file()}


# ---------------------------------------------------------------------------
# Successful generation
# ---------------------------------------------------------------------------


class TestGenerate:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_generates_project(self, generator, context, template_root, tracker):
        result = await generator.generate(context, template_root)

        target = context.project_path
        assert result.success is True
        assert result.preset == "react-mysten-simple-upload"
        assert result.project_path == target
        assert result.env_created is True
        # housekeeping entries (node_modules, dist, .git) are not counted
        assert result.files_created == 7
        assert tracker.current is None

        assert json.loads((target / "package.json").read_text())["name"] == "my-walrus-app"
        assert (target / "index.html").read_text() == "<title>my-walrus-app</title>\n"
        assert (target / "README.md").exists()
        assert not (target / "README.md.j2").exists()
        assert (target / ".env").read_bytes() == (target / ".env.example").read_bytes()
        assert "style={{ color: 'red' }}" in (target / "src" / "App.tsx").read_text()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_housekeeping_entries_not_copied(self, generator, context, template_root):
        await generator.generate(context, template_root)
        for name in ("node_modules", "dist", ".git"):
            assert not (context.project_path / name).exists()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_no_placeholders_left(self, generator, context, template_root):
        await generator.generate(context, template_root)
        for path in context.project_path.rglob("*"):
            if path.is_file():
                assert "{{projectName}}" not in path.read_text()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_existing_empty_directory_is_accepted(self, generator, context, template_root):
        context.project_path.mkdir(parents=True)
        result = await generator.generate(context, template_root)
        assert result.success is True

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_explicit_target_dir(self, generator, context, template_root, tmp_path: Path):
        target = tmp_path / "elsewhere"
        result = await generator.generate(context, template_root, target_dir=target)
        assert result.success is True
        assert result.project_path == target
        assert (target / "package.json").exists()
        assert not context.project_path.exists()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_uses_settings_templates_dir_by_default(self, context, template_root, tracker):
        generator = ProjectGenerator(settings=Settings(templates_dir=template_root), tracker=tracker)
        result = await generator.generate(context)
        assert result.success is True

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_preset_without_env_example(self, generator, context, template_root):
        (template_root / "react-mysten-simple-upload" / ".env.example").unlink()
        result = await generator.generate(context, template_root)
        assert result.success is True
        assert result.env_created is False
        assert not (context.project_path / ".env").exists()


# ---------------------------------------------------------------------------
# Refusals (nothing written)
# ---------------------------------------------------------------------------


class TestRefusals:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_non_empty_target_left_untouched(self, generator, context, template_root, tree_writer):
        target = tree_writer(context.project_path, {"mine.txt": "precious", "sub/data.bin": b"\x00\x01"})
        before = _snapshot(target)

        result = await generator.generate(context, template_root)

        assert result.success is False
        assert result.reason == "directory-not-empty"
        assert _snapshot(target) == before

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_target_that_is_a_file(self, generator, context, template_root):
        context.project_path.parent.mkdir(parents=True)
        context.project_path.write_text("file")
        result = await generator.generate(context, template_root)
        assert result.reason == "directory-not-empty"
        assert context.project_path.read_text() == "file"

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_preset(self, generator, make_context, template_root, tracker):
        ctx = make_context(use_case="gallery", tailwind=True)
        result = await generator.generate(ctx, template_root)

        assert result.success is False
        assert result.reason == "preset-not-found"
        assert "react-mysten-gallery-tailwind" in result.error
        assert "react-mysten-gallery" in result.error  # available presets listed
        assert not ctx.project_path.exists()
        assert tracker.current is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_missing_template_root(self, generator, context, tmp_path: Path):
        result = await generator.generate(context, tmp_path / "no-presets")
        assert result.reason == "preset-not-found"
        assert "available: none" in result.error
        assert not context.project_path.exists()


# ---------------------------------------------------------------------------
# Failures during writing
# ---------------------------------------------------------------------------


class TestGenerationErrors:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_render_failure_reports_generation_error(self, generator, context, template_root, tracker):
        (template_root / "react-mysten-simple-upload" / "broken.txt.j2").write_text("{{ undefined_var }}")
        result = await generator.generate(context, template_root)

        assert result.success is False
        assert result.reason == "generation-error"
        assert "broken.txt.j2" in result.error
        assert tracker.current is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_copy_failure_reports_generation_error(self, generator, context, template_root, tracker):
        with patch("walrus_starter.scaffolder.file_ops.shutil.copy2", side_effect=PermissionError("denied")):
            result = await generator.generate(context, template_root)

        assert result.reason == "generation-error"
        assert "denied" in result.error
        assert tracker.current is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_unexpected_error_propagates_and_clears(self, generator, context, template_root, tracker):
        with patch(
            "walrus_starter.scaffolder.generator.copy_env_file", side_effect=RuntimeError("boom")
        ):
            with pytest.raises(RuntimeError):
                await generator.generate(context, template_root)
        assert tracker.current is None


# ---------------------------------------------------------------------------
# Interrupts and cleanup
# ---------------------------------------------------------------------------


async def _copy_then_cancel(src, dest, exclude=()):
    """Copy one file, then behave as if the task was cancelled."""
    dest = Path(dest)
    dest.mkdir(parents=True, exist_ok=True)
    (dest / "package.json").write_bytes((Path(src) / "package.json").read_bytes())
    raise asyncio.CancelledError


class TestInterrupts:
    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_cancel_mid_copy_leaves_tracker_set(self, generator, context, template_root, tracker):
        with patch("walrus_starter.scaffolder.generator.copy_directory", _copy_then_cancel):
            with pytest.raises(asyncio.CancelledError):
                await generator.generate(context, template_root)

        assert tracker.current == context.project_path
        assert (context.project_path / "package.json").exists()

        assert cleanup_interrupted(tracker) is True
        assert not context.project_path.exists()
        assert tracker.current is None

        # The same command can run again immediately.
        result = await generator.generate(context, template_root)
        assert result.success is True

    @pytest.mark.unit
    def test_keyboard_interrupt_through_asyncio_run(self, context, template_root, tracker):
        calls = {"n": 0}
        real_copy = file_ops.shutil.copy2

        def flaky_copy(src, dst, *args, **kwargs):
            calls["n"] += 1
            if calls["n"] == 3:
                raise KeyboardInterrupt
            return real_copy(src, dst, *args, **kwargs)

        generator = ProjectGenerator(tracker=tracker)
        with patch("walrus_starter.scaffolder.file_ops.shutil.copy2", flaky_copy):
            with pytest.raises(KeyboardInterrupt):
                asyncio.run(generator.generate(context, template_root))

        assert tracker.current == context.project_path
        assert cleanup_interrupted(tracker) is True
        assert not context.project_path.exists()

    @pytest.mark.unit
    def test_interrupt_before_write_never_deletes_user_data(
        self, context, template_root, tracker, tree_writer
    ):
        tree_writer(context.project_path, {"keep.txt": "mine"})
        generator = ProjectGenerator(tracker=tracker)
        result = asyncio.run(generator.generate(context, template_root))

        assert result.reason == "directory-not-empty"
        assert tracker.current is None
        assert cleanup_interrupted(tracker) is True
        assert (context.project_path / "keep.txt").read_text() == "mine"

    @pytest.mark.unit
    def test_cleanup_with_nothing_in_progress(self, tracker):
        assert cleanup_interrupted(tracker) is True

    @pytest.mark.unit
    def test_cleanup_when_directory_already_gone(self, tracker, tmp_path: Path):
        tracker.begin(tmp_path / "never-created")
        assert cleanup_interrupted(tracker) is True
        assert tracker.current is None

    @pytest.mark.unit
    def test_cleanup_failure_reports_path(self, tracker, tmp_path: Path, capsys):
        partial = tmp_path / "partial"
        partial.mkdir()
        tracker.begin(partial)

        with patch("walrus_starter.scaffolder.generator.shutil.rmtree", side_effect=OSError("busy")):
            assert cleanup_interrupted(tracker) is False

        assert partial.exists()
        assert tracker.current == partial


class TestGenerationTracker:
    @pytest.mark.unit
    def test_begin_and_clear(self, tmp_path: Path):
        tracker = GenerationTracker()
        assert tracker.current is None
        tracker.begin(str(tmp_path))
        assert tracker.current == tmp_path
        tracker.clear()
        assert tracker.current is None

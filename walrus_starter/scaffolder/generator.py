"""Project generation orchestrator.

Copies the preset selected by a ``Context`` into the target directory,
substitutes the project identity and derives ``.env`` from ``.env.example``.

Cancellation (Ctrl+C) is handled by the caller: the generator marks the
target on a :class:`GenerationTracker` right before the first write and
clears the mark when it returns.  If the run is interrupted the mark is still
set and :func:`cleanup_interrupted` removes the partial tree.
"""

from __future__ import annotations

import shutil
import threading
from pathlib import Path

from jinja2 import TemplateError

from walrus_starter.config import Settings
from walrus_starter.models import Context, GenerationResult
from walrus_starter.utils import console, print_error, print_info, print_success, print_warning

from .file_ops import copy_directory, copy_env_file, is_directory_empty
from .layers import PresetPathError, get_preset_name, list_presets, resolve_preset_path
from .templates import TemplateRenderError, TemplateRenderer


# ---------------------------------------------------------------------------
# In-progress tracking
# ---------------------------------------------------------------------------


class GenerationTracker:
    """The one piece of state shared with the interrupt path.

    ``begin`` is called immediately before the first file is written and
    ``clear`` immediately after generation ends, whether it succeeded or
    failed.  While a path is set, an interrupt means that path is a partial
    project.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._current: Path | None = None

    @property
    def current(self) -> Path | None:
        with self._lock:
            return self._current

    def begin(self, path: str | Path) -> None:
        with self._lock:
            self._current = Path(path)

    def clear(self) -> None:
        with self._lock:
            self._current = None


generation_tracker = GenerationTracker()


def cleanup_interrupted(tracker: GenerationTracker = generation_tracker) -> bool:
    """Remove the directory of an interrupted generation, if there is one.

    Best effort: a failed removal is reported together with the path the user
    has to delete by hand, and never raised.

    Returns:
        ``True`` if nothing was in progress or the directory was removed.
    """
    path = tracker.current
    if path is None:
        return True

    print_info(f"Cleaning up partial generation: {path}")
    try:
        if path.exists():
            shutil.rmtree(path)
    except OSError as exc:
        print_error(f"Failed to clean up: {exc}")
        print_warning(f"Please delete manually: {path}")
        return False

    tracker.clear()
    print_success("Cleanup completed")
    return True


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Creates a project directory from a preset.

    Steps run strictly in order and each completes before the next starts:

    1. refuse a target that exists and is not empty,
    2. resolve the preset directory (it must exist),
    3. copy the preset, skipping housekeeping entries,
    4. substitute project-identity placeholders,
    5. create ``.env`` from ``.env.example`` when missing.

    Nothing is written before steps 1 and 2 pass.  A failure in steps 3-5
    yields ``success=False`` and leaves the partial tree for the caller.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        tracker: GenerationTracker | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.tracker = tracker if tracker is not None else generation_tracker
        self.renderer = TemplateRenderer()

    async def generate(
        self,
        context: Context,
        template_root: str | Path | None = None,
        target_dir: str | Path | None = None,
    ) -> GenerationResult:
        """Generate the project described by *context*.

        Args:
            context: Validated configuration.
            template_root: Directory holding the presets.  Defaults to
                ``settings.templates_dir``.
            target_dir: Where to create the project.  Defaults to
                ``context.project_path``.
        """
        root = Path(template_root) if template_root is not None else self.settings.templates_dir
        target = Path(target_dir) if target_dir is not None else context.project_path
        preset = get_preset_name(context)

        # 1. Never write into somebody's data
        if not is_directory_empty(target):
            print_error(f"Directory {target} already exists and is not empty")
            return GenerationResult(
                success=False,
                project_path=target,
                preset=preset,
                reason="directory-not-empty",
                error=f"Directory {target} already exists and is not empty",
            )

        # 2. Locate the preset
        try:
            preset_path = resolve_preset_path(context, root)
        except PresetPathError as exc:
            print_error(str(exc))
            return GenerationResult(
                success=False, project_path=target, preset=preset,
                reason="preset-not-found", error=str(exc),
            )
        if not preset_path.is_dir():
            available = ", ".join(list_presets(root)) or "none"
            message = f'No template found for preset "{preset}" (available: {available})'
            print_error(message)
            return GenerationResult(
                success=False, project_path=target, preset=preset,
                reason="preset-not-found", error=message,
            )

        console.print(f"  Using preset [bold]{preset}[/bold]")

        # Cancellation (CancelledError / KeyboardInterrupt) skips clear() on
        # purpose so the interrupt path can find the partial tree.
        self.tracker.begin(target)
        try:
            # 3. Copy
            files_created = await copy_directory(preset_path, target, self.settings.exclude)
            console.print(f"  [green]+[/green] Copied {files_created} file(s)")

            # 4. Substitute
            await self.renderer.render_tree(target, context)
            console.print("  [green]+[/green] Project identity applied")

            # 5. Environment file
            env_result = copy_env_file(target)
            if env_result.created:
                console.print("  [green]+[/green] Created .env from .env.example")
        except (OSError, TemplateRenderError, TemplateError) as exc:
            self.tracker.clear()
            print_error(f"Project generation failed: {exc}")
            return GenerationResult(
                success=False, project_path=target, preset=preset,
                reason="generation-error", error=str(exc),
            )
        except Exception:
            self.tracker.clear()
            raise
        self.tracker.clear()

        print_success(f"Project created at {target}")
        return GenerationResult(
            success=True,
            project_path=target,
            preset=preset,
            files_created=files_created,
            env_created=env_result.created,
        )

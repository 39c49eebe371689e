"""walrus-starter scaffolder -- turns a validated ``Context`` into a project.

Quick usage::

    from walrus_starter.scaffolder import ProjectGenerator, cleanup_interrupted

    try:
        result = asyncio.run(ProjectGenerator().generate(context))
    except KeyboardInterrupt:
        cleanup_interrupted()
"""

from walrus_starter.scaffolder.file_ops import copy_directory, copy_env_file, is_directory_empty
from walrus_starter.scaffolder.generator import (
    GenerationTracker,
    ProjectGenerator,
    cleanup_interrupted,
    generation_tracker,
)
from walrus_starter.scaffolder.layers import (
    PresetPathError,
    get_preset_name,
    list_presets,
    resolve_preset_path,
)
from walrus_starter.scaffolder.templates import TemplateRenderer

__all__ = [
    "GenerationTracker",
    "PresetPathError",
    "ProjectGenerator",
    "TemplateRenderer",
    "cleanup_interrupted",
    "copy_directory",
    "copy_env_file",
    "generation_tracker",
    "get_preset_name",
    "is_directory_empty",
    "list_presets",
    "resolve_preset_path",
]

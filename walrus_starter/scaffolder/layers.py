"""Map a ``Context`` to its preset (template layer) directory.

Preset names follow ``{framework}-{sdk}-{useCase}[-feature...]`` where the
optional feature tokens are sorted alphabetically, e.g.::

    react-mysten-simple-upload
    react-mysten-gallery-tailwind
    react-mysten-simple-upload-analytics-enoki
"""

from __future__ import annotations

import os
from pathlib import Path

from walrus_starter.config import DEFAULT_TEMPLATES_DIR
from walrus_starter.models import Context

SEPARATOR = "-"


class PresetPathError(ValueError):
    """Raised when a resolved preset path would escape the templates root."""


def feature_tokens(context: Context) -> list[str]:
    """Return the active optional feature tokens, sorted."""
    flags = {
        "analytics": context.analytics,
        "enoki": context.use_zk_login,
        "tailwind": context.tailwind,
    }
    return sorted(token for token, enabled in flags.items() if enabled)


def get_preset_name(context: Context) -> str:
    """Build the preset identifier for *context*."""
    parts = [context.framework.value, context.sdk.value, context.use_case.value]
    return SEPARATOR.join(parts + feature_tokens(context))


def _normalise(path: str | Path) -> str:
    return os.path.normcase(os.path.abspath(os.path.normpath(str(path))))


def ensure_within_root(path: str | Path, root: str | Path) -> Path:
    """Return *path* normalised, or raise if it does not live under *root*."""
    normalised = _normalise(path)
    normalised_root = _normalise(root)
    # Strictly below the root: the root itself is not a preset.
    if not normalised.startswith(normalised_root.rstrip(os.sep) + os.sep):
        raise PresetPathError(
            f"Invalid template path: {path} is outside templates root {root}"
        )
    return Path(normalised)


def resolve_preset_path(context: Context, template_root: str | Path | None = None) -> Path:
    """Return the absolute preset directory for *context*.

    Only the enumerated axes feed the name today, so escaping the root is not
    reachable through a valid ``Context``; the containment check stays anyway.

    Raises:
        PresetPathError: If the joined path resolves outside *template_root*.
    """
    root = Path(template_root) if template_root is not None else DEFAULT_TEMPLATES_DIR
    return ensure_within_root(root / get_preset_name(context), root)


def list_presets(template_root: str | Path | None = None) -> list[str]:
    """Return the sorted names of the preset directories under *template_root*."""
    root = Path(template_root) if template_root is not None else DEFAULT_TEMPLATES_DIR
    if not root.is_dir():
        return []
    return sorted(p.name for p in root.iterdir() if p.is_dir() and not p.name.startswith("."))

"""Structural checks on a generated, installed project."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

REQUIRED_DIRS: tuple[str, ...] = ("src", "node_modules")


@dataclass
class ProjectCheckResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


def validate_project(project_path: str | Path) -> ProjectCheckResult:
    """Check that the files a runnable project needs are in place.

    Looks for a parseable ``package.json`` with ``name`` and ``scripts``, plus
    the ``src/`` and ``node_modules/`` directories.  Every problem found is
    listed; the check does not stop at the first one.
    """
    root = Path(project_path)
    errors: list[str] = []

    manifest_path = root / "package.json"
    if not manifest_path.is_file():
        errors.append("package.json is missing")
    else:
        try:
            manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            errors.append(f"package.json is not valid JSON: {exc}")
        else:
            if not isinstance(manifest, dict):
                errors.append("package.json must contain a JSON object")
            else:
                if not manifest.get("name"):
                    errors.append('package.json has no "name"')
                if not isinstance(manifest.get("scripts"), dict):
                    errors.append('package.json has no "scripts" section')

    for name in REQUIRED_DIRS:
        if not (root / name).is_dir():
            errors.append(f"{name}/ directory is missing")

    return ProjectCheckResult(valid=not errors, errors=errors)

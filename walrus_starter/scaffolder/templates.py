"""Project-identity substitution for a freshly copied preset.

Preset files are copied byte-for-byte and then post-processed in place:

* ``*.j2`` files are rendered with Jinja2 (``StrictUndefined``, so a missing
  variable is an error rather than an empty string) and written without the
  ``.j2`` suffix.
* Every other text file gets a literal replacement of the identity tokens
  (``{{projectName}}``, ``{{sdk}}``, ...).  JSX such as ``style={{ color }}``
  is left alone because only the exact tokens are replaced.
* ``package.json`` gets its ``name`` field set to the project name.

Binary files are never modified.
"""

from __future__ import annotations

import asyncio
import json
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, StrictUndefined, TemplateError

from walrus_starter.models import Context

TEMPLATE_SUFFIX = ".j2"

_TOKEN_RE = re.compile(r"\{\{(projectName|sdk|framework|useCase|packageManager)\}\}")


class TemplateRenderError(Exception):
    """Raised when a preset file cannot be rendered completely."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


def identity_tokens(context: Context) -> dict[str, str]:
    """Return the token -> value mapping for *context*."""
    return {
        "projectName": context.project_name,
        "sdk": context.sdk.value,
        "framework": context.framework.value,
        "useCase": context.use_case.value,
        "packageManager": context.package_manager.value,
    }


class TemplateRenderer:
    """Applies project-identity substitution to a generated tree."""

    def __init__(self) -> None:
        self.env = Environment(
            autoescape=False,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.env.filters["pascal_case"] = _pascal_case_filter

    # -- Single file -------------------------------------------------------

    def render_string(self, template_string: str, variables: dict[str, Any]) -> str:
        """Render an inline Jinja2 template string."""
        return self.env.from_string(template_string).render(**variables)

    def substitute(self, text: str, tokens: dict[str, str]) -> str:
        """Replace every identity token in *text*."""
        return _TOKEN_RE.sub(lambda m: tokens[m.group(1)], text)

    def render_file(self, path: Path, context: Context) -> Path:
        """Process one file in place and return its final path."""
        tokens = identity_tokens(context)
        text = _read_text(path)

        if path.name.endswith(TEMPLATE_SUFFIX):
            if text is None:
                raise TemplateRenderError(path, "template is not valid UTF-8 text")
            try:
                rendered = self.render_string(text, {**tokens, "context": context})
            except TemplateError as exc:
                raise TemplateRenderError(path, str(exc)) from exc
            output = path.with_name(path.name[: -len(TEMPLATE_SUFFIX)])
            output.write_text(rendered, encoding="utf-8")
            path.unlink()
            path, text = output, rendered
        elif text is not None:
            replaced = self.substitute(text, tokens)
            if replaced != text:
                path.write_text(replaced, encoding="utf-8")
            text = replaced

        if text is not None and _TOKEN_RE.search(text):
            raise TemplateRenderError(path, "unresolved placeholder left after rendering")

        if path.name == "package.json" and text is not None:
            _set_package_name(path, text, context.project_name)

        return path

    # -- Whole tree (async) ------------------------------------------------

    async def render_tree(self, root: str | Path, context: Context) -> list[Path]:
        """Process every file below *root*.

        Returns:
            Final paths of all processed files.
        """
        files = sorted(p for p in Path(root).rglob("*") if p.is_file())
        written: list[Path] = []
        for file_path in files:
            written.append(await asyncio.to_thread(self.render_file, file_path, context))
        return written


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _pascal_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", value)
    return "".join(word.capitalize() for word in parts if word)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _read_text(path: Path) -> str | None:
    """Return the file as text, or ``None`` if it looks binary."""
    data = path.read_bytes()
    if b"\x00" in data:
        return None
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return None


def _set_package_name(path: Path, text: str, name: str) -> None:
    try:
        manifest = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TemplateRenderError(path, f"invalid JSON: {exc}") from exc
    if not isinstance(manifest, dict) or manifest.get("name") == name:
        return
    manifest["name"] = name
    path.write_text(json.dumps(manifest, indent=2) + "\n", encoding="utf-8")

"""Resolve explicit arguments and prompt answers into a ``Context``.

The two sources are merged field by field, explicit arguments first.  Any
input-shape problem (missing field, value outside its enumeration, unusable
project name) raises :class:`ContextError` naming the field and what it
accepts.  Compatibility between the axes is *not* checked here.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from walrus_starter.models import SDK, Context, Framework, PackageManager, UseCase
from walrus_starter.utils import USER_AGENT_ENV, detect_package_manager
from walrus_starter.validator import validate_project_name


class ContextError(ValueError):
    """Raised when the merged configuration is missing or malformed."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


# Canonical field name -> accepted spellings in the input mappings.
# ``project_path`` is deliberately absent: it is always derived.
_ALIASES: dict[str, tuple[str, ...]] = {
    "project_name": ("project_name", "projectName"),
    "sdk": ("sdk",),
    "framework": ("framework",),
    "use_case": ("use_case", "useCase"),
    "package_manager": ("package_manager", "packageManager"),
    "analytics": ("analytics",),
    "tailwind": ("tailwind",),
    "use_zk_login": ("use_zk_login", "useZkLogin", "zklogin"),
}

_ENUM_FIELDS: dict[str, tuple[type[Enum], str]] = {
    "sdk": (SDK, "SDK"),
    "framework": (Framework, "framework"),
    "use_case": (UseCase, "use case"),
    "package_manager": (PackageManager, "package manager"),
}

_FALSE_STRINGS = frozenset({"", "0", "false", "no", "off", "n"})


def _lookup(source: Mapping[str, Any] | None, field: str) -> Any:
    if not source:
        return None
    for key in _ALIASES[field]:
        value = source.get(key)
        if value is not None:
            return value
    return None


def merge_sources(
    explicit: Mapping[str, Any] | None,
    interactive: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Merge the two sources field by field; explicit values win.

    ``None`` means "not supplied" in either source, so an explicit ``None``
    never masks an interactive answer.
    """
    merged: dict[str, Any] = {}
    for field in _ALIASES:
        value = _lookup(explicit, field)
        if value is None:
            value = _lookup(interactive, field)
        if value is not None:
            merged[field] = value
    return merged


def coerce_bool(value: Any) -> bool:
    """Coerce a truthy/falsy input (``1``/``0``, ``"yes"``/``""``, ...) to ``bool``."""
    if isinstance(value, str):
        return value.strip().lower() not in _FALSE_STRINGS
    return bool(value)


def _coerce_enum(field: str, value: Any) -> Enum:
    enum_cls, label = _ENUM_FIELDS[field]
    if isinstance(value, enum_cls):
        return value
    allowed = ", ".join(member.value for member in enum_cls)
    try:
        return enum_cls(value)
    except ValueError:
        raise ContextError(
            field, f"Invalid {label}: {value}. Must be one of: {allowed}"
        ) from None


def _require(merged: dict[str, Any], field: str) -> Any:
    value = merged.get(field)
    if value is None or value == "":
        if field in _ENUM_FIELDS:
            enum_cls, label = _ENUM_FIELDS[field]
            allowed = ", ".join(member.value for member in enum_cls)
            raise ContextError(
                field,
                f"Missing {label} (--{field.replace('_', '-')}). Must be one of: {allowed}",
            )
        raise ContextError(field, "Project name is required and must be a string")
    return value


def build_context(
    explicit: Mapping[str, Any] | None,
    interactive: Mapping[str, Any] | None,
    *,
    cwd: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
    user_agent_env: str = USER_AGENT_ENV,
) -> Context:
    """Build a fully-typed ``Context`` from CLI arguments and prompt answers.

    Args:
        explicit: Values supplied on the command line.
        interactive: Values gathered by the prompts.
        cwd: Directory the project is created in. Defaults to ``Path.cwd()``.
        environ: Environment used to infer the package manager when neither
            source names one. Defaults to ``os.environ``.
        user_agent_env: Name of the environment variable to sniff.

    Raises:
        ContextError: If a required field is missing or any value is invalid.
    """
    merged = merge_sources(explicit, interactive)

    project_name = _require(merged, "project_name")
    if not isinstance(project_name, str):
        raise ContextError("project_name", "Project name is required and must be a string")
    name_check = validate_project_name(project_name)
    if name_check is not True:
        raise ContextError("project_name", f"Invalid project name {project_name!r}: {name_check}")

    sdk = _coerce_enum("sdk", _require(merged, "sdk"))
    framework = _coerce_enum("framework", _require(merged, "framework"))
    use_case = _coerce_enum("use_case", _require(merged, "use_case"))

    package_manager = merged.get("package_manager") or detect_package_manager(
        environ, user_agent_env
    )
    package_manager = _coerce_enum("package_manager", package_manager)

    base = Path(cwd) if cwd is not None else Path.cwd()

    return Context(
        project_name=project_name,
        project_path=(base / project_name).resolve(),
        sdk=sdk,
        framework=framework,
        use_case=use_case,
        analytics=coerce_bool(merged.get("analytics", False)),
        tailwind=coerce_bool(merged.get("tailwind", False)),
        use_zk_login=coerce_bool(merged.get("use_zk_login", False)),
        package_manager=package_manager,
    )

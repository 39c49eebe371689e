"""Compatibility gate for resolved contexts.

``validate_context`` is the authoritative accept/reject decision and returns a
``ValidationResult`` rather than raising: an unsupported-but-well-typed
combination is something the user fixes by picking different options.
``is_stable`` is a per-axis hint used by the prompt layer.
"""

from __future__ import annotations

import re
from pathlib import PurePosixPath, PureWindowsPath

from walrus_starter.matrix import (
    PRIMARY_SDK,
    STABLE_VALUES,
    allowed_frameworks,
    allowed_use_cases,
)
from walrus_starter.models import (
    Context,
    Framework,
    UseCase,
    ValidationKind,
    ValidationResult,
)

MAX_PROJECT_NAME_LENGTH = 214  # npm package name limit

_PROJECT_NAME_RE = re.compile(r"^[a-z0-9-]+$")


def _join(values) -> str:
    return ", ".join(v.value for v in values)


def validate_context(context: Context) -> ValidationResult:
    """Check a context against the compatibility rules.

    Rules are applied in a fixed order and the first failing rule decides the
    result; errors are never aggregated.
    """
    sdk, framework, use_case = context.sdk, context.framework, context.use_case

    # 1. Framework axis
    if sdk != PRIMARY_SDK and framework != Framework.REACT:
        return ValidationResult.reject(
            ValidationKind.INCOMPATIBLE,
            f'SDK "{sdk.value}" is incompatible with framework "{framework.value}"',
            f"Compatible frameworks for {sdk.value}: {_join(allowed_frameworks(sdk))}",
        )
    if not is_stable("framework", framework.value):
        return ValidationResult.reject(
            ValidationKind.PLANNED,
            f'SDK "{sdk.value}" is currently only stable with "{Framework.REACT.value}" framework.',
            f'Please select "{Framework.REACT.value}" or wait for "{framework.value}" support.',
        )

    # 2. zkLogin
    if context.use_zk_login and (sdk != PRIMARY_SDK or framework != Framework.REACT):
        return ValidationResult.reject(
            ValidationKind.ZKLOGIN,
            f'zkLogin (Enoki) requires "{PRIMARY_SDK.value}" SDK and "{Framework.REACT.value}" framework.',
            f'Please select "{PRIMARY_SDK.value}" SDK and "{Framework.REACT.value}" framework to use zkLogin.',
        )

    # 3. Gallery needs a UI framework
    if use_case == UseCase.GALLERY and framework != Framework.REACT:
        return ValidationResult.reject(
            ValidationKind.REQUIRES_UI,
            f'The "{UseCase.GALLERY.value}" use case requires a UI framework '
            f'(currently "{Framework.REACT.value}").',
            f'Please select "{Framework.REACT.value}" framework for the gallery use case.',
        )

    # 4. DeFi/NFT is not available yet, whatever the other axes say
    if use_case == UseCase.DEFI_NFT:
        return ValidationResult.reject(
            ValidationKind.PLANNED,
            f'The "{UseCase.DEFI_NFT.value}" use case is currently planned.',
            f'Please select "{UseCase.SIMPLE_UPLOAD.value}" or "{UseCase.GALLERY.value}".',
        )

    # 5. Per-SDK use case support
    if use_case not in allowed_use_cases(sdk):
        return ValidationResult.reject(
            ValidationKind.INCOMPATIBLE,
            f'SDK "{sdk.value}" does not support use case "{use_case.value}"',
            f"Supported use cases for {sdk.value}: "
            f"{_join(u for u in allowed_use_cases(sdk) if is_stable('use_case', u.value))}",
        )

    return ValidationResult.ok()


def is_stable(axis: str, value: str) -> bool:
    """Return ``True`` if *value* is a released (non-planned) choice for *axis*.

    *axis* is one of ``"sdk"``, ``"framework"`` or ``"use_case"`` (``"useCase"``
    is accepted too).  Unknown axes are never stable.
    """
    if axis == "useCase":
        axis = "use_case"
    return value in STABLE_VALUES.get(axis, frozenset())


def validate_project_name(name: str) -> bool | str:
    """Return ``True`` for a usable project name, otherwise an error message.

    The name becomes both a directory name and an npm package name, so it has
    to satisfy both.
    """
    if not name or not name.strip():
        return "Project name cannot be empty"

    if len(name) > MAX_PROJECT_NAME_LENGTH:
        return f"Project name must be {MAX_PROJECT_NAME_LENGTH} characters or less"

    if ".." in name or "/" in name or "\\" in name:
        return "Project name cannot contain path separators"

    if PurePosixPath(name).is_absolute() or PureWindowsPath(name).drive:
        return "Project name cannot be an absolute path"

    if not _PROJECT_NAME_RE.match(name):
        return "Project name must contain only lowercase letters, numbers, and hyphens"

    if name.startswith("-") or name.endswith("-"):
        return "Project name cannot start or end with a hyphen"

    return True

"""Data model for walrus-starter.

Defines the closed configuration axes, the resolved ``Context`` for one run,
and the result types returned by validation, generation and post-install.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class SDK(str, Enum):
    """Walrus SDK used by the generated app. ``MYSTEN`` is the primary SDK."""
    MYSTEN = "mysten"
    TUSKY = "tusky"
    HIBERNUTS = "hibernuts"


class Framework(str, Enum):
    """UI framework of the generated app."""
    REACT = "react"
    VUE = "vue"
    PLAIN_TS = "plain-ts"


class UseCase(str, Enum):
    """Which starter flow the generated app implements."""
    SIMPLE_UPLOAD = "simple-upload"
    GALLERY = "gallery"
    DEFI_NFT = "defi-nft"


class PackageManager(str, Enum):
    """Package manager used to install the generated app."""
    NPM = "npm"
    PNPM = "pnpm"
    YARN = "yarn"
    BUN = "bun"


class ValidationKind(str, Enum):
    """Why a well-typed configuration was rejected."""
    INCOMPATIBLE = "incompatible"
    PLANNED = "planned"
    ZKLOGIN = "zklogin"
    REQUIRES_UI = "requires-ui"


# ---------------------------------------------------------------------------
# Context
# ---------------------------------------------------------------------------

class Context(BaseModel):
    """Fully-resolved configuration for one generation run.

    Construction only checks that every value is well typed.  Whether the
    combination is actually supported is decided separately by
    :func:`walrus_starter.validator.validate_context`.
    """

    model_config = ConfigDict(frozen=True)

    project_name: str = Field(..., min_length=1, description="Project directory / package name")
    project_path: Path = Field(..., description="Absolute path of the generated project")
    sdk: SDK
    framework: Framework
    use_case: UseCase
    analytics: bool = Field(default=False, description="Include Blockberry analytics")
    tailwind: bool = Field(default=False, description="Include Tailwind CSS")
    use_zk_login: bool = Field(default=False, description="Include zkLogin (Enoki) auth")
    package_manager: PackageManager = PackageManager.NPM

    @field_validator("project_path")
    @classmethod
    def _must_be_absolute(cls, value: Path) -> Path:
        if not value.is_absolute():
            raise ValueError("project_path must be absolute")
        return value


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ValidationResult:
    """Outcome of the compatibility gate. Rejections carry a remediation hint."""

    valid: bool
    error: Optional[str] = None
    suggestion: Optional[str] = None
    kind: Optional[ValidationKind] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def reject(cls, kind: ValidationKind, error: str, suggestion: str) -> "ValidationResult":
        return cls(valid=False, error=error, suggestion=suggestion, kind=kind)


@dataclass
class EnvCopyResult:
    """Outcome of deriving ``.env`` from ``.env.example``."""

    created: bool
    reason: Optional[str] = None  # "no-source" | "already-exists"


@dataclass
class GenerationResult:
    """Outcome of :meth:`ProjectGenerator.generate`.

    There is no partial success: either the target directory was fully
    populated or ``success`` is ``False`` and ``error``/``reason`` say why.
    """

    success: bool
    project_path: Optional[Path] = None
    preset: str = ""
    files_created: int = 0
    env_created: bool = False
    reason: Optional[str] = None  # "directory-not-empty" | "preset-not-found" | "generation-error"
    error: Optional[str] = None


@dataclass
class PostInstallResult:
    """Outcome of the post-install steps.

    Individual step failures only show up as ``installed``/``validated``
    being ``False``; ``success`` is ``False`` only when the orchestrator
    itself hit an unexpected error, which is attached as ``error``.
    """

    success: bool = True
    installed: bool = False
    validated: bool = False
    deploy_configured: bool = False
    error: Optional[BaseException] = None
    warnings: list[str] = field(default_factory=list)

"""walrus-starter settings.

Centralised, typed settings for the scaffolder.  Settings use a Pydantic v2
model so they are validated at construction time and can be serialised to/from
JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from walrus_starter.utils import USER_AGENT_ENV

DEFAULT_TEMPLATES_DIR = Path(__file__).parent / "presets"

# Housekeeping entries that never belong in a generated project.
DEFAULT_EXCLUDE: tuple[str, ...] = ("node_modules", ".git", "dist")


class Settings(BaseModel):
    """Tuning knobs for one scaffolder run.

    Instances are created once by the CLI entry point (usually via
    :meth:`from_env`) and passed to the generator and post-install steps.
    """

    templates_dir: Path = Field(
        default=DEFAULT_TEMPLATES_DIR,
        description="Root directory holding one sub-directory per preset",
    )
    exclude: list[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDE),
        description="Entry names skipped while copying a preset",
    )
    install_timeout: int = Field(
        default=600, ge=10, description="Dependency install timeout in seconds"
    )
    deploy_timeout: int | None = Field(
        default=None,
        ge=10,
        description="Deploy setup script timeout in seconds (None = no limit)",
    )
    deploy_script: str = Field(
        default="scripts/setup-walrus-deploy.sh",
        description="Deploy setup script path, relative to the generated project",
    )
    user_agent_env: str = Field(
        default=USER_AGENT_ENV,
        description="Environment variable inspected to infer the package manager",
    )

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the settings to a JSON file and return the written path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Settings":
        """Load previously-saved settings from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            WALRUS_TEMPLATES_DIR, WALRUS_INSTALL_TIMEOUT, WALRUS_DEPLOY_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("WALRUS_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["WALRUS_TEMPLATES_DIR"])
        if os.environ.get("WALRUS_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = int(os.environ["WALRUS_INSTALL_TIMEOUT"])
        if os.environ.get("WALRUS_DEPLOY_TIMEOUT"):
            kwargs["deploy_timeout"] = int(os.environ["WALRUS_DEPLOY_TIMEOUT"])
        return cls(**kwargs)

"""Shared pytest fixtures for the walrus-starter test suite.

Provides reusable fixtures for:
- Context construction with sensible defaults
- Temporary preset trees (template roots)
- Mock subprocess helpers
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

from walrus_starter.models import Context


# ---------------------------------------------------------------------------
# Contexts
# ---------------------------------------------------------------------------

@pytest.fixture
def make_context(tmp_path: Path) -> Callable[..., Context]:
    """Factory for ``Context`` objects rooted in ``tmp_path``.

    Usage:
        def test_x(make_context):
            ctx = make_context(use_case="gallery", tailwind=True)
    """
    def factory(**overrides: Any) -> Context:
        values: dict[str, Any] = {
            "project_name": "my-walrus-app",
            "sdk": "mysten",
            "framework": "react",
            "use_case": "simple-upload",
            "package_manager": "pnpm",
        }
        values.update(overrides)
        values.setdefault("project_path", tmp_path / "out" / values["project_name"])
        return Context(**values)

    return factory


@pytest.fixture
def context(make_context) -> Context:
    """Default stable context: mysten + react + simple-upload."""
    return make_context()


# ---------------------------------------------------------------------------
# Template roots
# ---------------------------------------------------------------------------

PRESET_FILES: dict[str, str] = {
    "package.json": json.dumps(
        {"name": "{{projectName}}", "private": True, "scripts": {"dev": "vite"}},
        indent=2,
    ) + "\n",
    "index.html": "<title>{{projectName}}</title>\n",
    "README.md.j2": "# {{ projectName }}\n\nBuilt with {{ sdk }} + {{ framework }} ({{ useCase }}).\n"
                    "Run `{{ packageManager }} install`.\n",
    ".env.example": "VITE_SUI_NETWORK=testnet\nVITE_WALRUS_PUBLISHER=https://publisher.example\n",
    "src/App.tsx": "export const App = () => <div style={{ color: 'red' }}>{{projectName}}</div>;\n",
    "src/main.tsx": "import { App } from './App';\n",
    "scripts/setup-walrus-deploy.sh": "#!/usr/bin/env bash\necho deploy\n",
    # Housekeeping entries that must never be copied
    "node_modules/left-pad/index.js": "module.exports = 1;\n",
    "dist/bundle.js": "console.log(1);\n",
    ".git/HEAD": "ref: refs/heads/main\n",
}


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Write ``{relative_path: content}`` under *root* and return *root*."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def tree_writer() -> Callable[[Path, dict[str, str | bytes]], Path]:
    """Expose :func:`write_tree` to tests."""
    return write_tree


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A template root holding ``react-mysten-simple-upload`` and ``react-mysten-gallery``."""
    root = tmp_path / "presets"
    write_tree(root / "react-mysten-simple-upload", PRESET_FILES)
    write_tree(root / "react-mysten-gallery", PRESET_FILES)
    return root


# ---------------------------------------------------------------------------
# Mock Subprocess (generic)
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_subprocess():
    """Mock asyncio subprocess for testing command execution.

    Returns a factory that creates mock subprocess instances with configurable
    stdout, stderr, and return codes.

    Usage:
        def test_command(mock_subprocess):
            proc = mock_subprocess(stdout="output", returncode=0)
            with patch("asyncio.create_subprocess_exec", return_value=proc):
                ...
    """
    def factory(
        stdout: str = "",
        stderr: str = "",
        returncode: int = 0,
    ) -> AsyncMock:
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(
            return_value=(stdout.encode("utf-8"), stderr.encode("utf-8"))
        )
        mock_proc.returncode = returncode
        mock_proc.pid = 99999
        mock_proc.kill = MagicMock()
        mock_proc.wait = AsyncMock(return_value=returncode)
        return mock_proc

    return factory

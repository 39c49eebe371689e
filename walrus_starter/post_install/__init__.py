"""Post-install steps run after a project has been generated.

Usage::

    from walrus_starter.post_install import run_post_install

    result = await run_post_install(context, context.project_path)

Steps run one after the other: dependency install, project validation, and
the optional deploy setup.  A failing step is downgraded to a warning and the
remaining steps still run; only an unexpected exception marks the whole
result as failed.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Optional

from walrus_starter.config import Settings
from walrus_starter.models import Context, PostInstallResult
from walrus_starter.utils import print_info, print_warning

from .deploy import setup_walrus_deploy
from .messages import display_error, display_success
from .package_manager import InstallResult, install_command, install_dependencies
from .project_check import ProjectCheckResult, validate_project

__all__ = [
    "InstallResult",
    "ProjectCheckResult",
    "install_dependencies",
    "run_post_install",
    "setup_walrus_deploy",
    "validate_project",
]


async def run_post_install(
    context: Context,
    project_path: str | Path,
    *,
    skip_install: bool = False,
    skip_validation: bool = False,
    interactive: Optional[bool] = None,
    confirm: Optional[Callable[[], bool]] = None,
    settings: Settings | None = None,
) -> PostInstallResult:
    """Run the post-install steps for a freshly generated project.

    Args:
        context: Resolved configuration of the run.
        project_path: Generated project root.
        skip_install: Do not install dependencies (this also skips the steps
            that need them).
        skip_validation: Do not run the structural project check.
        interactive: Whether a user is attached; ``None`` detects a TTY.
        confirm: Yes/no callback for the deploy question.
        settings: Timeouts and deploy script location.

    Returns:
        A ``PostInstallResult``; see the module docstring for its semantics.
    """
    settings = settings or Settings()
    result = PostInstallResult()

    try:
        # 1. Install dependencies
        if not skip_install:
            install = await install_dependencies(
                project_path, context.package_manager, timeout=settings.install_timeout
            )
            result.installed = install.success
            if not install.success:
                message = "Dependency installation failed, but the project was created"
                result.warnings.append(message)
                print_warning(message)
                if install.error:
                    print_warning(f"  {install.error}")
                print_info("You can install manually by running:")
                print_info(f"  cd {context.project_name}")
                print_info(f"  {' '.join(install_command(context.package_manager))}")

        # 2. Validate the project structure
        if not skip_validation and result.installed:
            check = validate_project(project_path)
            result.validated = check.valid
            if not check.valid:
                print_warning("Project validation failed:")
                for error in check.errors:
                    result.warnings.append(error)
                    print_warning(f"  - {error}")

        # 3. Deploy setup
        if result.installed:
            result.deploy_configured = await setup_walrus_deploy(
                project_path,
                context,
                interactive=interactive,
                confirm=confirm,
                script=settings.deploy_script,
                timeout=settings.deploy_timeout,
            )

        display_success(context, result)
    except Exception as exc:
        result.success = False
        result.error = exc
        display_error(exc, context)

    return result

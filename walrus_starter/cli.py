"""``create-walrus-app`` command line entry point.

Usage::

    create-walrus-app my-app --sdk mysten --framework react --use-case gallery
    python -m walrus_starter my-app -p pnpm --skip-install

Missing options are asked for interactively when stdin is a terminal; in a
non-interactive session every required option has to be given.

Exit status is 0 on success and when the user cancels with Ctrl+C (any
partially generated directory is removed first), 1 otherwise.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Any, Optional

from walrus_starter import __version__
from walrus_starter.config import Settings
from walrus_starter.context import ContextError, build_context
from walrus_starter.models import SDK, Context, Framework, PackageManager, UseCase
from walrus_starter.post_install import run_post_install
from walrus_starter.prompts import run_prompts
from walrus_starter.scaffolder import GenerationTracker, ProjectGenerator, cleanup_interrupted, generation_tracker
from walrus_starter.utils import console, print_error, print_info, print_success, print_summary_table, print_warning
from walrus_starter.validator import validate_context

PROG = "create-walrus-app"

# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _choices(enum_cls) -> str:
    return " | ".join(member.value for member in enum_cls)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Interactive CLI for scaffolding Walrus applications",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            f"  {PROG}\n"
            f"  {PROG} my-app --sdk mysten --framework react --use-case simple-upload\n"
            f"  {PROG} my-app --sdk mysten --framework react --use-case gallery -p pnpm\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"{PROG} {__version__}")
    parser.add_argument("project_name", nargs="?", default=None, help="Project directory name")
    parser.add_argument("--sdk", default=None, help=f"SDK to use ({_choices(SDK)})")
    parser.add_argument("--framework", default=None, help=f"Framework ({_choices(Framework)})")
    parser.add_argument("--use-case", dest="use_case", default=None, help=f"Use case ({_choices(UseCase)})")
    parser.add_argument(
        "-p", "--package-manager",
        dest="package_manager",
        default=None,
        help=f"Package manager to use ({_choices(PackageManager)})",
    )
    # Flags default to None so an absent flag does not override a prompt answer.
    parser.add_argument("--analytics", action="store_true", default=None, help="Include Blockberry analytics")
    parser.add_argument("--tailwind", action="store_true", default=None, help="Include Tailwind CSS")
    parser.add_argument(
        "--zklogin", dest="use_zk_login", action="store_true", default=None,
        help="Use zkLogin (Enoki) authentication",
    )
    parser.add_argument("--skip-install", action="store_true", help="Skip dependency installation")
    parser.add_argument("--skip-validation", action="store_true", help="Skip project validation")
    # Accepted for backwards compatibility; git initialisation was removed.
    parser.add_argument("--skip-git", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument(
        "--templates-dir", default=None,
        help="Directory containing the presets (default: bundled presets)",
    )
    return parser


def explicit_values(args: argparse.Namespace) -> dict[str, Any]:
    """Extract the context fields given on the command line."""
    return {
        "project_name": args.project_name,
        "sdk": args.sdk,
        "framework": args.framework,
        "use_case": args.use_case,
        "package_manager": args.package_manager,
        "analytics": args.analytics,
        "tailwind": args.tailwind,
        "use_zk_login": args.use_zk_login,
    }


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------


async def create_project(
    context: Context,
    settings: Settings,
    args: argparse.Namespace,
    tracker: GenerationTracker,
    interactive: bool,
) -> int:
    """Generate the project and run post-install. Returns the exit status."""
    console.print("\n[bold]Generating your Walrus application...[/bold]\n")

    generator = ProjectGenerator(settings, tracker=tracker)
    result = await generator.generate(context)
    if not result.success:
        print_error("Project generation failed")
        return 1

    post = await run_post_install(
        context,
        context.project_path,
        skip_install=args.skip_install,
        skip_validation=args.skip_validation,
        interactive=interactive,
        settings=settings,
    )
    if not post.success:
        print_warning("Post-install tasks completed with warnings")
    return 0


def run(
    argv: Optional[list[str]] = None,
    *,
    interactive: Optional[bool] = None,
    tracker: GenerationTracker = generation_tracker,
) -> int:
    """Parse *argv*, create the project and return the process exit status."""
    args = build_parser().parse_args(argv)
    if interactive is None:
        interactive = sys.stdin.isatty()

    try:
        settings = Settings.from_env()
        if args.templates_dir:
            settings = settings.model_copy(update={"templates_dir": Path(args.templates_dir)})

        print_info("Welcome to Walrus Starter Kit!")

        explicit = explicit_values(args)
        answers = run_prompts(explicit, interactive=interactive)
        context = build_context(explicit, answers, user_agent_env=settings.user_agent_env)

        validation = validate_context(context)
        if not validation.valid:
            print_error(validation.error or "Invalid configuration")
            if validation.suggestion:
                print_info(validation.suggestion)
            return 1

        print_success("Configuration valid!")
        print_summary_table(
            {
                "Project": context.project_name,
                "Path": str(context.project_path),
                "SDK": context.sdk.value,
                "Framework": context.framework.value,
                "Use case": context.use_case.value,
                "Package manager": context.package_manager.value,
            },
            title="Configuration",
        )

        return asyncio.run(create_project(context, settings, args, tracker, interactive))

    except KeyboardInterrupt:
        print_warning("\n\nOperation cancelled by user.")
        cleanup_interrupted(tracker)
        return 0
    except ContextError as exc:
        print_error(str(exc))
        return 1
    except Exception as exc:
        # Keep internals (tracebacks) away from end users.
        print_error(f"Failed to create project: {str(exc) or type(exc).__name__}")
        return 1


def main() -> None:
    """Console-script entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()

"""Final banners shown after post-install."""

from __future__ import annotations

from rich.panel import Panel

from walrus_starter.models import Context, PostInstallResult
from walrus_starter.utils import console


def next_steps(context: Context, installed: bool) -> list[str]:
    """Return the commands the user runs next."""
    pm = context.package_manager.value
    steps = [f"cd {context.project_name}"]
    if not installed:
        steps.append(f"{pm} install")
    steps.append(f"{pm} run dev")
    return steps


def display_success(context: Context, result: PostInstallResult) -> None:
    lines = [
        f"[bold green]Created {context.project_name}[/bold green]",
        "",
        f"SDK       : {context.sdk.value}",
        f"Framework : {context.framework.value}",
        f"Use case  : {context.use_case.value}",
        "",
        "Next steps:",
    ]
    lines.extend(f"  {step}" for step in next_steps(context, result.installed))
    console.print()
    console.print(Panel("\n".join(lines), title="[bold]Walrus app ready[/bold]", border_style="green"))


def display_error(error: BaseException, context: Context) -> None:
    """Show an unexpected post-install failure without internal detail."""
    console.print()
    console.print(
        Panel(
            f"[bold red]Post-install failed:[/bold red] {error}\n\n"
            f"The project files are in {context.project_path}.\n"
            f"You can finish manually with: cd {context.project_name} && "
            f"{context.package_manager.value} install",
            title="[bold]Post-install[/bold]",
            border_style="red",
        )
    )

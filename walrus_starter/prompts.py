"""Interactive prompts for the values not supplied on the command line.

The questions are a small decision table: each ``PromptStep`` names the
context field it resolves, how to ask for it, which choices are offered given
the answers so far, and when the question applies at all.  A step is asked at
most once and only if its field is still unresolved.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from rich.prompt import Confirm, Prompt

from walrus_starter.context import merge_sources
from walrus_starter.matrix import (
    FRAMEWORK_LABELS,
    SDK_METADATA,
    USE_CASE_LABELS,
    allowed_frameworks,
    allowed_use_cases,
)
from walrus_starter.models import SDK, Framework, PackageManager
from walrus_starter.utils import console, print_warning
from walrus_starter.validator import is_stable, validate_project_name

DEFAULT_PROJECT_NAME = "my-walrus-app"

Choices = Callable[[Mapping[str, Any]], list[tuple[str, str]]]
Condition = Callable[[Mapping[str, Any]], bool]


@dataclass(frozen=True)
class PromptStep:
    """One row of the question table."""

    field: str
    kind: str  # "text" | "select" | "confirm"
    message: str
    choices: Optional[Choices] = None
    default: Any = None
    when: Optional[Condition] = None


def _label(text: str, axis: str, value: str) -> str:
    return text if is_stable(axis, value) else f"{text} (planned)"


def _sdk_choices(answers: Mapping[str, Any]) -> list[tuple[str, str]]:
    return [
        (sdk.value, _label(f"{info.package} - {info.description}", "sdk", sdk.value))
        for sdk, info in SDK_METADATA.items()
    ]


def _sdk_of(answers: Mapping[str, Any]) -> SDK:
    try:
        return SDK(answers.get("sdk"))
    except ValueError:
        # An invalid explicit value is reported by build_context afterwards.
        return SDK.MYSTEN


def _framework_choices(answers: Mapping[str, Any]) -> list[tuple[str, str]]:
    return [
        (fw.value, _label(FRAMEWORK_LABELS[fw], "framework", fw.value))
        for fw in allowed_frameworks(_sdk_of(answers))
    ]


def _use_case_choices(answers: Mapping[str, Any]) -> list[tuple[str, str]]:
    return [
        (uc.value, _label(USE_CASE_LABELS[uc], "use_case", uc.value))
        for uc in allowed_use_cases(_sdk_of(answers))
    ]


def _package_manager_choices(answers: Mapping[str, Any]) -> list[tuple[str, str]]:
    return [(pm.value, pm.value) for pm in PackageManager]


def _zk_login_applies(answers: Mapping[str, Any]) -> bool:
    return answers.get("sdk") == SDK.MYSTEN.value and answers.get("framework") == Framework.REACT.value


PROMPT_STEPS: tuple[PromptStep, ...] = (
    PromptStep("project_name", "text", "Project name", default=DEFAULT_PROJECT_NAME),
    PromptStep("sdk", "select", "Choose Walrus SDK", choices=_sdk_choices, default=SDK.MYSTEN.value),
    PromptStep("framework", "select", "Choose framework", choices=_framework_choices),
    PromptStep("use_case", "select", "Choose use case", choices=_use_case_choices),
    PromptStep(
        "use_zk_login",
        "confirm",
        "Use zkLogin (Enoki) for wallet-less sign-in?",
        default=False,
        when=_zk_login_applies,
    ),
    PromptStep("analytics", "confirm", "Include Blockberry analytics?", default=False),
    PromptStep("tailwind", "confirm", "Include Tailwind CSS?", default=False),
)

# Asked only when an explicit choice was requested; otherwise it is detected.
PACKAGE_MANAGER_STEP = PromptStep(
    "package_manager", "select", "Choose package manager", choices=_package_manager_choices
)


def _ask(step: PromptStep, answers: Mapping[str, Any]) -> Any:
    if step.kind == "confirm":
        return Confirm.ask(step.message, default=bool(step.default), console=console)

    if step.kind == "select":
        options = step.choices(answers) if step.choices else []
        for value, title in options:
            console.print(f"  [cyan]{value}[/cyan]  {title}")
        values = [value for value, _ in options]
        default = step.default if step.default in values else values[0]
        return Prompt.ask(step.message, choices=values, default=default, console=console)

    while True:
        value = Prompt.ask(step.message, default=step.default, console=console)
        check = validate_project_name(value)
        if check is True:
            return value
        print_warning(str(check))


def pending_steps(resolved: Mapping[str, Any]) -> list[PromptStep]:
    """Return the table rows whose field is not yet resolved."""
    return [step for step in PROMPT_STEPS if resolved.get(step.field) is None]


def run_prompts(
    initial: Mapping[str, Any] | None = None,
    *,
    interactive: bool = True,
    ask_package_manager: bool = False,
    ask: Callable[[PromptStep, Mapping[str, Any]], Any] = _ask,
) -> dict[str, Any]:
    """Ask for every field not already present in *initial*.

    Args:
        initial: Values supplied on the command line.
        interactive: When ``False`` nothing is asked; missing required values
            surface later as a ``ContextError``.
        ask_package_manager: Also ask for the package manager instead of
            leaving it to detection.
        ask: Question callback, replaceable for tests.

    Returns:
        Only the answers gathered here.  ``KeyboardInterrupt`` from the
        underlying prompt library propagates unchanged.
    """
    if not interactive:
        return {}

    # Answers seen by later rows include the explicit values.
    resolved = merge_sources(initial, None)
    gathered: dict[str, Any] = {}

    steps = list(pending_steps(resolved))
    if ask_package_manager and resolved.get("package_manager") is None:
        steps.append(PACKAGE_MANAGER_STEP)

    for step in steps:
        if step.when is not None and not step.when(resolved):
            continue
        answer = ask(step, resolved)
        resolved[step.field] = answer
        gathered[step.field] = answer

    return gathered

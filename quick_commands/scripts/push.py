"""
Terminal Push Wizard.

Drives the push wizard from a terminal: each step is printed as a numbered
list and answered with comma-separated numbers, or 'b' to go back.

Usage:
    python -m quick_commands.scripts.push [PATH ...] [--confirm/--no-confirm]
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import List, Optional

import typer

from quick_commands.commands.push import PushCommand
from quick_commands.config import settings
from quick_commands.domain.models import ActionItem, Selection, Step
from quick_commands.execution.schemas.state_machine import Completed
from quick_commands.execution.sequencer import StepSequencer, drive
from quick_commands.repositories.git import LocalGitRepositorySource
from quick_commands.state.models import PushCommandArgs

BACK_ANSWERS = ("", "b", "back")


def render(step: Step) -> None:
    typer.echo(f"\n{step.title}: {step.placeholder}")
    for number, item in enumerate(step.items, start=1):
        mark = "[x]" if isinstance(item, ActionItem) and item.picked else "[ ]"
        prefix = f"{mark} " if step.multiselect else ""
        line = f"  {number}. {prefix}{item.label}"
        if getattr(item, "description", ""):
            line += f"  {item.description}"
        typer.echo(line)
        if item.detail:
            typer.echo(f"       {item.detail}")


def parse_answer(step: Step, answer: str) -> Selection:
    answer = answer.strip().lower()
    if answer in BACK_ANSWERS:
        return Selection.go_back()

    items = []
    for part in answer.split(","):
        part = part.strip()
        if not part.isdigit() or not 1 <= int(part) <= len(step.items):
            # Unreadable answers count as backing out
            return Selection.go_back()
        items.append(step.items[int(part) - 1])
    return Selection.of(*items)


async def ask(step: Step) -> Selection:
    render(step)
    hint = "numbers separated by commas" if step.multiselect else "a number"
    answer = typer.prompt(f"Choose {hint} (b = back)", default="", show_default=False)
    return parse_answer(step, answer)


def main(
    paths: Optional[List[Path]] = typer.Argument(None, help="Working trees to offer"),
    confirm: Optional[bool] = typer.Option(
        None, "--confirm/--no-confirm", help="Force showing or skipping the confirmation"
    ),
):
    """Pushes one or more repositories after confirmation."""
    logging.basicConfig(level=settings.LOG_LEVEL)

    repo_paths = [str(p) for p in paths] if paths else settings.REPOSITORY_PATHS or [os.getcwd()]
    source = LocalGitRepositorySource(repo_paths, git_executable=settings.GIT_EXECUTABLE)
    command = PushCommand(source, PushCommandArgs(confirm=confirm))

    outcome = asyncio.run(drive(StepSequencer(command), ask))

    if isinstance(outcome, Completed):
        typer.echo(f"Pushed {len(outcome.state.repos)} repositories.")
    else:
        typer.echo(f"Push cancelled: {outcome.reason}")
        raise typer.Exit(code=1)


def run():
    typer.run(main)


if __name__ == "__main__":
    run()

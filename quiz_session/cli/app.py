"""Typer CLI application for running quiz sessions in the terminal."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from quiz_session import __version__
from quiz_session.cli.terminal import TerminalRenderer
from quiz_session.config.settings import get_settings
from quiz_session.content.loader import QuestionSetLoadError, load_question_set
from quiz_session.engine.driver import QuizDriver
from quiz_session.engine.states import (
    AdvanceRequested,
    Completed,
    ConfirmRequested,
    OptionSelected,
    Presenting,
)
from quiz_session.engine.views import parse_option_label
from quiz_session.export.docx_report import export_session_report
from quiz_session.models.quiz import QuestionSet, QuestionType
from quiz_session.utils.logging_config import configure_logging

app = typer.Typer(
    name="quiz-session",
    help="Interactive multiple-choice quiz sessions in the terminal",
    add_completion=False,
)

console = Console()


@app.command()
def play(
    path: Path = typer.Argument(..., help="Question set JSON file"),
    label: Optional[str] = typer.Option(
        None,
        "--label",
        "-l",
        help="Display name for the quiz set",
    ),
    explanations: Optional[bool] = typer.Option(
        None,
        "--explanations/--no-explanations",
        help="Show explanations after each answer (default from QUIZ_SHOW_EXPLANATIONS)",
    ),
    report: bool = typer.Option(
        False,
        "--report/--no-report",
        help="Export a DOCX report when the quiz is finished",
    ),
    output: str = typer.Option(
        "quiz_report",
        "--output",
        "-o",
        help="Report file name (without extension)",
    ),
) -> None:
    """
    Answer a question set one question at a time.

    Example:
        quiz-session play questions/react_basics.json --report
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    question_set = load_or_exit(path, label)
    show_explanations = settings.show_explanations if explanations is None else explanations

    renderer = TerminalRenderer(console, show_explanations=show_explanations)
    while True:
        driver = QuizDriver(question_set, renderer=renderer, tiers=settings.tiers)
        if question_set.label:
            console.print(f"\n[bold cyan]{escape(question_set.label)}[/bold cyan]")
        driver.start()
        run_session(driver, renderer)

        if not Confirm.ask("\nPlay again?", console=console, default=False):
            break

    if report:
        try:
            report_file = export_session_report(
                driver, output, output_dir=settings.report_output_dir
            )
        except OSError as e:
            console.print(f"\n[red]Error during export:[/red] {e}", style="bold")
            raise typer.Exit(code=1)
        console.print(f"\n[green]✓[/green] Report exported to: {report_file}")


@app.command()
def check(
    path: Path = typer.Argument(..., help="Question set JSON file"),
) -> None:
    """Validate a question set file and summarise its contents."""
    configure_logging(get_settings().log_level)
    question_set = load_or_exit(path, None)
    display_set_summary(question_set)
    console.print("\n[green]✓[/green] Question set is valid.")


@app.command()
def info() -> None:
    """Display information about the quiz runner."""
    info_text = f"""
[bold cyan]Quiz Session[/bold cyan]
Version: {__version__}

[bold]Question types:[/bold]
  • Single choice - pick one option, checked immediately
  • Multiple choice - pick every correct option, then confirm
  • True / False - two options, checked immediately

[bold]Features:[/bold]
  • Per-question feedback with explanations
  • Running answered count and accuracy
  • Graded summary at the end
  • Optional DOCX report of the session
  • Retake the set after the summary
    """
    console.print(Panel(info_text, title="Quiz Session Info", border_style="cyan"))


def load_or_exit(path: Path, label: Optional[str]) -> QuestionSet:
    """Load a question set, turning failures into a console error and exit code 1."""
    try:
        return load_question_set(path, label)
    except QuestionSetLoadError as e:
        console.print(
            f"[red]Error:[/red] could not load question set {escape(str(e))}",
            style="bold",
        )
        raise typer.Exit(code=1)


def parse_selection(text: str, option_count: int) -> list[int]:
    """
    Turn input like ``"A, c"`` into option indices.

    Raises:
        ValueError: Unknown letter or nothing entered
    """
    letters = [part for part in text.replace(",", " ").split() if part]
    if not letters:
        raise ValueError("Enter at least one option letter")
    indices = []
    for letter in letters:
        index = parse_option_label(letter)
        if index >= option_count:
            raise ValueError(f"There is no option {letter.upper()}")
        if index not in indices:
            indices.append(index)
    return indices


def run_session(driver: QuizDriver, renderer: TerminalRenderer) -> None:
    """Read answers from the console until the session is completed."""
    while not isinstance(driver.state, Completed):
        state = driver.state

        if isinstance(state, Presenting):
            question = driver.session.questions[state.index]
            multiple = question.type is QuestionType.MULTIPLE
            prompt = "Your answers (e.g. A,C)" if multiple else "Your answer"
            answer = Prompt.ask(prompt, console=console, default="", show_default=False)
            try:
                indices = parse_selection(answer, len(question.options))
            except ValueError as e:
                console.print(f"[yellow]{escape(str(e))}[/yellow]")
                continue

            if multiple:
                for index in sorted(set(indices) ^ state.pending):
                    driver.dispatch(OptionSelected(index=index))
                driver.dispatch(ConfirmRequested())
            elif len(indices) > 1:
                console.print("[yellow]Choose exactly one option[/yellow]")
            else:
                driver.dispatch(OptionSelected(index=indices[0]))
        else:
            Prompt.ask(
                renderer.advance_prompt,
                console=console,
                default="",
                show_default=False,
            )
            driver.dispatch(AdvanceRequested())


def display_set_summary(question_set: QuestionSet) -> None:
    """Display what a question set contains."""
    table = Table(title="Question Set", show_header=False, border_style="cyan")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Label", escape(question_set.label or "-"))
    table.add_row("Questions", str(question_set.question_count))
    for qtype, count in question_set.count_by_type().items():
        table.add_row(qtype.label, str(count))
    tags = question_set.all_tags()
    if tags:
        table.add_row("Tags", escape(", ".join(tags)))

    console.print()
    console.print(table)


@app.callback()
def callback() -> None:
    """
    Quiz Session - answer question sets with instant feedback.
    """
    pass


if __name__ == "__main__":
    app()

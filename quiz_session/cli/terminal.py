"""Rich rendering surface for quiz sessions.

Question content is escaped with ``rich.markup.escape`` before it is embedded
in markup, so brackets in prompts or options are printed literally.
"""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from quiz_session.engine.errors import QuizError
from quiz_session.engine.views import (
    CompletionView,
    FeedbackView,
    OptionMark,
    QuestionView,
)
from quiz_session.models.quiz import SessionStats

NEXT_QUESTION_PROMPT = "Press Enter for the next question"
RESULTS_PROMPT = "Press Enter to see your results"

_MARK_STYLES = {
    OptionMark.CORRECT: ("green", "✓"),
    OptionMark.INCORRECT: ("red", "✗"),
    OptionMark.NEUTRAL: ("dim", " "),
}


class TerminalRenderer:
    """Draws engine views on a rich Console."""

    def __init__(self, console: Console, show_explanations: bool = True) -> None:
        self.console = console
        self.show_explanations = show_explanations
        self.advance_prompt = NEXT_QUESTION_PROMPT
        self._drawn_index: int | None = None

    def render_question(self, view: QuestionView) -> None:
        # Same card already on screen: only the pending selection changed
        if view.index == self._drawn_index:
            chosen = ", ".join(o.label for o in view.options if o.selected) or "none"
            self.console.print(f"[dim]Selected: {chosen}[/dim]")
            return

        self._drawn_index = view.index
        self.console.print()
        self.console.print(self._stats_line(view.stats))
        self.console.print(Panel(self._question_body(view), title=self._title(view), border_style="cyan"))

    def render_feedback(self, view: FeedbackView) -> None:
        question = view.question
        self._drawn_index = question.index
        self.advance_prompt = RESULTS_PROMPT if question.is_last else NEXT_QUESTION_PROMPT
        self.console.print()
        self.console.print(Panel(self._question_body(question), title=self._title(question), border_style="cyan"))

        if view.is_correct:
            self.console.print("[bold green]✅ Correct![/bold green]")
        else:
            self.console.print("[bold red]❌ Wrong answer[/bold red]")

        if not self.show_explanations:
            return

        self.console.print(
            f"[green]Correct answer: {', '.join(view.correct_labels)}[/green]  "
            f"{escape(view.correct_text)}"
        )
        for entry in view.wrong_explanations:
            marker = "⚠️ " if entry.was_selected else "ℹ️ "
            chosen = " [yellow](you chose this)[/yellow]" if entry.was_selected else ""
            self.console.print(f"{marker}Option {entry.label}{chosen}: {escape(entry.text)}")

    def render_completion(self, view: CompletionView) -> None:
        self._drawn_index = None
        stats = view.stats
        table = Table(title="Quiz Results", border_style="green", show_header=False)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Correct", str(stats.correct_count))
        table.add_row("Total Questions", str(stats.total_count))
        table.add_row("Accuracy", self._colour_accuracy(stats.accuracy_percent))

        self.console.print()
        title = escape(view.set_label) if view.set_label else "Quiz"
        self.console.print(f"[bold green]{title} completed![/bold green]")
        self.console.print(table)
        if view.tier:
            self.console.print(f"{view.tier.icon} {escape(view.tier.message)}")

    def render_rejection(self, error: QuizError) -> None:
        self.console.print(f"[yellow]{escape(str(error))}[/yellow]")

    def _title(self, view: QuestionView) -> str:
        return f"Question {view.number}/{view.total} · {view.type_label}"

    def _question_body(self, view: QuestionView) -> str:
        lines = []
        if view.tags:
            lines.append(" ".join(f"[magenta]#{escape(tag)}[/magenta]" for tag in view.tags))
        lines.append(f"[bold]{escape(view.prompt_text)}[/bold]")
        lines.append("")
        for option in view.options:
            text = f"{option.label}. {escape(option.text)}"
            if option.mark is not None:
                style, symbol = _MARK_STYLES[option.mark]
                if option.selected and option.mark is OptionMark.CORRECT:
                    style = "bold green"
                lines.append(f"[{style}]{symbol} {text}[/{style}]")
            elif option.selected:
                lines.append(f"[bold cyan]> {text}[/bold cyan]")
            else:
                lines.append(f"  {text}")
        return "\n".join(lines)

    def _stats_line(self, stats: SessionStats) -> str:
        return (
            f"[dim]Answered {stats.answered_count}/{stats.total_count}"
            f"  ·  Accuracy {stats.accuracy_percent}%[/dim]"
        )

    @staticmethod
    def _colour_accuracy(percent: int) -> str:
        if percent >= 70:
            return f"[green]{percent}%[/green]"
        if percent >= 60:
            return f"[yellow]{percent}%[/yellow]"
        return f"[red]{percent}%[/red]"

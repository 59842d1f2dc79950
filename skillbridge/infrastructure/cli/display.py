import json
import logging
from datetime import datetime
from typing import Any, Iterable, Optional, Tuple

from rich.box import HEAVY, ROUNDED, SIMPLE
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from skillbridge.domain.interfaces.user_interface import UserInterface
from skillbridge.domain.models.coaching import CoachingResult, ResultSource
from skillbridge.domain.models.common import PromptText, ProcessedOutput

logger = logging.getLogger(__name__)

QUOTA_HELP = (
    "Our AI service has reached its free usage limits. Here's what you can do:\n"
    "- Wait & retry: free tier limits reset every 24 hours.\n"
    "- Use the demo analysis below: it shows what the AI typically provides.\n"
    "- Get your own API key from Google AI Studio: https://aistudio.google.com/app/apikey"
)

SOURCE_LABELS = {
    ResultSource.AI: "[green]fresh[/green]",
    ResultSource.CACHE: "[cyan]cached[/cyan]",
    ResultSource.DEMO: "[yellow]demo[/yellow]",
    ResultSource.FALLBACK: "[red]fallback[/red]",
}

class ConsoleDisplay(UserInterface):
    """Concrete implementation of UserInterface using the rich library for console output."""

    def __init__(self, console: Optional[Console] = None):
        """Initializes the rich Console."""
        self.console = console or Console()

    def display_output(self, output: ProcessedOutput, **kwargs: Any) -> None:
        """Displays output text to the user, rendering Markdown in a panel.

        Args:
            output: The processed output string to display.
            **kwargs: Additional arguments including:
                - title: The panel title (default: "SkillBridge")
        """
        title = kwargs.get("title", "SkillBridge")
        timestamp = datetime.now().strftime("%H:%M:%S")
        panel = Panel(
            Markdown(str(output)),
            title=f"[bold white]{escape(title)}[/bold white] [dim]{timestamp}[/dim]",
            title_align="left",
            border_style="blue",
            box=ROUNDED,
            padding=(0, 1)
        )
        self.console.print(panel)

    def display_result(self, result: CoachingResult, **kwargs: Any) -> None:
        """Shows a coaching payload as JSON, with a banner for degraded results.

        Args:
            result: The coaching result.
            **kwargs: Additional arguments including:
                - title: The panel title (default: "Result")
        """
        title = kwargs.get("title", "Result")
        logger.debug(f"display_result called: title={title}, source={result.source.value}")

        if result.source is ResultSource.DEMO:
            self.console.print(Panel(
                Text(QUOTA_HELP, style="white"),
                title="[bold yellow]AI Service Temporarily Limited[/bold yellow]",
                border_style="yellow",
                box=HEAVY,
                padding=(0, 1)
            ))
        elif result.source is ResultSource.FALLBACK:
            self.display_warning("The AI service could not complete this request. Showing sample results instead.")
        if result.note:
            self.display_info(result.note)

        body = Syntax(json.dumps(result.payload, indent=2, ensure_ascii=False), "json", word_wrap=True)
        self.console.print(Panel(
            body,
            title=f"[bold white]{escape(title)}[/bold white] ({SOURCE_LABELS[result.source]})",
            title_align="left",
            border_style="blue",
            box=ROUNDED,
            padding=(0, 1)
        ))

    def display_menu(self, options: Iterable[Tuple[str, str]]) -> None:
        """Prints the session menu as a two-column table of (command, description)."""
        table = Table(show_header=False, box=SIMPLE, border_style="cyan", padding=(0, 1))
        table.add_column("Command", style="bold cyan")
        table.add_column("Description", style="white")
        for command, description in options:
            table.add_row(command, description)
        self.console.print(table)

    def get_prompt(self, prompt_message: str = "> ") -> PromptText:
        """Gets input from the user.

        Args:
            prompt_message: The message to display before the input cursor.

        Returns:
            The text input by the user.
        """
        return PromptText(self.console.input(f"[bold green]{prompt_message}[/bold green]"))

    def display_error(self, error_message: str, **kwargs: Any) -> None:
        """Displays an error message in a distinct style."""
        self.console.print(Panel(
            Text(error_message, style="white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            box=HEAVY,
            padding=(0, 1)
        ))

    def display_info(self, info_message: str, **kwargs: Any) -> None:
        """Displays an informational message."""
        self.console.print(f"[blue]Info:[/blue] {escape(info_message)}")

    def display_warning(self, warning_message: str, **kwargs: Any) -> None:
        """Displays a warning message."""
        logger.warning(f"Display warning: {warning_message}")
        self.console.print(Panel(
            Text(warning_message, style="white"),
            title="[bold yellow]Warning[/bold yellow]",
            border_style="yellow",
            box=HEAVY,
            padding=(0, 1)
        ))

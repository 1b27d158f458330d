"""
Interactive prompts.

RichPrompter is the CLI implementation of the prompter capability: numbered
single and multi selections, free text and confirmations, all read through
rich.prompt. Ctrl+C or end of input raises OperationCancelled.
"""

from functools import wraps
from typing import Any, List, Optional, Sequence, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt

from monoalign_common import OperationCancelled
from monoalign_sdk import VersionChoice, VersionPrompt

from .utils import console as default_console

Option = Tuple[Any, str]

_LATEST = "__latest__"
_CUSTOM = "__custom__"
_SKIP = "__skip__"


def _cancellable(method):
    @wraps(method)
    def wrapper(*args, **kwargs):
        try:
            return method(*args, **kwargs)
        except (KeyboardInterrupt, EOFError) as e:
            raise OperationCancelled() from e

    return wrapper


def _plural(count: int, word: str = "workspace") -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


class RichPrompter:
    """Prompter capability backed by rich.prompt."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or default_console

    def _print_options(self, message: str, options: Sequence[Option]) -> None:
        self.console.print(f"\n[bold]{message}[/bold]")
        for number, (_, label) in enumerate(options, start=1):
            self.console.print(f"  [cyan]{number}[/cyan]. {label}")

    @_cancellable
    def select(self, message: str, options: Sequence[Option], default: int = 1) -> Any:
        """Pick one option by number."""
        if not options:
            raise OperationCancelled("Nothing to choose from")
        self._print_options(message, options)
        choices = [str(n) for n in range(1, len(options) + 1)]
        number = IntPrompt.ask(
            "Choose", choices=choices, default=default, show_choices=False, console=self.console
        )
        return options[number - 1][0]

    @_cancellable
    def multiselect(self, message: str, options: Sequence[Option], required: bool = True) -> List[Any]:
        """Pick several options: comma separated numbers, or 'all'."""
        if not options:
            return []
        self._print_options(message, options)
        while True:
            answer = Prompt.ask("Choose (e.g. 1,3 or all)", console=self.console).strip().lower()
            if answer == "all":
                return [value for value, _ in options]
            picked = self._parse_numbers(answer, len(options))
            if picked is None:
                self.console.print("[prompt.invalid]Enter numbers from the list separated by commas")
                continue
            if not picked and required:
                self.console.print("[prompt.invalid]Select at least one option")
                continue
            return [options[n - 1][0] for n in picked]

    @staticmethod
    def _parse_numbers(answer: str, upper: int) -> Optional[List[int]]:
        numbers: List[int] = []
        for part in filter(None, (p.strip() for p in answer.split(","))):
            if not part.isdigit() or not 1 <= int(part) <= upper:
                return None
            if int(part) not in numbers:
                numbers.append(int(part))
        return numbers

    @_cancellable
    def text(self, message: str, default: Optional[str] = None, required: bool = True) -> str:
        """Free-form text; empty answers are refused when required."""
        while True:
            value = Prompt.ask(message, default=default, console=self.console)
            value = (value or "").strip()
            if value or not required:
                return value
            self.console.print("[prompt.invalid]A value is required")

    @_cancellable
    def confirm(self, message: str, default: bool = False) -> bool:
        return Confirm.ask(message, default=default, console=self.console)

    def _show_conflict(self, prompt: VersionPrompt) -> None:
        lines = [f"[bold cyan]📦 Resolving: {escape(prompt.package_name)}[/bold cyan]", ""]
        for version, workspaces in prompt.usage.items():
            lines.append(f"[yellow]Version {escape(version)}:[/yellow]")
            lines.extend(f"  [dim]├─[/dim] {escape(name)}" for name in workspaces)
            lines.append("")
        if prompt.latest_version:
            hint = (
                "[yellow]🆕 (newer than current versions)[/yellow]"
                if prompt.latest_is_newer
                else "[dim](already in use)[/dim]"
            )
            lines.append(f"📋 Latest version on npm: [green]{escape(prompt.latest_version)}[/green] {hint}")
        self.console.print(
            Panel("\n".join(lines).rstrip(), title=escape(f"Conflict Resolution for {prompt.package_name}"))
        )

    def choose_version(self, prompt: VersionPrompt) -> VersionChoice:
        """Ask for the target version of one package."""
        if prompt.detailed:
            self._show_conflict(prompt)

        options: List[Option] = [
            (version, f"{escape(version)} [dim](used in {_plural(len(names))})[/dim]")
            for version, names in prompt.usage.items()
        ]
        if prompt.latest_version:
            marker = " 🆕" if prompt.latest_is_newer else ""
            options.append((_LATEST, f"{escape(prompt.latest_version)} [green](latest from npm)[/green]{marker}"))
        elif not prompt.detailed:
            options.append((_LATEST, "[green]Use latest from npm[/green]"))
        if prompt.allow_custom:
            options.append((_CUSTOM, "✨ Enter custom version"))
        options.append((_SKIP, "⏭️  Skip this package"))

        picked = self.select(f"Select target version for {escape(prompt.package_name)}:", options)
        if picked == _SKIP:
            return VersionChoice.skip()
        if picked == _LATEST:
            return VersionChoice.latest()
        if picked == _CUSTOM:
            custom = self.text(f"Enter custom version for {escape(prompt.package_name)} (e.g. ^5.6.0, latest, ~4.0.0)")
            return VersionChoice.custom(custom)
        return VersionChoice.use(picked)

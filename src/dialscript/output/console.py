"""Rich console rendering for validation and auto-fix results.

Script text is always wrapped in :class:`rich.text.Text` so that DialScript
headers such as ``[Scene.1]`` are never parsed as console markup.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.text import Text

from dialscript.models.corrections import FixResult
from dialscript.models.diagnostics import Diagnostic, ValidationResult
from dialscript.models.tokens import (
    CharactersDecl,
    Comment,
    DialogHeader,
    DialogLine,
    Empty,
    LevelDecl,
    LineToken,
    LocationDecl,
    SceneHeader,
)
from dialscript.parser.classifier import LineClassifier

GUTTER = "     │   "


def _gutter(label: str | int, style: str = "grey50") -> Text:
    return Text(f"{label:>4} │ ", style=style)


class ConsoleReporter:
    """Renders results to a :class:`rich.console.Console`."""

    def __init__(
        self,
        console: Console | None = None,
        classifier: LineClassifier | None = None,
    ) -> None:
        self.console = console or Console(highlight=False)
        self._classifier = classifier or LineClassifier()

    # -- diagnostics ---------------------------------------------------------

    def print_diagnostic(self, diagnostic: Diagnostic) -> None:
        label = "EOF" if diagnostic.end_of_file else diagnostic.line_number
        header = _gutter(label, style="bold red")
        header.append(f"✗ {diagnostic.title}", style="bold red")
        self.console.print(header)

        if diagnostic.source_text is not None:
            self.console.print(Text(GUTTER, style="grey50") + Text(diagnostic.source_text))
            if diagnostic.caret_offset is not None:
                caret = " " * diagnostic.caret_offset + "^"
                self.console.print(Text(GUTTER, style="grey50") + Text(caret, style="bold red"))

        hint = Text(GUTTER, style="grey50")
        hint.append("Hint: ", style="bold grey50")
        hint.append(diagnostic.hint, style="grey50")
        self.console.print(hint)

    def _describe(self, number: int, token: LineToken) -> Text:
        line = _gutter(number)
        match token:
            case Empty():
                pass
            case Comment(text=text):
                line.append(f"–{text}", style="dim")
            case SceneHeader(number=scene):
                line = _gutter(number, style="bold cyan")
                line.append(f"◉ Scene {scene}", style="bold cyan")
            case DialogHeader(number=dialog):
                line = _gutter(number, style="bold magenta")
                line.append(f"◆ Dialog {dialog}", style="bold magenta")
            case LevelDecl(value=value):
                line.append("  Level: ", style="cyan")
                line.append(value)
            case LocationDecl(value=value):
                line.append("  Location: ", style="cyan")
                line.append(value)
            case CharactersDecl(raw_list=value):
                line.append("  Characters: ", style="cyan")
                line.append(value)
            case DialogLine(name=name, text=text, metadata=metadata):
                line.append(f"  {name}: ", style="bold white")
                line.append(text)
                if metadata:
                    line.append(f"    {metadata}", style="yellow")
        return line

    def report_validation(
        self,
        result: ValidationResult,
        lines: Sequence[str] = (),
        verbose: bool = False,
        source: Path | str | None = None,
    ) -> None:
        """Print diagnostics and the summary footer.

        In verbose mode every line of *lines* is echoed with its kind, and
        diagnostics are shown in place of the lines they belong to.
        """
        if verbose and source is not None:
            self.console.print(Text.assemble(("Compiling: ", "bold cyan"), str(source)))

        if verbose and lines:
            by_line: dict[int, list[Diagnostic]] = defaultdict(list)
            for diagnostic in result.diagnostics:
                by_line[diagnostic.line_number].append(diagnostic)
            for number, line in enumerate(lines, start=1):
                if number in by_line:
                    for diagnostic in by_line[number]:
                        self.print_diagnostic(diagnostic)
                else:
                    self.console.print(self._describe(number, self._classifier.classify(line)))
            for diagnostic in result.diagnostics:
                if diagnostic.line_number > len(lines):
                    self.print_diagnostic(diagnostic)
        else:
            for diagnostic in result.diagnostics:
                self.print_diagnostic(diagnostic)

        self.print_summary(result)

    def print_summary(self, result: ValidationResult) -> None:
        if result.valid:
            self.console.print(
                Text.assemble(
                    ("Parsing completed: ", "bold green"),
                    f"{result.total_lines} lines processed",
                )
            )
        else:
            self.console.print(
                Text.assemble(
                    ("Parsing broken: ", "bold red"),
                    f"{result.total_lines} lines processed, {result.error_count} error(s)",
                )
            )

    # -- auto-fix ------------------------------------------------------------

    def report_fix(self, result: FixResult, source: Path | str | None = None) -> None:
        if source is not None:
            self.console.print(Text.assemble(("Auto-fix: ", "bold cyan"), str(source)))

        for correction in result.corrections:
            fixed = _gutter(correction.line_number, style="bold blue")
            fixed.append("◼ Fixed", style="bold blue")
            self.console.print(fixed)
            self.console.print(
                Text(GUTTER, style="grey50") + Text(f"- {correction.original_text}", style="red")
            )
            self.console.print(
                Text(GUTTER, style="grey50") + Text(f"+ {correction.fixed_text}", style="green")
            )

        if not result.changed:
            if result.converged:
                self.console.print(Text("No fixes needed", style="bold green"))
            else:
                self.console.print(
                    Text("Auto-fix not possible, please fix manually", style="bold red")
                )
            return

        self.console.print(
            Text.assemble(("✓ Applied: ", "bold green"), f"{result.fix_count} fixes")
        )
        if not result.converged:
            self.console.print(
                Text("✗ Script still has errors that need to be fixed manually", style="bold red")
            )
            for diagnostic in result.validation.diagnostics:
                self.print_diagnostic(diagnostic)

    # -- reference -----------------------------------------------------------

    def print_example(self, example: str) -> None:
        self.console.print(Text("Example .ds file:", style="bold cyan"))
        self.console.print()
        for number, line in enumerate(example.splitlines(), start=1):
            self.console.print(self._describe(number, self._classifier.classify(line)))

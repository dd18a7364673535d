"""Console output abstraction.

Resolvers and commands write through ConsoleProtocol and never touch rich
directly. RichConsole writes to stderr by default so that stdout stays
clean for `--json`; MockConsole records output for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "OutputRecord",
    "RichConsole",
    "Style",
]


class Style(Enum):
    """How a diagnostic line is rendered."""

    DEFAULT = auto()
    ERROR = auto()
    WARNING = auto()
    DIM = auto()  # resolution notes, only shown with --verbose

    def __str__(self) -> str:
        return self.name.lower()


class ConsoleProtocol(Protocol):
    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


_RICH_STYLES = {
    Style.DEFAULT: "",
    Style.ERROR: "red bold",
    Style.WARNING: "yellow",
    Style.DIM: "dim",
}


class RichConsole:
    """Terminal console; drops DIM notes unless verbose."""

    def __init__(self, *, stderr: bool = True, verbose: bool = False) -> None:
        from rich.console import Console

        self._console = Console(stderr=stderr, highlight=False)
        self._verbose = verbose

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        if style == Style.DIM and not self._verbose:
            return
        self._console.print(message, style=_RICH_STYLES[style] or None, markup=False)

    def error(self, message: str) -> None:
        self._console.print("[red bold]error:[/red bold] ", end="")
        self._console.print(message, markup=False)

    def warning(self, message: str) -> None:
        self._console.print("[yellow]warning:[/yellow] ", end="")
        self._console.print(message, markup=False)


@dataclass(frozen=True, slots=True)
class OutputRecord:
    message: str
    style: Style


@dataclass
class MockConsole:
    """Records every line, DIM included, for assertions."""

    outputs: list[OutputRecord] = field(default_factory=list)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def warning(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"warning: {message}", Style.WARNING))

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)

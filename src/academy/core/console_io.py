"""Console collaborators used by interactive core workflows.

The core reads lines from an InputSource and writes status lines to an
OutputSink. The CLI provides the terminal implementation; tests provide
scripted ones.
"""

from __future__ import annotations

from typing import Protocol


class InputSource(Protocol):
    """Supplies one line of user input per call."""

    def read_line(self, prompt: str) -> str: ...

    def read_secret(self, prompt: str) -> str:
        """Like read_line, without echoing the typed text."""
        ...


class OutputSink(Protocol):
    """Receives human-readable status lines."""

    def heading(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleIO(InputSource, OutputSink, Protocol):
    """Both ends of the console."""

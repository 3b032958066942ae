"""
Indentation-aware text sink for generated code.
"""

from contextlib import contextmanager
from typing import Iterator, List


class CodePrinter:
    """Accumulates ordered text blocks, indenting the start of each non-empty line."""

    def __init__(self, indent: str = "  "):
        self._indent_unit = indent
        self._level = 0
        self._parts: List[str] = []
        self._at_line_start = True

    @property
    def content(self) -> str:
        """All text printed so far."""
        return "".join(self._parts)

    @property
    def is_empty(self) -> bool:
        return not self._parts

    def print(self, *texts: str, newlines: bool = True):
        """
        Append texts, each followed by a newline unless ``newlines`` is False.

        With no arguments, appends a single blank line.
        """
        if not texts:
            texts = ("",)
        for text in texts:
            self._append(text)
            if newlines:
                self._append("\n")

    def print_indented(self, *texts: str, newlines: bool = True):
        """Print texts one level deeper than the current indentation."""
        with self.indented():
            self.print(*texts, newlines=newlines)

    def indent(self):
        self._level += 1

    def outdent(self):
        if self._level == 0:
            raise ValueError("Cannot outdent below column zero")
        self._level -= 1

    @contextmanager
    def indented(self) -> Iterator["CodePrinter"]:
        self.indent()
        try:
            yield self
        finally:
            self.outdent()

    def _append(self, text: str):
        indent = self._indent_unit * self._level
        for line in text.splitlines(keepends=True):
            if self._at_line_start and indent and line not in ("\n", "\r\n"):
                self._parts.append(indent)
            self._parts.append(line)
            self._at_line_start = line.endswith("\n")

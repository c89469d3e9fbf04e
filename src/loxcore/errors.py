"""Error types with formatted source context."""

from __future__ import annotations

from loxcore.tokens import Position


def _render(message: str, position: Position, source: str, filename: str) -> str:
    lines = source.splitlines(keepends=True)
    line = position.start_line(source)
    line_idx = line - 1
    col = position.column(source)

    # Build the source line (strip trailing newline for display)
    if 0 <= line_idx < len(lines):
        source_line = lines[line_idx].rstrip("\n").rstrip("\r")
    else:
        source_line = ""

    # Underline the scanned span when it stays on one line, at least 1 char
    span_len = position.current - position.start
    if "\n" in source[position.start : position.current]:
        span_len = len(source_line) - col + 1
    underline_len = max(1, span_len)

    pad = " " * (col - 1)
    carets = "^" * underline_len

    line_num = str(line)
    gutter_width = len(line_num) + 1

    blank_gutter = " " * gutter_width + "|"
    line_gutter = f"{line_num:>{gutter_width - 1}} |"

    return (
        f"error: {message}\n"
        f"{' ' * gutter_width}--> {filename}:{line}:{col}\n"
        f"{blank_gutter}\n"
        f"{line_gutter} {source_line}\n"
        f"{blank_gutter} {pad}{carets}"
    )


class LexError(Exception):
    """Raised on the first lexing error, with position and source context."""

    def __init__(self, message: str, position: Position, source: str) -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<input>") -> str:
        return _render(self.message, self.position, self.source, filename)


class ParseError(Exception):
    """Raised on the first parse error, positioned at the offending token."""

    def __init__(self, message: str, position: Position, source: str = "") -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<input>") -> str:
        return _render(self.message, self.position, self.source, filename)


class EvalError(Exception):
    """Raised by strict evaluation when an operator does not apply to its operands."""

    def __init__(self, message: str, position: Position, source: str = "") -> None:
        self.message = message
        self.position = position
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "<input>") -> str:
        return _render(self.message, self.position, self.source, filename)

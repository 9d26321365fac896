from dataclasses import dataclass


@dataclass(frozen=True)
class Position:
    """Represents the current position in the input stream.

    `byte_offset` counts code points consumed since the start of input;
    `line` and `column` are 1-based.
    """
    byte_offset: int = 0
    line: int = 1
    column: int = 1

    def advance(self, was_newline: bool = False) -> 'Position':
        """Step over one consumed character."""
        if was_newline:
            return Position(self.byte_offset + 1, self.line + 1, 1)
        return Position(self.byte_offset + 1, self.line, self.column + 1)

    def advance_over(self, char: str) -> 'Position':
        """Step over `char`, starting a new line if it is '\\n'."""
        return self.advance(char == '\n')

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


def origin() -> Position:
    """Position at the very beginning of the input."""
    return Position(0, 1, 1)

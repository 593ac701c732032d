"""Exception hierarchy for infinite region operations."""


class InfiniteRegionError(Exception):
    """Base exception for infinite region operations."""
    pass


class ParseError(InfiniteRegionError, ValueError):
    """Raised when an instruction line does not match the instruction grammar.

    Attributes:
        line: The offending text (without its trailing newline)
        column: 0-based offset of the first character that does not fit
        line_number: 1-based line number within a batch, or None for a single line
    """

    def __init__(self, message: str, line: str, column: int, line_number: int | None = None):
        self.message = message
        self.line = line
        self.column = column
        self.line_number = line_number
        super().__init__(str(self))

    def with_line_number(self, line_number: int) -> "ParseError":
        return ParseError(self.message, self.line, self.column, line_number)

    def __str__(self) -> str:
        if self.line_number is None:
            return f"column {self.column}: {self.message}"
        return f"line {self.line_number}, column {self.column}: {self.message}"


class ValidationError(InfiniteRegionError, ValueError):
    """Raised when parameter validation fails."""
    pass


class RegionLimitError(InfiniteRegionError):
    """Raised when applying an instruction would exceed the configured cuboid ceiling."""
    pass


class InvariantViolation(InfiniteRegionError, AssertionError):
    """Raised when an internal consistency check fails.

    This indicates a logic defect (malformed range, overlapping members, volume
    not conserved), never a data problem. Callers should not try to recover.
    """
    pass

"""Decoding of reactor reboot instructions.

An instruction line has the form::

    on x=10..12,y=10..12,z=10..12

The decoder walks the line token by token so that a failure can be reported
at the exact column where the text stops matching the grammar.
"""

import enum
import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from infinite_region.cuboid import Cuboid, Range
from infinite_region.exceptions import ParseError

_STATE = re.compile(r"on|off")
_INT = re.compile(r"-?[0-9]+")


class SwitchState(enum.Enum):
    ON = "on"
    OFF = "off"


@dataclass(frozen=True)
class Instruction:
    """A switch state applied to a cuboid."""

    switch_state: SwitchState
    cuboid: Cuboid

    def __str__(self) -> str:
        c = self.cuboid
        return (f"{self.switch_state.value} x={c.x.lo}..{c.x.hi},"
                f"y={c.y.lo}..{c.y.hi},z={c.z.lo}..{c.z.hi}")


class _Scanner:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0

    def fail(self, message: str, column: int | None = None):
        raise ParseError(message, self.text, self.pos if column is None else column)

    def literal(self, expected: str):
        if not self.text.startswith(expected, self.pos):
            self.fail(f"expected {expected!r}")
        self.pos += len(expected)

    def token(self, pattern: re.Pattern, what: str) -> str:
        match = pattern.match(self.text, self.pos)
        if match is None:
            self.fail(f"expected {what}")
        self.pos = match.end()
        return match.group()

    def axis(self, name: str) -> Range:
        self.literal(f"{name}=")
        start = self.pos
        lo = int(self.token(_INT, "integer"))
        self.literal("..")
        hi = int(self.token(_INT, "integer"))
        if lo > hi:
            self.fail(f"{name} range {lo}..{hi} is reversed", column=start)
        return Range(lo, hi)

    def end(self):
        if self.pos != len(self.text):
            self.fail("unexpected trailing content")


def parse_instruction(line: str) -> Instruction:
    """Parse a single instruction line.

    Args:
        line: Text such as ``"off x=9..11,y=9..11,z=9..11"``. A trailing
              line ending is ignored; anything else outside the grammar is not.

    Returns:
        Instruction: The decoded switch state and cuboid

    Raises:
        ParseError: If the line does not match the grammar exactly, or an
                    axis range is written high-to-low
    """
    text = line.rstrip("\r\n")
    scanner = _Scanner(text)
    state = SwitchState(scanner.token(_STATE, "'on' or 'off'"))
    scanner.literal(" ")
    x = scanner.axis("x")
    scanner.literal(",")
    y = scanner.axis("y")
    scanner.literal(",")
    z = scanner.axis("z")
    scanner.end()
    return Instruction(state, Cuboid(x, y, z))


def parse_instructions(lines: Iterable[str]) -> Iterator[Instruction]:
    """Parse instruction lines lazily, skipping blank lines.

    Raises:
        ParseError: For the first malformed line, with ``line_number`` set
    """
    for line_number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            yield parse_instruction(line)
        except ParseError as e:
            raise e.with_line_number(line_number) from None

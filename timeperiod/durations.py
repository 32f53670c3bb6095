"""Utilities for parsing human-friendly duration strings."""

import enum
import logging
import string
from types import MappingProxyType
from typing import Dict, Mapping

logger = logging.getLogger(__name__)

INT64_MAX = 2**63 - 1
INT64_MIN = -(2**63)
DEFAULT_MULTIPLIER = 60

DEFAULT_UNITS: Mapping[str, int] = MappingProxyType(
    {
        "s": 1,
        "seconds": 1,
        "m": 60,
        "minutes": 60,
        "h": 3600,
        "hours": 3600,
        "d": 86400,
        "days": 86400,
        "mo": 2419200,
        "months": 2419200,
        "y": 31536000,
        "years": 31536000,
    }
)


class ParseMode(enum.Enum):
    """How the scanner treats unit literals missing from the unit table."""

    LENIENT = "lenient"
    STRICT = "strict"


class ParseError(ValueError):
    """Base class for duration parsing failures."""

    def __init__(self, message: str, literal: str, position: int):
        super().__init__(message)
        self.literal = literal
        self.position = position


class UnknownUnitError(ParseError):
    def __init__(self, literal: str, position: int):
        super().__init__(
            f"Unknown unit {literal!r} at position {position}", literal, position
        )


class NumericOverflowError(ParseError):
    def __init__(self, literal: str, position: int):
        super().__init__(
            f"Value {literal!r} at position {position} is outside the signed 64-bit range",
            literal,
            position,
        )


def _freeze_units(units: Mapping[str, int]) -> Mapping[str, int]:
    table = MappingProxyType(dict(units))
    for literal, multiplier in table.items():
        if (
            isinstance(multiplier, bool)
            or not isinstance(multiplier, int)
            or multiplier <= 0
        ):
            raise ValueError(
                f"Multiplier for {literal!r} must be a positive integer, got {multiplier!r}"
            )
    return table


class Scanner:
    """Tokenize a duration string into ``{multiplier: value}`` pairs.

    Only ASCII digits start a token. Each digit run may be followed directly by
    a run of ASCII letters naming its unit; a run without letters counts as
    minutes. Everything else between tokens is skipped. Values that resolve to
    the same multiplier are added together.
    """

    def __init__(
        self,
        source: str,
        units: Mapping[str, int] = DEFAULT_UNITS,
        mode: ParseMode = ParseMode.LENIENT,
    ):
        self.source = source
        self.units = _freeze_units(units)
        self.mode = mode
        self._start = 0
        self._current = 0
        self._result: Dict[int, int] = {}

    def _at_end(self) -> bool:
        return self._current >= len(self.source)

    def _advance(self) -> str:
        char = self.source[self._current]
        self._current += 1
        return char

    def _peek(self) -> str:
        if self._at_end():
            return ""
        return self.source[self._current]

    def _scan_token(self) -> None:
        if self._advance() not in string.digits:
            return
        while self._peek() and self._peek() in string.digits:
            self._advance()
        digits = self.source[self._start : self._current]
        offset = self._current

        while self._peek() and self._peek() in string.ascii_letters:
            self._advance()
        literal = self.source[offset : self._current]

        value = int(digits)
        if value > INT64_MAX:
            raise NumericOverflowError(digits, self._start)

        if not literal:
            self._add_value(DEFAULT_MULTIPLIER, value)
        elif literal in self.units:
            self._add_value(self.units[literal], value)
        elif self.mode is ParseMode.STRICT:
            raise UnknownUnitError(literal, offset)
        else:
            logger.debug("dropping %s%s: unknown unit at %d", digits, literal, offset)

    def _add_value(self, multiplier: int, value: int) -> None:
        self._result[multiplier] = self._result.get(multiplier, 0) + value

    def scan_tokens(self) -> Dict[int, int]:
        """Scan the whole source and return the accumulated values."""
        while not self._at_end():
            self._start = self._current
            self._scan_token()
        return dict(self._result)


def parse(
    text: str,
    units: Mapping[str, int] = DEFAULT_UNITS,
    mode: ParseMode = ParseMode.LENIENT,
) -> int:
    """Convert a duration expression into a number of seconds.

    Parameters
    ----------
    text:
        Duration expression such as ``"2h 30m 15s"`` or ``"1mo 2d"``. A number
        without a unit is read as minutes. An empty string yields ``0``.
    units:
        Mapping of unit literal to seconds. Defaults to :data:`DEFAULT_UNITS`.
    mode:
        :attr:`ParseMode.LENIENT` ignores tokens with unknown units,
        :attr:`ParseMode.STRICT` rejects them.

    Returns
    -------
    int
        Total number of seconds.

    Raises
    ------
    UnknownUnitError
        In strict mode, when a unit literal is not in ``units``.
    NumericOverflowError
        If a number or the resulting total does not fit a signed 64-bit
        integer.
    """

    scanner = Scanner(text, units, mode)
    total = sum(
        multiplier * value for multiplier, value in scanner.scan_tokens().items()
    )
    if total > INT64_MAX:
        raise NumericOverflowError(text, 0)
    return total

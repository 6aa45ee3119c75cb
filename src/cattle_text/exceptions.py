"""Custom exception hierarchy for the cattle text parser.

Exception tree:
    CattleTextError
    +-- AcquisitionError     (line source produced no usable content)
    +-- InputContractError   (parser handed something that is not a line sequence)
    +-- ConfigError          (tables file unreadable or invalid)

Malformed report content never raises: short rows, unknown labels and
orphaned categories are encoded in the parsed output instead.
"""

from typing import Optional


class CattleTextError(Exception):
    """Base exception for all cattle text errors."""

    def __init__(self, message: str, *, source: Optional[str] = None):
        self.source = source
        super().__init__(message)


class AcquisitionError(CattleTextError):
    """The line source could not produce a line sequence at all.

    Raised before the parser runs -- e.g. the capture file is missing,
    empty, or not in a recognised format. The host should treat this as
    a hard failure.
    """

    pass


class InputContractError(CattleTextError, TypeError):
    """The parser was given ``None`` or a non-sequence instead of lines.

    This signals a broken upstream contract, not a parsing edge case.
    """

    pass


class ConfigError(CattleTextError):
    """A tables override file could not be read or failed validation."""

    pass

"""Line-consistency scanner for the body of a single sequence record."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, NamedTuple, Union

SPACE = 0x20
CARRIAGE_RETURN = 0x0D
LINE_FEED = 0x0A

BytesLike = Union[bytes, bytearray, memoryview]


def is_residue(byte: int) -> bool:
    """Return True for bytes that count toward the sequence length."""

    return byte > SPACE


def is_carriage_return(byte: int) -> bool:
    return byte == CARRIAGE_RETURN


def is_line_break(byte: int) -> bool:
    return byte == LINE_FEED


@dataclass(slots=True)
class ScanState:
    """Running counters for one scan."""

    line_length: int = 0
    sequence_length: int = 0
    blank_seen: bool = False
    trailing_short_flag: bool = False
    error_count: int = 0


class ScanResult(NamedTuple):
    """Ordered (sequence_length, error_count) pair."""

    sequence_length: int
    error_count: int

    @property
    def is_consistent(self) -> bool:
        return self.error_count == 0

    def as_dict(self) -> Dict[str, int]:
        return dict(self._asdict())


def scan(buffer: BytesLike, expected_line_length: int) -> ScanResult:
    """Count residues and line-width irregularities in ``buffer``.

    ``line_length`` includes the closing newline, so a line carrying
    ``expected_line_length`` residues closes at ``expected_line_length + 1``
    and an empty line closes at 1. Carriage returns are dropped from the
    width. An unterminated final line is never checked.
    """

    if expected_line_length < 0:
        raise ValueError(f"expected_line_length must be >= 0, got {expected_line_length}")

    state = ScanState()
    for byte in memoryview(buffer).cast("B"):
        state.line_length += 1
        if is_residue(byte):
            state.sequence_length += 1
        elif is_carriage_return(byte):
            state.line_length -= 1
        elif is_line_break(byte):
            _close_line(state, expected_line_length)

    apply_forgiveness(state)
    return ScanResult(sequence_length=state.sequence_length, error_count=state.error_count)


def _close_line(state: ScanState, expected_line_length: int) -> None:
    if state.line_length == 1:
        state.blank_seen = True
    elif state.blank_seen:
        # content is only allowed before the trailing run of blank lines
        state.error_count += 1
    elif state.line_length - 1 != expected_line_length:
        state.error_count += 1
        state.trailing_short_flag = True
    else:
        state.trailing_short_flag = False
    state.line_length = 0


def apply_forgiveness(state: ScanState) -> ScanState:
    """Discount a lone width mismatch when it came from the last closed line."""

    if state.trailing_short_flag and state.error_count == 1:
        state.error_count -= 1
    return state


def scan_text(text: str, expected_line_length: int, encoding: str = "ascii") -> ScanResult:
    """Encode ``text`` and scan it."""

    return scan(text.encode(encoding), expected_line_length)

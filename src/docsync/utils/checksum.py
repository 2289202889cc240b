"""Rolling 32-bit checksum for incremental-save envelopes.

The checksum catches accidental corruption or truncation of a serialized
diff in transport or storage.  It is **not** used for security purposes
and offers no protection against deliberate tampering.

The arithmetic is fixed by the wire format: every implementation that
reads or writes envelopes must produce the same value, so the
multiply-add and the signed 32-bit wraparound are reproduced exactly.
"""

from __future__ import annotations

_MASK_32 = 0xFFFFFFFF
_SIGN_BIT = 0x80000000


def _to_int32(value: int) -> int:
    """Wrap *value* to a signed 32-bit integer."""
    value &= _MASK_32
    return value - 0x100000000 if value & _SIGN_BIT else value


def _code_units(data: str) -> list[int]:
    """Return the UTF-16 code units of *data*.

    Characters outside the Basic Multilingual Plane contribute their
    surrogate pair, matching implementations that index strings by UTF-16
    unit.
    """
    raw = data.encode("utf-16-le", "surrogatepass")
    return [raw[i] | (raw[i + 1] << 8) for i in range(0, len(raw), 2)]


def checksum(data: str) -> str:
    """Return the rolling checksum of *data* as a signed hex string.

    For each character the accumulator becomes ``acc * 31 + unit``,
    wrapped to signed 32 bits.  Negative results keep their sign, so the
    output looks like ``"5e918d2"`` or ``"-3a4f21c0"``.

    Parameters
    ----------
    data:
        Arbitrary string to checksum.

    Returns
    -------
    str
        Lowercase hexadecimal representation of the accumulator.

    Examples
    --------
    >>> checksum("")
    '0'
    >>> checksum("hello")
    '5e918d2'
    """
    acc = 0
    for unit in _code_units(data):
        acc = _to_int32(acc * 31 + unit)
    return format(acc, "x")

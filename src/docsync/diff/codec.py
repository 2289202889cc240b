"""Compact wire encoding for :class:`~docsync.models.DiffResult`.

The encoding is JSON with single-letter keys::

    {"c": [{"t": "r", "p": 2, "l": 2, "c": "x\\n", "o": "b\\n"}],
     "s": 0.6666666666666666, "h": true, "n": 1}

Change-level keys: ``t`` (first letter of the change type), ``p``
(position), ``l`` (length), ``c`` (content), ``o`` (old content).
Top-level keys: ``c`` (changes), ``s`` (similarity), ``h`` (has changes),
``n`` (change count).  Absent optional fields are omitted, and the output
has no insignificant whitespace, because envelope checksums are computed
over this exact text.
"""

from __future__ import annotations

import json
import math
from decimal import Decimal
from typing import Any

from docsync.errors import DocsyncDecodeError
from docsync.models import ChangeType, DiffResult, TextChange

_TYPE_CODES: dict[str, ChangeType] = {
    "i": ChangeType.INSERT,
    "d": ChangeType.DELETE,
    "r": ChangeType.REPLACE,
    "e": ChangeType.EQUAL,
}


def _wire_number(value: float) -> str:
    """Render *value* the way ``JSON.stringify`` does.

    Python's ``repr`` already yields the shortest round-tripping digits;
    only the placement of the decimal point differs.  Whole numbers lose
    the ``.0`` (``1``), plain notation is used for decimal exponents in
    ``[-6, 21)`` (``0.00005`` rather than ``5e-05``), and exponent form
    elsewhere looks like ``1e-7`` or ``1.5e+21``.  Non-finite values
    become ``null``.

    Examples
    --------
    >>> _wire_number(1.0)
    '1'
    >>> _wire_number(1 / 20000)
    '0.00005'
    """
    value = float(value)
    if not math.isfinite(value):
        return "null"
    if value == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(map(str, digit_tuple)).rstrip("0")
    exponent += len(digit_tuple) - len(digits)
    k = len(digits)
    n = exponent + k  # decimal point sits after the n-th digit
    prefix = "-" if sign else ""

    if k <= n <= 21:
        return prefix + digits + "0" * (n - k)
    if 0 < n <= 21:
        return prefix + digits[:n] + "." + digits[n:]
    if -6 < n <= 0:
        return prefix + "0." + "0" * -n + digits

    e = n - 1
    mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{prefix}{mantissa}e{'+' if e > 0 else '-'}{abs(e)}"


def _encode_change(change: TextChange) -> dict[str, Any]:
    encoded: dict[str, Any] = {
        "t": ChangeType(change.type).value[0],
        "p": change.position,
    }
    if change.length is not None:
        encoded["l"] = change.length
    encoded["c"] = change.content
    if change.old_content is not None:
        encoded["o"] = change.old_content
    return encoded


def _decode_change(entry: dict[str, Any]) -> TextChange:
    return TextChange(
        type=_TYPE_CODES.get(entry.get("t"), ChangeType.EQUAL),
        position=entry["p"],
        length=entry.get("l"),
        content=entry.get("c", ""),
        old_content=entry.get("o"),
    )


def compress_diff(diff: DiffResult) -> str:
    """Serialize *diff* to its compact wire form."""
    changes = json.dumps(
        [_encode_change(change) for change in diff.changes],
        ensure_ascii=False,
        separators=(",", ":"),
    )
    # json.dumps would write small similarities as 5e-05.
    return (
        f'{{"c":{changes},"s":{_wire_number(diff.similarity)},'
        f'"h":{json.dumps(bool(diff.has_changes))},"n":{int(diff.change_count)}}}'
    )


def decompress_diff(data: str) -> DiffResult:
    """Parse the wire form produced by :func:`compress_diff`.

    Unknown change-type codes decode as ``equal``.

    Raises
    ------
    DocsyncDecodeError
        If *data* is not valid JSON or does not have the expected shape.
        The underlying exception is chained as the cause.
    """
    try:
        compressed = json.loads(data)
        changes = [_decode_change(entry) for entry in compressed["c"]]
        return DiffResult(
            changes=changes,
            similarity=float(compressed["s"]),
            has_changes=bool(compressed["h"]),
            change_count=int(compressed["n"]),
        )
    except (ValueError, TypeError, KeyError, AttributeError) as exc:
        raise DocsyncDecodeError(
            message=f"Failed to decompress diff data: {exc}",
            context={
                "reason": type(exc).__name__,
                "data_length": len(data) if isinstance(data, str) else None,
            },
            cause=exc,
        ) from exc

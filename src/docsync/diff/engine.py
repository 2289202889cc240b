"""Line-oriented diff engine: compute, apply, and merge text diffs.

The diff is a greedy two-cursor scan over the lines of both texts, **not**
a minimal-edit (LCS / Myers) diff.  Lines are compared strictly by
position: an insertion near the top of a document reports every later
line as a ``replace``.  Positions, lengths, change counts and similarity
scores of stored diffs depend on this exact behaviour, so the scan must
not be "improved" into an aligning diff.
"""

from __future__ import annotations

from collections.abc import Sequence

from docsync.config import DEFAULT_SIGNIFICANCE_THRESHOLD, DEFAULT_SIGNIFICANT_CHANGE_COUNT
from docsync.models import ChangeType, DiffResult, TextChange


def calculate_diff(old_text: str, new_text: str) -> DiffResult:
    """Compute the line diff that turns *old_text* into *new_text*.

    Both texts are split on ``"\\n"``.  Two cursors walk the line lists
    while ``position`` tracks the character offset into *old_text*.  An
    exhausted cursor reads as the empty line, and line equality is tested
    first:

    - **equal** lines advance both cursors and ``position`` by the line
      length + 1 (the newline); nothing is emitted.
    - old exhausted: **insert** ``new_line + "\\n"`` at ``position``;
      advance the new cursor and ``position``.
    - new exhausted: **delete** ``len(old_line) + 1`` characters at
      ``position``; advance the old cursor only.
    - otherwise **replace** ``len(old_line) + 1`` characters at
      ``position`` with ``new_line + "\\n"``; advance both cursors and
      ``position`` past the old line.

    Similarity is ``(total - change_count) / total`` with
    ``total = max(len(old_lines), len(new_lines))``.  It is not clamped.

    Parameters
    ----------
    old_text:
        The base text.
    new_text:
        The edited text.

    Returns
    -------
    DiffResult
    """
    if old_text == new_text:
        return DiffResult.identity()

    old_lines = old_text.split("\n")
    new_lines = new_text.split("\n")
    old_count = len(old_lines)
    new_count = len(new_lines)

    changes: list[TextChange] = []
    old_index = 0
    new_index = 0
    position = 0

    while old_index < old_count or new_index < new_count:
        old_line = old_lines[old_index] if old_index < old_count else ""
        new_line = new_lines[new_index] if new_index < new_count else ""

        if old_line == new_line:
            position += len(old_line) + 1
            old_index += 1
            new_index += 1
        elif old_index >= old_count:
            changes.append(TextChange(
                type=ChangeType.INSERT,
                position=position,
                content=new_line + "\n",
            ))
            position += len(new_line) + 1
            new_index += 1
        elif new_index >= new_count:
            changes.append(TextChange(
                type=ChangeType.DELETE,
                position=position,
                length=len(old_line) + 1,
                content="",
                old_content=old_line + "\n",
            ))
            old_index += 1
        else:
            changes.append(TextChange(
                type=ChangeType.REPLACE,
                position=position,
                length=len(old_line) + 1,
                content=new_line + "\n",
                old_content=old_line + "\n",
            ))
            position += len(old_line) + 1
            old_index += 1
            new_index += 1

    total_lines = max(old_count, new_count)
    unchanged_lines = total_lines - len(changes)

    return DiffResult(
        changes=changes,
        similarity=unchanged_lines / total_lines,
        has_changes=bool(changes),
        change_count=len(changes),
    )


def apply_diff(base_text: str, changes: Sequence[TextChange]) -> str:
    """Apply *changes* to *base_text* and return the result.

    Changes are applied in stable position order.  A running ``offset``
    records how far the text has grown or shrunk, so each change lands at
    ``change.position + offset``.  ``equal`` changes are skipped.

    The changes must come from one :func:`calculate_diff` call against
    this same *base_text*.  Applying them to any other text is not
    detected and produces undefined output.

    Parameters
    ----------
    base_text:
        The text the changes were computed against.
    changes:
        The edits to apply.  Not modified.

    Returns
    -------
    str
    """
    if not changes:
        return base_text

    result = base_text
    offset = 0

    for change in sorted(changes, key=lambda c: c.position):
        at = change.position + offset
        length = change.length or 0

        if change.type == ChangeType.INSERT:
            result = result[:at] + change.content + result[at:]
            offset += len(change.content)
        elif change.type == ChangeType.DELETE:
            result = result[:at] + result[at + length:]
            offset -= length
        elif change.type == ChangeType.REPLACE:
            result = result[:at] + change.content + result[at + length:]
            offset += len(change.content) - length

    return result


def is_significant_change(
    diff: DiffResult,
    threshold: float = DEFAULT_SIGNIFICANCE_THRESHOLD,
    max_changes: int = DEFAULT_SIGNIFICANT_CHANGE_COUNT,
) -> bool:
    """Decide whether *diff* is worth persisting or transmitting.

    A diff is significant when its similarity is below ``1 - threshold``,
    when it has more than *max_changes* changes, or when any non-``equal``
    change carries non-whitespace content.
    """
    if diff.similarity < 1 - threshold:
        return True

    if diff.change_count > max_changes:
        return True

    return any(
        change.type != ChangeType.EQUAL and change.content.strip()
        for change in diff.changes
    )


def merge_diffs(diffs: Sequence[DiffResult]) -> DiffResult:
    """Concatenate several diffs into one.

    Changes are joined in input order.  ``change_count`` is the sum of the
    inputs' counts and ``similarity`` the mean of their similarities; neither
    is recomputed from the merged change list.  A single input is returned
    as-is.
    """
    if not diffs:
        return DiffResult.identity()

    if len(diffs) == 1:
        return diffs[0]

    all_changes: list[TextChange] = []
    total_similarity = 0.0
    total_changes = 0

    for diff in diffs:
        all_changes.extend(diff.changes)
        total_similarity += diff.similarity
        total_changes += diff.change_count

    return DiffResult(
        changes=all_changes,
        similarity=total_similarity / len(diffs),
        has_changes=bool(all_changes),
        change_count=total_changes,
    )

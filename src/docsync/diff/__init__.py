"""Line diffs, their wire encoding, and incremental-save envelopes.

Exports
-------
calculate_diff
    Compute the positional line diff between two texts.
apply_diff
    Apply a diff's changes to the text it was computed against.
is_significant_change
    Decide whether a diff is worth persisting.
merge_diffs
    Concatenate several diffs.
compress_diff / decompress_diff
    Serialize a diff to and from its compact wire form.
create_incremental_save / validate_incremental_save / apply_incremental_save
    Package, verify, and apply an incremental-save envelope.
"""

from .codec import compress_diff, decompress_diff
from .engine import apply_diff, calculate_diff, is_significant_change, merge_diffs
from .envelope import apply_incremental_save, create_incremental_save, validate_incremental_save

__all__ = [
    "apply_diff",
    "apply_incremental_save",
    "calculate_diff",
    "compress_diff",
    "create_incremental_save",
    "decompress_diff",
    "is_significant_change",
    "merge_diffs",
    "validate_incremental_save",
]

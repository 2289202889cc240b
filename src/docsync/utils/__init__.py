from .checksum import checksum
from .clock import epoch_millis, iso_timestamp, utc_now

__all__ = [
    "checksum",
    "epoch_millis",
    "iso_timestamp",
    "utc_now",
]

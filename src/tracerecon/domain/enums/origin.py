from enum import Enum


class TransferOrigin(str, Enum):
    """Which side of the comparison produced a decoded transfer."""

    ACTUAL = "actual"
    LOCAL = "local"

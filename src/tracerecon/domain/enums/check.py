from enum import Enum


class CheckField(str, Enum):
    """Per-victim atomic checks. Values are the labels used in discrepancy lines."""

    COLLATERAL_PULLED = "Collateral pulled"
    DUST_RETURNED = "Dust returned"
    BURNED = "Burn"

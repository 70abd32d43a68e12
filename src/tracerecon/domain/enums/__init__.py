from tracerecon.domain.enums.check import CheckField
from tracerecon.domain.enums.origin import TransferOrigin

__all__ = [
    "CheckField",
    "TransferOrigin",
]

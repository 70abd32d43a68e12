"""Normalized transfer records shared by both sides of the comparison."""

from pydantic import BaseModel, ConfigDict, Field

from tracerecon.domain.enums import TransferOrigin
from tracerecon.domain.models.amounts import Amount


class TransferEvent(BaseModel):
    """A decoded ERC-20 Transfer. Addresses are lowercase."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    token: str
    from_address: str = Field(alias="from")
    to_address: str = Field(alias="to")
    value: Amount
    origin: TransferOrigin


class TokenMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    symbol: str | None = None
    decimals: int = Field(18, ge=0)


class CustomEvent(BaseModel):
    """An application event emitted by the reproduction's own contracts, for display only."""

    address: str
    event: str
    args: dict[str, str] = {}

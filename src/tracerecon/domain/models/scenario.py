"""Caller-supplied expectations for one exploit reproduction."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tracerecon.domain.models.amounts import Amount


class _ScenarioModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class VictimSpec(_ScenarioModel):
    """Expected effect on one victim, in the collateral token's smallest unit."""

    victim_id: int
    label: str
    symbol: str
    decimals: int = Field(18, ge=0)
    expected_collateral: Amount
    expected_dust: Amount = 0
    actual_token: str | None = None  # production token address; resolved from the registry when omitted


class GlobalCheckSpec(_ScenarioModel):
    """The single transaction-wide check (flash-mint or flash-loan principal)."""

    label: str = "Flash mint"
    symbol: str | None = None  # None = any token on the actual side
    decimals: int = Field(18, ge=0)
    amount: Amount
    tolerance: Amount = 999


class EventInput(_ScenarioModel):
    name: str = ""
    type: str
    indexed: bool = False


class EventAbi(_ScenarioModel):
    name: str
    inputs: list[EventInput] = []

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(i.type for i in self.inputs)})"


class Scenario(_ScenarioModel):
    name: str
    network: str
    victims: list[VictimSpec]
    global_check: GlobalCheckSpec
    local_tokens: dict[str, str] = {}  # symbol -> local deployment address, for RPC receipts
    emitters: dict[str, str] = {}  # name -> local contract whose events are decoded for display
    event_abis: list[EventAbi] = []

"""Comparison results and the persisted report layout."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from tracerecon.domain.models.amounts import Amount
from tracerecon.domain.models.transfer import CustomEvent, TransferEvent


class _ReportModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AmountBreakdown(_ReportModel):
    collateral_pulled: Amount = 0
    dust_returned: Amount = 0
    burned: Amount = 0


class MatchFlags(_ReportModel):
    collateral_pulled: bool = False
    dust_returned: bool = False
    burned: bool = False  # mirrors collateral_pulled; no independent burn signal is checked

    def count(self) -> int:
        return sum((self.collateral_pulled, self.dust_returned, self.burned))


class VictimComparison(_ReportModel):
    victim_id: int
    label: str
    local_token: str
    actual_token: str
    symbol: str
    decimals: int
    actual: AmountBreakdown
    reproduced: AmountBreakdown
    matches: MatchFlags


class GlobalCheck(_ReportModel):
    label: str = "Flash mint"
    decimals: int = 18
    actual: Amount = 0
    reproduced: Amount = 0
    matches: bool = False


class ComparisonBlock(_ReportModel):
    victims: list[VictimComparison] = []
    flash_mint: GlobalCheck
    alignment_score: int = Field(ge=0, le=100)
    discrepancies: list[str] = []


class ReportMetadata(_ReportModel):
    generated_at: str
    tx_hash: str
    network: str
    local_tx_hash: str


class ActualSection(_ReportModel):
    transfers: list[TransferEvent] = []
    call_trace_excerpt: str = ""
    error: str | None = None
    used_cache: bool | None = None


class LocalSection(_ReportModel):
    transfers: list[TransferEvent] = []
    custom_events: list[CustomEvent] = []


class ComparisonReport(_ReportModel):
    metadata: ReportMetadata
    actual: ActualSection
    local: LocalSection
    comparison: ComparisonBlock

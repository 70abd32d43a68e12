"""Boundary schema for traces returned by the trace provider.

Everything the provider returns is validated into these models before it
reaches the extractor; unknown keys are dropped. Bump TRACE_SCHEMA_VERSION
when the cached file layout changes.
"""

import logging
from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

TRACE_SCHEMA_VERSION = 1


def _lenient_int(value: object) -> int | None:
    """Provider numbers sometimes arrive as strings or junk; anything unparseable becomes None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class _TraceModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class RawLog(_TraceModel):
    """An undecoded EVM log: emitting contract, ordered topics, data payload."""

    address: str
    topics: list[str] = []
    data: str = "0x"


class CallNode(_TraceModel):
    """One frame of the call tree."""

    call_type: str = "CALL"
    from_address: str = Field("", alias="from")
    to_address: str = Field("", alias="to")
    function_name: str | None = None
    value: str | None = None
    error: str | None = None
    calls: list["CallNode"] = []


class AssetInfo(_TraceModel):
    contract_address: str | None = None
    symbol: str | None = None
    decimals: Annotated[int | None, BeforeValidator(_lenient_int)] = None


class AssetChange(_TraceModel):
    """Provider-computed balance change; only its asset metadata is consumed."""

    type: str | None = None
    from_address: str | None = Field(None, alias="from")
    to_address: str | None = Field(None, alias="to")
    raw_amount: str | None = None
    asset_info: AssetInfo | None = None


class TraceResult(_TraceModel):
    schema_version: int = TRACE_SCHEMA_VERSION
    logs: list[RawLog] = []
    trace: list[CallNode] = []
    asset_changes: list[AssetChange] = []

    @field_validator("logs", mode="before")
    @classmethod
    def drop_malformed_logs(cls, v: object) -> object:
        """Validate logs one by one; a malformed entry is dropped instead of rejecting the trace."""
        if not isinstance(v, list):
            return v
        logs: list[RawLog] = []
        for item in v:
            try:
                logs.append(RawLog.model_validate(item))
            except ValidationError as exc:
                logger.debug("Dropping malformed trace log %r: %s", item, exc)
        if len(logs) < len(v):
            logger.warning("Dropped %d malformed trace logs", len(v) - len(logs))
        return logs

from pydantic import BaseModel

from tracerecon.domain.models.trace import RawLog
from tracerecon.domain.models.transfer import CustomEvent


class LocalReproResult(BaseModel):
    """What the local reproduction hands back: its receipt logs plus the addresses it deployed."""

    tx_hash: str
    logs: list[RawLog] = []
    token_addresses: dict[str, str] = {}  # symbol -> local token address
    emitters: dict[str, str] = {}  # name -> local contract address
    custom_events: list[CustomEvent] = []  # pre-decoded by the harness, if it did so

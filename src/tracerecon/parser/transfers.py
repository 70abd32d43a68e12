"""Extract ERC-20 Transfer records from raw receipt or trace logs."""

import logging

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import to_bytes

from tracerecon.domain.enums import TransferOrigin
from tracerecon.domain.models.trace import RawLog
from tracerecon.domain.models.transfer import TransferEvent
from tracerecon.exceptions import DecodeError

logger = logging.getLogger(__name__)

# keccak256("Transfer(address,address,uint256)")
TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


def is_transfer_log(log: RawLog, topic: str = TRANSFER_TOPIC) -> bool:
    return bool(log.topics) and log.topics[0].lower() == topic.lower()


def decode_transfer_log(log: RawLog, origin: TransferOrigin, topic: str = TRANSFER_TOPIC) -> TransferEvent:
    """Decode one Transfer log. Raises DecodeError for anything that is not an ERC-20 Transfer.

    ERC-721 Transfers share the signature but index the token id as a fourth topic,
    so exactly three topics are required. `topic` admits events with the same
    (address indexed, address indexed, uint256) layout under another signature.
    """
    if not is_transfer_log(log, topic):
        raise DecodeError(f"Log from {log.address} is not a Transfer event")
    if len(log.topics) != 3:
        raise DecodeError(f"Transfer log from {log.address} has {len(log.topics)} topics, expected 3")

    try:
        (from_addr,) = decode(["address"], to_bytes(hexstr=log.topics[1]))
        (to_addr,) = decode(["address"], to_bytes(hexstr=log.topics[2]))
        (value,) = decode(["uint256"], to_bytes(hexstr=log.data))
    except (DecodingError, ValueError) as exc:
        raise DecodeError(f"Undecodable Transfer log from {log.address}: {exc}") from exc

    return TransferEvent(
        token=log.address.lower(),
        from_address=from_addr.lower(),
        to_address=to_addr.lower(),
        value=value,
        origin=origin,
    )


def extract_transfer_events(
    logs: list[RawLog],
    origin: TransferOrigin,
    topic: str = TRANSFER_TOPIC,
) -> list[TransferEvent]:
    """Decode every Transfer log, skipping foreign and malformed logs. Order is preserved."""
    transfers: list[TransferEvent] = []
    skipped = 0
    for log in logs:
        if not is_transfer_log(log, topic):
            continue
        try:
            transfers.append(decode_transfer_log(log, origin, topic))
        except DecodeError as exc:
            skipped += 1
            logger.debug("Skipping log: %s", exc)

    if skipped:
        logger.warning("Skipped %d undecodable %s Transfer logs", skipped, origin.value)
    return transfers

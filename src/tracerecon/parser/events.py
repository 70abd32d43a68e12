"""Decode the reproduction's own application events against scenario-supplied ABIs."""

import logging

from eth_abi import decode
from eth_abi.exceptions import DecodingError
from eth_utils import keccak, to_bytes

from tracerecon.domain.models.scenario import EventAbi
from tracerecon.domain.models.trace import RawLog
from tracerecon.domain.models.transfer import CustomEvent
from tracerecon.exceptions import DecodeError

logger = logging.getLogger(__name__)


def event_topic(abi: EventAbi) -> str:
    return "0x" + keccak(text=abi.signature).hex()


def format_arg(value: object) -> str:
    """Render a decoded ABI value as display text."""
    if isinstance(value, bytes):
        return "0x" + value.hex()
    if isinstance(value, (list, tuple)):
        return ",".join(format_arg(v) for v in value)
    return str(value)


def decode_event_log(log: RawLog, abi: EventAbi) -> CustomEvent:
    indexed = [i for i in abi.inputs if i.indexed]
    if len(log.topics) != len(indexed) + 1:
        raise DecodeError(f"{abi.name} expects {len(indexed)} indexed topics, got {len(log.topics) - 1}")

    try:
        topic_values = [
            decode([inp.type], to_bytes(hexstr=topic))[0]
            for inp, topic in zip(indexed, log.topics[1:])
        ]
        data_types = [i.type for i in abi.inputs if not i.indexed]
        data_values = list(decode(data_types, to_bytes(hexstr=log.data))) if data_types else []
    except (DecodingError, ValueError) as exc:
        raise DecodeError(f"Undecodable {abi.name} log from {log.address}: {exc}") from exc

    args: dict[str, str] = {}
    topic_iter = iter(topic_values)
    data_iter = iter(data_values)
    for position, inp in enumerate(abi.inputs):
        key = inp.name or f"arg{position}"
        args[key] = format_arg(next(topic_iter) if inp.indexed else next(data_iter))

    return CustomEvent(address=log.address.lower(), event=abi.name, args=args)


def decode_custom_events(
    logs: list[RawLog],
    emitters: dict[str, str],
    abis: list[EventAbi],
) -> list[CustomEvent]:
    """Decode logs emitted by the named contracts. Unknown or malformed logs are skipped."""
    watched = {addr.lower(): name for name, addr in emitters.items()}
    by_topic = {event_topic(abi): abi for abi in abis}

    events: list[CustomEvent] = []
    for log in logs:
        emitter = watched.get(log.address.lower())
        if emitter is None or not log.topics:
            continue
        abi = by_topic.get(log.topics[0].lower())
        if abi is None:
            logger.warning("No ABI for %s log with topic %s", emitter, log.topics[0])
            continue
        try:
            events.append(decode_event_log(log, abi))
        except DecodeError as exc:
            logger.warning("Failed to parse %s log: %s", emitter, exc)
    return events

"""Per-token totals and per-account net flows: pure functions, diagnostic only."""

from collections import defaultdict

from tracerecon.domain.models.transfer import TransferEvent

NetFlowLedger = dict[str, dict[str, int]]


def aggregate_by_token(transfers: list[TransferEvent]) -> dict[str, int]:
    """Total value moved per token, ignoring direction."""
    totals: dict[str, int] = defaultdict(int)
    for t in transfers:
        totals[t.token] += t.value
    return dict(totals)


def aggregate_net_flows(transfers: list[TransferEvent]) -> NetFlowLedger:
    """{token: {account: incoming - outgoing}}.

    Every transfer debits `from` and credits `to` by the same value, so each
    token's entries sum to zero.
    """
    ledger: dict[str, dict[str, int]] = defaultdict(lambda: defaultdict(int))
    for t in transfers:
        ledger[t.token][t.from_address] -= t.value
        ledger[t.token][t.to_address] += t.value
    return {token: dict(flows) for token, flows in ledger.items()}

"""Per-victim and transaction-wide comparisons of actual vs reproduced transfers."""

import logging

from tracerecon.domain.models.comparison import AmountBreakdown, GlobalCheck, MatchFlags, VictimComparison
from tracerecon.domain.models.scenario import GlobalCheckSpec, VictimSpec
from tracerecon.domain.models.transfer import TransferEvent
from tracerecon.reconcile.matching import find_closest, find_exact, tolerance_window

logger = logging.getLogger(__name__)


def burned_amount(collateral_pulled: int, dust_returned: int) -> int:
    """Collateral consumed net of the dust handed back; never negative."""
    return max(0, collateral_pulled - dust_returned)


def _breakdown(collateral: int, dust: int) -> AmountBreakdown:
    return AmountBreakdown(
        collateral_pulled=collateral,
        dust_returned=dust,
        burned=burned_amount(collateral, dust),
    )


def compare_victim(
    victim: VictimSpec,
    local_token: str,
    actual_token: str,
    actual_transfers: list[TransferEvent],
    local_transfers: list[TransferEvent],
) -> VictimComparison:
    """Match the victim's expected collateral and dust against both transfer sets.

    The actual side is matched within a tolerance window; the local side is an
    exact lookup because the fixture computes the same values it reproduces.
    A local amount that cannot be found falls back to the expected amount.
    """
    collateral_tolerance = tolerance_window(victim.expected_collateral)
    dust_tolerance = 0 if victim.expected_dust == 0 else tolerance_window(victim.expected_dust)

    actual_collateral = find_closest(actual_transfers, actual_token, victim.expected_collateral, collateral_tolerance)
    actual_dust = find_closest(actual_transfers, actual_token, victim.expected_dust, dust_tolerance)

    local_collateral = find_exact(local_transfers, local_token, victim.expected_collateral)
    local_dust = find_exact(local_transfers, local_token, victim.expected_dust)
    if local_collateral is None or local_dust is None:
        logger.warning(
            "%s: reproduction emitted no exact %s transfer for %s",
            victim.label,
            victim.symbol,
            "collateral" if local_collateral is None else "dust",
        )

    actual = _breakdown(
        actual_collateral.value if actual_collateral else 0,
        actual_dust.value if actual_dust else 0,
    )
    reproduced = _breakdown(
        local_collateral.value if local_collateral else victim.expected_collateral,
        local_dust.value if local_dust else victim.expected_dust,
    )

    return VictimComparison(
        victim_id=victim.victim_id,
        label=victim.label,
        local_token=local_token.lower(),
        actual_token=actual_token.lower(),
        symbol=victim.symbol,
        decimals=victim.decimals,
        actual=actual,
        reproduced=reproduced,
        matches=MatchFlags(
            collateral_pulled=actual_collateral is not None,
            dust_returned=actual_dust is not None,
            burned=actual_collateral is not None,
        ),
    )


def compare_global_check(
    spec: GlobalCheckSpec,
    actual_transfers: list[TransferEvent],
    local_transfers: list[TransferEvent],
    actual_token: str | None = None,
    local_token: str | None = None,
) -> GlobalCheck:
    """Check the transaction-wide principal (e.g. the flash-mint amount)."""
    actual = find_closest(actual_transfers, actual_token, spec.amount, spec.tolerance)
    local = find_exact(local_transfers, local_token, spec.amount)
    return GlobalCheck(
        label=spec.label,
        decimals=spec.decimals,
        actual=actual.value if actual else 0,
        reproduced=local.value if local else spec.amount,
        matches=actual is not None,
    )

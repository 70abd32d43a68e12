"""Alignment score and discrepancy lines."""

from tracerecon.domain.enums import CheckField
from tracerecon.domain.models.comparison import VictimComparison
from tracerecon.tokens.units import format_units

CHECKS_PER_VICTIM = 3


def alignment_score(victims: list[VictimComparison], global_check_matches: bool) -> int:
    """Percentage of atomic checks that matched, rounded half up to an integer in [0, 100]."""
    total = CHECKS_PER_VICTIM * len(victims) + 1
    matching = sum(v.matches.count() for v in victims) + (1 if global_check_matches else 0)
    return (200 * matching + total) // (2 * total)


def find_discrepancies(victims: list[VictimComparison]) -> list[str]:
    lines: list[str] = []
    for v in victims:
        checks = (
            (CheckField.COLLATERAL_PULLED, v.matches.collateral_pulled,
             v.reproduced.collateral_pulled, v.actual.collateral_pulled),
            (CheckField.DUST_RETURNED, v.matches.dust_returned,
             v.reproduced.dust_returned, v.actual.dust_returned),
            (CheckField.BURNED, v.matches.burned, v.reproduced.burned, v.actual.burned),
        )
        for field, matched, expected, actual in checks:
            if matched:
                continue
            lines.append(
                f"{v.label}: {field.value} mismatch "
                f"(expected: {format_units(expected, v.decimals)}, actual: {format_units(actual, v.decimals)})"
            )
    return lines

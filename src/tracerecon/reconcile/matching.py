"""Value-proximity correlation between expected amounts and observed transfers.

The real trace and the local reproduction share no identifiers (different
addresses, nonces, ordering), so records are matched by token and amount.
"""

from tracerecon.domain.models.transfer import TransferEvent

TOLERANCE_DIVISOR = 200  # 0.5%


def tolerance_window(amount: int) -> int:
    """Allowed absolute deviation for `amount`: 0.5% floored, at least 1, or 0 for non-positive amounts."""
    if amount <= 0:
        return 0
    return max(1, amount // TOLERANCE_DIVISOR)


def find_closest(
    candidates: list[TransferEvent],
    token: str | None,
    target: int,
    tolerance: int,
) -> TransferEvent | None:
    """Closest transfer of `token` to `target` within `tolerance`, or None.

    `tolerance == 0` demands an exact value. `token=None` accepts any token.
    Equidistant candidates resolve to the first one seen.
    """
    wanted = token.lower() if token is not None else None
    best: TransferEvent | None = None
    best_diff: int | None = None

    for candidate in candidates:
        if wanted is not None and candidate.token.lower() != wanted:
            continue
        diff = abs(candidate.value - target)
        if tolerance == 0 and diff != 0:
            continue
        if tolerance > 0 and diff > tolerance:
            continue
        if best_diff is None or diff < best_diff:
            best = candidate
            best_diff = diff

    return best


def find_exact(candidates: list[TransferEvent], token: str | None, value: int) -> TransferEvent | None:
    """First transfer of `token` carrying exactly `value`."""
    wanted = token.lower() if token is not None else None
    for candidate in candidates:
        if wanted is not None and candidate.token.lower() != wanted:
            continue
        if candidate.value == value:
            return candidate
    return None

"""Decimal-aware amount formatting."""

from tracerecon.domain.models.transfer import TokenMetadata


def format_units(value: int, decimals: int) -> str:
    """Render a smallest-unit integer as a decimal string, e.g. (25660570000, 6) -> "25660.57".

    Exact for any size; at least one fractional digit is always shown ("1.0").
    """
    sign = "-" if value < 0 else ""
    whole, frac = divmod(abs(value), 10**decimals)
    frac_digits = str(frac).rjust(decimals, "0").rstrip("0") if decimals else ""
    return f"{sign}{whole}.{frac_digits or '0'}"


def format_token_amount(token: str, value: int, metadata: dict[str, TokenMetadata]) -> str:
    meta = metadata.get(token.lower())
    return format_units(value, meta.decimals if meta else 18)


def token_label(token: str, metadata: dict[str, TokenMetadata]) -> str:
    meta = metadata.get(token.lower())
    if meta and meta.symbol:
        return f"{meta.symbol} ({token})"
    return token

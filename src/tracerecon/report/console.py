"""Human-readable console summary of a comparison run."""

from tracerecon.domain.models.comparison import ComparisonReport
from tracerecon.domain.models.transfer import TokenMetadata, TransferEvent
from tracerecon.reconcile.aggregation import aggregate_by_token, aggregate_net_flows
from tracerecon.tokens.units import format_token_amount, format_units, token_label


def _mark(ok: bool) -> str:
    return "✓" if ok else "✗"


def render_summary(report: ComparisonReport) -> list[str]:
    """Per-victim amounts with a mark per field, the global check, the score, then discrepancies."""
    comparison = report.comparison
    lines = [f"=== Attack Comparison ({report.metadata.network}) ==="]

    for v in comparison.victims:
        d = v.decimals
        lines.append("")
        lines.append(f"{v.label}:")
        lines.append(
            f"  Collateral: {format_units(v.reproduced.collateral_pulled, d)} {v.symbol} "
            f"(actual {format_units(v.actual.collateral_pulled, d)}) {_mark(v.matches.collateral_pulled)}"
        )
        lines.append(
            f"  Dust: {format_units(v.reproduced.dust_returned, d)} {v.symbol} "
            f"(actual {format_units(v.actual.dust_returned, d)}) {_mark(v.matches.dust_returned)}"
        )
        lines.append(
            f"  Burned: {format_units(v.reproduced.burned, d)} {v.symbol} "
            f"(actual {format_units(v.actual.burned, d)}) {_mark(v.matches.burned)}"
        )

    check = comparison.flash_mint
    lines.append("")
    lines.append(f"{check.label}:")
    lines.append(f"  Amount: {format_units(check.reproduced, check.decimals)} {_mark(check.matches)}")

    lines.append("")
    lines.append(f"Alignment Score: {comparison.alignment_score}%")

    if comparison.discrepancies:
        lines.append("")
        lines.append("Discrepancies Found:")
        lines.extend(f"  - {d}" for d in comparison.discrepancies)
    else:
        lines.append("")
        lines.append("No discrepancies found - reproduction matches the actual attack.")

    if report.actual.error:
        lines.append("")
        lines.append(f"Trace source error: {report.actual.error}")
    return lines


def render_token_totals(label: str, transfers: list[TransferEvent], metadata: dict[str, TokenMetadata]) -> list[str]:
    lines = [label]
    for token, total in aggregate_by_token(transfers).items():
        lines.append(
            f"  Token {token_label(token, metadata)} total moved: "
            f"{format_token_amount(token, total, metadata)} (raw: {total})"
        )
    return lines


def render_net_flows(label: str, transfers: list[TransferEvent], metadata: dict[str, TokenMetadata]) -> list[str]:
    lines = [label]
    for token, flows in aggregate_net_flows(transfers).items():
        lines.append(f"  Token {token_label(token, metadata)}")
        for account, delta in flows.items():
            if delta == 0:
                continue
            direction = "received" if delta > 0 else "sent"
            lines.append(
                f"    {account} {direction}: {format_token_amount(token, abs(delta), metadata)} (raw: {delta})"
            )
    return lines

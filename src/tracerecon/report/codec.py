"""JSON codec for ComparisonReport.

Amount fields are typed (see domain.models.amounts), so serialization renders
every on-chain amount as a decimal string and parsing turns it back into an
int. Plain ints such as the alignment score and decimals stay numeric.
"""

from tracerecon.domain.models.comparison import ComparisonReport


def dumps_report(report: ComparisonReport) -> str:
    return report.model_dump_json(by_alias=True, exclude_none=True, indent=2) + "\n"


def loads_report(text: str) -> ComparisonReport:
    return ComparisonReport.model_validate_json(text)

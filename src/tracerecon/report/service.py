"""ReportService: assembles the comparison artifact and writes it to disk."""

import logging
from datetime import UTC, datetime
from pathlib import Path

from tracerecon.domain.models.comparison import (
    ActualSection,
    ComparisonBlock,
    ComparisonReport,
    GlobalCheck,
    LocalSection,
    ReportMetadata,
    VictimComparison,
)
from tracerecon.domain.models.transfer import CustomEvent, TransferEvent
from tracerecon.report.codec import dumps_report

logger = logging.getLogger(__name__)


class ReportService:
    """Builds ComparisonReport payloads and persists them under a network-keyed file name."""

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir

    def path_for(self, network: str) -> Path:
        return self._output_dir / f"attack-vs-repro-comparison-{network}.json"

    def assemble(
        self,
        *,
        tx_hash: str,
        network: str,
        local_tx_hash: str,
        actual_transfers: list[TransferEvent],
        call_trace_excerpt: str,
        local_transfers: list[TransferEvent],
        custom_events: list[CustomEvent],
        victims: list[VictimComparison],
        global_check: GlobalCheck,
        alignment_score: int,
        discrepancies: list[str],
        error: str | None = None,
        used_cache: bool = False,
        generated_at: datetime | None = None,
    ) -> ComparisonReport:
        return ComparisonReport(
            metadata=ReportMetadata(
                generated_at=(generated_at or datetime.now(UTC)).isoformat(),
                tx_hash=tx_hash,
                network=network,
                local_tx_hash=local_tx_hash,
            ),
            actual=ActualSection(
                transfers=actual_transfers,
                call_trace_excerpt=call_trace_excerpt,
                error=error,
                used_cache=used_cache,
            ),
            local=LocalSection(transfers=local_transfers, custom_events=custom_events),
            comparison=ComparisonBlock(
                victims=victims,
                flash_mint=global_check,
                alignment_score=alignment_score,
                discrepancies=discrepancies,
            ),
        )

    def write(self, report: ComparisonReport) -> Path:
        """Write the report. OSErrors propagate to the caller."""
        path = self.path_for(report.metadata.network)
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path.write_text(dumps_report(report))
        logger.info("Wrote comparison artifact to %s", path)
        return path

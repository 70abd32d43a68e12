"""ReconciliationService: orchestrates trace acquisition → extraction → comparison → report.

The run is strictly sequential. The trace fetch and the local reproduction are
the only awaits; everything after them is a pure function of their results.
A freshly fetched trace is cached as soon as it arrives. A failed cache write
is held until persist(), so it surfaces only after the report is written.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from tracerecon.domain.enums import TransferOrigin
from tracerecon.domain.models.comparison import ComparisonBlock, ComparisonReport
from tracerecon.domain.models.repro import LocalReproResult
from tracerecon.domain.models.scenario import Scenario
from tracerecon.domain.models.trace import TraceResult
from tracerecon.domain.models.transfer import TokenMetadata, TransferEvent
from tracerecon.exceptions import ConfigurationError, TraceFetchError
from tracerecon.infra.local.base import LocalReproSource
from tracerecon.infra.tenderly.cache import TraceCache
from tracerecon.infra.tenderly.client import TenderlyClient
from tracerecon.parser.call_trace import EXCERPT_NODES, summarize_call_trace
from tracerecon.parser.events import decode_custom_events
from tracerecon.parser.transfers import extract_transfer_events
from tracerecon.reconcile.comparator import compare_global_check, compare_victim
from tracerecon.reconcile.scoring import alignment_score, find_discrepancies
from tracerecon.report.service import ReportService
from tracerecon.tokens.registry import TokenRegistry

logger = logging.getLogger(__name__)


@dataclass
class TraceAcquisition:
    trace: TraceResult | None = None
    error: str | None = None
    used_cache: bool = False
    fresh: bool = False  # fetched this run rather than read from the cache
    cache_error: OSError | None = None  # raised by persist() after the report is written


@dataclass
class ReconciliationOutcome:
    report: ComparisonReport
    acquisition: TraceAcquisition
    actual_transfers: list[TransferEvent] = field(default_factory=list)
    local_transfers: list[TransferEvent] = field(default_factory=list)
    actual_metadata: dict[str, TokenMetadata] = field(default_factory=dict)
    local_metadata: dict[str, TokenMetadata] = field(default_factory=dict)


def compare_transfers(
    scenario: Scenario,
    actual_transfers: list[TransferEvent],
    local_transfers: list[TransferEvent],
    local_tokens: dict[str, str],
    actual_tokens: dict[str, str],
) -> ComparisonBlock:
    """Compare every victim plus the global check. Token maps are symbol -> address."""
    victims = [
        compare_victim(
            victim,
            local_tokens[victim.symbol],
            actual_tokens[victim.symbol],
            actual_transfers,
            local_transfers,
        )
        for victim in scenario.victims
    ]

    spec = scenario.global_check
    global_check = compare_global_check(
        spec,
        actual_transfers,
        local_transfers,
        actual_token=actual_tokens.get(spec.symbol) if spec.symbol else None,
        local_token=local_tokens.get(spec.symbol) if spec.symbol else None,
    )

    return ComparisonBlock(
        victims=victims,
        flash_mint=global_check,
        alignment_score=alignment_score(victims, global_check.matches),
        discrepancies=find_discrepancies(victims),
    )


class ReconciliationService:
    def __init__(
        self,
        *,
        scenario: Scenario,
        tx_hash: str,
        network: str,
        cache: TraceCache,
        registry: TokenRegistry,
        report_service: ReportService,
        local_source: LocalReproSource,
        trace_client: TenderlyClient | None = None,
        cache_allowed: bool = True,
    ) -> None:
        self._scenario = scenario
        self._tx_hash = tx_hash
        self._network = network
        self._cache = cache
        self._registry = registry
        self._reports = report_service
        self._local_source = local_source
        self._client = trace_client
        self._cache_allowed = cache_allowed

        if scenario.network.lower() != network.lower():
            logger.warning("Scenario %s targets %s but the trace network is %s", scenario.name, scenario.network, network)

    async def acquire_trace(self) -> TraceAcquisition:
        """Cached trace unless refresh is forced; otherwise fetch, falling back to the cache on failure.

        A failed fetch with no cache to fall back on yields an empty trace with
        the error recorded, so the run still produces a (degraded) report.
        """
        if self._cache_allowed:
            cached = self._cache.load(self._tx_hash, self._network)
            if cached is not None:
                return TraceAcquisition(trace=cached, used_cache=True)

        if self._client is None:
            raise ConfigurationError(
                "No cached trace found. Set TENDERLY_ACCESS_KEY (or provide a cached trace) to fetch from Tenderly."
            )

        try:
            trace = await self._client.trace_transaction(self._tx_hash, self._network)
        except TraceFetchError as exc:
            error = str(exc)
            logger.error("Failed to fetch trace: %s", error)
            fallback = self._cache.load(self._tx_hash, self._network)
            if fallback is None:
                return TraceAcquisition(error=error)
            logger.info("Recovered trace from cache %s", self._cache.path_for(self._tx_hash, self._network))
            return TraceAcquisition(trace=fallback, error=f"{error} (used cached copy)", used_cache=True)

        try:
            self._cache.write(self._tx_hash, self._network, trace)
        except OSError as exc:
            logger.error("Failed to cache trace: %s", exc)
            return TraceAcquisition(trace=trace, fresh=True, cache_error=exc)
        return TraceAcquisition(trace=trace, fresh=True)

    def _resolve_local_tokens(self, local: LocalReproResult) -> dict[str, str]:
        tokens = {**{k: v.lower() for k, v in self._scenario.local_tokens.items()}, **local.token_addresses}
        for symbol in self._symbols():
            if symbol not in tokens:
                raise ConfigurationError(f"Local reproduction did not report a {symbol} token address")
        return tokens

    def _resolve_actual_tokens(self) -> dict[str, str]:
        tokens: dict[str, str] = {}
        for victim in self._scenario.victims:
            address = victim.actual_token or self._registry.address_for(self._network, victim.symbol)
            if address is None:
                raise ConfigurationError(f"No {victim.symbol} token registered for network {self._network}")
            tokens[victim.symbol] = address.lower()
        symbol = self._scenario.global_check.symbol
        if symbol and symbol not in tokens:
            address = self._registry.address_for(self._network, symbol)
            if address is None:
                raise ConfigurationError(f"No {symbol} token registered for network {self._network}")
            tokens[symbol] = address.lower()
        return tokens

    def _symbols(self) -> list[str]:
        symbols = [v.symbol for v in self._scenario.victims]
        if self._scenario.global_check.symbol:
            symbols.append(self._scenario.global_check.symbol)
        return symbols

    def _local_metadata(self, local_tokens: dict[str, str]) -> dict[str, TokenMetadata]:
        table = {
            local_tokens[v.symbol]: TokenMetadata(symbol=v.symbol, decimals=v.decimals)
            for v in self._scenario.victims
        }
        spec = self._scenario.global_check
        if spec.symbol and local_tokens[spec.symbol] not in table:
            table[local_tokens[spec.symbol]] = TokenMetadata(symbol=spec.symbol, decimals=spec.decimals)
        return table

    async def reconcile(self) -> ReconciliationOutcome:
        acquisition = await self.acquire_trace()
        trace = acquisition.trace

        actual_transfers = extract_transfer_events(trace.logs, TransferOrigin.ACTUAL) if trace else []
        excerpt = summarize_call_trace(trace.trace[:EXCERPT_NODES]) if trace else ""
        actual_metadata = self._registry.metadata_for(self._network, trace.asset_changes if trace else None)

        local = await self._local_source.run()
        local_transfers = extract_transfer_events(local.logs, TransferOrigin.LOCAL)
        custom_events = local.custom_events or decode_custom_events(
            local.logs,
            local.emitters or self._scenario.emitters,
            self._scenario.event_abis,
        )
        logger.info(
            "Extracted %d actual and %d local transfers", len(actual_transfers), len(local_transfers)
        )

        local_tokens = self._resolve_local_tokens(local)
        comparison = compare_transfers(
            self._scenario,
            actual_transfers,
            local_transfers,
            local_tokens,
            self._resolve_actual_tokens(),
        )

        report = self._reports.assemble(
            tx_hash=self._tx_hash,
            network=self._network,
            local_tx_hash=local.tx_hash,
            actual_transfers=actual_transfers,
            call_trace_excerpt=excerpt,
            local_transfers=local_transfers,
            custom_events=custom_events,
            victims=comparison.victims,
            global_check=comparison.flash_mint,
            alignment_score=comparison.alignment_score,
            discrepancies=comparison.discrepancies,
            error=acquisition.error,
            used_cache=acquisition.used_cache,
        )
        return ReconciliationOutcome(
            report=report,
            acquisition=acquisition,
            actual_transfers=actual_transfers,
            local_transfers=local_transfers,
            actual_metadata=actual_metadata,
            local_metadata=self._local_metadata(local_tokens),
        )

    def persist(self, outcome: ReconciliationOutcome) -> Path:
        """Write the report, then re-raise any cache write failure from the fetch."""
        path = self._reports.write(outcome.report)
        if outcome.acquisition.cache_error is not None:
            raise outcome.acquisition.cache_error
        return path

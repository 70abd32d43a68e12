"""Compare the real attack transaction against the local reproduction.

Usage:
    PYTHONPATH=src python scripts/compare_attack_trace.py

Environment (or .env):
    TENDERLY_TX_HASH, TENDERLY_NETWORK     production tx (defaults: Fraxtal Odos attack)
    TENDERLY_ACCESS_KEY                    needed only when no cached trace exists
    TENDERLY_FORCE_REFRESH=true            ignore the cache and refetch
    LOCAL_REPRO_FILE                       harness export JSON, or
    LOCAL_TX_HASH (+ LOCAL_RPC_URL)        reproduction tx on a running dev node
    SCENARIO_FILE, TOKEN_REGISTRY_FILE     optional overrides
"""

import asyncio
import logging
import sys
from pathlib import Path

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logger = logging.getLogger("compare_attack_trace")

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


def separator(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}\n")


def build_local_source(container):
    from tracerecon.exceptions import ConfigurationError
    from tracerecon.infra.local.harness import HarnessExportSource
    from tracerecon.infra.local.rpc import RPCReceiptSource

    settings = container.settings()
    if settings.local_repro_file:
        return HarnessExportSource(Path(settings.local_repro_file))
    if settings.local_tx_hash:
        scenario = container.scenario()
        return RPCReceiptSource(
            rpc_url=settings.local_rpc_url,
            tx_hash=settings.local_tx_hash,
            http_client=container.http_client(),
            token_addresses=scenario.local_tokens,
            emitters=scenario.emitters,
        )
    raise ConfigurationError("Set LOCAL_REPRO_FILE or LOCAL_TX_HASH to provide the local reproduction")


async def main() -> int:
    from tracerecon.container import Container
    from tracerecon.exceptions import ReconciliationError
    from tracerecon.reconcile.service import ReconciliationService
    from tracerecon.report.console import render_net_flows, render_summary, render_token_totals

    container = Container()
    settings = container.settings()
    if settings.debug:
        logging.getLogger("tracerecon").setLevel(logging.DEBUG)

    separator("Attack vs Reproduction")
    print(f"Transaction:  {settings.tenderly_tx_hash}")
    print(f"Network:      {settings.tenderly_network}")
    print(f"Tenderly:     {'configured' if settings.tenderly_access_key else 'NOT SET (cache only)'}")
    print(f"Cache:        {'allowed' if settings.cache_allowed else 'force refresh'}")

    try:
        service = ReconciliationService(
            scenario=container.scenario(),
            tx_hash=settings.tenderly_tx_hash,
            network=settings.tenderly_network,
            cache=container.trace_cache(),
            registry=container.token_registry(),
            report_service=container.report_service(),
            local_source=build_local_source(container),
            trace_client=container.tenderly_client() if settings.tenderly_access_key else None,
            cache_allowed=settings.cache_allowed,
        )
        outcome = await service.reconcile()
    except ReconciliationError as exc:
        logger.error("%s", exc)
        return 1
    finally:
        await container.http_client().close()

    print()
    print("\n".join(render_summary(outcome.report)))
    print()
    print("\n".join(render_token_totals("Actual attack transfer totals", outcome.actual_transfers, outcome.actual_metadata)))
    print("\n".join(render_net_flows("Actual attack net flows per account", outcome.actual_transfers, outcome.actual_metadata)))
    print("\n".join(render_token_totals("Local repro transfer totals", outcome.local_transfers, outcome.local_metadata)))
    print("\n".join(render_net_flows("Local repro net flows per account", outcome.local_transfers, outcome.local_metadata)))

    try:
        path = service.persist(outcome)
    except OSError as exc:
        logger.error("Failed to persist results: %s", exc)
        return 1
    separator(f"Wrote comparison artifact to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

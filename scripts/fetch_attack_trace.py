"""Fetch the raw Tenderly trace for the attack transaction and store it in the trace cache.

Usage:
    TENDERLY_ACCESS_KEY=... PYTHONPATH=src python scripts/fetch_attack_trace.py
"""

import asyncio
import logging
import sys

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logger = logging.getLogger("fetch_attack_trace")

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


async def main() -> int:
    from tracerecon.container import Container
    from tracerecon.exceptions import ConfigurationError, TraceFetchError

    container = Container()
    settings = container.settings()
    if settings.debug:
        logging.getLogger("tracerecon").setLevel(logging.DEBUG)

    print(f"Fetching Tenderly trace for transaction: {settings.tenderly_tx_hash}")
    print(f"Network: {settings.tenderly_network}")
    print(f"Project: {settings.tenderly_project_slug}")

    try:
        client = container.tenderly_client()
        trace = await client.trace_transaction(settings.tenderly_tx_hash, settings.tenderly_network)
    except (ConfigurationError, TraceFetchError) as exc:
        logger.error("Error fetching Tenderly trace: %s", exc)
        return 1
    finally:
        await container.http_client().close()

    path = container.trace_cache().write(settings.tenderly_tx_hash, settings.tenderly_network, trace)
    print(f"\nSuccessfully fetched and saved trace to: {path}")
    print(f"Logs count: {len(trace.logs)}")
    print(f"Top-level calls: {len(trace.trace)}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))

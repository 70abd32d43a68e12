"""On-disk cache of raw traces, one JSON file per (network, tx hash prefix).

Reads and writes are unlocked: concurrent runs for the same key can race on the write.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from tracerecon.domain.models.trace import TRACE_SCHEMA_VERSION, TraceResult

logger = logging.getLogger(__name__)


class TraceCache:
    def __init__(self, directory: Path) -> None:
        self._dir = directory

    def path_for(self, tx_hash: str, network: str) -> Path:
        return self._dir / f"raw-tenderly-trace-{network}-{tx_hash[2:10]}.json"

    def load(self, tx_hash: str, network: str) -> TraceResult | None:
        """Cached trace, or None on a miss, an unreadable file, or a schema mismatch."""
        path = self.path_for(tx_hash, network)
        try:
            raw = json.loads(path.read_text())
            trace = TraceResult.model_validate(raw)
        except FileNotFoundError:
            logger.info("Cache miss: %s", path)
            return None
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Ignoring unreadable trace cache %s: %s", path, exc)
            return None

        if trace.schema_version != TRACE_SCHEMA_VERSION:
            logger.warning(
                "Ignoring trace cache %s with schema version %d (expected %d)",
                path, trace.schema_version, TRACE_SCHEMA_VERSION,
            )
            return None
        logger.info("Loaded trace from cache %s", path)
        return trace

    def write(self, tx_hash: str, network: str, trace: TraceResult) -> Path:
        path = self.path_for(tx_hash, network)
        self._dir.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(trace.model_dump(mode="json", by_alias=True), indent=2))
        logger.info("Cached trace to %s", path)
        return path

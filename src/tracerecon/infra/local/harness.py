"""Local reproduction loaded from the JSON export written by the Hardhat harness."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from tracerecon.domain.models.repro import LocalReproResult
from tracerecon.exceptions import ConfigurationError
from tracerecon.infra.local.base import LocalReproSource

logger = logging.getLogger(__name__)


class HarnessExportSource(LocalReproSource):
    """Reads {txHash, logs, tokenAddresses, emitters, customEvents?} from disk."""

    def __init__(self, path: Path) -> None:
        self._path = path

    async def run(self) -> LocalReproResult:
        try:
            raw = json.loads(self._path.read_text())
        except FileNotFoundError as exc:
            raise ConfigurationError(f"Local repro export not found: {self._path}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Local repro export {self._path} is not valid JSON: {exc}") from exc

        try:
            result = LocalReproResult(
                tx_hash=raw["txHash"],
                logs=raw.get("logs", []),
                token_addresses={k: v.lower() for k, v in raw.get("tokenAddresses", {}).items()},
                emitters={k: v.lower() for k, v in raw.get("emitters", {}).items()},
                custom_events=raw.get("customEvents", []),
            )
        except (KeyError, ValidationError) as exc:
            raise ConfigurationError(f"Malformed local repro export {self._path}: {exc}") from exc

        logger.info("Loaded local repro %s with %d logs from %s", result.tx_hash, len(result.logs), self._path)
        return result

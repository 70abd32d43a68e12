"""TokenRegistry: (network, address) → display metadata, with a built-in production table."""

import json
import logging
from pathlib import Path

from tracerecon.domain.models.trace import AssetChange
from tracerecon.domain.models.transfer import TokenMetadata
from tracerecon.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Production collateral on Fraxtal (all lowercase)
FRAXTAL_TOKENS: dict[str, TokenMetadata] = {
    "0x788d96f655735f52c676a133f4dfc53cec614d4a": TokenMetadata(symbol="dUSD", decimals=6),
    "0xfc00000000000000000000000000000000000005": TokenMetadata(symbol="sfrxETH", decimals=18),
    "0x211cc4dd073734da055fbf44a2b4667d5e5fe5d2": TokenMetadata(symbol="sUSDe", decimals=18),
}


class TokenRegistry:
    """Registry mapping (network, token_address) → TokenMetadata."""

    def __init__(self) -> None:
        self._tokens: dict[str, dict[str, TokenMetadata]] = {}

    def register(self, network: str, address: str, metadata: TokenMetadata) -> None:
        self._tokens.setdefault(network.lower(), {})[address.lower()] = metadata

    def register_network(self, network: str, tokens: dict[str, TokenMetadata]) -> None:
        for address, metadata in tokens.items():
            self.register(network, address, metadata)

    def get(self, network: str, address: str) -> TokenMetadata | None:
        return self._tokens.get(network.lower(), {}).get(address.lower())

    def tokens(self, network: str) -> dict[str, TokenMetadata]:
        return dict(self._tokens.get(network.lower(), {}))

    def address_for(self, network: str, symbol: str) -> str | None:
        """Reverse lookup by symbol (case-sensitive first, then case-insensitive)."""
        tokens = self._tokens.get(network.lower(), {})
        for address, meta in tokens.items():
            if meta.symbol == symbol:
                return address
        for address, meta in tokens.items():
            if meta.symbol and meta.symbol.lower() == symbol.lower():
                return address
        return None

    def load_json(self, path: Path) -> None:
        """Merge a {network: {address: {symbol, decimals}}} file into the registry."""
        try:
            raw = json.loads(path.read_text())
        except FileNotFoundError as exc:
            raise ConfigurationError(f"Token registry file not found: {path}") from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Token registry file {path} is not valid JSON: {exc}") from exc

        if not isinstance(raw, dict):
            raise ConfigurationError(f"Token registry file {path} must map network -> tokens")
        for network, tokens in raw.items():
            for address, entry in tokens.items():
                self.register(network, address, TokenMetadata.model_validate(entry))
        logger.info("Loaded token registry overrides from %s", path)

    def metadata_for(self, network: str, asset_changes: list[AssetChange] | None = None) -> dict[str, TokenMetadata]:
        """Lookup table for one run: provider asset metadata, overridden by registry entries.

        When the provider reports the same contract more than once, the first entry wins.
        """
        table: dict[str, TokenMetadata] = {}
        for change in asset_changes or []:
            info = change.asset_info
            if info is None or not info.contract_address:
                continue
            address = info.contract_address.lower()
            if address in table:
                continue
            table[address] = TokenMetadata(
                symbol=info.symbol or None,
                decimals=info.decimals if info.decimals is not None else 18,
            )
        table.update(self.tokens(network))
        return table


def build_token_registry(override_file: str = "") -> TokenRegistry:
    """Create a TokenRegistry with the built-in production tables, plus an optional JSON override."""
    registry = TokenRegistry()
    registry.register_network("fraxtal", FRAXTAL_TOKENS)
    if override_file:
        registry.load_json(Path(override_file))
    return registry

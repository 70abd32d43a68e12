from pydantic_settings import BaseSettings

DEFAULT_TX_HASH = "0xd8ae4f2a66d059e73407eca6ba0ba5080f5003f5abbf29867345425276734a32"


class Settings(BaseSettings):
    tenderly_tx_hash: str = DEFAULT_TX_HASH
    tenderly_network: str = "fraxtal"
    tenderly_access_key: str = ""
    tenderly_account_slug: str = "me"
    tenderly_project_slug: str = "project"
    tenderly_api_url: str = "https://api.tenderly.co/api/v1"
    tenderly_force_refresh: bool = False
    tenderly_rate_per_second: float = 2.0
    trace_timeout_seconds: float = 60.0
    output_dir: str = "reports/tenderly"
    token_registry_file: str = ""  # optional JSON override of the built-in registry
    scenario_file: str = ""  # optional JSON scenario; built-in Fraxtal Odos scenario otherwise
    local_repro_file: str = ""  # harness export written by the Hardhat fixture run
    local_rpc_url: str = "http://127.0.0.1:8545"
    local_tx_hash: str = ""
    debug: bool = False

    @property
    def cache_allowed(self) -> bool:
        return not self.tenderly_force_refresh

    class Config:
        env_file = ".env"


settings = Settings()

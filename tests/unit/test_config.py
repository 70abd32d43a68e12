from tracerecon.config import DEFAULT_TX_HASH, Settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("TENDERLY_NETWORK", raising=False)
        monkeypatch.delenv("TENDERLY_TX_HASH", raising=False)
        s = Settings(_env_file=None)
        assert s.tenderly_network == "fraxtal"
        assert s.tenderly_tx_hash == DEFAULT_TX_HASH
        assert s.output_dir == "reports/tenderly"

    def test_force_refresh_disables_cache(self, monkeypatch):
        monkeypatch.setenv("TENDERLY_FORCE_REFRESH", "true")
        s = Settings(_env_file=None)
        assert s.tenderly_force_refresh is True
        assert s.cache_allowed is False

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("TENDERLY_ACCESS_KEY", "abc")
        monkeypatch.setenv("TRACE_TIMEOUT_SECONDS", "5")
        s = Settings(_env_file=None)
        assert s.tenderly_access_key == "abc"
        assert s.trace_timeout_seconds == 5.0

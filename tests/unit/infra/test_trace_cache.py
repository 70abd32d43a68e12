"""Tests for the on-disk trace cache."""

import json

from tracerecon.domain.models.trace import CallNode, RawLog, TraceResult

TX = "0xd8ae4f2a66d059e73407eca6ba0ba5080f5003f5abbf29867345425276734a32"


def _make_trace() -> TraceResult:
    return TraceResult(
        logs=[RawLog(address="0xabc", topics=["0x01", "0x02"], data="0x10")],
        trace=[CallNode(from_address="0xa", to_address="0xb", function_name="attack",
                        calls=[CallNode(from_address="0xb", to_address="0xc")])],
    )


class TestTraceCache:
    def test_path_uses_network_and_hash_prefix(self, trace_cache, output_dir):
        assert trace_cache.path_for(TX, "fraxtal") == output_dir / "raw-tenderly-trace-fraxtal-d8ae4f2a.json"

    def test_miss(self, trace_cache):
        assert trace_cache.load(TX, "fraxtal") is None

    def test_write_then_load(self, trace_cache):
        path = trace_cache.write(TX, "fraxtal", _make_trace())
        assert path.exists()

        loaded = trace_cache.load(TX, "fraxtal")
        assert loaded == _make_trace()

    def test_written_with_provider_aliases(self, trace_cache):
        path = trace_cache.write(TX, "fraxtal", _make_trace())
        raw = json.loads(path.read_text())
        assert raw["schemaVersion"] == 1
        assert raw["trace"][0]["from"] == "0xa"
        assert raw["trace"][0]["functionName"] == "attack"

    def test_networks_do_not_collide(self, trace_cache):
        trace_cache.write(TX, "fraxtal", _make_trace())
        assert trace_cache.load(TX, "ethereum") is None

    def test_corrupt_file_ignored(self, trace_cache, output_dir):
        output_dir.mkdir(parents=True)
        trace_cache.path_for(TX, "fraxtal").write_text("{truncated")
        assert trace_cache.load(TX, "fraxtal") is None

    def test_schema_mismatch_ignored(self, trace_cache, output_dir):
        output_dir.mkdir(parents=True)
        trace_cache.path_for(TX, "fraxtal").write_text(json.dumps({"schemaVersion": 0, "logs": []}))
        assert trace_cache.load(TX, "fraxtal") is None

    def test_malformed_cached_log_dropped_rest_kept(self, trace_cache, output_dir):
        output_dir.mkdir(parents=True)
        trace_cache.path_for(TX, "fraxtal").write_text(json.dumps({
            "schemaVersion": 1,
            "logs": [
                {"address": "0xabc", "topics": ["0x01"], "data": "0x"},
                {"address": "0xdef", "topics": None, "data": "0x"},
            ],
            "trace": [],
        }))

        loaded = trace_cache.load(TX, "fraxtal")

        assert loaded is not None
        assert [log.address for log in loaded.logs] == ["0xabc"]

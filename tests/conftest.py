from pathlib import Path

import pytest

from tracerecon.infra.tenderly.cache import TraceCache
from tracerecon.report.service import ReportService
from tracerecon.tokens.registry import TokenRegistry, build_token_registry


@pytest.fixture()
def registry() -> TokenRegistry:
    return build_token_registry()


@pytest.fixture()
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "reports" / "tenderly"


@pytest.fixture()
def trace_cache(output_dir: Path) -> TraceCache:
    return TraceCache(output_dir)


@pytest.fixture()
def report_service(output_dir: Path) -> ReportService:
    return ReportService(output_dir)

from pathlib import Path

from dependency_injector import containers, providers

from tracerecon.config import Settings
from tracerecon.infra.http.rate_limited_client import RateLimitedClient
from tracerecon.infra.tenderly.cache import TraceCache
from tracerecon.infra.tenderly.client import TenderlyClient
from tracerecon.report.service import ReportService
from tracerecon.scenarios.loader import load_scenario
from tracerecon.tokens.registry import build_token_registry


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    output_dir = providers.Singleton(Path, settings.provided.output_dir)

    http_client = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.tenderly_rate_per_second,
        timeout=settings.provided.trace_timeout_seconds,
    )

    tenderly_client = providers.Factory(
        TenderlyClient,
        access_key=settings.provided.tenderly_access_key,
        http_client=http_client,
        account_slug=settings.provided.tenderly_account_slug,
        project_slug=settings.provided.tenderly_project_slug,
        base_url=settings.provided.tenderly_api_url,
        timeout=settings.provided.trace_timeout_seconds,
    )

    trace_cache = providers.Singleton(TraceCache, directory=output_dir)

    token_registry = providers.Singleton(
        build_token_registry,
        override_file=settings.provided.token_registry_file,
    )

    scenario = providers.Singleton(load_scenario, path=settings.provided.scenario_file)

    report_service = providers.Singleton(ReportService, output_dir=output_dir)

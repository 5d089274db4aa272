from __future__ import annotations

from dependency_injector import containers, providers

from ..core.domain.models import ArtifactPaths, SubprojectLayout
from ..core.services import (
    Aggregator,
    BatchScheduler,
    DiscoveryService,
    MetadataEnricher,
    RepositoryProcessor,
)
from ..core.usecases.discover import DiscoverUseCase
from ..core.usecases.lint import LintUseCase
from ..core.usecases.report import ReportUseCase
from ..core.usecases.status import StatusUseCase
from ..infra.catalog_store import CatalogStore
from ..infra.checkpoint_store import CheckpointStore
from ..infra.github import GitHubClient
from ..infra.linter import Linter
from ..infra.logging import SurveyLogger
from ..infra.result_store import ReportStore, ResultStore
from ..infra.workspace import Workspace


class Container(containers.DeclarativeContainer):
    """DI container fed from AppConfig via ``config.from_pydantic``.

    The tool version must already be resolved into ``config.linter.version``
    when the container is populated; artifact paths derive from it once.
    """

    config = providers.Configuration()

    # Logger (Resource: manages lifecycle with init/shutdown)
    logger = providers.Resource(
        SurveyLogger,
        run_name=config.runtime.run_name,
        logs_dir=config.directories.logs_dir,
        logger_name=config.logging.logger_name,
        console_output=config.logging.console_output,
        level=config.logging.level,
    )

    artifacts = providers.Singleton(
        ArtifactPaths.for_version,
        data_dir=config.directories.data_dir,
        version=config.linter.version,
    )

    layout = providers.Singleton(
        SubprojectLayout,
        marker_file=config.layout.marker_file,
        source_dir=config.layout.source_dir,
        manifest_file=config.layout.manifest_file,
    )

    # Adapters
    github = providers.Singleton(
        GitHubClient,
        token=config.github.token,
        api_url=config.github.api_url,
        timeout=config.github.timeout_seconds,
    )

    catalog_store = providers.Singleton(CatalogStore, path=artifacts.provided.catalog)
    checkpoint_store = providers.Singleton(CheckpointStore, path=artifacts.provided.checkpoint)
    result_store = providers.Singleton(ResultStore, path=artifacts.provided.results)
    report_store = providers.Singleton(ReportStore, path=artifacts.provided.report)

    workspace = providers.Singleton(
        Workspace,
        root_dir=config.directories.workspace_dir,
        layout=layout,
        clone_depth=config.batch.clone_depth,
    )

    linter = providers.Singleton(
        Linter,
        command=config.linter.command,
        logger=logger,
    )

    # Domain services
    discovery = providers.Factory(
        DiscoveryService,
        search=github,
        logger=logger,
        query=config.discovery.query,
        page_size=config.discovery.page_size,
        delay_seconds=config.discovery.page_delay_seconds,
    )

    enricher = providers.Factory(
        MetadataEnricher,
        search=github,
        logger=logger,
        delay_seconds=config.discovery.metadata_delay_seconds,
    )

    processor = providers.Factory(
        RepositoryProcessor,
        workspace=workspace,
        linter=linter,
        logger=logger,
    )

    scheduler = providers.Factory(
        BatchScheduler,
        processor=processor,
        checkpoint_store=checkpoint_store,
        result_store=result_store,
        logger=logger,
        batch_size=config.batch.batch_size,
        num_batches=config.batch.num_batches,
        checkpoint_every=config.batch.checkpoint_every,
    )

    aggregator = providers.Factory(
        Aggregator,
        deprecated_rule_id=config.report.deprecated_rule_id,
        top_n=config.report.top_n,
    )

    # Use cases
    discover_uc = providers.Factory(
        DiscoverUseCase,
        discovery=discovery,
        enricher=enricher,
        catalog_store=catalog_store,
        logger=logger,
    )

    lint_uc = providers.Factory(
        LintUseCase,
        catalog_store=catalog_store,
        scheduler=scheduler,
        logger=logger,
    )

    report_uc = providers.Factory(
        ReportUseCase,
        result_store=result_store,
        report_store=report_store,
        aggregator=aggregator,
        logger=logger,
    )

    status_uc = providers.Factory(
        StatusUseCase,
        catalog_store=catalog_store,
        checkpoint_store=checkpoint_store,
        result_store=result_store,
    )

"""Dependency injection container for the intake system."""

from __future__ import annotations

from dependency_injector import containers, providers

from .core import CandidateFilter, FilterConfig
from .pipeline import FilterPipeline, FilterService
from .storage import InMemoryCandidateRepository


class IntakeContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    repository = providers.Singleton(InMemoryCandidateRepository)

    candidate_filter = providers.Singleton(CandidateFilter)

    filter_service = providers.Factory(
        FilterService,
        repository=repository,
        candidate_filter=candidate_filter,
    )

    pipeline = providers.Factory(
        FilterPipeline,
        service=filter_service,
        repository=repository,
    )


def create_container(*, settings: dict | None = None) -> IntakeContainer:
    """Instantiate container with optional overrides."""

    container = IntakeContainer()

    if not settings:
        return container

    filter_settings = settings.get("filter", {}) if isinstance(settings, dict) else {}
    if filter_settings:
        filter_config = FilterConfig(**filter_settings)
        container.candidate_filter.override(
            providers.Singleton(CandidateFilter, config=filter_config)
        )

    return container

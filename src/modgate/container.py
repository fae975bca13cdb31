"""Dependency injection container for the admission scanner."""

from __future__ import annotations

import pkgutil
from typing import Any

from dependency_injector import containers, providers

from .core import Criterion, exclude_names, exports_any_class, has_attributes, subclass_of
from .pipeline import AdmissionScanner, ModuleDiscovery, ReportWriter
from .schemas.config import AppConfig, load_config


def build_load_criteria(settings: dict[str, Any] | None) -> list[Criterion]:
    """Translate the ``criteria`` config section into load criteria."""
    settings = settings or {}
    complaints = settings.get("default_complaints")
    criteria: list[Criterion] = []

    base_class = settings.get("base_class")
    if base_class:
        base = pkgutil.resolve_name(base_class)
        criteria.append(
            subclass_of(
                base,
                include_abstract=settings.get("include_abstract", False),
                complaints=complaints,
            )
        )

    attributes = settings.get("required_attributes") or []
    if attributes:
        criteria.append(has_attributes(*attributes, complaints=complaints))

    if not criteria:
        criteria.append(exports_any_class(complaints))
    return criteria


def build_exclusion_criteria(settings: dict[str, Any] | None) -> list[Criterion]:
    patterns = (settings or {}).get("exclude") or []
    return [exclude_names(patterns)] if patterns else []


class ModgateContainer(containers.DeclarativeContainer):
    """Dependency-injector container definition."""

    config = providers.Configuration()

    discovery = providers.Singleton(
        ModuleDiscovery,
        directories=config.discovery.directories,
        recursive=config.discovery.recursive,
        include_private=config.discovery.include_private,
    )

    load_criteria = providers.Singleton(build_load_criteria, config.criteria)
    exclusion_criteria = providers.Singleton(build_exclusion_criteria, config.criteria)

    report_writer = providers.Singleton(ReportWriter)

    scanner = providers.Factory(
        AdmissionScanner,
        load_criteria=load_criteria,
        exclusion_criteria=exclusion_criteria,
        discovery=discovery,
    )


def create_container(*, settings: dict | AppConfig | None = None) -> ModgateContainer:
    """Instantiate container with validated settings applied over defaults."""

    app_config = settings if isinstance(settings, AppConfig) else load_config(settings or {})
    container = ModgateContainer()
    container.config.from_dict(app_config.model_dump())
    return container

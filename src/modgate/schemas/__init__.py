"""Pydantic schema definitions for configuration and scan reports."""

from __future__ import annotations

from .config import AppConfig, CriteriaConfig, DiscoveryConfig, load_config

__all__ = [
    "AppConfig",
    "CriteriaConfig",
    "DiscoveryConfig",
    "load_config",
]

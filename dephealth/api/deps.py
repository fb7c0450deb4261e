"""Dependency injection: settings and analyzer singletons."""

from __future__ import annotations

from functools import lru_cache

from dephealth.core.config import Settings
from dephealth.engines.analysis.analyzer import DependencyHealthAnalyzer


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache
def get_analyzer() -> DependencyHealthAnalyzer:
    return DependencyHealthAnalyzer(get_settings())

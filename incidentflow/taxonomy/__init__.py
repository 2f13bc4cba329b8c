"""
Site taxonomy for IncidentFlow.

This package holds the configured categories, severities and assets and
the resolvers that validate them and look entries up by ID, with
deterministic fallback for IDs that are no longer configured.
"""

from incidentflow.taxonomy.models import (
    MAX_SEVERITY_LEVEL,
    MIN_SEVERITY_LEVEL,
    UNKNOWN_ID,
    UNKNOWN_SEVERITY_LEVEL,
    Asset,
    Category,
    Severity,
)
from incidentflow.taxonomy.resolver import (
    AssetsConfig,
    CategoriesConfig,
    SeveritiesConfig,
    TaxonomyConfig,
)

__all__ = [
    # Entries
    "Asset",
    "Category",
    "Severity",
    "UNKNOWN_ID",
    "UNKNOWN_SEVERITY_LEVEL",
    "MIN_SEVERITY_LEVEL",
    "MAX_SEVERITY_LEVEL",
    # Resolvers
    "AssetsConfig",
    "CategoriesConfig",
    "SeveritiesConfig",
    "TaxonomyConfig",
]

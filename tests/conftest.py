"""
Pytest configuration and shared fixtures for IncidentFlow tests.

This module provides:
- Configuration fixtures
- Taxonomy fixtures (plain data, validated config, YAML file)
- Entity fixtures (incidents, tasks, sessions)
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pytest
import yaml

from incidentflow.config.defaults import get_default_config, get_test_config
from incidentflow.config.schema import IncidentFlowConfig
from incidentflow.incidents.models import Incident
from incidentflow.incidents.tasks import Task
from incidentflow.taxonomy.resolver import TaxonomyConfig

from helpers import IncidentFactory, TaskFactory, taxonomy_data


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def default_config() -> IncidentFlowConfig:
    """Create a default configuration.

    Returns:
        IncidentFlowConfig with default values.
    """
    return get_default_config()


@pytest.fixture
def test_config() -> IncidentFlowConfig:
    """Create a configuration suitable for testing.

    Returns:
        IncidentFlowConfig with test-friendly settings.
    """
    return get_test_config()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove INCIDENTFLOW_* variables so loader tests start from defaults."""
    for name in list(os.environ):
        if name.startswith("INCIDENTFLOW_"):
            monkeypatch.delenv(name)
    return monkeypatch


# =============================================================================
# Taxonomy Fixtures
# =============================================================================


@pytest.fixture
def taxonomy_dict() -> dict[str, Any]:
    """Plain taxonomy data as it appears in a taxonomy file."""
    return taxonomy_data()


@pytest.fixture
def taxonomy(taxonomy_dict: dict[str, Any]) -> TaxonomyConfig:
    """A validated taxonomy with categories, severities and assets."""
    config = TaxonomyConfig.from_dict(taxonomy_dict)
    config.validate()
    return config


@pytest.fixture
def taxonomy_file(tmp_path: Path, taxonomy_dict: dict[str, Any]) -> Path:
    """Write the sample taxonomy to a YAML file.

    Returns:
        Path to the file.
    """
    path = tmp_path / "taxonomy.yaml"
    path.write_text(yaml.safe_dump(taxonomy_dict), encoding="utf-8")
    return path


# =============================================================================
# Entity Fixtures
# =============================================================================


@pytest.fixture
def incident() -> Incident:
    """A freshly declared incident in HANDLING."""
    return IncidentFactory.create()


@pytest.fixture
def triage_incident() -> Incident:
    """A freshly declared incident that starts in TRIAGE."""
    return IncidentFactory.create(initial_triage=True)


@pytest.fixture
def task() -> Task:
    """A new TODO task on incident 1."""
    return TaskFactory.create()

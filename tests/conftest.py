"""Shared fixtures for planrisk tests."""

import json
import pytest
from planrisk.analysis.aggregator import analyze_plan
from planrisk.config import default_rule_tables
from planrisk.ingest.models import Change, ResourceChange
from planrisk.samples import SAMPLE_PLAN_PATH, load_sample_plan


@pytest.fixture(autouse=True)
def no_user_overrides(tmp_path, monkeypatch):
    """Keep developer .planrisk/config.yaml files out of every test."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    return tmp_path


@pytest.fixture
def tables():
    """Packaged default rule tables."""
    return default_rule_tables()


@pytest.fixture
def sample_plan():
    """Bundled sample plan as parsed JSON."""
    return load_sample_plan()


@pytest.fixture
def sample_plan_file():
    """Path to the bundled sample plan on disk."""
    return str(SAMPLE_PLAN_PATH)


@pytest.fixture
def sample_analysis(sample_plan):
    """Analysis of the bundled sample plan."""
    return analyze_plan(sample_plan)


@pytest.fixture
def make_resource():
    """Factory for ResourceChange records."""
    def _make(resource_type, actions, before=None, after=None, address=None):
        return ResourceChange(
            address=address or f"{resource_type}.test",
            type=resource_type,
            change=Change(actions=actions, before=before, after=after),
        )
    return _make


@pytest.fixture
def write_plan(tmp_path):
    """Write plan data (or raw text) to a temp file and return its path."""
    def _write(plan_data, name="plan.json"):
        path = tmp_path / name
        text = plan_data if isinstance(plan_data, str) else json.dumps(plan_data)
        path.write_text(text, encoding='utf-8')
        return str(path)
    return _write

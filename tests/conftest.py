"""
Pytest configuration and shared fixtures for the kubecharter test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the kubecharter project.
"""

import shutil
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, List

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kubecharter.models import ChartConfig, RawReading  # noqa: E402


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_charter_data() -> Dict[str, Any]:
    """A valid raw [charter] table, as parsed from TOML."""
    return {
        "namespace": "prod",
        "interval_seconds": 15,
        "groups": ["web", "worker"],
        "max_ticks": 10,
        "html_output_path": "out/{{date}}.html",
        "snapshot_output_path": "out/{{date}}.json",
        "report": {"layout": "split"},
        "snapshot": {"format": "json"},
        "cluster": {
            "kubeconfig": "",
            "context": "",
            "in_cluster": False,
            "group_label": "app.kubernetes.io/name",
            "request_timeout_seconds": 0,
        },
    }


@pytest.fixture
def config_file(temp_dir):
    """Write a minimal valid config.toml and return its path."""
    path = temp_dir / "config.toml"
    path.write_text(
        "[charter]\n"
        'namespace = "prod"\n'
        "interval_seconds = 30\n"
        'groups = ["web", "worker"]\n'
        "max_ticks = 3\n"
        'html_output_path = "out/{{date}}.html"\n'
        'snapshot_output_path = "out/{{date}}.json"\n'
    )
    return path


@pytest.fixture
def chart_config_factory(temp_dir):
    """
    Build ChartConfig objects that write into the temporary directory.

    The interval is 0 so the loop never actually sleeps.
    """

    def _create(**overrides) -> ChartConfig:
        values = dict(
            namespace="",
            interval_seconds=0,
            groups=["web"],
            max_ticks=1,
            html_output_path=str(temp_dir / "report.html"),
            snapshot_output_path=str(temp_dir / "snapshot.json"),
        )
        values.update(overrides)
        return ChartConfig(**values)

    return _create


class FakeMetricsSource:
    """Returns pre-scripted batches of readings, one per fetch() call."""

    def __init__(self, batches: List[List[RawReading]], repeat_last: bool = True):
        self.batches = list(batches)
        self.repeat_last = repeat_last
        self.calls = 0

    def fetch(self) -> List[RawReading]:
        index = self.calls
        self.calls += 1
        if index < len(self.batches):
            return self.batches[index]
        if self.repeat_last and self.batches:
            return self.batches[-1]
        return []


class TestUtils:
    """Small constructors shared by several test modules."""

    @staticmethod
    def reading(group: str, cpu_m: int, mem_mi: int, pod: str = None, namespace: str = "default") -> RawReading:
        pod = pod or f"{group}-pod"
        return RawReading(
            entity_name=f"{namespace}/{pod}",
            group=group,
            cpu_m=cpu_m,
            mem_mi=mem_mi,
        )

    @staticmethod
    def readings(group: str, values: List[tuple]) -> List[RawReading]:
        """One reading per (cpu_m, mem_mi) tuple, each from a distinct pod."""
        return [
            TestUtils.reading(group, cpu, mem, pod=f"{group}-{i}")
            for i, (cpu, mem) in enumerate(values)
        ]

    @staticmethod
    def pod_metrics_item(namespace: str, name: str, containers: List[tuple]) -> Dict[str, Any]:
        """A PodMetrics item as returned by the metrics.k8s.io API."""
        return {
            "metadata": {"namespace": namespace, "name": name},
            "containers": [
                {"name": c_name, "usage": {"cpu": cpu, "memory": mem}}
                for c_name, cpu, mem in containers
            ],
        }


@pytest.fixture
def test_utils():
    return TestUtils


@pytest.fixture
def fake_metrics_source():
    return FakeMetricsSource


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield

    from kubecharter.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(original_config_path)

"""
Shared fixtures for Scrutinizer Badges tests.
"""

import pytest

import scrutinizer_badges.config


def _make_report(metric_values=None, default_branch="master", branch=None):
    if metric_values is None:
        metric_values = {"scrutinizer.quality": 8.5, "scrutinizer.test_coverage": 0.755}
    return {
        "default_branch": default_branch,
        "applications": {
            branch or default_branch: {
                "index": {
                    "_embedded": {"project": {"metric_values": metric_values}}
                }
            }
        },
    }


@pytest.fixture
def make_report():
    """Factory building a repository report with one application."""
    return _make_report


@pytest.fixture
def report():
    """A report for the master branch with quality 8.5 and coverage 75.5%."""
    return _make_report()


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Keep runtime settings and environment from leaking between tests."""
    for name in ("SCRUTINIZER_API_BASE", "SCRUTINIZER_TOKEN", "SCRUTINIZER_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(scrutinizer_badges.config, "VERIFY_SSL", True)
    monkeypatch.setattr(scrutinizer_badges.config, "_API_BASE", None)
    monkeypatch.setattr(scrutinizer_badges.config, "_TIMEOUT", None)

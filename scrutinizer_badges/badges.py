"""
Badge pipeline for Scrutinizer metrics.

A badge is produced by fetching the repository report, validating it,
extracting one metric for a branch and rendering it. The two metrics differ
only in their ``MetricBadge`` configuration.
"""

import math
from typing import Any, Awaitable, Callable, NamedTuple

from scrutinizer_badges.colors import COVERAGE_SCALE, QUALITY_SCALE, ColorScale
from scrutinizer_badges.errors import NotFound
from scrutinizer_badges.schema import ensure_valid_report
from scrutinizer_badges.scrutinizer import (
    fetch_report,
    transform_branch_info_metric_value,
)

Fetcher = Callable[[str, str], Awaitable[Any]]


class BadgeData(NamedTuple):
    """Message and color of a rendered badge."""

    message: str
    color: str


class MetricBadge(NamedTuple):
    """Configuration of a metric badge."""

    name: str
    label: str
    category: str
    metric_key: str
    scale: ColorScale
    render: Callable[[float, ColorScale], BadgeData]
    postprocess: Callable[[float], float]
    not_found_message: str


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def render_quality(score: float, scale: ColorScale = QUALITY_SCALE) -> BadgeData:
    """Render a quality score (0-10) rounded to two decimals."""
    message = f"{_round_half_up(score, 2):.2f}".rstrip("0").rstrip(".")
    return BadgeData(message=message, color=scale(score))


def render_coverage(
    coverage: float, scale: ColorScale = COVERAGE_SCALE
) -> BadgeData:
    """Render a coverage percentage rounded to a whole number."""
    return BadgeData(
        message=f"{_round_half_up(coverage):.0f}%",
        color=scale(coverage),
    )


def coverage_from_raw(raw_coverage: float) -> float:
    """
    Convert the reported coverage fraction into a percentage.

    Raises:
        NotFound: If the value is zero or missing. The report schema only
            admits positive values, so zero is treated as absent.
    """
    if not raw_coverage:
        raise NotFound("coverage not found")
    return raw_coverage * 100


def _identity(value: float) -> float:
    return value


QUALITY = MetricBadge(
    name="quality",
    label="code quality",
    category="analysis",
    metric_key="scrutinizer.quality",
    scale=QUALITY_SCALE,
    render=render_quality,
    postprocess=_identity,
    not_found_message="metric not found",
)

COVERAGE = MetricBadge(
    name="coverage",
    label="coverage",
    category="coverage",
    metric_key="scrutinizer.test_coverage",
    scale=COVERAGE_SCALE,
    render=render_coverage,
    postprocess=coverage_from_raw,
    not_found_message="coverage not found",
)

METRICS = {metric.name: metric for metric in (QUALITY, COVERAGE)}


def transform(
    metric: MetricBadge, report: Any, branch: str | None = None
) -> tuple[str, float]:
    """
    Validate a report and compute the display value for a branch.

    Returns:
        Tuple of (resolved branch, postprocessed value)

    Raises:
        InvalidResponse: If the report does not have the expected shape
        NotFound: If the branch or the metric value is missing
    """
    report = ensure_valid_report(report, metric.metric_key)
    result = transform_branch_info_metric_value(
        report,
        branch,
        metric.metric_key,
        not_found_message=metric.not_found_message,
    )
    return result.branch, metric.postprocess(result.value)


async def make_badge(
    metric: MetricBadge,
    vcs: str,
    slug: str,
    branch: str | None = None,
    fetch: Fetcher | None = None,
) -> BadgeData:
    """
    Build the badge for a repository.

    Args:
        metric: QUALITY or COVERAGE
        vcs: VCS code ('g', 'b', 'gl' or 'gp')
        slug: Repository slug
        branch: Branch name; the report's default branch when omitted
        fetch: Coroutine function returning the decoded report for (vcs, slug).
            Defaults to fetch_report.

    Returns:
        Rendered BadgeData
    """
    fetch = fetch or fetch_report
    report = await fetch(vcs, slug)
    _, value = transform(metric, report, branch)
    return metric.render(value, metric.scale)


def endpoint_payload(badge: BadgeData, label: str) -> dict[str, Any]:
    """Return the JSON endpoint badge representation of a badge."""
    return {
        "schemaVersion": 1,
        "label": label,
        "message": badge.message,
        "color": badge.color,
    }

"""
Scrutinizer CI repository API integration.

Fetches repository reports and extracts per-branch metric values from them.
"""

from typing import Any, NamedTuple

from scrutinizer_badges.config import get_api_base, get_token
from scrutinizer_badges.errors import Inaccessible, InvalidResponse, NotFound
from scrutinizer_badges.http_client import _get_async_http_client
from scrutinizer_badges.schema import METRIC_PATH

HTTP_ERRORS = {
    401: (Inaccessible, "not authorized to access project"),
    404: (NotFound, "project not found"),
}


class MetricResult(NamedTuple):
    """A metric value and the branch it was read from."""

    branch: str
    value: float


def get_report_url(vcs: str, slug: str) -> str:
    """Construct the repository API URL for a VCS code and slug."""
    return f"{get_api_base()}/api/repositories/{vcs}/{slug}"


async def fetch_report(vcs: str, slug: str) -> Any:
    """
    Fetch the repository report from the Scrutinizer API.

    Args:
        vcs: VCS code ('g', 'b', 'gl' or 'gp')
        slug: Repository slug, e.g. 'filp/whoops'

    Returns:
        Decoded JSON body (not yet validated)

    Raises:
        NotFound: If Scrutinizer does not know the project
        Inaccessible: If the project requires authorization
        InvalidResponse: If the body is not valid JSON
        httpx.HTTPStatusError: For any other non-2xx response
        httpx.RequestError: If the request fails
    """
    params = {}
    token = get_token()
    if token:
        params["access_token"] = token

    client = await _get_async_http_client()
    response = await client.get(get_report_url(vcs, slug), params=params)

    if response.status_code in HTTP_ERRORS:
        error_class, message = HTTP_ERRORS[response.status_code]
        raise error_class(message)
    response.raise_for_status()

    try:
        return response.json()
    except ValueError as e:
        raise InvalidResponse("unparseable json response") from e


def transform_branch_info(
    report: dict[str, Any], branch: str | None = None
) -> tuple[str, dict[str, Any]]:
    """
    Look up the application info for a branch.

    Args:
        report: Validated repository report
        branch: Wanted branch; the report's default branch when empty

    Returns:
        Tuple of (resolved branch name, application info)

    Raises:
        NotFound: If the report has no application for the branch
    """
    resolved = branch or report["default_branch"]
    application = report["applications"].get(resolved)
    if application is None:
        raise NotFound("branch not found")
    return resolved, application


def transform_branch_info_metric_value(
    report: dict[str, Any],
    branch: str | None,
    metric: str,
    not_found_message: str = "metric not found",
) -> MetricResult:
    """
    Read a metric value for a branch.

    Args:
        report: Validated repository report
        branch: Wanted branch; the report's default branch when empty
        metric: Key under metric_values, e.g. 'scrutinizer.quality'
        not_found_message: Message used when the branch has no value

    Raises:
        NotFound: If the branch is unknown or has no value for the metric
    """
    resolved, node = transform_branch_info(report, branch)
    for key in METRIC_PATH:
        if not isinstance(node, dict) or key not in node:
            raise NotFound(not_found_message)
        node = node[key]

    if not isinstance(node, dict) or metric not in node:
        raise NotFound(not_found_message)
    return MetricResult(resolved, node[metric])

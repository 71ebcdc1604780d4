"""
Shape validation for Scrutinizer repository reports.

The repository API returns one document per repository:

    {
      "default_branch": "master",
      "applications": {
        "master": {
          "index": {
            "_embedded": {
              "project": {
                "metric_values": {"scrutinizer.quality": 8.5, ...}
              }
            }
          }
        }
      }
    }

Only the keys needed to extract ``metric_key`` are checked. Unknown keys are
ignored.
"""

import math
from typing import Any, NamedTuple

from scrutinizer_badges.errors import InvalidResponse

# Keys nested under each application, outermost first
METRIC_PATH = ("index", "_embedded", "project", "metric_values")


class ValidationResult(NamedTuple):
    """Outcome of validating a report."""

    report: dict[str, Any] | None
    errors: list[str]

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _is_positive_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def _validate_application(
    name: str, application: Any, metric_key: str, errors: list[str]
) -> None:
    path = f"applications.{name}"
    if not isinstance(application, dict):
        errors.append(f"{path}: must be an object")
        return

    # index is optional, but once present the chain down to metric_values is not
    if "index" not in application:
        return

    node: Any = application
    for key in METRIC_PATH:
        path = f"{path}.{key}"
        if key not in node:
            errors.append(f"{path}: is required")
            return
        node = node[key]
        if not isinstance(node, dict):
            errors.append(f"{path}: must be an object")
            return

    if metric_key in node and not _is_positive_number(node[metric_key]):
        errors.append(f'{path}["{metric_key}"]: must be a positive number')


def validate_report(data: Any, metric_key: str) -> ValidationResult:
    """
    Validate a repository report for extraction of ``metric_key``.

    Args:
        data: Decoded JSON document.
        metric_key: Metric expected under each application's metric_values.

    Returns:
        ValidationResult holding the report when valid, or every violation found.
    """
    errors: list[str] = []

    if not isinstance(data, dict):
        return ValidationResult(None, ["value: must be an object"])

    default_branch = data.get("default_branch")
    if "default_branch" not in data:
        errors.append("default_branch: is required")
    elif not isinstance(default_branch, str) or not default_branch:
        errors.append("default_branch: must be a non-empty string")

    applications = data.get("applications")
    if "applications" not in data:
        errors.append("applications: is required")
    elif not isinstance(applications, dict):
        errors.append("applications: must be an object")
    else:
        for name, application in applications.items():
            _validate_application(name, application, metric_key, errors)

    if errors:
        return ValidationResult(None, errors)
    return ValidationResult(data, [])


def ensure_valid_report(data: Any, metric_key: str) -> dict[str, Any]:
    """
    Validate a report and return it.

    Raises:
        InvalidResponse: If the report does not have the expected shape.
    """
    result = validate_report(data, metric_key)
    if not result.is_valid:
        raise InvalidResponse("invalid response data", errors=result.errors)
    return result.report

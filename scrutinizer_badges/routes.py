"""
Route table for Scrutinizer badges.

Each route turns the parameters of a badge path into a VCS code, a repository
slug and an optional branch, then hands them to the badge pipeline. Routes come
in three families per metric:

- hosted:    scrutinizer/<metric>/<g|b>/<user>/<repo>[/<branch>]
- GitLab:    scrutinizer/<metric>/gl/<instance>/<user>/<repo>[/<branch>]
- plain Git: scrutinizer/<metric>/gp/<slug>[/<branch>]

Branches may contain slashes.
"""

import re
from typing import Callable, NamedTuple

from scrutinizer_badges.badges import (
    COVERAGE,
    QUALITY,
    BadgeData,
    Fetcher,
    MetricBadge,
    make_badge,
)
from scrutinizer_badges.errors import NotFound
from scrutinizer_badges.vcs import HOSTED_VCS, VCSCode

# :name, :name(a|b) or :name*
_PARAM_RE = re.compile(r":(?P<name>\w+)(?:\((?P<choices>[^)]*)\))?(?P<rest>\*)?")


class RouteTarget(NamedTuple):
    """Arguments for the badge pipeline."""

    vcs: str
    slug: str
    branch: str | None


class Route(NamedTuple):
    """A badge route."""

    name: str
    metric: MetricBadge
    base: str
    pattern: str
    build: Callable[[dict[str, str]], RouteTarget]
    examples: tuple[str, ...] = ()

    @property
    def path(self) -> str:
        return f"{self.base}/{self.pattern}"


def hosted_slug(user: str, repo: str) -> str:
    """Slug for GitHub and Bitbucket repositories."""
    return f"{user}/{repo}"


def gitlab_slug(instance: str, user: str, repo: str) -> str:
    """Slug for GitLab repositories, prefixed by the Scrutinizer instance."""
    return f"{instance}/{user}/{repo}"


def plain_git_slug(slug: str) -> str:
    """Plain Git repositories are addressed by their Scrutinizer slug as-is."""
    return slug


def _build_hosted(params: dict[str, str]) -> RouteTarget:
    return RouteTarget(
        params["vcs"],
        hosted_slug(params["user"], params["repo"]),
        params.get("branch"),
    )


def _build_gitlab(params: dict[str, str]) -> RouteTarget:
    return RouteTarget(
        VCSCode.GITLAB.value,
        gitlab_slug(params["instance"], params["user"], params["repo"]),
        params.get("branch"),
    )


def _build_plain_git(params: dict[str, str]) -> RouteTarget:
    return RouteTarget(
        VCSCode.PLAIN_GIT.value,
        plain_git_slug(params["slug"]),
        params.get("branch"),
    )


HOSTED_PATTERN = (
    f":vcs({'|'.join(code.value for code in HOSTED_VCS)})/:user/:repo/:branch*"
)
GITLAB_PATTERN = ":instance/:user/:repo/:branch*"
PLAIN_GIT_PATTERN = ":slug/:branch*"


def _routes_for(metric: MetricBadge, prefix: str) -> list[Route]:
    base = f"scrutinizer/{metric.name}"
    return [
        Route(
            name=f"{prefix}GitLab",
            metric=metric,
            base=f"{base}/gl",
            pattern=GITLAB_PATTERN,
            build=_build_gitlab,
            # No public GitLab report is known; this project exists but is private.
            examples=(
                f"{base}/gl/propertywindow/propertywindow/client",
                f"{base}/gl/propertywindow/propertywindow/client/master",
            ),
        ),
        Route(
            name=f"{prefix}PlainGit",
            metric=metric,
            base=f"{base}/gp",
            pattern=PLAIN_GIT_PATTERN,
            build=_build_plain_git,
        ),
        Route(
            name=prefix,
            metric=metric,
            base=base,
            pattern=HOSTED_PATTERN,
            build=_build_hosted,
            examples=(f"{base}/g/filp/whoops", f"{base}/g/filp/whoops/master"),
        ),
    ]


# GitLab and plain Git bases come first so their fixed segment wins
ROUTES: list[Route] = [
    *_routes_for(QUALITY, "ScrutinizerQuality"),
    *_routes_for(COVERAGE, "ScrutinizerCoverage"),
]


def compile_route(route: Route) -> re.Pattern[str]:
    """
    Compile a route into a regular expression over the request path.

    Named parameters match one path segment, ``:name(a|b)`` restricts the
    segment to the listed values and ``:name*`` matches the remaining segments
    (possibly none).
    """
    regex = "^" + re.escape(route.base)
    for segment in route.pattern.split("/"):
        match = _PARAM_RE.fullmatch(segment)
        if match is None:
            regex += "/" + re.escape(segment)
            continue
        name = match.group("name")
        if match.group("rest"):
            regex += f"(?:/(?P<{name}>.+))?"
        elif match.group("choices"):
            choices = "|".join(re.escape(c) for c in match.group("choices").split("|"))
            regex += f"/(?P<{name}>{choices})"
        else:
            regex += f"/(?P<{name}>[^/]+)"
    return re.compile(regex + "$")


_COMPILED = [(route, compile_route(route)) for route in ROUTES]


def match_route(path: str) -> tuple[Route, dict[str, str]] | None:
    """
    Find the route for a badge path.

    Args:
        path: Badge path, with or without leading/trailing slashes,
              e.g. 'scrutinizer/quality/g/filp/whoops/master'

    Returns:
        Tuple of (route, parameters) or None if no route matches
    """
    normalized = path.strip("/")
    for route, regex in _COMPILED:
        match = regex.match(normalized)
        if match:
            params = {k: v for k, v in match.groupdict().items() if v is not None}
            return route, params
    return None


async def handle_route(
    route: Route, params: dict[str, str], fetch: Fetcher | None = None
) -> BadgeData:
    """Build the badge for a matched route."""
    target = route.build(params)
    return await make_badge(
        route.metric,
        vcs=target.vcs,
        slug=target.slug,
        branch=target.branch,
        fetch=fetch,
    )


async def handle(path: str, fetch: Fetcher | None = None) -> BadgeData:
    """
    Build the badge for a badge path.

    Raises:
        NotFound: If no route matches the path
    """
    matched = match_route(path)
    if matched is None:
        raise NotFound("unknown route")
    route, params = matched
    return await handle_route(route, params, fetch=fetch)

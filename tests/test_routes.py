"""
Tests for the route table.
"""

import asyncio

import pytest

from scrutinizer_badges.badges import COVERAGE, QUALITY, BadgeData
from scrutinizer_badges.errors import NotFound
from scrutinizer_badges.routes import (
    ROUTES,
    RouteTarget,
    compile_route,
    gitlab_slug,
    handle,
    hosted_slug,
    match_route,
    plain_git_slug,
)


def test_slug_builders():
    assert hosted_slug("filp", "whoops") == "filp/whoops"
    assert (
        gitlab_slug("propertywindow", "propertywindow", "client")
        == "propertywindow/propertywindow/client"
    )
    assert plain_git_slug("abc123") == "abc123"


def test_route_table():
    """Three route families per metric."""
    names = [route.name for route in ROUTES]
    assert sorted(names) == sorted(
        [
            "ScrutinizerQuality",
            "ScrutinizerQualityGitLab",
            "ScrutinizerQualityPlainGit",
            "ScrutinizerCoverage",
            "ScrutinizerCoverageGitLab",
            "ScrutinizerCoveragePlainGit",
        ]
    )
    paths = {route.name: route.path for route in ROUTES}
    assert paths["ScrutinizerQuality"] == "scrutinizer/quality/:vcs(g|b)/:user/:repo/:branch*"
    assert paths["ScrutinizerCoverageGitLab"] == (
        "scrutinizer/coverage/gl/:instance/:user/:repo/:branch*"
    )
    assert paths["ScrutinizerCoveragePlainGit"] == "scrutinizer/coverage/gp/:slug/:branch*"


def test_route_examples_match_their_route():
    """Documented examples resolve to the route that documents them."""
    for route in ROUTES:
        for example in route.examples:
            matched = match_route(example)
            assert matched is not None
            assert matched[0] is route


def test_compile_route_regex():
    route = next(r for r in ROUTES if r.name == "ScrutinizerQuality")
    regex = compile_route(route)
    assert regex.match("scrutinizer/quality/g/filp/whoops")
    assert regex.match("scrutinizer/quality/b/filp/whoops/feature/x")
    assert not regex.match("scrutinizer/quality/x/filp/whoops")
    assert not regex.match("scrutinizer/quality/g/filp")


class TestMatchRoute:
    """Test path matching."""

    def test_hosted(self):
        route, params = match_route("scrutinizer/quality/g/filp/whoops")
        assert route.name == "ScrutinizerQuality"
        assert route.metric is QUALITY
        assert params == {"vcs": "g", "user": "filp", "repo": "whoops"}
        assert route.build(params) == RouteTarget("g", "filp/whoops", None)

    def test_hosted_bitbucket_with_branch(self):
        route, params = match_route("/scrutinizer/coverage/b/user/repo/master/")
        assert route.name == "ScrutinizerCoverage"
        assert route.metric is COVERAGE
        assert route.build(params) == RouteTarget("b", "user/repo", "master")

    def test_branch_with_slashes(self):
        route, params = match_route("scrutinizer/quality/g/filp/whoops/feature/new-ui")
        assert params["branch"] == "feature/new-ui"

    def test_gitlab(self):
        route, params = match_route(
            "scrutinizer/quality/gl/propertywindow/propertywindow/client"
        )
        assert route.name == "ScrutinizerQualityGitLab"
        assert route.build(params) == RouteTarget(
            "gl", "propertywindow/propertywindow/client", None
        )

    def test_gitlab_with_branch(self):
        route, params = match_route(
            "scrutinizer/coverage/gl/propertywindow/propertywindow/client/master"
        )
        assert route.name == "ScrutinizerCoverageGitLab"
        assert route.build(params).branch == "master"

    def test_plain_git(self):
        route, params = match_route("scrutinizer/coverage/gp/abc123")
        assert route.name == "ScrutinizerCoveragePlainGit"
        assert route.build(params) == RouteTarget("gp", "abc123", None)

    def test_plain_git_with_branch(self):
        route, params = match_route("scrutinizer/quality/gp/abc123/develop")
        assert route.build(params) == RouteTarget("gp", "abc123", "develop")

    @pytest.mark.parametrize(
        "path",
        [
            "scrutinizer/quality",
            "scrutinizer/quality/g/filp",
            "scrutinizer/quality/x/filp/whoops",
            "scrutinizer/build/g/filp/whoops",
            "scrutinizer/coverage/gl/instance/user",
            "scrutinizer/coverage/gp",
        ],
    )
    def test_no_match(self, path):
        assert match_route(path) is None


class TestHandle:
    """Test route handling end to end with a fake fetcher."""

    def test_gitlab_slug_passed_to_fetch(self, report):
        calls = []

        async def fetch(vcs, slug):
            calls.append((vcs, slug))
            return report

        badge = asyncio.run(
            handle(
                "scrutinizer/quality/gl/propertywindow/propertywindow/client",
                fetch=fetch,
            )
        )
        assert calls == [("gl", "propertywindow/propertywindow/client")]
        assert badge == BadgeData("8.5", "green")

    def test_branch_passed_to_pipeline(self, make_report):
        report = make_report(
            metric_values={"scrutinizer.test_coverage": 0.3}, branch="release/1.x"
        )

        async def fetch(vcs, slug):
            return report

        badge = asyncio.run(
            handle("scrutinizer/coverage/gp/abc123/release/1.x", fetch=fetch)
        )
        assert badge == BadgeData("30%", "red")

    def test_unknown_route(self):
        async def fetch(vcs, slug):
            raise AssertionError("fetch should not be called")

        with pytest.raises(NotFound, match="unknown route"):
            asyncio.run(handle("scrutinizer/quality/zz", fetch=fetch))

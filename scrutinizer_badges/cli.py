"""
Command-line interface for Scrutinizer Badges.
"""

import asyncio
import json

import httpx
import typer
from rich.console import Console
from rich.table import Table

from scrutinizer_badges.badges import (
    METRICS,
    BadgeData,
    MetricBadge,
    endpoint_payload,
    make_badge,
)
from scrutinizer_badges.config import set_api_base, set_verify_ssl
from scrutinizer_badges.errors import BadgeError, InvalidResponse
from scrutinizer_badges.http_client import close_http_client
from scrutinizer_badges.routes import ROUTES, handle_route, match_route
from scrutinizer_badges.scrutinizer import get_report_url
from scrutinizer_badges.vcs import get_vcs_code, list_supported_platforms

# --- Typer App ---
app = typer.Typer()
console = Console()

# Badge colors mapped onto terminal colors
RICH_COLORS = {
    "brightgreen": "bright_green",
    "green": "green",
    "yellowgreen": "green_yellow",
    "yellow": "yellow",
    "orange": "dark_orange",
    "red": "red",
}

# --- Helper Functions ---


async def _run_and_close(coro):
    """Await a badge coroutine and release the shared HTTP client."""
    try:
        return await coro
    finally:
        await close_http_client()


def _render(metric: MetricBadge, coro, as_json: bool) -> None:
    """Run a badge coroutine and print the result, exiting 1 on failure."""
    try:
        badge: BadgeData = asyncio.run(_run_and_close(coro))
    except InvalidResponse as e:
        console.print(f"[red]{metric.label}: {e.pretty_message}[/red]")
        for error in e.errors:
            console.print(f"[dim]  {error}[/dim]")
        raise typer.Exit(code=1) from None
    except BadgeError as e:
        console.print(f"[red]{metric.label}: {e.pretty_message}[/red]")
        raise typer.Exit(code=1) from None
    except httpx.HTTPError as e:
        console.print(f"[red]{metric.label}: inaccessible[/red]")
        console.print(f"[dim]{e}[/dim]")
        raise typer.Exit(code=1) from None

    if as_json:
        typer.echo(json.dumps(endpoint_payload(badge, metric.label)))
    else:
        style = RICH_COLORS.get(badge.color, "white")
        console.print(
            f"{metric.label}: [bold {style}]{badge.message}[/bold {style}] "
            f"({badge.color})",
            highlight=False,
        )


def _apply_options(insecure: bool, api_base: str | None) -> None:
    set_verify_ssl(not insecure)
    if api_base:
        set_api_base(api_base)


# --- Commands ---


@app.command()
def show(
    path: str = typer.Argument(
        ...,
        help="Badge path, e.g. scrutinizer/quality/g/filp/whoops or scrutinizer/coverage/gl/<instance>/<user>/<repo>/<branch>.",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the JSON endpoint badge payload instead of text.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show the matched route and the upstream URL.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification.",
    ),
    api_base: str | None = typer.Option(
        None,
        "--api-base",
        help="Scrutinizer base URL (default: https://scrutinizer-ci.com).",
    ),
):
    """Render the badge for a route path."""
    _apply_options(insecure, api_base)

    matched = match_route(path)
    if matched is None:
        console.print(f"[yellow]⚠️  No route matches: {path}[/yellow]")
        console.print("[dim]Run 'routes' to list the supported paths.[/dim]")
        raise typer.Exit(code=1)

    route, params = matched
    if verbose:
        target = route.build(params)
        console.print(f"[dim]Route: {route.name} ({route.path})[/dim]")
        console.print(f"[dim]Fetching {get_report_url(target.vcs, target.slug)}[/dim]")
        if target.branch:
            console.print(f"[dim]Branch: {target.branch}[/dim]")
        else:
            console.print("[dim]Branch: (default)[/dim]")

    _render(route.metric, handle_route(route, params), as_json)


@app.command()
def badge(
    metric: str = typer.Argument(..., help="Metric: quality or coverage."),
    platform: str = typer.Argument(
        ...,
        help=f"Repository platform: {', '.join(list_supported_platforms())}.",
    ),
    slug: str = typer.Argument(
        ...,
        help="Repository slug: user/repo, instance/user/repo for GitLab, or the plain Git slug.",
    ),
    branch: str | None = typer.Option(
        None, "--branch", "-b", help="Branch (default: the repository's default)."
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the JSON endpoint badge payload instead of text.",
    ),
    insecure: bool = typer.Option(
        False,
        "--insecure",
        help="Disable SSL certificate verification.",
    ),
    api_base: str | None = typer.Option(
        None,
        "--api-base",
        help="Scrutinizer base URL (default: https://scrutinizer-ci.com).",
    ),
):
    """Render a badge from a platform name and slug."""
    _apply_options(insecure, api_base)

    metric_badge = METRICS.get(metric.lower())
    if metric_badge is None:
        console.print(
            f"[yellow]⚠️  Unknown metric: {metric}. "
            f"Choose from: {', '.join(sorted(METRICS))}[/yellow]"
        )
        raise typer.Exit(code=1)

    try:
        vcs = get_vcs_code(platform)
    except ValueError as e:
        console.print(f"[yellow]⚠️  {e}[/yellow]")
        raise typer.Exit(code=1) from None

    _render(
        metric_badge,
        make_badge(metric_badge, vcs=vcs.value, slug=slug, branch=branch),
        as_json,
    )


@app.command()
def routes():
    """List the supported badge routes."""
    table = Table(title="Scrutinizer Badge Routes")
    table.add_column("Route", justify="left", style="cyan", no_wrap=True)
    table.add_column("Label", justify="left", style="magenta")
    table.add_column("Path", justify="left")
    table.add_column("Examples", justify="left")

    for route in ROUTES:
        table.add_row(
            route.name,
            route.metric.label,
            route.path,
            "\n".join(route.examples) or "-",
        )

    console.print(table)


if __name__ == "__main__":
    app()

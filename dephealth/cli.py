"""CLI entry point: dephealth.

Subcommands:
    dephealth analyze /path/to/project             # auto-detect ecosystem
    dephealth analyze . --ecosystem pip            # force an ecosystem
    dephealth analyze github.com/owner/repo --json # clone, analyze, score activity
    dephealth serve --port 8000                    # run the HTTP API
"""

from __future__ import annotations

import asyncio
import json
import sys

import click

from dephealth.core.logging import setup_logging
from dephealth.engines.analysis.analyzer import DependencyHealthAnalyzer
from dephealth.engines.analysis.models import AnalysisResult


def _print_summary(result: AnalysisResult) -> None:
    click.echo(f"Ecosystem: {result.ecosystem.value if result.ecosystem else '?'}")
    click.echo(f"Detected files: {', '.join(result.detected_files)}")

    outdated = [e for e in result.outdated if e.is_outdated]
    click.echo(f"\nOutdated ({len(outdated)} of {len(result.outdated)} checked):")
    for entry in outdated:
        click.echo(
            f"  {entry.name:30s} {entry.current.display():>12s} -> "
            f"{entry.latest.display():12s} [{entry.role.value}]"
        )
    for entry in result.outdated:
        if not entry.latest.is_concrete:
            click.echo(f"  {entry.name:30s} latest: {entry.latest.display()}")

    click.echo(f"\nVulnerabilities ({len(result.vulnerabilities)}):")
    for vuln in result.vulnerabilities:
        fix = vuln.fix
        fix_label = "no fix" if not fix else ("fix available" if fix is True else f"fix: {fix.target_version}")
        click.echo(f"  [{vuln.severity}] {vuln.name} {vuln.affected_range} ({fix_label})")

    unused = [u for u in result.usage if not u.used]
    click.echo(f"\nUnused dependencies ({len(unused)} of {len(result.usage)}):")
    for record in unused:
        click.echo(f"  {record.name}")

    if result.activity is not None:
        activity = result.activity
        click.echo("\nRepository activity:")
        if activity.error:
            click.echo(f"  unavailable: {activity.error}")
        else:
            click.echo(f"  Score: {activity.activity_score}/100 ({'active' if activity.is_active else 'inactive'})")
            click.echo(f"  Last commit: {activity.last_commit_date.isoformat() if activity.last_commit_date else '?'}")
            click.echo(f"  Commits (30 days / total): {activity.recent_commit_count} / {activity.total_commit_count}")
            click.echo(f"  Contributors: {activity.contributor_count}")


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """dephealth: dependency health and repository activity analysis."""
    setup_logging("DEBUG" if verbose else None)


@main.command("analyze")
@click.argument("location")
@click.option(
    "-e",
    "--ecosystem",
    type=click.Choice(["auto", "npm", "pip"], case_sensitive=False),
    default="auto",
    show_default=True,
    help="Package ecosystem",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def analyze(location: str, ecosystem: str, as_json: bool) -> None:
    """Analyze a local project path or a GitHub repository reference."""
    result = asyncio.run(DependencyHealthAnalyzer().analyze(location, ecosystem))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    elif result.error is None:
        _print_summary(result)

    if result.error is not None:
        if not as_json:
            click.echo(f"Error: {result.error}", err=True)
        sys.exit(1)


@main.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port")
def serve(host: str, port: int) -> None:
    """Run the HTTP API (POST /api/analyze)."""
    import uvicorn

    uvicorn.run("dephealth.api:create_app", host=host, port=port, factory=True)


if __name__ == "__main__":
    main()

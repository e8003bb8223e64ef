"""Click-based CLI interface for readyscan."""

import json
import sys
from pathlib import Path

import click

from readyscan.config import load_config
from readyscan.engine import run_scan
from readyscan.exceptions import ScanInputError
from readyscan.formatters.sarif import render_sarif
from readyscan.logging_config import configure_logging
from readyscan.models import PERSONAS, Category, Severity, severity_rank
from readyscan.report import (
    filter_issues,
    load_report_issues,
    render_compliance,
    render_json,
    render_rules,
    render_score,
    render_table,
)
from readyscan.scoring import calculate_score

SEVERITY_CHOICES = [s.value for s in Severity]


@click.group()
@click.version_option(package_name="readyscan")
@click.option("--config", "config_path", type=click.Path(), default=None,
              help="Path to .readyscan.yml config file.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx, config_path, verbose):
    """readyscan - Production-readiness audit for source repositories."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose


@cli.command()
@click.argument("path", type=click.Path())
@click.option("--format", "fmt", type=click.Choice(["table", "json", "sarif"]), default="table")
@click.option("--severity", "min_severity", type=click.Choice(SEVERITY_CHOICES), default=None,
              help="Minimum severity to display and to fail on.")
@click.option("--output", "-o", type=str, default=None, help="Write JSON report to file.")
@click.option("--exit-code", is_flag=True, help="Exit with code 1 if issues >= severity.")
@click.option("--fail-under", type=click.IntRange(0, 100), default=None,
              help="Exit with code 1 if the readiness score is below this value.")
@click.option("--compliance", type=click.Choice(["gdpr", "soc2"]), default=None,
              help="Compliance report (gdpr or soc2).")
@click.option("--persona", type=click.Choice(PERSONAS), default=None,
              help="Only show issues aimed at this audience.")
@click.pass_context
def scan(ctx, path, fmt, min_severity, output, exit_code, fail_under, compliance, persona):
    """Scan a repository directory and compute its readiness score."""
    try:
        config = load_config(ctx.obj.get("config_path"), project_root=path if Path(path).is_dir() else None)
    except (FileNotFoundError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc

    configure_logging("DEBUG" if ctx.obj.get("verbose") else config.log_level)

    try:
        report = run_scan(path, config)
    except ScanInputError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(2)

    sev = Severity(min_severity or config.severity_threshold)
    shown = filter_issues(report.all_issues, sev, persona)

    if fmt in ("json", "sarif"):
        if fmt == "sarif":
            text_out = render_sarif(report, issues=shown)
        else:
            text_out = render_json(report)
        if output:
            Path(output).write_text(text_out)
            click.echo(f"Report written to {output}")
        else:
            click.echo(text_out)
    else:
        render_table(report, min_severity=sev, persona=persona)
        if output:
            Path(output).write_text(render_json(report))
            click.echo(f"JSON report also written to {output}")

    if compliance:
        render_compliance(report, compliance, min_severity=sev)

    threshold = fail_under if fail_under is not None else config.fail_under
    if threshold is not None and report.score.score < threshold:
        sys.exit(1)
    if exit_code and any(severity_rank(i.severity) >= sev.rank for i in report.all_issues):
        sys.exit(1)


@cli.command()
@click.argument("report_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--format", "fmt", type=click.Choice(["table", "json"]), default="table")
def rescore(report_path, fmt):
    """Recompute the readiness score of a saved JSON report."""
    try:
        issues = load_report_issues(report_path)
    except ValueError as exc:
        raise click.ClickException(f"Invalid report {report_path}: {exc}") from exc

    score = calculate_score(issues)
    if fmt == "json":
        click.echo(json.dumps(score.to_dict(), indent=2, ensure_ascii=False))
    else:
        render_score(score)


@cli.command("rules")
@click.option("--category", type=click.Choice([c.value for c in Category]), default=None)
def list_rules(category):
    """List the built-in detection rules."""
    render_rules(Category(category) if category else None)

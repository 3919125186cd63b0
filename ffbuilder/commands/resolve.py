import click
import json
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ..resolver import format_report, resolve as resolve_features
from .options import pass_resolution_request

@click.command()
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@handle_exceptions
@pass_resolution_request
def resolve(ctx, settings, request, as_json):
    """Probe the environment and print the resolved configure flags.

    Nothing is configured or built.
    """
    logger.info(f"Platform: {request.platform.value} ({request.architecture})")
    logger.info(f"Build Type: {request.build_profile.value}")
    logger.info(f"Prefix: {request.install_prefix}")

    report = resolve_features(request)

    if as_json:
        click.echo(json.dumps({
            "enabled_flags": list(report.enabled_flags),
            "included": list(report.included),
            "skipped_missing": list(report.skipped_missing),
            "skipped_unrequested": list(report.skipped_unrequested),
            "unknown_requested": list(report.unknown_requested),
            "needs_fallback": report.needs_fallback,
        }, indent=4))
        return

    for line in format_report(report):
        click.echo(line)
    click.echo("Configuration options:")
    for flag in report.enabled_flags:
        click.echo(f"  {flag}")
    if report.needs_fallback:
        logger.warning("None of the requested features were found; configure would use the minimal configuration.")

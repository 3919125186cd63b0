import click
from ..build_info import write_build_info
from ..cli_logger import logger
from ..decorators import handle_exceptions
from ..fallback import ConfigState, FallbackController, make_configure_step
from ..policy import probe_environment
from ..resolver import resolve as resolve_features
from .options import pass_resolution_request

@click.command()
@click.option("--source-dir", "-s", default=None,
              help="FFmpeg source directory holding the configure script (default: current directory).")
@click.option("--build-info", "build_info_dir", default=None,
              help="Directory to write build-info.txt into after a successful configure.")
@handle_exceptions
@pass_resolution_request
def configure(ctx, settings, request, source_dir, build_info_dir):
    """Configure FFmpeg with detected features, falling back to a minimal build."""
    source_dir = source_dir or settings.get("source_dir") or "."
    logger.info("FFmpeg Configuration")
    logger.info(f"Version: {settings['version']}")
    logger.info(f"Platform: {request.platform.value} ({request.architecture})")
    logger.info(f"Build Type: {request.build_profile.value}")
    logger.info(f"Prefix: {request.install_prefix}")

    step = make_configure_step(source_dir, env=probe_environment(request.platform))
    outcome = FallbackController(step, resolver=resolve_features).run(request)

    if outcome.state is ConfigState.MINIMAL:
        logger.warning("Note: External codec libraries were not found or not requested")

    if build_info_dir:
        write_build_info(build_info_dir, settings["version"], request, outcome)

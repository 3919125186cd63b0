import click
from ..cli_logger import logger
from ..probe import probe_tools_status

@click.command()
def doctor():
    """Check which detection tools are available to the probes."""
    logger.info("Running environment check...")
    all_ok = True
    for tool, path in probe_tools_status().items():
        if path:
            logger.success(f"{tool}: {path}")
        else:
            logger.warning(f"{tool} not found. Features probed with it will be reported as missing.")
            all_ok = False

    if all_ok:
        logger.success("Environment check completed successfully.")
    else:
        logger.error("Environment check found issues. Resolution will fall back to the minimal configuration if nothing can be detected.")

import click
import importlib.metadata
from ..cli_logger import logger

@click.command()
def version():
    """Print the version of ffbuilder."""
    try:
        ver = importlib.metadata.version("ffbuilder")
        logger.info(f"ffbuilder version {ver}")
    except importlib.metadata.PackageNotFoundError:
        logger.error("Error: Could not determine the version of ffbuilder. Is it installed correctly?")

import click
from .. import catalog
from ..cli_logger import logger

@click.command()
@click.option("--defaults", "defaults_only", is_flag=True, help="Only list the default tier.")
def features(defaults_only):
    """List the features ffbuilder can enable, in the order their flags are emitted."""
    specs = [spec for spec in catalog.all_features() if spec.default_requested or not defaults_only]
    if not specs:
        logger.info("No features registered.")
        return

    logger.info("Available features:")
    for spec in specs:
        tier = "default" if spec.default_requested else "opt-in"
        probe = spec.probe_strategy.value
        if spec.probe_target:
            probe = f"{probe}:{spec.probe_target}"
        click.echo(f"  {spec.name:<12} {tier:<8} {probe:<30} {spec.description}")

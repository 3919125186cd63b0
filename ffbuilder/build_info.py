import datetime
import os

from .cli_logger import logger

BUILD_INFO_FILE = "build-info.txt"


def render_build_info(version, request, outcome, timestamp=None):
    timestamp = timestamp or datetime.datetime.now()
    features = ", ".join(outcome.features) if outcome.features else "built-in codecs only"
    lines = [
        "FFmpeg Build Information",
        "========================",
        f"Version: {version}",
        f"Platform: {request.platform.value}",
        f"Architecture: {request.architecture}",
        f"Build Type: {request.build_profile.value}",
        f"Configuration: {outcome.state.value}",
        f"Codecs: {features}",
        f"Build Date: {timestamp.strftime('%Y-%m-%d %H:%M:%S')}",
    ]
    return "\n".join(lines) + "\n"


def write_build_info(directory, version, request, outcome, timestamp=None):
    """Write the build metadata record into ``directory`` and return its path."""
    os.makedirs(directory, exist_ok=True)
    path = os.path.join(directory, BUILD_INFO_FILE)
    with open(path, "w") as f:
        f.write(render_build_info(version, request, outcome, timestamp))
    logger.info(f"Build information written to {path}")
    return path

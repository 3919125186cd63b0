"""Primary/minimal configuration controller.

Probes can be wrong in both directions, so configure itself has the final
say. When it rejects the resolved flags, or when nothing requested could be
found, the build is retried once with built-in codecs only.
"""
import enum
import os
from dataclasses import dataclass

from .cli_logger import logger
from .errors import ConfigurationError, MinimalConfigurationRejected, PrimaryConfigurationRejected
from .resolver import ResolutionReport, ResolutionRequest, log_report, minimal_flags, resolve
from .utils import run_shell_command


class ConfigState(enum.Enum):
    PRIMARY = "primary"
    MINIMAL = "minimal"


@dataclass(frozen=True)
class ConfigureOutcome:
    state: ConfigState
    flags: tuple
    report: ResolutionReport

    @property
    def features(self):
        """Features that made it into the accepted configuration."""
        if self.state is ConfigState.MINIMAL:
            return ()
        return self.report.included


class FallbackController:
    """
    Runs the configure step with the resolved flags, falling back to the
    minimal tier at most once.

    ``configure_step(flags, install_prefix) -> bool`` is the external
    configure invocation; True means exit status zero.
    """

    def __init__(self, configure_step, resolver=resolve):
        self.configure_step = configure_step
        self.resolver = resolver
        self.state = ConfigState.PRIMARY

    def run(self, request: ResolutionRequest) -> ConfigureOutcome:
        self.state = ConfigState.PRIMARY
        report = self.resolver(request)
        log_report(report)

        try:
            self._primary(request, report)
            logger.success("Configuration completed successfully!")
            return ConfigureOutcome(ConfigState.PRIMARY, report.enabled_flags, report)
        except PrimaryConfigurationRejected as e:
            logger.warning(f"{e}, trying minimal configuration...")

        self.state = ConfigState.MINIMAL
        flags = minimal_flags(request)
        logger.warning("Using minimal configuration with built-in codecs only")
        logger.listing("Configuration options:", flags)

        if not self.configure_step(flags, request.install_prefix):
            raise MinimalConfigurationRejected(f"{request.platform.value}/{request.architecture}")

        logger.success("Minimal configuration completed successfully!")
        logger.warning("The build will include only built-in codecs")
        return ConfigureOutcome(ConfigState.MINIMAL, flags, report)

    def _primary(self, request, report):
        if report.needs_fallback:
            raise PrimaryConfigurationRejected(
                "None of the requested features are available"
            )
        if not self.configure_step(report.enabled_flags, request.install_prefix):
            raise PrimaryConfigurationRejected("Configuration with detected features failed")


def configure_command(source_dir, flags, install_prefix):
    return [os.path.join(source_dir, "configure"), f"--prefix={install_prefix}", *flags]


def make_configure_step(source_dir, env=None):
    """Build a configure step running FFmpeg's ``configure`` in ``source_dir``."""
    configure_script = os.path.join(source_dir, "configure")
    if not os.path.isfile(configure_script):
        raise ConfigurationError(
            f"Not in FFmpeg source directory: no 'configure' script in {source_dir}"
        )

    def run_configure(flags, install_prefix):
        command = configure_command(source_dir, flags, install_prefix)
        logger.info("Running FFmpeg configure...")
        try:
            lines, process = run_shell_command(command, stream_output=True, env=env, cwd=source_dir)
        except OSError as e:
            logger.error(f"Could not run {configure_script}: {e}")
            return False
        for line in lines:
            logger.debug(line.rstrip())
        if process.returncode != 0:
            logger.error(f"configure exited with status {process.returncode}")
            return False
        return True

    return run_configure

"""Error kinds raised while resolving and configuring an FFmpeg build.

Only subclasses of ``ConfigurationError`` are fatal. The rest are recorded in
the resolution report or trigger the minimal configuration tier.
"""


class FFBuilderError(Exception):
    """Base class for all ffbuilder errors."""


class ProbeToolUnavailable(FFBuilderError):
    """The detection tool behind a probe (pkg-config, the compiler) is missing."""

    def __init__(self, tool, detail=""):
        self.tool = tool
        message = f"Detection tool '{tool}' is not available"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UnknownRequestedFeature(FFBuilderError, KeyError):
    """A requested feature name is not present in the feature catalog."""

    def __init__(self, name):
        self.name = name
        super().__init__(name)

    def __str__(self):
        return f"Unknown feature '{self.name}'"


class PrimaryConfigurationRejected(FFBuilderError):
    """The configure step rejected the fully resolved flag set."""


class ConfigurationError(FFBuilderError):
    """A fatal configuration problem. The build cannot proceed."""


class UnsupportedPlatformArchitectureCombination(ConfigurationError):
    def __init__(self, platform, architecture, supported=()):
        self.platform = platform
        self.architecture = architecture
        self.supported = tuple(supported)
        message = f"Unsupported architecture '{architecture}' for platform '{platform}'"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class MinimalConfigurationRejected(ConfigurationError):
    def __init__(self, detail=""):
        message = (
            "Even the minimal configuration was rejected by configure. "
            "This points to a broken toolchain rather than a missing optional library."
        )
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)

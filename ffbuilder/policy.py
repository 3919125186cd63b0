"""Platform and build-profile flag overlays."""
import enum
import os
import platform as host_platform

from .errors import ConfigurationError, UnsupportedPlatformArchitectureCombination


class Platform(enum.Enum):
    LINUX = "linux"
    DARWIN = "darwin"
    WINDOWS = "windows"


class BuildProfile(enum.Enum):
    RELEASE = "release"
    DEBUG = "debug"


# Architectures each platform overlay knows how to target.
SUPPORTED_ARCHS = {
    Platform.LINUX: ("x86_64", "i686", "aarch64", "armv7l"),
    Platform.DARWIN: ("x86_64", "arm64"),
    Platform.WINDOWS: ("x86_64", "i686", "aarch64"),
}

STATIC_LINK_FLAGS = ["--extra-cflags=-static", "--extra-ldflags=-static"]
MACOS_MIN_VERSION = "10.15"
HOMEBREW_PKG_CONFIG_DIRS = ["/opt/homebrew/lib/pkgconfig", "/usr/local/lib/pkgconfig"]

LICENSE_FLAGS = ["--enable-gpl", "--enable-version3"]

PROFILE_FLAGS = {
    BuildProfile.DEBUG: ["--enable-debug", "--disable-optimizations", "--disable-stripping"],
    BuildProfile.RELEASE: ["--enable-optimizations"],
}

_HOST_ARCH_ALIASES = {
    "amd64": "x86_64",
    "x64": "x86_64",
    "x86": "i686",
    "i386": "i686",
    "arm64": "arm64",
    "aarch64": "aarch64",
}


def parse_platform(value):
    if isinstance(value, Platform):
        return value
    name = str(value).strip().lower()
    if name.startswith(("mingw", "msys", "cygwin", "win")):
        return Platform.WINDOWS
    if name in ("darwin", "macos", "osx"):
        return Platform.DARWIN
    if name == "linux":
        return Platform.LINUX
    raise ConfigurationError(f"Unsupported platform '{value}'. Supported platforms are linux, darwin, windows.")


def parse_profile(value):
    if isinstance(value, BuildProfile):
        return value
    try:
        return BuildProfile(str(value).strip().lower())
    except ValueError:
        raise ConfigurationError(
            f"Invalid build type: {value} (must be 'release' or 'debug')"
        ) from None


def detect_host():
    """Return the ``(Platform, architecture)`` of the machine ffbuilder runs on."""
    platform = parse_platform(host_platform.system())
    machine = host_platform.machine()
    arch = _HOST_ARCH_ALIASES.get(machine.lower(), machine)
    if platform is Platform.LINUX and arch == "arm64":
        arch = "aarch64"
    elif platform is Platform.DARWIN and arch == "aarch64":
        arch = "arm64"
    return platform, arch


def check_architecture(platform, architecture):
    supported = SUPPORTED_ARCHS[platform]
    if architecture not in supported:
        raise UnsupportedPlatformArchitectureCombination(platform.value, architecture, supported)


def platform_flags(platform, architecture):
    """Flags describing the target platform and how to link for it."""
    check_architecture(platform, architecture)
    flags = ["--enable-static", "--disable-shared"]

    if platform is Platform.WINDOWS:
        flags += [
            "--target-os=mingw32",
            f"--arch={architecture}",
            f"--cross-prefix={architecture}-w64-mingw32-",
        ]
        flags += STATIC_LINK_FLAGS
    elif platform is Platform.DARWIN:
        flags.append("--target-os=darwin")
        if architecture == "arm64":
            # configure requires this even on Apple Silicon hosts.
            flags += ["--arch=arm64", "--enable-cross-compile"]
        flags += [
            f"--extra-cflags=-mmacosx-version-min={MACOS_MIN_VERSION}",
            f"--extra-ldflags=-mmacosx-version-min={MACOS_MIN_VERSION}",
        ]
    elif platform is Platform.LINUX:
        flags += STATIC_LINK_FLAGS
        flags.append("--pkg-config-flags=--static")

    return flags


def profile_flags(build_profile):
    return list(PROFILE_FLAGS[build_profile])


def minimal_feature_flags():
    """License toggles kept by the minimal tier."""
    return list(LICENSE_FLAGS)


def probe_environment(platform, base_env=None):
    """Environment used for probes and configure on ``platform``."""
    env = dict(os.environ if base_env is None else base_env)
    if platform is Platform.DARWIN:
        paths = list(HOMEBREW_PKG_CONFIG_DIRS)
        if env.get("PKG_CONFIG_PATH"):
            paths.append(env["PKG_CONFIG_PATH"])
        env["PKG_CONFIG_PATH"] = os.pathsep.join(paths)
    return env

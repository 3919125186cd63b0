import functools
import click

from .. import config as config_module
from .. import policy
from ..resolver import ResolutionRequest


def resolution_options(func):
    """Options shared by every command that resolves a feature set."""
    options = [
        click.option("--codecs", "-c", envvar="ENABLE_CODECS", default=None,
                     help="Comma-separated list of features to enable (default: the default tier)."),
        click.option("--platform", "platform_name", default=None,
                     help="Target platform: linux, darwin or windows (default: host)."),
        click.option("--arch", envvar="ARCH", default=None,
                     help="Target architecture, e.g. x86_64 or arm64 (default: host)."),
        click.option("--type", "-t", "build_type", envvar="BUILD_TYPE", default=None,
                     type=click.Choice(["release", "debug"], case_sensitive=False),
                     help="Build type (default: release)."),
        click.option("--prefix", "-p", envvar="PREFIX", default=None,
                     help="Installation prefix (default: /usr/local)."),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def load_settings(ctx, **overrides):
    conf = config_module.load_config(path=ctx.obj["path"])
    return config_module.build_settings(conf, **overrides)


def build_request(settings):
    """Turn merged settings into an immutable ResolutionRequest."""
    platform, arch = settings.get("platform"), settings.get("arch")
    # Only consult the host for what the user left unset.
    if platform and arch:
        platform = policy.parse_platform(platform)
    else:
        host_platform, host_arch = policy.detect_host()
        platform = policy.parse_platform(platform or host_platform)
        if not arch:
            arch = host_arch if platform is host_platform else "x86_64"
    return ResolutionRequest(
        requested_features=config_module.parse_feature_list(settings.get("features")),
        platform=platform,
        architecture=arch,
        build_profile=policy.parse_profile(settings["profile"]),
        install_prefix=settings["prefix"],
    )


def settings_from_options(ctx, codecs, platform_name, arch, build_type, prefix, **extra):
    return load_settings(
        ctx,
        features=codecs,
        platform=platform_name,
        arch=arch,
        profile=build_type,
        prefix=prefix,
        **extra,
    )


def pass_resolution_request(func):
    """Build the request from options and hand it to the command as ``request``."""
    @resolution_options
    @click.pass_context
    @functools.wraps(func)
    def wrapper(ctx, codecs, platform_name, arch, build_type, prefix, *args, **kwargs):
        settings = settings_from_options(ctx, codecs, platform_name, arch, build_type, prefix)
        return func(ctx, settings, build_request(settings), *args, **kwargs)
    return wrapper

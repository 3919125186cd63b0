"""Feature resolution.

Turns a ``ResolutionRequest`` into the ordered configure flag list and a
report of what was included or skipped, and why.
"""
from dataclasses import dataclass, field

from . import catalog, policy
from .cli_logger import logger
from .errors import UnknownRequestedFeature
from .probe import probe_feature
from .utils import FlagList


@dataclass(frozen=True)
class ResolutionRequest:
    requested_features: frozenset
    platform: policy.Platform
    architecture: str
    build_profile: policy.BuildProfile
    install_prefix: str = "/usr/local"

    def __post_init__(self):
        # Accept any iterable of names, including a list with repeats.
        object.__setattr__(self, "requested_features", frozenset(self.requested_features or ()))


@dataclass(frozen=True)
class ResolutionReport:
    enabled_flags: tuple
    included: tuple = ()
    skipped_missing: tuple = ()
    skipped_unrequested: tuple = ()
    unknown_requested: tuple = ()
    requested: frozenset = frozenset()
    probe_results: tuple = field(default=(), compare=False)

    @property
    def needs_fallback(self) -> bool:
        """True when nothing was included even though features were asked for."""
        return bool(self.requested) and not self.included


def _effective_features(request):
    if not request.requested_features:
        return catalog.default_feature_names(), ()

    effective = set()
    unknown = []
    for name in request.requested_features:
        try:
            effective.add(catalog.lookup(name).name)
        except UnknownRequestedFeature as e:
            logger.warning(f"{e}, ignoring")
            unknown.append(name)
    return frozenset(effective), tuple(sorted(unknown))


def resolve(request: ResolutionRequest, prober=probe_feature, env=None) -> ResolutionReport:
    """
    Resolve the configure flags for ``request``.

    Args:
        request (ResolutionRequest): What to build and for which target.
        prober (callable): ``prober(spec, env) -> ProbeResult``. Defaults to the live probes.
        env (dict, optional): Environment for the probes. Defaults to the
            platform's probe environment.

    Returns:
        ResolutionReport: Flags ordered platform, then features in catalog
        order, then profile, without duplicates.

    Raises:
        UnsupportedPlatformArchitectureCombination: Before any probe runs.
    """
    leading_flags = policy.platform_flags(request.platform, request.architecture)
    trailing_flags = policy.profile_flags(request.build_profile)
    if env is None:
        env = policy.probe_environment(request.platform)

    effective, unknown = _effective_features(request)

    feature_flags = FlagList()
    included, missing, unrequested, results = [], [], [], []
    for spec in catalog.all_features():
        if spec.name not in effective:
            unrequested.append(spec.name)
            continue
        result = prober(spec, env)
        results.append(result)
        if result.available:
            feature_flags.extend(spec.flags)
            included.append(spec.name)
        else:
            missing.append(spec.name)

    flags = FlagList(leading_flags)
    flags.extend(feature_flags)
    flags.extend(trailing_flags)

    return ResolutionReport(
        enabled_flags=flags.as_tuple(),
        included=tuple(included),
        skipped_missing=tuple(missing),
        skipped_unrequested=tuple(unrequested),
        unknown_requested=unknown,
        requested=request.requested_features,
        probe_results=tuple(results),
    )


def minimal_flags(request: ResolutionRequest) -> tuple:
    """Flags of the minimal tier: built-in codecs only."""
    flags = FlagList(policy.platform_flags(request.platform, request.architecture))
    flags.extend(policy.minimal_feature_flags())
    flags.extend(policy.profile_flags(request.build_profile))
    return flags.as_tuple()


def format_report(report: ResolutionReport) -> list:
    """Human readable report lines, sets listed in catalog order."""
    sections = [
        ("Included", report.included),
        ("Skipped (not found)", report.skipped_missing),
        ("Skipped (not requested)", report.skipped_unrequested),
        ("Unknown (ignored)", report.unknown_requested),
    ]
    lines = []
    for title, names in sections:
        lines.append(f"{title}: {', '.join(names) if names else '-'}")
    return lines


def log_report(report: ResolutionReport):
    logger.listing("Resolution report:", format_report(report))
    logger.listing("Configuration options:", report.enabled_flags)

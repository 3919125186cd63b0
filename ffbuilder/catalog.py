"""Registry of the optional FFmpeg features ffbuilder knows how to enable.

Adding a feature is a data change: append a ``FeatureSpec`` to
``_REGISTRY``. Registration order is the order flags are emitted in.
"""
import enum
from dataclasses import dataclass

from .errors import UnknownRequestedFeature


class ProbeStrategy(enum.Enum):
    PACKAGE_METADATA = "package-metadata"
    HEADER_INCLUSION = "header-inclusion"
    COMMAND_EXISTS = "command-exists"
    ALWAYS_TRUE = "always-true"


@dataclass(frozen=True)
class FeatureSpec:
    name: str
    probe_strategy: ProbeStrategy
    probe_target: str
    flags: tuple
    default_requested: bool = False
    alternatives: tuple = ()
    description: str = ""

    def probes(self):
        """Primary probe followed by the alternatives, as (strategy, target) pairs."""
        return ((self.probe_strategy, self.probe_target),) + tuple(self.alternatives)


PKG = ProbeStrategy.PACKAGE_METADATA
HEADER = ProbeStrategy.HEADER_INCLUSION
ALWAYS = ProbeStrategy.ALWAYS_TRUE

_REGISTRY = (
    # License toggles
    FeatureSpec("gpl", ALWAYS, "", ("--enable-gpl",), True,
                description="Allow GPL-licensed components"),
    FeatureSpec("version3", ALWAYS, "", ("--enable-version3",), True,
                description="Upgrade (L)GPL to version 3"),
    FeatureSpec("nonfree", ALWAYS, "", ("--enable-nonfree",), True,
                description="Allow non-redistributable components"),

    # Video codecs
    FeatureSpec("libx264", PKG, "x264", ("--enable-libx264",), True,
                description="H.264 encoder"),
    FeatureSpec("libx265", PKG, "x265", ("--enable-libx265",), True,
                description="HEVC encoder"),
    FeatureSpec("libvpx", PKG, "vpx", ("--enable-libvpx",), True,
                description="VP8/VP9 codec"),
    FeatureSpec("libaom", PKG, "aom", ("--enable-libaom",),
                description="AV1 reference codec"),
    FeatureSpec("libsvtav1", PKG, "SvtAv1Enc", ("--enable-libsvtav1",),
                description="SVT-AV1 encoder"),
    FeatureSpec("libtheora", PKG, "theora", ("--enable-libtheora",),
                description="Theora encoder"),

    # Audio codecs
    FeatureSpec("libfdk-aac", PKG, "fdk-aac", ("--enable-libfdk-aac",), True,
                alternatives=((PKG, "libfdk-aac"),),
                description="Fraunhofer AAC codec"),
    FeatureSpec("libmp3lame", PKG, "lame", ("--enable-libmp3lame",), True,
                alternatives=((HEADER, "lame/lame.h"),),
                description="MP3 encoder"),
    FeatureSpec("libopus", PKG, "opus", ("--enable-libopus",), True,
                alternatives=((PKG, "libopus"),),
                description="Opus codec"),
    FeatureSpec("libvorbis", PKG, "vorbis", ("--enable-libvorbis",), True,
                description="Vorbis codec"),

    # Other libraries
    FeatureSpec("libass", PKG, "libass", ("--enable-libass",), True,
                description="ASS/SSA subtitle renderer"),
    FeatureSpec("libfreetype", PKG, "freetype2", ("--enable-libfreetype",), True,
                description="Font rendering for drawtext"),
    FeatureSpec("gnutls", PKG, "gnutls", ("--enable-gnutls",), True,
                description="TLS support"),
    FeatureSpec("sdl2", PKG, "sdl2", ("--enable-sdl2",), True,
                description="SDL2 output, needed to build ffplay"),
    FeatureSpec("libwebp", PKG, "libwebp", ("--enable-libwebp",),
                description="WebP image codec"),
)


def _index(registry):
    index = {}
    for position, spec in enumerate(registry):
        if spec.name in index:
            raise ValueError(f"Duplicate feature name in catalog: {spec.name}")
        index[spec.name] = position
    return index


_POSITIONS = _index(_REGISTRY)


def all_features():
    """All features in registration order."""
    return _REGISTRY


def lookup(name):
    try:
        return _REGISTRY[_POSITIONS[name]]
    except KeyError:
        raise UnknownRequestedFeature(name) from None


def default_feature_names():
    return frozenset(spec.name for spec in _REGISTRY if spec.default_requested)


def catalog_order(names):
    """Sort known feature names by registration order. Unknown names are dropped."""
    return [spec.name for spec in _REGISTRY if spec.name in names]

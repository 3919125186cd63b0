from .config import config
from .configure import configure
from .doctor import doctor
from .features import features
from .log import log
from .resolve import resolve
from .version import version

__all__ = [
    "config",
    "configure",
    "doctor",
    "features",
    "log",
    "resolve",
    "version",
]

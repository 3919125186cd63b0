"""Environment probes.

Every probe only reads the environment. A probe whose detection tool is
missing reports the feature as unavailable instead of failing the run.
"""
import os
import shlex
import shutil
from dataclasses import dataclass

from .catalog import FeatureSpec, ProbeStrategy
from .cli_logger import logger
from .errors import ProbeToolUnavailable
from .utils import run_shell_command

PKG_CONFIG = "pkg-config"
DEFAULT_COMPILER = "gcc"


@dataclass(frozen=True)
class ProbeResult:
    feature: FeatureSpec
    available: bool
    reason: str = ""


def _environ(env=None):
    return env if env is not None else os.environ


def _compiler(env=None):
    """The compiler command as an argv list. $CC may carry a launcher or flags."""
    return shlex.split(_environ(env).get("CC") or DEFAULT_COMPILER)


def _run_tool(command, env=None, input_data=None):
    try:
        return run_shell_command(command, env=env, input_data=input_data)
    except FileNotFoundError as e:
        raise ProbeToolUnavailable(command[0], str(e)) from e


def check_package(target, env=None):
    _, _, return_code = _run_tool([PKG_CONFIG, "--exists", target], env=env)
    if return_code == 0:
        return True, f"pkg-config found '{target}'"
    return False, f"pkg-config does not know '{target}'"


def check_header(target, env=None):
    compiler = _compiler(env)
    _, _, return_code = _run_tool(
        [*compiler, "-E", "-x", "c", "-"],
        env=env,
        input_data=f"#include <{target}>\n",
    )
    if return_code == 0:
        return True, f"{shlex.join(compiler)} can include <{target}>"
    return False, f"{shlex.join(compiler)} cannot include <{target}>"


def check_command(target, env=None):
    path = _environ(env).get("PATH", os.defpath)
    found = shutil.which(target, path=path)
    if found:
        return True, f"'{target}' found at {found}"
    return False, f"'{target}' not found on PATH"


_CHECKS = {
    ProbeStrategy.PACKAGE_METADATA: check_package,
    ProbeStrategy.HEADER_INCLUSION: check_header,
    ProbeStrategy.COMMAND_EXISTS: check_command,
    ProbeStrategy.ALWAYS_TRUE: lambda target, env=None: (True, "no external dependency"),
}


def probe(strategy, target, env=None):
    """Run one detection strategy. Returns an ``(available, reason)`` pair."""
    try:
        return _CHECKS[strategy](target, env=env)
    except ProbeToolUnavailable as e:
        return False, str(e)


def probe_feature(spec, env=None):
    """Probe a catalog feature, trying each alternative until one succeeds."""
    reasons = []
    for strategy, target in spec.probes():
        available, reason = probe(strategy, target, env=env)
        if available:
            logger.info(f"Found {spec.name}")
            return ProbeResult(spec, True, reason)
        reasons.append(reason)
    logger.warning(f"{spec.name} not found, skipping")
    return ProbeResult(spec, False, "; ".join(reasons))


def probe_tools_status(env=None):
    """Which detection tools can be invoked in this environment."""
    compiler = _compiler(env)[0]
    path = _environ(env).get("PATH", os.defpath)
    return {
        PKG_CONFIG: shutil.which(PKG_CONFIG, path=path),
        compiler: shutil.which(compiler, path=path),
    }

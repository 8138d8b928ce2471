"""Subprocess wrapper — the single mock seam for all tests."""

import os
import subprocess
from dataclasses import dataclass

from setup_rust_lambda import log


@dataclass
class Result:
    returncode: int
    stdout: str
    stderr: str


def _merge_env(env: dict[str, str] | None) -> dict[str, str] | None:
    if env is None:
        return None
    return {**os.environ, **env}


def run(args: list[str], env: dict[str, str] | None = None, cwd: str | None = None) -> Result:
    """Run a command and capture output. Does not raise on non-zero exit."""
    proc = subprocess.run(
        args,
        capture_output=True,
        text=True,
        env=_merge_env(env),
        cwd=cwd,
    )
    return Result(returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)


def run_streaming(
    args: list[str],
    env: dict[str, str] | None = None,
    cwd: str | None = None,
    echo: bool = True,
) -> int:
    """Run a command with passthrough stdout/stderr. Returns exit code."""
    if echo:
        log.command(args)
    proc = subprocess.run(
        args,
        env=_merge_env(env),
        cwd=cwd,
    )
    return proc.returncode


def spawn(args: list[str]) -> subprocess.Popen:
    """Start a command with both output streams piped as bytes.

    Nothing is echoed. Raises OSError when the OS refuses to start it.
    """
    return subprocess.Popen(
        args,
        stdin=None,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
    )

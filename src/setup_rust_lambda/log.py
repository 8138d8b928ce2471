"""Timestamped output + GitHub Actions workflow commands."""

import os
import sys
from datetime import datetime


def _timestamp() -> str:
    return datetime.now().strftime("%H:%M:%S")


def _is_github_actions() -> bool:
    return os.environ.get("GITHUB_ACTIONS") == "true"


def _is_runner_debug() -> bool:
    return os.environ.get("RUNNER_DEBUG") == "1"


def escape_data(value: str) -> str:
    """Escape a workflow command payload."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    """Escape a workflow command property value."""
    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def info(msg: str) -> None:
    print(f"[{_timestamp()}] {msg}", flush=True)


def header(title: str) -> None:
    line = f"── {title} " + "─" * max(0, 45 - len(title))
    if _is_github_actions():
        print(f"::group::{title}", flush=True)
    info(line)


def footer(title: str) -> None:
    line = f"── {title} " + "─" * max(0, 45 - len(title))
    info(line)
    if _is_github_actions():
        print("::endgroup::", flush=True)


def step(msg: str) -> None:
    info(f"  {msg}")


def success(msg: str) -> None:
    info(f"  ✓ {msg}")


def command(args: list[str]) -> None:
    """Echo a command line before it runs."""
    print(f"[command]{' '.join(args)}", flush=True)


def debug(msg: str) -> None:
    """Debug output. The runner only shows it when step debugging is on."""
    if _is_github_actions():
        print(f"::debug::{escape_data(msg)}", flush=True)
    elif _is_runner_debug():
        info(f"DEBUG: {msg}")


def warning(msg: str) -> None:
    if _is_github_actions():
        print(f"::warning::{escape_data(msg)}", flush=True)
    print(f"[{_timestamp()}] WARNING: {msg}", file=sys.stderr, flush=True)


def error(msg: str) -> None:
    if _is_github_actions():
        print(f"::error::{escape_data(msg)}", flush=True)
    print(f"[{_timestamp()}] ERROR: {msg}", file=sys.stderr, flush=True)

"""Map runner OS/arch names onto Rust target triple components."""

import platform
import sys

ARCH_NAMES = {
    "x64": "x86_64",
    "amd64": "x86_64",
    "arm64": "aarch64",
}

OS_NAMES = {
    "darwin": "apple-darwin",
    "linux": "unknown-linux-gnu",
    "win32": "pc-windows-msvc",
}


def map_arch(machine: str | None = None) -> str:
    """x64/amd64 -> x86_64, arm64 -> aarch64, anything else unchanged."""
    if machine is None:
        machine = platform.machine()
    return ARCH_NAMES.get(machine.lower(), machine)


def map_os(name: str | None = None) -> str:
    if name is None:
        name = sys.platform
    return OS_NAMES.get(name, name)


def is_windows(name: str | None = None) -> bool:
    return (sys.platform if name is None else name).startswith("win")


def exe_suffix(name: str | None = None) -> str:
    return ".exe" if is_windows(name) else ""

"""Setup phase: Rust toolchain, cargo-lambda and the cargo wrapper."""

import os
import shlex
import shutil
import stat
import sys
from contextlib import contextmanager

from setup_rust_lambda import actions, log, platforms, process, toolcache
from setup_rust_lambda.config import SetupConfig
from setup_rust_lambda.errors import InstallError, SetupError
from setup_rust_lambda.locator import BIN_PATH_VAR

RUSTUP_INIT_URL = "https://sh.rustup.rs"
CARGO_LAMBDA_REPO = "cargo-lambda/cargo-lambda"
CARGO_LAMBDA_TOOL = "cargo-lambda"

POSIX_WRAPPER = """\
#!/bin/sh
exec {python} -m setup_rust_lambda.wrapper "$@"
"""

WINDOWS_WRAPPER = '@"{python}" -m setup_rust_lambda.wrapper %*\r\n'


@contextmanager
def _group(title: str):
    log.header(title)
    try:
        yield
    finally:
        log.footer(title)


def _check(args: list[str]) -> None:
    """Run a command with live output; non-zero exit is an InstallError."""
    code = process.run_streaming(args)
    if code != 0:
        raise InstallError(f"{' '.join(args)} exited with code {code}")


def _make_executable(path: str) -> None:
    os.chmod(path, os.stat(path).st_mode | stat.S_IEXEC | stat.S_IXGRP | stat.S_IXOTH)


def install_rust_toolchain(version: str, target: str) -> None:
    """Ensure rustup, then install and select the toolchain and add the target."""
    log.debug(f"Installing Rust toolchain {version} with target {target}")
    if shutil.which("rustup") is None:
        log.step("rustup not found, bootstrapping with rustup-init")
        rustup_init = toolcache.download(RUSTUP_INIT_URL)
        _make_executable(rustup_init)
        _check([rustup_init, "-y", "--default-toolchain", "none", "--profile", "minimal"])
        actions.add_path(os.path.join(os.path.expanduser("~"), ".cargo", "bin"))

    _check(["rustup", "toolchain", "install", version])
    _check(["rustup", "default", version])
    _check(["rustup", "target", "add", target])

    try:
        result = process.run(["rustc", "--version"])
    except FileNotFoundError:
        log.warning("rustc not found on PATH after toolchain install")
        return
    if result.returncode == 0 and result.stdout.strip():
        log.success(result.stdout.strip())


def cargo_lambda_url(version: str, arch: str | None = None, os_name: str | None = None) -> str:
    arch = arch or platforms.map_arch()
    os_name = os_name or platforms.map_os()
    base = f"https://github.com/{CARGO_LAMBDA_REPO}/releases"
    if version == "latest":
        return f"{base}/latest/download/cargo-lambda-{arch}-{os_name}.tar.gz"
    return f"{base}/download/v{version}/cargo-lambda-v{version}-{arch}-{os_name}.tar.gz"


def install_cargo_lambda(version: str) -> str:
    """Install cargo-lambda into the tool cache and put it on PATH.

    Pinned versions already in the cache are reused; ``latest`` is always
    downloaded. Returns the cached directory.
    """
    arch = platforms.map_arch()
    if version != "latest":
        cached = toolcache.find(CARGO_LAMBDA_TOOL, version, arch)
        if cached:
            log.step(f"cargo-lambda {version} found in tool cache")
            actions.add_path(cached)
            return cached

    url = cargo_lambda_url(version, arch)
    log.debug(f"Downloading from {url}")
    archive = toolcache.download(url)

    log.debug("Extracting cargo-lambda tarball")
    extracted = toolcache.extract_tar(archive)

    cached = toolcache.cache_dir(extracted, CARGO_LAMBDA_TOOL, version, arch)
    actions.add_path(cached)
    log.debug(f"cargo-lambda installed and cached at {cached}")
    return cached


def write_wrapper(directory: str, windows: bool | None = None) -> str:
    """Write the launcher that runs the wrapper under the name ``cargo``."""
    if windows is None:
        windows = platforms.is_windows()
    if windows:
        path = os.path.join(directory, "cargo.cmd")
        with open(path, "w", newline="") as f:
            f.write(WINDOWS_WRAPPER.format(python=sys.executable))
        return path

    path = os.path.join(directory, "cargo")
    with open(path, "w") as f:
        f.write(POSIX_WRAPPER.format(python=shlex.quote(sys.executable)))
    _make_executable(path)
    return path


def install_wrapper() -> str:
    """Move cargo aside to cargo-bin and install the wrapper in its place.

    Exports CARGO_BIN_PATH for the wrapper. Returns the wrapper path.
    """
    cargo_path = shutil.which("cargo")
    if cargo_path is None:
        raise InstallError("cargo not found on PATH")
    cargo_dir = os.path.dirname(cargo_path)
    suffix = platforms.exe_suffix()

    source = os.path.join(cargo_dir, f"cargo{suffix}")
    target = os.path.join(cargo_dir, f"cargo-bin{suffix}")
    if os.path.exists(target):
        raise InstallError(f"{target} already exists; cargo is already wrapped")

    shutil.move(source, target)
    log.debug(f"Renamed {source} to {target}")

    wrapper_path = write_wrapper(cargo_dir)
    log.debug(f"Installed wrapper at {wrapper_path}")

    actions.export_variable(BIN_PATH_VAR, target)
    return wrapper_path


def run(config: SetupConfig) -> int:
    """Run every setup step. Returns exit code (0=success, 1=failure)."""
    try:
        with _group("rust toolchain"):
            install_rust_toolchain(config.rust_version, config.rust_target)
        with _group("cargo-lambda"):
            install_cargo_lambda(config.cargo_lambda_version)
        if config.cargo_wrapper:
            with _group("cargo wrapper"):
                install_wrapper()
    except SetupError as e:
        return actions.set_failed(str(e))

    log.success(
        f"Rust {config.rust_version} ({config.rust_target}), "
        f"cargo-lambda {config.cargo_lambda_version}"
    )
    return 0

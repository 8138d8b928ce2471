"""Download, extract and cache tool archives on the runner."""

import os
import shutil
import subprocess
import tarfile
import tempfile
import uuid

from setup_rust_lambda import platforms
from setup_rust_lambda.errors import InstallError

DOWNLOAD_TIMEOUT = 300


def _cache_root() -> str:
    return os.environ.get("RUNNER_TOOL_CACHE") or os.path.join(
        tempfile.gettempdir(), "setup-rust-lambda", "tool-cache"
    )


def _temp_root() -> str:
    return os.environ.get("RUNNER_TEMP") or tempfile.gettempdir()


def download(url: str, dest: str | None = None) -> str:
    """Download a URL to a local path using curl or wget. Returns the path."""
    if dest is None:
        dest = os.path.join(_temp_root(), str(uuid.uuid4()))
    if shutil.which("curl"):
        args = ["curl", "-fsSL", "-o", dest, url]
    elif shutil.which("wget"):
        args = ["wget", "-qO", dest, url]
    else:
        raise InstallError("curl or wget required")
    try:
        subprocess.run(args, check=True, timeout=DOWNLOAD_TIMEOUT)
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
        if os.path.exists(dest):
            os.unlink(dest)
        raise InstallError(f"Download of {url} failed: {e}") from e
    return dest


def extract_tar(archive: str, dest: str | None = None) -> str:
    """Extract a (gzipped) tarball into dest, or a fresh temp dir."""
    if dest is None:
        dest = os.path.join(_temp_root(), str(uuid.uuid4()))
    os.makedirs(dest, exist_ok=True)
    try:
        with tarfile.open(archive) as tar:
            if hasattr(tarfile, "data_filter"):
                tar.extractall(dest, filter="data")
            else:
                tar.extractall(dest)
    except (tarfile.TarError, OSError) as e:
        raise InstallError(f"Failed to extract {archive}: {e}") from e
    return dest


def _tool_path(tool: str, version: str, arch: str | None) -> str:
    return os.path.join(_cache_root(), tool, version, arch or platforms.map_arch())


def find(tool: str, version: str, arch: str | None = None) -> str | None:
    """Return the cached directory for tool/version/arch, or None."""
    path = _tool_path(tool, version, arch)
    if os.path.isdir(path) and os.path.exists(f"{path}.complete"):
        return path
    return None


def cache_dir(source: str, tool: str, version: str, arch: str | None = None) -> str:
    """Copy a directory into the tool cache and mark it complete."""
    path = _tool_path(tool, version, arch)
    marker = f"{path}.complete"
    if os.path.exists(marker):
        os.remove(marker)
    if os.path.isdir(path):
        shutil.rmtree(path)
    shutil.copytree(source, path)
    with open(marker, "w"):
        pass
    return path

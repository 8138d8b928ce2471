"""Setup inputs parsed into a SetupConfig."""

from dataclasses import dataclass

from setup_rust_lambda import actions

DEFAULT_RUST_VERSION = "stable"
DEFAULT_RUST_TARGET = "x86_64-unknown-linux-musl"
DEFAULT_CARGO_LAMBDA_VERSION = "latest"


@dataclass
class SetupConfig:
    rust_version: str = DEFAULT_RUST_VERSION
    rust_target: str = DEFAULT_RUST_TARGET
    cargo_lambda_version: str = DEFAULT_CARGO_LAMBDA_VERSION
    cargo_wrapper: bool = True

    @property
    def pinned_cargo_lambda(self) -> bool:
        return self.cargo_lambda_version != "latest"


def normalize_version(version: str) -> str:
    """Accept both ``1.2.3`` and ``v1.2.3``."""
    return version[1:] if version[:1] == "v" and version[1:2].isdigit() else version


def from_inputs(
    rust_version: str | None = None,
    rust_target: str | None = None,
    cargo_lambda_version: str | None = None,
    cargo_wrapper: bool | None = None,
) -> SetupConfig:
    """Build a SetupConfig.

    Order per field: explicit argument → action input (INPUT_*) → default.
    """
    if cargo_wrapper is None:
        cargo_wrapper = (
            actions.get_boolean_input("cargo-wrapper")
            if actions.get_input("cargo-wrapper")
            else True
        )
    version = (
        cargo_lambda_version
        or actions.get_input("cargo-lambda-version")
        or DEFAULT_CARGO_LAMBDA_VERSION
    )
    return SetupConfig(
        rust_version=rust_version or actions.get_input("rust-version") or DEFAULT_RUST_VERSION,
        rust_target=rust_target or actions.get_input("rust-target") or DEFAULT_RUST_TARGET,
        cargo_lambda_version=normalize_version(version),
        cargo_wrapper=cargo_wrapper,
    )

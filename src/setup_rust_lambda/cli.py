"""Click entry point for the setup step."""

import sys

import click

from setup_rust_lambda import __version__, config, install


@click.group()
@click.version_option(version=__version__, prog_name="setup-rust-lambda")
def main():
    """Set up Rust and cargo-lambda on a CI runner."""


@main.command()
@click.option("--rust-version", default=None, help="Toolchain to install (default: stable)")
@click.option("--rust-target", default=None, help="Target triple to add")
@click.option("--cargo-lambda-version", default=None, help="cargo-lambda release (default: latest)")
@click.option(
    "--cargo-wrapper/--no-cargo-wrapper",
    default=None,
    help="Wrap cargo to publish stdout, stderr and exitcode outputs",
)
def setup(rust_version, rust_target, cargo_lambda_version, cargo_wrapper):
    """Install the toolchain, cargo-lambda and optionally the cargo wrapper.

    Options left unset fall back to the action's inputs, then to defaults.
    """
    try:
        cfg = config.from_inputs(
            rust_version=rust_version,
            rust_target=rust_target,
            cargo_lambda_version=cargo_lambda_version,
            cargo_wrapper=cargo_wrapper,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    code = install.run(cfg)
    sys.exit(code)


if __name__ == "__main__":
    main()

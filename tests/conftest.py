"""Shared test fixtures."""

import os

import pytest

RUNNER_VARS = (
    "GITHUB_ACTIONS",
    "GITHUB_OUTPUT",
    "GITHUB_ENV",
    "GITHUB_PATH",
    "RUNNER_DEBUG",
    "CARGO_BIN_PATH",
)


@pytest.fixture(autouse=True)
def clean_runner_env(monkeypatch):
    """Tests start outside GitHub Actions, with no action inputs."""
    for name in RUNNER_VARS:
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.startswith("INPUT_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def github_output(tmp_path, monkeypatch):
    """Point GITHUB_OUTPUT at a temp file and return its path."""
    path = tmp_path / "github_output"
    path.write_text("")
    monkeypatch.setenv("GITHUB_OUTPUT", str(path))
    return path


@pytest.fixture
def mock_process(monkeypatch):
    """Mock process.run and process.run_streaming for tests."""
    from setup_rust_lambda import process

    calls = []
    responses = []
    codes = []

    def fake_run(args, env=None, cwd=None):
        calls.append(("run", args, env, cwd))
        if responses:
            return responses.pop(0)
        return process.Result(returncode=0, stdout="", stderr="")

    def fake_run_streaming(args, env=None, cwd=None, echo=True):
        calls.append(("run_streaming", args, env, cwd))
        if codes:
            return codes.pop(0)
        return 0

    monkeypatch.setattr(process, "run", fake_run)
    monkeypatch.setattr(process, "run_streaming", fake_run_streaming)

    return type("MockProcess", (), {"calls": calls, "responses": responses, "codes": codes})()


@pytest.fixture
def parse_file_commands():
    """Parser for name<<delimiter records written to GITHUB_OUTPUT / GITHUB_ENV."""
    return _parse_file_commands


def _parse_file_commands(text: str) -> dict[str, str]:
    values = {}
    lines = text.split("\n")
    i = 0
    while i < len(lines):
        line = lines[i]
        if "<<" not in line:
            i += 1
            continue
        name, delimiter = line.split("<<", 1)
        body = []
        i += 1
        while lines[i] != delimiter:
            body.append(lines[i])
            i += 1
        values[name] = "\n".join(body)
        i += 1
    return values

"""GitHub Actions runner interface: inputs, outputs, env and PATH files."""

import os
import uuid

from setup_rust_lambda import log

TRUE_VALUES = ("true", "True", "TRUE")
FALSE_VALUES = ("false", "False", "FALSE")


def _input_var(name: str) -> str:
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(name: str, required: bool = False) -> str:
    """Read an action input from its INPUT_* variable."""
    value = os.environ.get(_input_var(name), "").strip()
    if required and not value:
        raise ValueError(f"Input required and not supplied: {name}")
    return value


def get_boolean_input(name: str, required: bool = False) -> bool:
    """Read a YAML 1.2 core-schema boolean input."""
    value = get_input(name, required=required)
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ValueError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


def _file_command_record(name: str, value: str) -> str:
    """Build a multiline-safe ``name<<delimiter`` record."""
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name:
        raise ValueError(f"Unexpected input: name should not contain the delimiter {delimiter}")
    if delimiter in value:
        raise ValueError(f"Unexpected input: value should not contain the delimiter {delimiter}")
    return f"{name}<<{delimiter}\n{value}\n{delimiter}\n"


def _append(path: str, text: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(text)


def set_output(name: str, value: str) -> None:
    """Publish a step output for later workflow steps."""
    path = os.environ.get("GITHUB_OUTPUT")
    if path:
        _append(path, _file_command_record(name, value))
        return
    print(f"::set-output name={log.escape_property(name)}::{log.escape_data(value)}", flush=True)


def export_variable(name: str, value: str) -> None:
    """Set an environment variable for this process and later steps."""
    os.environ[name] = value
    path = os.environ.get("GITHUB_ENV")
    if path:
        _append(path, _file_command_record(name, value))
        return
    print(f"::set-env name={log.escape_property(name)}::{log.escape_data(value)}", flush=True)


def add_path(directory: str) -> None:
    """Prepend a directory to PATH for this process and later steps."""
    path = os.environ.get("GITHUB_PATH")
    if path:
        _append(path, directory + "\n")
    else:
        print(f"::add-path::{log.escape_data(directory)}", flush=True)
    os.environ["PATH"] = directory + os.pathsep + os.environ.get("PATH", "")


def set_failed(message: str) -> int:
    """Report a fatal error. Returns the exit status to use."""
    log.error(message)
    return 1

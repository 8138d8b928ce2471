"""Cargo wrapper — installed as ``cargo``, proxies to the real binary.

The real binary's stdout and stderr are mirrored to the wrapper's own
streams as they arrive and captured in memory. When it finishes, the
captured text and its exit code are published as the step outputs
``stdout``, ``stderr`` and ``exitcode``. A non-zero exit code is reported,
not raised: the workflow decides what to do with it.
"""

import sys
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import BinaryIO

from setup_rust_lambda import actions, log, process
from setup_rust_lambda.capture import OutputSink
from setup_rust_lambda.errors import (
    ConfigurationMissing,
    SetupError,
    SpawnFailure,
)
from setup_rust_lambda.locator import BinaryLocator

CHUNK_SIZE = 64 * 1024


class InvocationState(str, Enum):
    IDLE = "idle"
    RESOLVING = "resolving"
    SPAWNING = "spawning"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass
class ProxyInvocation:
    args: list[str]
    stdout: OutputSink
    stderr: OutputSink
    binary_path: str | None = None
    state: InvocationState = InvocationState.IDLE
    _exit_code: int | None = field(default=None, init=False, repr=False)

    @property
    def exit_code(self) -> int | None:
        return self._exit_code

    def complete(self, exit_code: int) -> None:
        if self._exit_code is not None:
            raise RuntimeError("exit code already recorded")
        self._exit_code = exit_code
        self.state = InvocationState.COMPLETED

    def outputs(self) -> dict[str, str]:
        return {
            "stdout": self.stdout.contents(),
            "stderr": self.stderr.contents(),
            "exitcode": str(self._exit_code),
        }


def _pump(stream, sink: OutputSink, failures: list[BaseException], proc) -> None:
    """Feed one pipe to its sink, chunk by chunk, until EOF."""
    try:
        for chunk in iter(lambda: stream.read1(CHUNK_SIZE), b""):
            sink.receive(chunk)
    except BaseException as e:
        failures.append(e)
        # Unblock the child and the other reader.
        proc.kill()
    finally:
        stream.close()


class ProxyExecutor:
    def __init__(
        self,
        locator: BinaryLocator,
        stdout: BinaryIO | None = None,
        stderr: BinaryIO | None = None,
    ):
        self.locator = locator
        self._stdout = stdout if stdout is not None else sys.stdout.buffer
        self._stderr = stderr if stderr is not None else sys.stderr.buffer

    def prepare(self, args: list[str]) -> ProxyInvocation:
        return ProxyInvocation(
            args=list(args),
            stdout=OutputSink(self._stdout),
            stderr=OutputSink(self._stderr),
        )

    def execute(self, invocation: ProxyInvocation) -> ProxyInvocation:
        """Resolve, spawn and wait. Single attempt, no timeout."""
        invocation.state = InvocationState.RESOLVING
        try:
            invocation.binary_path = self.locator.resolve()
        except ConfigurationMissing:
            invocation.state = InvocationState.FAILED
            raise

        invocation.state = InvocationState.SPAWNING
        try:
            proc = process.spawn([invocation.binary_path, *invocation.args])
        except OSError as e:
            invocation.state = InvocationState.FAILED
            raise SpawnFailure(
                f"failed to start {invocation.binary_path}: {e.strerror or e}"
            ) from e

        invocation.state = InvocationState.RUNNING
        failures: list[BaseException] = []
        readers = [
            threading.Thread(
                target=_pump, args=(proc.stdout, invocation.stdout, failures, proc), daemon=True
            ),
            threading.Thread(
                target=_pump, args=(proc.stderr, invocation.stderr, failures, proc), daemon=True
            ),
        ]
        for reader in readers:
            reader.start()
        exit_code = proc.wait()
        for reader in readers:
            reader.join()

        if failures:
            invocation.state = InvocationState.FAILED
            raise failures[0]

        invocation.complete(exit_code)
        return invocation

    def run(self, args: list[str]) -> ProxyInvocation:
        return self.execute(self.prepare(args))

    def publish(self, invocation: ProxyInvocation) -> None:
        for name, value in invocation.outputs().items():
            actions.set_output(name, value)


def main(argv: list[str] | None = None, environ=None) -> int:
    """Entry point for the installed ``cargo`` wrapper. Returns exit status."""
    args = sys.argv[1:] if argv is None else argv
    executor = ProxyExecutor(BinaryLocator(environ))
    try:
        invocation = executor.run(args)
    except SetupError as e:
        return actions.set_failed(str(e))

    try:
        executor.publish(invocation)
    except OSError as e:
        return actions.set_failed(f"failed to write step outputs: {e}")
    if invocation.exit_code != 0:
        log.debug(f"cargo command exited with code {invocation.exit_code}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Failure kinds that abort the setup step or the cargo wrapper.

A wrapped command exiting non-zero is not one of them: that exit code is
reported as a step output.
"""


class SetupError(RuntimeError):
    """Base class for failures reported via ``::error::`` with exit status 1."""


class ConfigurationMissing(SetupError):
    """The real binary path was never exported by the setup step."""


class SpawnFailure(SetupError):
    """The OS could not start the child process."""


class DownstreamWriteFailure(SetupError):
    """Mirroring captured output to the wrapper's own stream failed."""


class InstallError(SetupError):
    """A toolchain installation step failed."""

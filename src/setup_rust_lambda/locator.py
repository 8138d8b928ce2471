"""Find the real cargo binary the wrapper stands in for."""

import os
from collections.abc import Mapping

from setup_rust_lambda.errors import ConfigurationMissing

BIN_PATH_VAR = "CARGO_BIN_PATH"


class BinaryLocator:
    def __init__(self, environ: Mapping[str, str] | None = None, variable: str = BIN_PATH_VAR):
        self._environ = os.environ if environ is None else environ
        self.variable = variable

    def resolve(self) -> str:
        """Return the configured path unchanged.

        Raises ConfigurationMissing when it is unset or empty; running plain
        ``cargo`` instead would invoke the wrapper again.
        """
        path = self._environ.get(self.variable)
        if not path:
            raise ConfigurationMissing(
                f"{self.variable} is not set; run the setup step with cargo-wrapper enabled "
                "before invoking the cargo wrapper"
            )
        return path

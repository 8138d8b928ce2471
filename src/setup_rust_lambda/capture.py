"""Buffer a child's output stream while mirroring it to the live console."""

from typing import BinaryIO

from setup_rust_lambda.errors import DownstreamWriteFailure

ENCODING = "utf-8"


class OutputSink:
    """Append-only chunk buffer with an optional downstream writer.

    Chunks are kept exactly as received and written to ``writer`` unchanged,
    one write per chunk, in arrival order.
    """

    def __init__(self, writer: BinaryIO | None = None, encoding: str = ENCODING):
        self._chunks: list[bytes | str] = []
        self._writer = writer
        self._encoding = encoding

    def receive(self, chunk: bytes | str) -> None:
        self._chunks.append(chunk)
        if self._writer is None:
            return
        try:
            self._writer.write(chunk)
            self._writer.flush()
        except (OSError, ValueError) as e:
            raise DownstreamWriteFailure(f"failed to mirror output: {e}") from e

    def contents(self) -> str:
        """All chunks joined and decoded as text."""
        data = b"".join(
            c.encode(self._encoding) if isinstance(c, str) else c for c in self._chunks
        )
        return data.decode(self._encoding, errors="replace")

    def __len__(self) -> int:
        return len(self._chunks)

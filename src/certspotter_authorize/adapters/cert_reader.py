"""Certificate input adapter — a file path, or "-" for standard input."""

from __future__ import annotations

from pathlib import Path

import click
from railway import ErrorCode
from railway.result import Result

STDIN_SOURCE = "-"


class FileCertificateReader:
    """
    Read certificate bytes to completion.

    Implements the CertificateReader port. Standard input is a one-shot
    blocking read; there is no streaming or timeout.
    """

    def read(self, source: str) -> Result[bytes]:
        return Result.from_computation(
            lambda: self._do_read(source),
            ErrorCode.READ_ERROR,
            "error reading certificate",
        )

    def _do_read(self, source: str) -> bytes:
        if source == STDIN_SOURCE:
            return click.get_binary_stream("stdin").read()
        return Path(source).read_bytes()

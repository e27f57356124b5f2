"""
Ports — Protocol-based interfaces for infrastructure adapters.

These define WHAT the pipeline needs without specifying HOW:

  Domain ← Ports (protocols) ← Adapters (implementations)

Each port is a Protocol (structural typing) so adapters, and the stubs the
tests supply, satisfy the contract simply by implementing the method.

Stages, in pipeline order:
  1. CertificateReader   → raw bytes from a file or standard input
  2. CertificateDecoder  → PEM envelope or raw DER → DER
  3. CertificateParser   → DER → ParsedCertificate (TBS raw byte range)
  4. MarkerStore         → TBSFingerprint → marker file path
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from railway.result import Result

from certspotter_authorize.domain.models import ParsedCertificate, TBSFingerprint


@runtime_checkable
class CertificateReader(Protocol):
    """
    Port: read certificate bytes to completion.

    `source` is a filesystem path, or "-" for standard input.
    """

    def read(self, source: str) -> Result[bytes]: ...


@runtime_checkable
class CertificateDecoder(Protocol):
    """
    Port: normalize input into canonical DER.

    A single CERTIFICATE PEM block is unwrapped; input without PEM armor is
    returned unchanged. Any other PEM content is rejected.
    """

    def decode(self, raw: bytes) -> Result[bytes]: ...


@runtime_checkable
class CertificateParser(Protocol):
    """
    Port: parse DER into a structured certificate exposing its TBSCertificate.

    Parsing is structural only. No expiry, signature or chain checks.
    """

    def parse(self, der: bytes) -> Result[ParsedCertificate]: ...


@runtime_checkable
class MarkerStore(Protocol):
    """
    Port: idempotently record that a fingerprint has been handled.

    Returns the marker path whether this call created it or it already existed.
    Never deletes or modifies an existing marker.
    """

    def ensure_marker(self, fingerprint: TBSFingerprint) -> Result[Path]: ...

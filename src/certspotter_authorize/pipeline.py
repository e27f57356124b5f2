"""
Pipeline — the ROP pipeline from certificate bytes to marker file.

Domain layer. No I/O of its own. Reading, decoding, parsing and persistence
are injected via ports (Protocol interfaces); only the fingerprint is computed
here.

The pipeline connects stages via flat_map, forming a railway:

  read(source)
    → decode(raw)             PEM envelope or DER → DER
      → parse(der)            DER → TBSCertificate raw bytes
        → fingerprint(tbs)    SHA-256
          → ensure_marker(fp) marker path

Each stage returns Result[T]. Failures short-circuit automatically.
"""

from __future__ import annotations

from pathlib import Path

from railway.result import Result

from certspotter_authorize.domain.fingerprint import fingerprint
from certspotter_authorize.domain.models import TBSFingerprint
from certspotter_authorize.domain.ports import (
    CertificateDecoder,
    CertificateParser,
    CertificateReader,
    MarkerStore,
)


def compute_fingerprint(
    raw: bytes,
    decoder: CertificateDecoder,
    parser: CertificateParser,
) -> Result[TBSFingerprint]:
    """Decode and parse `raw`, then hash its TBSCertificate."""
    return (
        decoder.decode(raw)
        .flat_map(parser.parse)
        .map(lambda cert: fingerprint(cert.tbs_raw))
    )


def authorize_certificate(
    raw: bytes,
    decoder: CertificateDecoder,
    parser: CertificateParser,
    store: MarkerStore,
) -> Result[Path]:
    """
    Record that the certificate in `raw` has been handled.

    Returns Result[Path] with the marker path on success, or the failure
    of the first failing stage.
    """
    return compute_fingerprint(raw, decoder, parser).flat_map(store.ensure_marker)


def run_authorize(
    source: str,
    reader: CertificateReader,
    decoder: CertificateDecoder,
    parser: CertificateParser,
    store: MarkerStore,
) -> Result[Path]:
    """Read the certificate from `source` ("-" for stdin) and authorize it."""
    return reader.read(source).flat_map(
        lambda raw: authorize_certificate(raw, decoder, parser, store)
    )

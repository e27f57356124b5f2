"""
PEM decoder adapter — unwraps a single CERTIFICATE block, passes DER through.

Adapter layer. Implements the CertificateDecoder port using asn1crypto's PEM
support (the same library that handles the ASN.1 structure downstream).

Decision table:
  no PEM armor                      → input returned unchanged (assumed DER)
  armor present, no complete block  → input returned unchanged (assumed DER)
  complete block, label asn1crypto  → INVALID_INPUT_KIND naming the label
    cannot read (e.g. "Certificate")
  one block labeled CERTIFICATE     → decoded DER
  one block with any other label    → INVALID_INPUT_KIND naming the label
  more than one block               → INVALID_INPUT_KIND

Input that merely looks broken is never rejected here: malformed DER
surfaces later as a certificate parse failure.
"""

from __future__ import annotations

import re

import structlog
from asn1crypto import pem
from railway import ErrorCode
from railway.result import Result

log = structlog.get_logger()

CERTIFICATE_LABEL = "CERTIFICATE"

# Any label, with an END line carrying the same label. asn1crypto only
# recognizes upper-case alphanumeric labels.
_ANY_BLOCK = re.compile(
    rb"^-----BEGIN ([^\r\n]+?)-----[ \t]*\r?$.*?^-----END \1-----",
    re.MULTILINE | re.DOTALL,
)


class PemCertificateDecoder:
    """Implements the CertificateDecoder port."""

    def decode(self, raw: bytes) -> Result[bytes]:
        if not pem.detect(raw):
            return Result.success(raw)

        try:
            blocks = list(pem.unarmor(raw, multiple=True))
        except ValueError as e:
            log.debug("decoder.pem_unreadable", error=str(e))
            return self._undecoded(raw)

        if not blocks:
            return self._undecoded(raw)

        if len(blocks) != 1:
            return Result.failure(
                ErrorCode.INVALID_INPUT_KIND,
                f"input contains {len(blocks)} PEM blocks, expected exactly one {CERTIFICATE_LABEL}",
            )

        label, _headers, der = blocks[0]
        if label != CERTIFICATE_LABEL:
            return Result.failure(
                ErrorCode.INVALID_INPUT_KIND,
                f"PEM block type is {label!r}, expected {CERTIFICATE_LABEL}",
            )

        log.debug("decoder.pem_block", label=label, der_length=len(der))
        return Result.success(der)

    def _undecoded(self, raw: bytes) -> Result[bytes]:
        """
        asn1crypto found no usable block. A complete BEGIN/END pair with a
        foreign label is still a wrong-kind input; anything else is DER.
        """
        match = _ANY_BLOCK.search(raw)
        if match is None:
            log.debug("decoder.pem_incomplete")
            return Result.success(raw)

        label = match.group(1).decode("latin-1")
        if label == CERTIFICATE_LABEL:
            return Result.success(raw)
        return Result.failure(
            ErrorCode.INVALID_INPUT_KIND,
            f"PEM block type is {label!r}, expected {CERTIFICATE_LABEL}",
        )

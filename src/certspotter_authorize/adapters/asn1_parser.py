"""
ASN.1 certificate parser adapter — TBSCertificate extraction.

Adapter layer. Implements the CertificateParser port using asn1crypto.

  Certificate ::= SEQUENCE {
      tbsCertificate       TBSCertificate,     ← returned verbatim
      signatureAlgorithm   AlgorithmIdentifier,
      signatureValue       BIT STRING
  }

asn1crypto keeps the original encoding of every parsed element, so
`dump()` on the unmodified tbs_certificate child yields the exact byte range
from the input, tag and length included.

Parsing is structural only. Top-level trailing data and TBS fields with the
wrong tag are rejected; signatures, validity periods and extension contents
are never examined.
"""

from __future__ import annotations

import structlog
from asn1crypto import x509 as asn1_x509
from railway import ErrorCode
from railway.result import Result

from certspotter_authorize.domain.models import ParsedCertificate

log = structlog.get_logger()

# Touching each field forces asn1crypto to parse the TBS children headers
# against the X.509 schema; nested contents stay lazy.
_TBS_FIELDS = (
    "version",
    "serial_number",
    "signature",
    "issuer",
    "validity",
    "subject",
    "subject_public_key_info",
    "extensions",
)


class Asn1CertificateParser:
    """
    Parse DER into a ParsedCertificate.

    Implements the CertificateParser port.
    All exceptions are caught at this adapter boundary via Result.from_computation().
    """

    def parse(self, der: bytes) -> Result[ParsedCertificate]:
        return Result.from_computation(
            lambda: self._do_parse(der),
            ErrorCode.CERTIFICATE_PARSE_ERROR,
            "error parsing certificate",
        )

    def _do_parse(self, der: bytes) -> ParsedCertificate:
        """Internal parse, may raise (caught by from_computation)."""
        cert = asn1_x509.Certificate.load(der, strict=True)
        tbs = cert["tbs_certificate"]
        for name in _TBS_FIELDS:
            tbs[name]
        cert["signature_algorithm"]
        cert["signature_value"]

        tbs_raw = tbs.dump()
        log.debug("parser.tbs_extracted", der_length=len(der), tbs_length=len(tbs_raw))
        return ParsedCertificate(der=der, tbs_raw=tbs_raw)

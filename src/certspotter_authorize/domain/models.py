"""
Domain models — immutable values flowing through the authorization pipeline.

  DER bytes → ParsedCertificate (TBS byte range) → TBSFingerprint → marker path

All models are frozen dataclasses (immutable) following functional principles.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ParsedCertificate:
    """
    Structural view of a certificate: the DER input and its TBSCertificate.

    `tbs_raw` is the TBSCertificate element exactly as encoded in `der`
    (tag, length and contents), never re-encoded. A precertificate and the
    certificate issued from it share these bytes.
    """

    der: bytes = field(repr=False)
    tbs_raw: bytes = field(repr=False)


@dataclass(frozen=True, slots=True)
class TBSFingerprint:
    """
    SHA-256 digest of a TBSCertificate, the identity shared with the monitor.

    `shard` names the subdirectory under `certs/` holding the marker.
    """

    digest: bytes

    @classmethod
    def from_hex(cls, value: str) -> TBSFingerprint:
        return cls(bytes.fromhex(value))

    @property
    def hex(self) -> str:
        return self.digest.hex()

    @property
    def shard(self) -> str:
        return self.hex[0:2]

    def __str__(self) -> str:
        return self.hex

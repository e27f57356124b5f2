"""Fingerprinter — SHA-256 over the TBSCertificate bytes."""

from __future__ import annotations

import hashlib

from certspotter_authorize.domain.models import TBSFingerprint


def fingerprint(tbs_raw: bytes) -> TBSFingerprint:
    """Pure and deterministic: identical TBS bytes always give the same fingerprint."""
    return TBSFingerprint(hashlib.sha256(tbs_raw).digest())

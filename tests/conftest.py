"""
Shared test fixtures and helpers for the certspotter-authorize test suite.

Provides the reference certificate (self-signed, test.example.com) in PEM and
DER form, its known TBSCertificate SHA-256, and a factory for throwaway
certificates built with cryptography.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable
from pathlib import Path

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding
from cryptography.x509.oid import NameOID

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# sha256 of bytes 4..519 of test_cert.der (the TBSCertificate SEQUENCE)
TEST_CERT_TBS_SHA256 = "ed0aac7ff5e695e7048dacc4f4a1124931c1ce06cd1afb10fe0b8ca547eab674"
TEST_CERT_TBS_OFFSET = 4
TEST_CERT_TBS_LENGTH = 515


def fixture_path(filename: str) -> Path:
    """
    Resolve the absolute path to a test fixture file.

    Raises FileNotFoundError if the fixture does not exist.
    """
    path = FIXTURES_DIR / filename
    if not path.exists():
        raise FileNotFoundError(f"Test fixture not found: {path}")
    return path


@pytest.fixture()
def cert_pem() -> bytes:
    return fixture_path("test_cert.pem").read_bytes()


@pytest.fixture()
def cert_der() -> bytes:
    return fixture_path("test_cert.der").read_bytes()


@pytest.fixture()
def state_dir(tmp_path: Path) -> Path:
    """An empty state directory, as a fresh certspotter installation has."""
    path = tmp_path / "state"
    path.mkdir()
    return path


@pytest.fixture()
def make_certificate() -> Callable[..., x509.Certificate]:
    """Factory for self-signed EC certificates with a chosen common name."""

    def _make(common_name: str = "generated.example.com") -> x509.Certificate:
        key = ec.generate_private_key(ec.SECP256R1())
        name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, common_name)])
        now = dt.datetime.now(dt.timezone.utc)
        return (
            x509.CertificateBuilder()
            .subject_name(name)
            .issuer_name(name)
            .public_key(key.public_key())
            .serial_number(x509.random_serial_number())
            .not_valid_before(now)
            .not_valid_after(now + dt.timedelta(days=1))
            .add_extension(
                x509.SubjectAlternativeName([x509.DNSName(common_name)]),
                critical=False,
            )
            .sign(key, hashes.SHA256())
        )

    return _make


def to_pem(cert: x509.Certificate) -> bytes:
    return cert.public_bytes(Encoding.PEM)


def to_der(cert: x509.Certificate) -> bytes:
    return cert.public_bytes(Encoding.DER)

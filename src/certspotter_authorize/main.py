"""
Application entry point — the certspotter-authorize command.

Composition root: resolves settings, creates concrete adapters, runs the
pipeline once and turns the Result into an exit status.

This is the ONLY place where concrete classes are instantiated.
Everything else depends on Protocol interfaces.

Responsibilities:
  1. Parse the command line (click)
  2. Load settings from the environment and resolve the state directory
  3. Configure structlog (stderr, quiet by default)
  4. Wire adapters into the pipeline
  5. Report failures as one line naming the failing stage; stay silent on success
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TypeAlias

import click
import structlog
from pydantic import ValidationError
from railway import ErrorCode
from railway.failure import FailureDescription
from railway.result import Result

from certspotter_authorize import __source__, __version__
from certspotter_authorize.adapters.asn1_parser import Asn1CertificateParser
from certspotter_authorize.adapters.cert_reader import FileCertificateReader
from certspotter_authorize.adapters.marker_store import FilesystemMarkerStore
from certspotter_authorize.adapters.pem_decoder import PemCertificateDecoder
from certspotter_authorize.config import AppSettings
from certspotter_authorize.pipeline import run_authorize

PROG_NAME = "certspotter-authorize"

EXIT_FAILURE = 1
EXIT_USAGE = 2

STAGES: dict[ErrorCode, str] = {
    ErrorCode.READ_ERROR: "read",
    ErrorCode.INVALID_INPUT_KIND: "PEM-decode",
    ErrorCode.CERTIFICATE_PARSE_ERROR: "certificate-parse",
    ErrorCode.FINGERPRINT_TOO_SHORT: "hash",
    ErrorCode.STATE_WRITE_ERROR: "state-write",
    ErrorCode.CONFIGURATION_ERROR: "config",
}


def configure_structlog(log_level: str = "WARNING") -> None:
    """
    Configure structlog for human-readable output on stderr.

    stdout is reserved for --version; the default level keeps a successful
    run completely silent.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.WARNING)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
        cache_logger_on_first_use=False,
    )


def format_failure(error: FailureDescription) -> str:
    """One line: program, failing stage, message."""
    stage = STAGES.get(error.code, error.code.value)
    return f"{PROG_NAME}: {stage}: {error.message}"


_Adapters: TypeAlias = tuple[
    FileCertificateReader,
    PemCertificateDecoder,
    Asn1CertificateParser,
    FilesystemMarkerStore,
]


def _create_adapters(state_dir: Path) -> _Adapters:
    """Instantiate the four concrete adapters around one state directory."""
    return (
        FileCertificateReader(),
        PemCertificateDecoder(),
        Asn1CertificateParser(),
        FilesystemMarkerStore(state_dir),
    )


def _load_settings() -> Result[AppSettings]:
    try:
        return Result.success(AppSettings())
    except ValidationError as e:
        return Result.failure(ErrorCode.CONFIGURATION_ERROR, f"invalid settings: {e}", e)


def _resolve_state_dir(settings: AppSettings, override: Path | None) -> Result[Path]:
    if override is not None:
        return Result.success(override)
    return Result.from_computation(
        settings.resolve_state_dir,
        ErrorCode.CONFIGURATION_ERROR,
        "unable to determine state directory",
    )


@click.command(
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog="Use - as PATH to read the certificate from standard input.",
)
@click.option(
    "--cert",
    "-cert",
    "cert",
    metavar="PATH",
    help="Path to a PEM or DER encoded certificate (use - to read from stdin)",
)
@click.option(
    "--state-dir",
    "--state_dir",
    "-state_dir",
    "state_dir",
    type=click.Path(path_type=Path),
    default=None,
    metavar="PATH",
    help="State directory used by certspotter "
    "[default: $CERTSPOTTER_STATE_DIR, or ~/.certspotter]",
)
@click.option(
    "--version",
    "-version",
    "show_version",
    is_flag=True,
    help="Print version and exit",
)
@click.pass_context
def main(ctx: click.Context, cert: str | None, state_dir: Path | None, show_version: bool) -> None:
    """
    Compute TBSCertificate SHA-256 and create a .notified marker to suppress
    future certspotter notifications for certificates with the same
    TBSCertificate.
    """
    if show_version:
        click.echo(f"{PROG_NAME} version {__version__} ({__source__})")
        ctx.exit(0)

    if not cert:
        click.echo(ctx.get_help(), err=True)
        ctx.exit(EXIT_USAGE)

    settings_result = _load_settings()
    if settings_result.is_failure():
        click.echo(format_failure(settings_result.error()), err=True)
        ctx.exit(EXIT_FAILURE)
    settings = settings_result.value()

    configure_structlog(settings.log_level)
    log = structlog.get_logger()

    result = _resolve_state_dir(settings, state_dir).flat_map(
        lambda resolved: run_authorize(cert, *_create_adapters(resolved))
    )

    if result.is_failure():
        error = result.error()
        log.debug("authorize.failed", code=error.code.value, detail=error.full_stack_trace())
        click.echo(format_failure(error), err=True)
        ctx.exit(EXIT_FAILURE)

    log.info("authorize.marker_ready", path=str(result.value()))


if __name__ == "__main__":
    main()

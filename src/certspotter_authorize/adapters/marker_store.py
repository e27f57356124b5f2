"""
Filesystem marker store — the ".notified" files read by the Cert Spotter monitor.

Adapter layer. Implements the MarkerStore port.

Layout (must match the monitor byte for byte):

  <state_dir>/certs/<hex[0:2]>/.<hex>.notified

The marker is an empty file; its presence is the whole signal. Creation is
safe when several processes (or the monitor itself) race on the same path:
directory creation accepts an existing directory and the marker is created
with O_EXCL, where "already exists" counts as success. No locks, no retries.
Existing markers are never truncated or deleted.
"""

from __future__ import annotations

import os
from pathlib import Path

import structlog
from railway import ErrorCode
from railway.result import Result

from certspotter_authorize.domain.models import TBSFingerprint

log = structlog.get_logger()

CERTS_DIR = "certs"
MARKER_SUFFIX = ".notified"

_DIR_MODE = 0o777
_FILE_MODE = 0o666


def marker_path(state_dir: Path, fingerprint: TBSFingerprint) -> Result[Path]:
    """Derive the marker path for a fingerprint. Pure. Touches no files."""
    tbs_hex = fingerprint.hex
    if len(tbs_hex) < 2:
        return Result.failure(
            ErrorCode.FINGERPRINT_TOO_SHORT,
            f"TBS hash hex is too short: {len(tbs_hex)} characters",
        )
    return Result.success(state_dir / CERTS_DIR / tbs_hex[0:2] / f".{tbs_hex}{MARKER_SUFFIX}")


class FilesystemMarkerStore:
    """
    Create-if-absent marker files under a state directory.

    Implements the MarkerStore port.
    """

    def __init__(self, state_dir: Path) -> None:
        self._state_dir = state_dir

    def ensure_marker(self, fingerprint: TBSFingerprint) -> Result[Path]:
        return marker_path(self._state_dir, fingerprint).flat_map(self._ensure)

    def _ensure(self, path: Path) -> Result[Path]:
        if os.path.lexists(path):
            log.debug("marker.exists", path=str(path))
            return Result.success(path)

        return self._make_shard_dir(path.parent).flat_map(lambda _: self._create_marker(path))

    def _make_shard_dir(self, shard_dir: Path) -> Result[Path]:
        try:
            shard_dir.mkdir(mode=_DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            return Result.failure(
                ErrorCode.STATE_WRITE_ERROR,
                f"error creating directory {shard_dir}: {e.strerror or e}",
                e,
            )
        return Result.success(shard_dir)

    def _create_marker(self, path: Path) -> Result[Path]:
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, _FILE_MODE)
        except FileExistsError:
            log.debug("marker.exists", path=str(path), raced=True)
            return Result.success(path)
        except OSError as e:
            return Result.failure(
                ErrorCode.STATE_WRITE_ERROR,
                f"error creating marker file {path}: {e.strerror or e}",
                e,
            )
        os.close(fd)
        log.debug("marker.created", path=str(path))
        return Result.success(path)

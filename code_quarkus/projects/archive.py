"""Reproducible zip packaging of generated projects.

Two generations of the same project must produce byte-identical archives,
so nothing in the output may depend on the wall clock, the umask or the
directory listing order:
- entries are sorted by their archive path
- every entry carries the same fixed timestamp
- permissions are normalized to 0755 (directories, executables) or 0644
"""

from __future__ import annotations

import hashlib
import io
import logging
import stat
import zipfile
from datetime import datetime, timezone
from pathlib import Path

from code_quarkus.errors import ArchiveError

logger = logging.getLogger(__name__)

DIR_MODE = 0o755
EXECUTABLE_MODE = 0o755
FILE_MODE = 0o644

# Unix, so that external_attr carries permissions
CREATE_SYSTEM_UNIX = 3
MSDOS_DIRECTORY_FLAG = 0x10


def _zip_date_time(timestamp: datetime) -> tuple[int, int, int, int, int, int]:
    if timestamp.tzinfo is not None:
        timestamp = timestamp.astimezone(timezone.utc)
    if timestamp.year < 1980:
        raise ArchiveError(f"Archive timestamp before 1980: {timestamp.isoformat()}")
    return (
        timestamp.year,
        timestamp.month,
        timestamp.day,
        timestamp.hour,
        timestamp.minute,
        timestamp.second,
    )


def _entry_info(
    name: str,
    date_time: tuple[int, int, int, int, int, int],
    mode: int,
    is_dir: bool,
    compression: int,
) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(name, date_time=date_time)
    info.create_system = CREATE_SYSTEM_UNIX
    if is_dir:
        info.external_attr = ((stat.S_IFDIR | mode) << 16) | MSDOS_DIRECTORY_FLAG
        info.compress_type = zipfile.ZIP_STORED
    else:
        info.external_attr = (stat.S_IFREG | mode) << 16
        info.compress_type = compression
    return info


def collect_entries(
    source_dir: Path,
    include_root: bool = True,
) -> list[tuple[str, Path]]:
    """List the archive entries for a directory, sorted by archive path.

    Args:
        source_dir: Directory to package.
        include_root: Prefix entries with the directory name.

    Returns:
        (archive path, filesystem path) pairs. Directory archive paths end
        with '/'. Symbolic links are skipped.
    """
    prefix = f"{source_dir.name}/" if include_root else ""
    entries: list[tuple[str, Path]] = []
    if include_root:
        entries.append((prefix, source_dir))

    for path in source_dir.rglob("*"):
        if path.is_symlink():
            logger.warning("Skipping symbolic link: %s", path)
            continue
        relative = path.relative_to(source_dir).as_posix()
        if path.is_dir():
            entries.append((f"{prefix}{relative}/", path))
        elif path.is_file():
            entries.append((f"{prefix}{relative}", path))

    entries.sort(key=lambda entry: entry[0])
    return entries


def zip_directory(
    source_dir: Path,
    timestamp: datetime,
    include_root: bool = True,
    compression: int = zipfile.ZIP_DEFLATED,
) -> bytes:
    """Zip a directory reproducibly.

    Args:
        source_dir: Directory to package.
        timestamp: Modification time stamped on every entry.
        include_root: Prefix entries with the directory name.
        compression: Compression method for file entries.

    Returns:
        Archive content.

    Raises:
        ArchiveError: If the directory cannot be read or the timestamp
            cannot be represented in a zip file.
    """
    if not source_dir.is_dir():
        raise ArchiveError(f"Not a directory: {source_dir}")

    date_time = _zip_date_time(timestamp)
    buffer = io.BytesIO()

    try:
        with zipfile.ZipFile(buffer, "w") as zf:
            for name, path in collect_entries(source_dir, include_root=include_root):
                if name.endswith("/"):
                    info = _entry_info(name, date_time, DIR_MODE, True, compression)
                    zf.writestr(info, b"")
                    continue
                executable = bool(path.stat().st_mode & 0o111)
                mode = EXECUTABLE_MODE if executable else FILE_MODE
                info = _entry_info(name, date_time, mode, False, compression)
                zf.writestr(info, path.read_bytes())
    except OSError as e:
        raise ArchiveError(f"Failed to package {source_dir}: {e}") from e

    data = buffer.getvalue()
    logger.debug("Packaged %s (%d bytes)", source_dir, len(data))
    return data


def compute_archive_hash(data: bytes) -> str:
    """Compute the SHA-256 hex digest of archive content."""
    return hashlib.sha256(data).hexdigest()


__all__ = [
    "collect_entries",
    "compute_archive_hash",
    "zip_directory",
]

"""
Durable storage for uploaded resumes.

Files are written once under ``<root>/resumes`` as ``{epoch-millis}-{sanitized-name}``
and recorded relative to ``<root>``. There is no transaction spanning this store and
the database: a crash between writing a file and committing its applicant row leaves
an orphaned file behind.
"""
import logging
import re
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from fastapi import UploadFile

from ..config import MAX_RESUME_BYTES
from ..utils.error_handlers import FileStorageError, FileTooLargeError, FileTypeRejectedError

logger = logging.getLogger(__name__)

RESUME_SUBDIR = "resumes"
ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}
CHUNK_BYTES = 1024 * 1024  # 1MB
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9.-]")
# Same-millisecond uploads of the same filename get the next free millisecond.
_MAX_NAME_ATTEMPTS = 50


def sanitize_original_name(filename: str | None) -> str:
    """Replace every character outside [A-Za-z0-9.-] with an underscore."""
    return _UNSAFE_CHARS.sub("_", filename or "")


def generate_name(original: str | None, now_ms: int | None = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}-{sanitize_original_name(original)}"


@dataclass
class StoredResume:
    name: str
    path: Path
    relative_path: str
    size_bytes: int
    content_type: str | None
    kept: bool = field(default=False, repr=False)

    def keep(self) -> None:
        """Mark the file as owned by a committed record; claim() will not remove it."""
        self.kept = True


class ResumeStore:
    def __init__(self, root: str | Path, max_bytes: int = MAX_RESUME_BYTES):
        self.root = Path(root)
        self.directory = self.root / RESUME_SUBDIR
        self.max_bytes = max_bytes
        # Idempotent; safe to construct more than once per process.
        self.directory.mkdir(parents=True, exist_ok=True)

    def resolve(self, relative_path: str) -> Path:
        return self.root / Path(relative_path)

    def _check_declared(self, upload: UploadFile) -> None:
        if upload.content_type not in ALLOWED_CONTENT_TYPES:
            logger.info("Rejected resume %r with content type %r", upload.filename, upload.content_type)
            raise FileTypeRejectedError()
        declared = getattr(upload, "size", None)
        if declared is not None and declared > self.max_bytes:
            logger.info("Rejected resume %r: declared size %s > %s", upload.filename, declared, self.max_bytes)
            raise FileTooLargeError()

    def _open_new(self, original: str | None):
        now_ms = int(time.time() * 1000)
        for attempt in range(_MAX_NAME_ATTEMPTS):
            name = generate_name(original, now_ms + attempt)
            dest = self.directory / name
            try:
                return name, dest, open(dest, "xb")
            except FileExistsError:
                continue
        raise FileStorageError()

    async def save(self, upload: UploadFile) -> StoredResume:
        """Validate the declared type/size, then stream the upload to disk."""
        self._check_declared(upload)

        dest = None
        size = 0
        try:
            name, dest, out = self._open_new(upload.filename)
            with out:
                while True:
                    chunk = await upload.read(CHUNK_BYTES)
                    if not chunk:
                        break
                    size += len(chunk)
                    if size > self.max_bytes:
                        raise FileTooLargeError()
                    out.write(chunk)
        except (FileTooLargeError, FileStorageError):
            self._remove_partial(dest)
            raise
        except OSError as e:
            logger.error("Failed to store resume %r: %s", upload.filename, e)
            self._remove_partial(dest)
            raise FileStorageError() from e
        finally:
            try:
                await upload.close()
            except Exception as e:
                logger.warning("Failed to close upload %r: %s", upload.filename, e)

        stored = StoredResume(
            name=name,
            path=dest,
            relative_path=f"{RESUME_SUBDIR}/{name}",
            size_bytes=size,
            content_type=upload.content_type,
        )
        logger.info("Stored resume %s (%s bytes)", stored.relative_path, size)
        return stored

    def _remove_partial(self, dest: Path | None) -> None:
        if dest is None:
            return
        try:
            dest.unlink(missing_ok=True)
        except OSError as e:
            logger.error("Failed to remove partial upload %s: %s", dest, e)

    def delete(self, stored: StoredResume) -> bool:
        """Best-effort removal. Returns False (and logs) instead of raising."""
        try:
            stored.path.unlink(missing_ok=True)
        except OSError as e:
            logger.error("File cleanup error for %s: %s", stored.relative_path, e)
            return False
        logger.info("Removed orphaned resume %s", stored.relative_path)
        return True

    @contextmanager
    def claim(self, stored: StoredResume | None):
        """
        Hold a stored file for the duration of a request.

        Unless ``stored.keep()`` is called inside the block, the file is deleted on
        exit, whether the block returned or raised.
        """
        try:
            yield stored
        finally:
            if stored is not None and not stored.kept:
                self.delete(stored)

from pathlib import Path

from constructia.storage.base import BaseFileStorage
from constructia.storage.exceptions import StorageError, StorageNotFoundError


class LocalFileStorage(BaseFileStorage):
    """Stores document files on the local filesystem under a fixed root."""

    FILES_ROOT = Path("/app/files")

    def __init__(self, files_root: Path | None = None) -> None:
        root = files_root if files_root is not None else self.FILES_ROOT
        self._files_root = root.resolve()

    def read(self, path: str) -> bytes:
        target = self._resolve_path(path)
        if not target.is_file():
            raise StorageNotFoundError(f"File not found: {path}")
        try:
            return target.read_bytes()
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}") from exc

    def remove(self, path: str) -> None:
        target = self._resolve_path(path)
        try:
            target.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Failed to remove {path}: {exc}") from exc

    def upload(self, path: str, data: bytes, content_type: str) -> None:
        _ = content_type
        target = self._resolve_path(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc

    def _resolve_path(self, path: str) -> Path:
        """Map a storage path onto the root, refusing anything that escapes it."""
        target = (self._files_root / path.lstrip("/")).resolve()
        if not target.is_relative_to(self._files_root):
            raise StorageError(f"Path escapes storage root: {path}")
        return target

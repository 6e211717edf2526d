"""Local storage for uploaded video files."""

import hashlib
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from video_critic.config import settings
from video_critic.domain.errors import InvalidInput
from video_critic.logging import get_logger

logger = get_logger(__name__)


@dataclass
class StoredUpload:
    """Metadata for a stored upload."""

    file_name: str
    file_path: Path
    file_size_bytes: int
    checksum: str


class UploadStorage:
    """Writes uploaded files to a local directory.

    Files are stored as ``<unix-millis>-<original name>`` so repeated uploads
    of the same name never collide.
    """

    def __init__(
        self,
        base_path: Path | None = None,
        max_size_bytes: int | None = None,
    ) -> None:
        self.base_path = base_path or Path(settings.upload_dir)
        self.max_size_bytes = (
            max_size_bytes
            if max_size_bytes is not None
            else settings.max_upload_size_mb * 1024 * 1024
        )

    def save(self, file_name: str, data: bytes) -> StoredUpload:
        """Persist an upload.

        Raises:
            InvalidInput: Empty name, empty file, or file over the size limit
        """
        safe_name = Path(file_name).name
        if not safe_name:
            raise InvalidInput("Video file is required")
        if not data:
            raise InvalidInput("Uploaded file is empty")
        if len(data) > self.max_size_bytes:
            raise InvalidInput(
                f"File exceeds the {self.max_size_bytes // (1024 * 1024)}MB upload limit"
            )

        self.base_path.mkdir(parents=True, exist_ok=True)
        stamp = int(datetime.now().timestamp() * 1000)
        file_path = self.base_path / f"{stamp}-{safe_name}"
        while file_path.exists():
            stamp += 1
            file_path = self.base_path / f"{stamp}-{safe_name}"
        file_path.write_bytes(data)

        logger.info(
            "upload_stored",
            file_path=str(file_path),
            file_size=len(data),
        )

        return StoredUpload(
            file_name=safe_name,
            file_path=file_path,
            file_size_bytes=len(data),
            checksum=hashlib.sha256(data).hexdigest(),
        )

    def delete(self, file_path: Path) -> None:
        """Remove a stored upload; a missing file is ignored."""
        file_path.unlink(missing_ok=True)
        logger.info("upload_deleted", file_path=str(file_path))

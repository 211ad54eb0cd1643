"""Resume artifact storage on the local filesystem."""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from prepcoach.core.config import settings
from prepcoach.core.exceptions import UploadError

logger = logging.getLogger(__name__)


@dataclass
class ResumeFile:
    """An uploaded resume as received from the client."""

    filename: str
    content: bytes
    content_type: Optional[str] = None


class ResumeStorage:
    """Stores resume files under ``UPLOAD_DIR`` and serves them from ``UPLOAD_URL_PREFIX``."""

    def __init__(self, upload_dir: Optional[str] = None, url_prefix: Optional[str] = None):
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR)
        self.url_prefix = (url_prefix or settings.UPLOAD_URL_PREFIX).rstrip("/")

    async def upload(self, user_id: str, filename: str, content: bytes) -> str:
        """Save a file and return its URL."""
        stored_name = f"{user_id}_{uuid.uuid4().hex}_{Path(filename).name}"
        try:
            self.upload_dir.mkdir(parents=True, exist_ok=True)
            with open(self.upload_dir / stored_name, "wb") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Error saving resume {filename}: {e}")
            raise UploadError("Failed to upload resume") from e

        return f"{self.url_prefix}/{stored_name}"

    async def delete(self, url: str) -> bool:
        """Delete a stored file. Returns False instead of raising when it cannot be removed."""
        prefix = f"{self.url_prefix}/"
        if not url.startswith(prefix):
            logger.warning(f"Not a stored resume URL: {url}")
            return False

        path = self.upload_dir / Path(url[len(prefix):]).name
        try:
            path.unlink()
            return True
        except OSError as e:
            logger.warning(f"Could not delete resume {path}: {e}")
            return False


def get_resume_storage() -> ResumeStorage:
    """Dependency for the resume storage collaborator."""
    return ResumeStorage()

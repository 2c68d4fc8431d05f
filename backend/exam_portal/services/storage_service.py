"""
Local file storage for uploaded materials.

Files live under UPLOAD_DIR and are served back through the ``/uploads``
static mount. Stored names are ``<upload time in ms>-<8 random hex>-<sanitized name>``
so two uploads of the same file never share a path.
"""

import re
import time
import uuid
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import aiofiles
import aiofiles.os

from exam_portal.core.config import settings
from exam_portal.core.logging_config import logger

URL_PREFIX = "/uploads/"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass
class StoredFile:
    stored_name: str
    url: str
    size: int


def sanitize_filename(filename: str) -> str:
    """Drop any directory part and replace characters unsafe on disk or in URLs"""
    name = Path(filename.replace("\\", "/")).name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "file"


class LocalStorage:
    """Writes uploads to a directory on the local filesystem"""

    def __init__(self, upload_dir: Path):
        self.upload_dir = Path(upload_dir)
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    async def save(self, filename: str, content: bytes) -> StoredFile:
        stored_name = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{sanitize_filename(filename)}"
        path = self.upload_dir / stored_name

        async with aiofiles.open(path, "xb") as f:
            await f.write(content)

        logger.info(f"[Storage] Saved {stored_name} ({len(content)} bytes)")
        return StoredFile(stored_name=stored_name, url=f"{URL_PREFIX}{stored_name}", size=len(content))

    async def delete(self, url: str) -> bool:
        """Remove a previously stored file. Returns False if nothing was removed."""
        if not url.startswith(URL_PREFIX):
            return False

        path = self.upload_dir / sanitize_filename(url[len(URL_PREFIX):])
        try:
            await aiofiles.os.remove(path)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"[Storage] Could not delete {path}: {e}")
            return False


@lru_cache()
def get_storage() -> LocalStorage:
    """Process-wide storage rooted at settings.UPLOAD_DIR (FastAPI dependency)"""
    return LocalStorage(settings.UPLOAD_DIR)

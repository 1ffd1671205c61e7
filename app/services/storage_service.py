import asyncio
import logging
import os
import time
import uuid

from app.config import settings

logger = logging.getLogger(__name__)


class LocalBlobStore:
    """Stores uploaded map images on disk; files are served under ``/uploads``."""

    def __init__(self, root: str, base_url: str):
        self.root = root
        self.base_url = base_url.rstrip("/")

    def make_key(self, filename: str) -> str:
        ext = os.path.splitext(filename or "")[1].lower()
        return f"mapas/mapa-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{ext}"

    async def save(self, content: bytes, filename: str) -> str:
        key = self.make_key(filename)
        path = os.path.join(self.root, *key.split("/"))
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._write, path, content)
        logger.info("Imagem gravada: %s (%d bytes)", key, len(content))
        return f"{self.base_url}/uploads/{key}"

    @staticmethod
    def _write(path: str, content: bytes) -> None:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "wb") as f:
            f.write(content)


def get_blob_store() -> LocalBlobStore:
    return LocalBlobStore(settings.UPLOAD_DIR, settings.BASE_URL)

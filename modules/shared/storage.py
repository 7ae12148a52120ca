import os
import json
import copy
import asyncio
import logging
import tempfile
from contextlib import asynccontextmanager

from starlette.concurrency import run_in_threadpool

from modules.shared.errors import StorageError

logger = logging.getLogger(__name__)


class JsonFileStore:
    """
    One JSON document on disk, read and replaced as a whole.
    Writes go to a temp file in the same directory and are swapped in with
    os.replace, so a reader never sees a half-written document.
    """

    def __init__(self, path: str, default):
        self.path = path
        self._default = default
        self._lock = asyncio.Lock()

    def _ensure_dir(self):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)

    def _read(self):
        if not os.path.exists(self.path):
            return copy.deepcopy(self._default)
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {self.path}: {e}")
            raise StorageError(f"Could not read {os.path.basename(self.path)}") from e
        if data is None:
            return copy.deepcopy(self._default)
        return data

    def _write(self, data):
        try:
            self._ensure_dir()
            fd, tmp_path = tempfile.mkstemp(dir=os.path.dirname(os.path.abspath(self.path)), suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.remove(tmp_path)
                raise
        except OSError as e:
            logger.error(f"Failed to write {self.path}: {e}")
            raise StorageError(f"Could not write {os.path.basename(self.path)}") from e

    async def read(self):
        logger.debug(f"Reading document {self.path}")
        return await run_in_threadpool(self._read)

    async def write(self, data):
        logger.debug(f"Writing document {self.path}")
        await run_in_threadpool(self._write, data)

    @asynccontextmanager
    async def locked(self):
        """
        Serialize read-modify-write cycles on this document.
        Use with 'async with store.locked():'
        """
        async with self._lock:
            yield


def data_path(data_dir: str, filename: str) -> str:
    return os.path.join(data_dir, filename)

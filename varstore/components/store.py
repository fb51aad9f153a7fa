import json
import os
import tempfile
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from filelock import FileLock
from pydantic import ValidationError

from varstore.logger import log
from .errors import StorageError
from .models import ConfigurationDocument

class VariableStore:
    """
    the json document on disk plus the locks guarding it.
    every read is a full read and every write replaces the whole file,
    so all access goes through `locked()`.
    """

    def __init__(self, path: str):
        self.path = os.path.abspath(path)
        self._lock = threading.Lock()
        self._file_lock = FileLock(f"{self.path}.lock")

    def ensure_exists(self) -> bool:
        """create an empty document if there is none. returns True if one was written."""
        if os.path.exists(self.path):
            return False
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with self.locked():
            # another process may have won the race while we waited
            if os.path.exists(self.path):
                return False
            self._write(ConfigurationDocument())
        log.info("created variable document", extra={"path": self.path})
        return True

    @contextmanager
    def locked(self) -> Iterator[None]:
        # the thread lock keeps threads of this process in order,
        # the file lock does the same for other processes
        with self._lock:
            try:
                self._file_lock.acquire()
            except OSError as e:
                raise StorageError(f"could not lock {self.path}: {e}", path=self.path) from e
            try:
                yield
            finally:
                self._file_lock.release()

    def read(self) -> ConfigurationDocument:
        with self.locked():
            return self._read()

    def update(self, mutate: Callable[[ConfigurationDocument], None]) -> ConfigurationDocument:
        """read-modify-write under the lock"""
        with self.locked():
            document = self._read()
            mutate(document)
            self._write(document)
        return document

    def _read(self) -> ConfigurationDocument:
        if not os.path.exists(self.path):
            return ConfigurationDocument()
        try:
            # windows editors like to prepend a bom
            with open(self.path, "r", encoding="utf-8-sig") as f:
                text = f.read()
        except OSError as e:
            raise StorageError(f"could not read {self.path}: {e}", path=self.path) from e

        # a zero-byte file is what a crashed external writer leaves behind
        if not text.strip():
            return ConfigurationDocument()

        try:
            return ConfigurationDocument.model_validate(json.loads(text))
        except json.JSONDecodeError as e:
            raise StorageError(f"{self.path} is not valid json: {e}", path=self.path) from e
        except ValidationError as e:
            raise StorageError(f"{self.path} has an unexpected shape: {e}", path=self.path) from e

    def _write(self, document: ConfigurationDocument):
        directory = os.path.dirname(self.path) or "."
        tmp_path: Optional[str] = None
        try:
            fd, tmp_path = tempfile.mkstemp(prefix=".varstore-", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(document.to_json())
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise StorageError(f"could not write {self.path}: {e}", path=self.path) from e
        finally:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)

"""
variable resolution for varstore
a saved value in the document wins, the process environment is the fallback
"""

import os
from typing import Callable, Dict, Mapping, Optional, TypeVar

from varstore import config
from varstore.logger import log
from . import environment
from .errors import MissingVariableError, StorageError, VariableFormatError
from .models import ConfigurationDocument
from .store import VariableStore

T = TypeVar("T")

class VariableResolver:
    def __init__(self, store: VariableStore, environ: Optional[Mapping[str, str]] = None):
        self.store = store
        self._environ = environ

    @classmethod
    def open(cls, path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None) -> "VariableResolver":
        """
        build a resolver for the document at `path` and make sure it exists.
        a document that can't be created is logged, not raised; lookups
        then fall back to the environment and writes fail on their own.
        """
        store = VariableStore(path or config.document_path())
        try:
            store.ensure_exists()
        except (OSError, StorageError) as e:
            log.error("could not create variable document", extra={"path": store.path, "error": str(e)})
        return cls(store, environ)

    @property
    def environ(self) -> Mapping[str, str]:
        # os.environ is looked up per call so later changes are seen
        return os.environ if self._environ is None else self._environ

    # --- saved values ---

    def _read_document(self) -> Optional[ConfigurationDocument]:
        try:
            return self.store.read()
        except StorageError as e:
            log.warning("variable document unreadable, using environment", extra={"path": self.store.path, "error": str(e)})
            return None

    def get_saved_value(self, name: str) -> Optional[str]:
        document = self._read_document()
        if document is None:
            return None
        return document.saved_value(name)

    def saved_variables(self) -> Dict[str, str]:
        """every saved variable as strings. unlike lookups this raises StorageError."""
        return self.store.read().saved_variables()

    # --- optional-aware getters ---

    def _resolve(self, name: str, required: bool, parse: Callable[[str], Optional[T]], type_name: str) -> Optional[T]:
        saved = self.get_saved_value(name)
        if saved is not None:
            value = parse(saved)
            if value is not None:
                return value
            log.warning(f"saved value is not a valid {type_name}, trying environment", extra={"variable": name})

        env_value = self.environ.get(name)
        if env_value is not None:
            value = parse(env_value)
            if value is None:
                raise VariableFormatError(name, env_value, type_name)
            return value

        if required:
            raise MissingVariableError(name)
        return None

    def get_string(self, name: str, required: bool = True) -> Optional[str]:
        return self._resolve(name, required, lambda text: text, "string")

    def get_int(self, name: str, required: bool = True) -> Optional[int]:
        return self._resolve(name, required, environment.parse_int, "int")

    def get_bool(self, name: str, required: bool = True) -> Optional[bool]:
        return self._resolve(name, required, environment.parse_bool, "bool")

    # --- legacy environment-only getters ---

    get_required_string = staticmethod(environment.get_required_string_from_env)
    get_required_int = staticmethod(environment.get_required_int_from_env)
    get_required_bool = staticmethod(environment.get_required_bool_from_env)

    # --- persistence ---

    def save_variable(self, key: str, value: str):
        if not isinstance(value, str):
            raise TypeError(f"value for {key} must be a string, got {type(value).__name__}")
        try:
            self.store.update(lambda document: document.set_variable(key, value))
        except StorageError as e:
            log.error("could not save variable", extra={"variable": key, "path": self.store.path, "error": str(e)})
            raise
        log.info("saved variable", extra={"variable": key})

    def load_from_environment(self) -> int:
        """copy every environment variable into the document. returns how many were written."""
        snapshot = dict(self.environ)

        def _apply(document: ConfigurationDocument):
            for key, value in snapshot.items():
                document.set_variable(key, value)

        try:
            self.store.update(_apply)
        except StorageError as e:
            log.error("could not write environment snapshot", extra={"path": self.store.path, "error": str(e)})
            raise
        log.info("environment snapshot written", extra={"variables": len(snapshot)})
        return len(snapshot)

"""
error types raised by varstore
missing and format errors are always raised; storage errors only on writes
"""

from typing import Optional


class VarstoreError(Exception):
    """base class for every varstore error"""


class MissingVariableError(VarstoreError, LookupError):
    """a required variable is in neither the document nor the environment"""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"ENV variable {name} is missing!")


class VariableFormatError(VarstoreError, ValueError):
    """a variable exists but does not parse as the requested type"""

    def __init__(self, name: str, value: str, expected: str):
        self.name = name
        self.value = value
        self.expected = expected
        super().__init__(f"ENV variable {name} is not a valid {expected}! Value '{value}'")


class StorageError(VarstoreError):
    """the variable document could not be read, parsed or written"""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)

"""
environment-only getters and the parsers shared with the resolver
"""

import os
import re
from typing import Mapping, Optional

from .errors import MissingVariableError, VariableFormatError

# optional sign, decimal digits, surrounding whitespace allowed
_INT_RE = re.compile(r"^\s*[+-]?[0-9]+\s*$")

def parse_int(text: str) -> Optional[int]:
    """base-10 integer or None if the text isn't one"""
    if not _INT_RE.match(text):
        return None
    return int(text.strip())

def parse_bool(text: str) -> Optional[bool]:
    """only the literals true/false, any case"""
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    return None

def _environ(environ: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    return os.environ if environ is None else environ

def get_required_string_from_env(name: str, environ: Optional[Mapping[str, str]] = None) -> str:
    value = _environ(environ).get(name)
    if value is None:
        raise MissingVariableError(name)
    return value

def get_required_int_from_env(name: str, environ: Optional[Mapping[str, str]] = None) -> int:
    text = get_required_string_from_env(name, environ)
    value = parse_int(text)
    if value is None:
        raise VariableFormatError(name, text, "int")
    return value

def get_required_bool_from_env(name: str, environ: Optional[Mapping[str, str]] = None) -> bool:
    text = get_required_string_from_env(name, environ)
    value = parse_bool(text)
    if value is None:
        raise VariableFormatError(name, text, "bool")
    return value

import json
import os
import pathlib

# root dir is two levels up from this file
ROOT_DIR = pathlib.Path(__file__).resolve().parents[1]
VALUES_PATH = ROOT_DIR / "values.json"

# where the variable document lives unless a path is passed explicitly
DEFAULT_DOCUMENT_PATH = "config/environment.json"

# lazy load json config
_json_cache = {}
if VALUES_PATH.exists():
    try:
        with open(VALUES_PATH, "r") as f:
            _json_cache = json.load(f)
    except (OSError, ValueError):
        # ignore malformed json, act like empty config
        _json_cache = {}
    if not isinstance(_json_cache, dict):
        _json_cache = {}

def get(key: str, default=None):
    # returns value from env or json fallback
    return os.getenv(key) or _json_cache.get(key, default)

def document_path() -> str:
    """path of the variable document for this process"""
    return get("VARSTORE_PATH", DEFAULT_DOCUMENT_PATH)

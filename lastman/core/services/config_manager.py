"""
config_manager.py
-----------------
Loads tutorial and game config files by name.

Features:
- .json files, and .py files exposing a DEFAULT_CONFIG dict
- Name lookup through an index built once: the working directory
  (top level only) first, then the packaged lastman/config tree
- Defaults merged recursively under the loaded values
- '_notes' keys are documentation only and never reach the caller
"""

import importlib.util
import json
import os
from typing import Dict, Optional

from lastman.core.debug.debug_logger import DebugLogger


# ===========================================================
# Search Path
# ===========================================================

DATA_ROOT = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "config")

SEARCH_DIRS = [
    ".",
    DATA_ROOT,
]

CONFIG_EXTENSIONS = (".json", ".py")

_FILE_INDEX: Optional[Dict[str, str]] = None


def _candidates(directory):
    """Yield (name, path) for config files; the working directory is not walked."""
    if directory == ".":
        for name in sorted(os.listdir(directory)):
            yield name, os.path.join(directory, name)
        return
    for root, _, files in os.walk(directory):
        for name in sorted(files):
            yield name, os.path.join(root, name)


def build_file_index():
    """Map bare filenames to paths. The first directory to provide a name wins."""
    global _FILE_INDEX
    index = {}
    for directory in SEARCH_DIRS:
        if not os.path.isdir(directory):
            continue
        for name, path in _candidates(directory):
            if name.endswith(CONFIG_EXTENSIONS):
                index.setdefault(name, path)
    _FILE_INDEX = index
    DebugLogger.init(f"Config index: {len(index)} files", category="loading")


def rebuild_file_index():
    """Forget the index and scan again (after adding a config file at runtime)."""
    global _FILE_INDEX
    _FILE_INDEX = None
    build_file_index()


def _resolve_search_path(filename):
    """Indexed path for `filename`, trying each known extension; else `filename` unchanged."""
    if _FILE_INDEX is None:
        build_file_index()

    name = filename.replace("\\", "/").lstrip("/")
    for key in (name,) + tuple(name + ext for ext in CONFIG_EXTENSIONS):
        if key in _FILE_INDEX:
            return _FILE_INDEX[key]
    return filename


# ===========================================================
# Loading
# ===========================================================

def load_config(filename, default_dict=None, strict=False):
    """
    Load a config file and merge it over defaults.

    Args:
        filename: Bare name ("tutorial", "tutorial.json") or an absolute path
        default_dict: Values used where the file is silent
        strict: Raise instead of falling back when the file can't be read

    Returns:
        dict: default_dict with the file's values merged in

    Raises:
        FileNotFoundError: only when strict and the file is missing or unreadable
    """
    defaults = default_dict or {}
    path = filename if os.path.isabs(filename) else _resolve_search_path(filename)
    loader = _load_py_module if path.endswith(".py") else _load_json

    try:
        data = loader(path)
    except (json.JSONDecodeError, OSError) as e:
        if strict:
            raise FileNotFoundError(f"Config not found: {filename}") from e
        DebugLogger.warn(f"Failed to load {path}: {e} - using defaults", category="loading")
        return dict(defaults)

    return _merge_dicts(defaults, data)


def _load_json(path):
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    DebugLogger.system(f"Loaded {os.path.basename(path)}", category="loading")
    return data


def _load_py_module(path):
    """Execute a .py config and return its DEFAULT_CONFIG (empty if it has none)."""
    if not os.path.exists(path):
        raise FileNotFoundError(path)
    try:
        spec = importlib.util.spec_from_file_location("lastman_config_module", path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    except (ImportError, SyntaxError) as e:
        DebugLogger.warn(f"Failed to load Python config {path}: {e}", category="loading")
        return {}
    DebugLogger.system(f"Loaded {os.path.basename(path)} (Python)", category="loading")
    return getattr(module, "DEFAULT_CONFIG", {})


def _merge_dicts(default, override):
    """Recursive merge; nested dicts are merged, everything else replaced."""
    merged = dict(default)
    for key, value in override.items():
        if key == "_notes":
            continue
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged

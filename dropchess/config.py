from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional


ROOT_DIR = Path(__file__).resolve().parent.parent
SETTINGS_PATH = ROOT_DIR / "dropchess_settings.json"

DEFAULT_RULES_MODE = "full"
VALID_RULES_MODES = {"full", "permissive"}

_TRUTHY = ("1", "true", "yes", "on")

# Console noise off unless DROPCHESS_DEBUG is set
DEBUG = os.environ.get("DROPCHESS_DEBUG", "").strip().lower() in _TRUTHY


def log(msg: str) -> None:
    if DEBUG:
        print(msg)


def warn(msg: str) -> None:
    """Always printed; used for internal invariant violations."""
    print(msg, file=sys.stderr)


@dataclass
class Settings:
    rules_mode: str = DEFAULT_RULES_MODE
    seed: Optional[int] = None
    auto_start: bool = False


def _settings_file() -> Path:
    env_path = os.environ.get("DROPCHESS_SETTINGS")
    if env_path:
        return Path(env_path)
    return SETTINGS_PATH


def _read_settings_file(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or _settings_file()
    try:
        if not path.is_file():
            return {}
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        warn(f"[Config] Ignoring unreadable settings file {path}: {exc}")
        return {}
    if not isinstance(payload, dict):
        warn(f"[Config] Ignoring settings file {path}: expected a JSON object")
        return {}
    return payload


def resolve_rules_mode(preferred: Optional[str] = None, file_settings: Optional[Dict[str, Any]] = None) -> str:
    if preferred:
        choice = preferred.strip().lower()
        if choice in VALID_RULES_MODES:
            return choice
        raise ValueError(f"Unknown rules mode '{preferred}'. Valid: {sorted(VALID_RULES_MODES)}")
    env_val = os.environ.get("DROPCHESS_RULES")
    if env_val:
        choice = env_val.strip().lower()
        if choice in VALID_RULES_MODES:
            return choice
        warn(f"[Config] Ignoring DROPCHESS_RULES={env_val!r}; valid: {sorted(VALID_RULES_MODES)}")
    if file_settings is None:
        file_settings = _read_settings_file()
    file_mode = file_settings.get("rules_mode")
    if isinstance(file_mode, str) and file_mode.lower() in VALID_RULES_MODES:
        return file_mode.lower()
    return DEFAULT_RULES_MODE


def _resolve_seed(preferred: Optional[int], file_settings: Dict[str, Any]) -> Optional[int]:
    if preferred is not None:
        return int(preferred)
    env_val = os.environ.get("DROPCHESS_SEED")
    if env_val:
        try:
            return int(env_val)
        except ValueError:
            warn(f"[Config] Ignoring non-integer DROPCHESS_SEED={env_val!r}")
    seed = file_settings.get("seed")
    if isinstance(seed, int) and not isinstance(seed, bool):
        return seed
    return None


def _resolve_auto_start(preferred: Optional[bool], file_settings: Dict[str, Any]) -> bool:
    if preferred is not None:
        return bool(preferred)
    env_val = os.environ.get("DROPCHESS_AUTO_START")
    if env_val:
        return env_val.strip().lower() in _TRUTHY
    return bool(file_settings.get("auto_start", False))


def load_settings(
    rules_mode: Optional[str] = None,
    *,
    seed: Optional[int] = None,
    auto_start: Optional[bool] = None,
    path: Optional[Path] = None,
) -> Settings:
    """Resolve settings: explicit argument, then environment, then settings file, then default."""
    file_settings = _read_settings_file(path)
    return Settings(
        rules_mode=resolve_rules_mode(rules_mode, file_settings),
        seed=_resolve_seed(seed, file_settings),
        auto_start=_resolve_auto_start(auto_start, file_settings),
    )


__all__ = [
    "DEBUG",
    "DEFAULT_RULES_MODE",
    "Settings",
    "VALID_RULES_MODES",
    "load_settings",
    "log",
    "resolve_rules_mode",
    "warn",
]

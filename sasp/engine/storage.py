# engine/storage.py
import json
import logging
import math
import os
from typing import Any, Dict

from ..data_model import Profile, profile_from_payload

logger = logging.getLogger(__name__)


def ensure_user_data_dir(path: str) -> None:
    folder = os.path.dirname(path)
    if folder and not os.path.exists(folder):
        os.makedirs(folder, exist_ok=True)


def _sanitize_json_compat(value: Any):
    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, dict):
        return {key: _sanitize_json_compat(val) for key, val in value.items()}
    if isinstance(value, list):
        return [_sanitize_json_compat(item) for item in value]
    return value


def _read_json_object(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw_text = f.read().strip()
            if not raw_text:
                return {}
            data = json.loads(raw_text)
    except (json.JSONDecodeError, OSError) as exc:
        logger.warning("Ignoring unreadable profile file %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring profile file %s: expected an object, got %s", path, type(data).__name__)
        return {}
    return data


def load_profiles(path: str) -> Dict[str, Profile]:
    """Load every slot through the same parser requests use; invalid slots are skipped."""
    profiles: Dict[str, Profile] = {}
    for name, payload in _read_json_object(path).items():
        if not isinstance(payload, dict):
            logger.warning("Skipping profile %r in %s: expected an object", name, path)
            continue
        try:
            profiles[name] = profile_from_payload(payload, name=name)
        except ValueError as exc:
            logger.warning("Skipping profile %r in %s: %s", name, path, exc)
    return profiles


def save_profiles(path: str, profiles: Dict[str, Profile]) -> None:
    ensure_user_data_dir(path)
    tmp_path = f"{path}.tmp"
    clean = _sanitize_json_compat({name: profile.to_payload() for name, profile in profiles.items()})
    with open(tmp_path, "w", encoding="utf-8") as f:
        json.dump(clean, f, allow_nan=False, ensure_ascii=False, indent=2)
    os.replace(tmp_path, path)

# engine/state.py
from typing import Dict

from ..config import PROFILES_PATH
from ..data_model import Profile
from .storage import load_profiles, save_profiles


class ProfileState:
    """Named profile slots, persisted as one JSON object keyed by slot name."""

    def __init__(self, storage_path: str = PROFILES_PATH):
        self.storage_path = storage_path
        self.profiles: Dict[str, Profile] = load_profiles(storage_path)

    def list_names(self):
        return sorted(self.profiles.keys())

    def get(self, name: str) -> Profile | None:
        return self.profiles.get(name)

    def save(self, profile: Profile) -> None:
        if not profile.name:
            raise ValueError("Profile name is required.")
        self.profiles[profile.name] = profile
        self._save()

    def delete(self, name: str) -> bool:
        if name not in self.profiles:
            return False
        del self.profiles[name]
        self._save()
        return True

    def _save(self) -> None:
        save_profiles(self.storage_path, self.profiles)

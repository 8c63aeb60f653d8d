"""
Profile persistence: the user's name and birth instant, plus their milestone ages.

Stored as two small JSON documents so either can be reset independently.
Unreadable or corrupt files are logged and treated as missing; callers fall
back to the default profile.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Protocol

from src.utils.config import profile_dir
from src.utils.logger import get_logger

logger = get_logger()

USER_DATA_FILE = "user_data.json"
MILESTONES_FILE = "milestones.json"


@dataclass(frozen=True)
class Profile:
    name: str
    birth: datetime

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "birthDate": self.birth.isoformat()}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Profile":
        """
        Build a profile from its stored form.

        Raises:
            ValueError: If name or birthDate is missing or malformed.
        """
        name = data.get("name")
        raw = data.get("birthDate")
        if not isinstance(name, str) or not name.strip():
            raise ValueError("Profile name is missing")
        if not isinstance(raw, str):
            raise ValueError("Profile birthDate is missing")
        birth = datetime.fromisoformat(raw.replace("Z", "+00:00"))
        if birth.tzinfo is not None:
            birth = birth.astimezone().replace(tzinfo=None)
        return cls(name=name.strip(), birth=birth)


DEFAULT_PROFILE = Profile(name="Sumon Hossain", birth=datetime(1998, 10, 25, 5, 30))


class ProfileStore(Protocol):
    def load(self) -> Profile | None: ...

    def save(self, profile: Profile) -> None: ...

    def load_milestones(self) -> list[int]: ...

    def save_milestones(self, milestones: list[int]) -> None: ...

    def clear(self) -> None: ...


def _clean_milestones(data: Any) -> list[int]:
    if not isinstance(data, list):
        return []
    return sorted({m for m in data if isinstance(m, int) and not isinstance(m, bool) and m > 0})


class JsonProfileStore:
    """
    File-backed ProfileStore under data/profile/ (or PROFILE_DIR).
    """

    def __init__(self, base_dir: Path | None = None) -> None:
        self._dir = base_dir or profile_dir()

    def _read(self, filename: str) -> Any | None:
        path = self._dir / filename
        if not path.is_file():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Profile store read failed for %s: %s", path, e)
            return None

    def _write(self, filename: str, data: Any) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._dir / filename
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def load(self) -> Profile | None:
        data = self._read(USER_DATA_FILE)
        if data is None:
            return None
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed profile in %s", self._dir / USER_DATA_FILE)
            return None
        try:
            return Profile.from_dict(data)
        except ValueError as e:
            logger.warning("Ignoring invalid profile: %s", e)
            return None

    def save(self, profile: Profile) -> None:
        self._write(USER_DATA_FILE, profile.to_dict())
        logger.info("Saved profile for %s", profile.name)

    def load_milestones(self) -> list[int]:
        return _clean_milestones(self._read(MILESTONES_FILE))

    def save_milestones(self, milestones: list[int]) -> None:
        self._write(MILESTONES_FILE, sorted(milestones))

    def clear(self) -> None:
        for filename in (USER_DATA_FILE, MILESTONES_FILE):
            (self._dir / filename).unlink(missing_ok=True)
        logger.info("Cleared saved profile in %s", self._dir)


class InMemoryProfileStore:
    """ProfileStore kept in process memory (Streamlit session, tests)."""

    def __init__(self, profile: Profile | None = None, milestones: list[int] | None = None) -> None:
        self._profile = profile
        self._milestones = list(milestones or [])

    def load(self) -> Profile | None:
        return self._profile

    def save(self, profile: Profile) -> None:
        self._profile = profile

    def load_milestones(self) -> list[int]:
        return list(self._milestones)

    def save_milestones(self, milestones: list[int]) -> None:
        self._milestones = sorted(milestones)

    def clear(self) -> None:
        self._profile = None
        self._milestones = []


def load_profile_or_default(store: ProfileStore) -> Profile:
    """Saved profile, or the default one when nothing usable is stored."""
    return store.load() or DEFAULT_PROFILE


def make_profile_store(persist: bool, base_dir: Path | None = None) -> ProfileStore:
    """JSON-backed store when persisting, otherwise an in-memory one."""
    if persist:
        return JsonProfileStore(base_dir=base_dir)
    return InMemoryProfileStore()

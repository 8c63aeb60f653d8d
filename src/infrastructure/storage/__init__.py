"""Profile persistence."""

from src.infrastructure.storage.profile_store import (
    DEFAULT_PROFILE,
    InMemoryProfileStore,
    JsonProfileStore,
    Profile,
    ProfileStore,
    load_profile_or_default,
    make_profile_store,
)

__all__ = [
    "DEFAULT_PROFILE",
    "InMemoryProfileStore",
    "JsonProfileStore",
    "Profile",
    "ProfileStore",
    "load_profile_or_default",
    "make_profile_store",
]

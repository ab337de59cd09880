"""Cargo feature selection and build profiles.

Exactly one feature policy is active per build:

- ``AllFeatures``            -> ``--all-features``
- ``DefaultAnd(a, b)``       -> ``--features "a b"`` (nothing if empty)
- ``NoDefaultBut(a, b)``     -> ``--no-default-features [--features "a b"]``
- ``UnsetFeatures``          -> nothing

Feature names are joined with spaces into a single argument, which is what
cargo expects for one ``--features`` value.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable, List, Tuple

DEBUG_PROFILE = "debug"
RELEASE_PROFILE = "release"


class FeatureSelection(ABC):
    """Base class of the feature policies."""

    @abstractmethod
    def to_args(self) -> List[str]:
        """Cargo arguments selecting the features."""
        pass


def _ordered_unique(names: Iterable[str]) -> Tuple[str, ...]:
    seen = []
    for name in names:
        if name not in seen:
            seen.append(name)
    return tuple(seen)


def _features_args(features: Tuple[str, ...]) -> List[str]:
    if not features:
        return []
    return ["--features", " ".join(features)]


@dataclass(frozen=True)
class UnsetFeatures(FeatureSelection):
    def to_args(self) -> List[str]:
        return []


@dataclass(frozen=True)
class AllFeatures(FeatureSelection):
    def to_args(self) -> List[str]:
        return ["--all-features"]


@dataclass(frozen=True, init=False)
class DefaultAnd(FeatureSelection):
    """Default features plus the listed ones."""

    features: Tuple[str, ...] = ()

    def __init__(self, features: Iterable[str] = ()):
        object.__setattr__(self, "features", _ordered_unique(features))

    def to_args(self) -> List[str]:
        return _features_args(self.features)


@dataclass(frozen=True, init=False)
class NoDefaultBut(FeatureSelection):
    """Only the listed features."""

    features: Tuple[str, ...] = ()

    def __init__(self, features: Iterable[str] = ()):
        object.__setattr__(self, "features", _ordered_unique(features))

    def to_args(self) -> List[str]:
        return ["--no-default-features"] + _features_args(self.features)


def profile_args(profile: str) -> List[str]:
    """
    Cargo flags selecting a build profile.

    Example:
        >>> profile_args("release")
        ['--release']
        >>> profile_args("bench")
        ['--profile=bench']
    """
    if profile == DEBUG_PROFILE:
        # debug is cargo's default
        return []
    if profile == RELEASE_PROFILE:
        return ["--release"]
    return [f"--profile={profile}"]


# Built-in cargo profiles whose output directory differs from their name
_PROFILE_DIRS = {"dev": DEBUG_PROFILE, "test": DEBUG_PROFILE, "bench": RELEASE_PROFILE}


def profile_dir_name(profile: str) -> str:
    """
    Directory cargo writes a profile's output to.

    Example:
        >>> profile_dir_name("dev")
        'debug'
    """
    return _PROFILE_DIRS.get(profile, profile)


__all__ = [
    "FeatureSelection",
    "UnsetFeatures",
    "AllFeatures",
    "DefaultAnd",
    "NoDefaultBut",
    "profile_args",
    "profile_dir_name",
    "DEBUG_PROFILE",
    "RELEASE_PROFILE",
]

"""Update intents, patch baselines, and the update set they collect into."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from patch_cascade.versioning.arithmetic import bump_patch, normalize_version


@dataclass(frozen=True, eq=False)
class UpdateIntent:
    """A package name and the version it must become.

    Two intents are equal when their names match case-insensitively and
    their versions match exactly.
    """

    name: str
    version: str

    @property
    def key(self) -> tuple[str, str]:
        return self.name.casefold(), self.version

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UpdateIntent):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return f"{self.name}={self.version}"


@dataclass(frozen=True)
class PatchBaseline:
    """Current and planned version of a project tracked for the release."""

    name: str
    current_version: str
    new_version: str

    @property
    def has_pending_patch(self) -> bool:
        """True when a new version is already planned for this project."""
        return normalize_version(self.new_version) != normalize_version(self.current_version)


class UpdateSet:
    """Insertion-ordered set of update intents. Members are never removed."""

    def __init__(self, intents: Iterable[UpdateIntent] = ()) -> None:
        self._members: dict[UpdateIntent, None] = {}
        self._names: set[str] = set()
        self.merge(intents)

    def add(self, intent: UpdateIntent) -> bool:
        """Add an intent. Returns True if it was not already present."""
        if intent in self._members:
            return False
        self._members[intent] = None
        self._names.add(intent.name.casefold())
        return True

    def merge(self, intents: Iterable[UpdateIntent]) -> int:
        """Add every intent; return how many were new."""
        return sum(1 for intent in intents if self.add(intent))

    def has_name(self, name: str) -> bool:
        return name.casefold() in self._names

    def versions_of(self, name: str) -> list[str]:
        folded = name.casefold()
        return [i.version for i in self._members if i.name.casefold() == folded]

    def __contains__(self, intent: object) -> bool:
        return intent in self._members

    def __iter__(self) -> Iterator[UpdateIntent]:
        return iter(list(self._members))

    def __len__(self) -> int:
        return len(self._members)


def normalize_dependency_update(name: str, version: str) -> UpdateIntent:
    """A dependency bump targets exactly the version the caller asked for."""
    return UpdateIntent(name=name, version=version)


def normalize_source_update(name: str, baseline: PatchBaseline) -> UpdateIntent:
    """A source fix always forces one patch above the current baseline version.

    Raises:
        MalformedVersionError: If the baseline version does not parse.
    """
    return UpdateIntent(name=name, version=bump_patch(baseline.current_version))


def find_baseline(baselines: Iterable[PatchBaseline], name: str) -> PatchBaseline | None:
    """Find a baseline record by project name (case-insensitive)."""
    folded = name.casefold()
    for baseline in baselines:
        if baseline.name.casefold() == folded:
            return baseline
    return None

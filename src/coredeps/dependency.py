# In src/coredeps/dependency.py
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Tuple


@dataclass(frozen=True)
class Dependency:
    """A single declared library coordinate within a build scope."""

    group: str
    name: str
    version: str
    transitive: bool = True
    exclusions: Tuple[str, ...] = ()

    def __post_init__(self):
        # Accept any iterable of "group:name" strings but store a tuple
        if not isinstance(self.exclusions, tuple):
            object.__setattr__(self, "exclusions", tuple(self.exclusions))

    @classmethod
    def of(
        cls, group: str, name: str, version: str, transitive: bool = True, *exclusions: str
    ) -> "Dependency":
        """Build a dependency with exclusions given as trailing arguments."""
        return cls(group, name, version, transitive, tuple(exclusions))

    @property
    def exported(self) -> bool:
        return self.transitive

    @property
    def pattern(self) -> str:
        """The group:name:version form used for matching resolved artifacts."""
        return f"{self.group}:{self.name}:{self.version}"

    @property
    def coordinates(self) -> str:
        return f"{self.group}:{self.name}"

    @property
    def purl(self) -> str:
        return f"pkg:maven/{self.group}/{self.name}@{self.version}"

    def excludes(self, coordinates: str) -> bool:
        """Check whether a group:name coordinate is suppressed by this entry."""
        return coordinates in self.exclusions

    def to_dict(self) -> Dict[str, Any]:
        return {
            "group": self.group,
            "name": self.name,
            "version": self.version,
            "transitive": self.transitive,
            "exclusions": list(self.exclusions),
            "pattern": self.pattern,
        }


def patterns_of(dependencies: Iterable[Dependency]) -> Tuple[str, ...]:
    """Return the patterns of the given dependencies, preserving order."""
    return tuple(dep.pattern for dep in dependencies)

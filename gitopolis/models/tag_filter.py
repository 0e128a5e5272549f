"""Tag filter used to select repos"""
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class TagFilter:
    """AND-of-ORs predicate over a repo's tag set.

    A repo matches when every group is satisfied, and a group is satisfied
    when the repo has any one of the group's tags. No groups matches all.
    """

    groups: Tuple[FrozenSet[str], ...] = field(default_factory=tuple)

    @classmethod
    def all(cls) -> "TagFilter":
        return cls()

    @classmethod
    def from_groups(cls, groups: Iterable[Iterable[str]]) -> "TagFilter":
        """Build from explicit groups, dropping empty ones."""
        built = tuple(frozenset(g) for g in (set(group) for group in groups) if g)
        return cls(built)

    @classmethod
    def from_args(cls, values: Optional[List[str]], separator: str = ",") -> "TagFilter":
        """Build from repeated command-line values.

        Each value is one AND group; a value holding several tags joined by
        the separator (``a,b``) is an OR group.
        """
        groups = []
        for value in values or []:
            tags = [t.strip() for t in value.split(separator)]
            groups.append([t for t in tags if t])
        return cls.from_groups(groups)

    @property
    def is_empty(self) -> bool:
        return not self.groups

    def matches(self, tags: Iterable[str]) -> bool:
        tag_set = set(tags)
        return all(group & tag_set for group in self.groups)

    def __str__(self) -> str:
        if self.is_empty:
            return "(all)"
        parts = []
        for group in self.groups:
            names = sorted(group, key=str.lower)
            parts.append(names[0] if len(names) == 1 else "(" + " OR ".join(names) + ")")
        return " AND ".join(parts)

"""
Core Value Objects and Entities

Work items (graph vertices) and their typed dependencies (graph edges).

Dependency kinds:
    blocks           structural   A cannot proceed until B is resolved
    parent-child     structural   A is a child of epic/parent B
    related          cosmetic     ignored by the analytics engine
    discovered-from  cosmetic     ignored by the analytics engine

Edge direction:
    A Dependency records "issue_id depends on depends_on_id". The traversal
    edge used by every algorithm runs prerequisite -> dependent, i.e.
    depends_on_id -> issue_id.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Tuple, Union


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ItemStatus(str, Enum):
    """Lifecycle state of a work item."""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    BLOCKED = "blocked"
    CLOSED = "closed"


class ItemType(str, Enum):
    """Kind of work item."""
    TASK = "task"
    BUG = "bug"
    FEATURE = "feature"
    EPIC = "epic"
    CHORE = "chore"


class DependencyKind(str, Enum):
    """
    Dependency tag carried by each edge.

    Only BLOCKS and PARENT_CHILD shape the graph; the rest are relational
    annotations for humans.
    """
    BLOCKS = "blocks"
    PARENT_CHILD = "parent-child"
    RELATED = "related"
    DISCOVERED_FROM = "discovered-from"

    @classmethod
    def from_string(cls, value: str) -> Optional[DependencyKind]:
        """
        Resolve a kind tag, supporting common aliases.

        Returns None for tags this engine does not know; those are
        treated as non-structural.
        """
        _ALIASES: Dict[str, DependencyKind] = {
            "block": cls.BLOCKS,
            "blocked-by": cls.BLOCKS,
            "parent": cls.PARENT_CHILD,
            "relates-to": cls.RELATED,
            "relates": cls.RELATED,
        }
        key = value.lower().strip().replace("_", "-")
        if key in _ALIASES:
            return _ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            return None

    @property
    def is_structural(self) -> bool:
        return self in STRUCTURAL_KINDS


#: Kinds that participate in adjacency.
STRUCTURAL_KINDS: FrozenSet[DependencyKind] = frozenset({
    DependencyKind.BLOCKS,
    DependencyKind.PARENT_CHILD,
})


def is_structural_kind(kind: Union[DependencyKind, str, None]) -> bool:
    """True when *kind* (enum or raw tag) is a structural dependency kind."""
    if kind is None:
        return False
    if not isinstance(kind, DependencyKind):
        kind = DependencyKind.from_string(str(kind))
        if kind is None:
            return False
    return kind in STRUCTURAL_KINDS


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Dependency:
    """A typed "issue_id depends on depends_on_id" record."""
    issue_id: str
    depends_on_id: str
    kind: Union[DependencyKind, str] = DependencyKind.BLOCKS

    @property
    def is_structural(self) -> bool:
        return is_structural_kind(self.kind)

    @property
    def traversal_edge(self) -> Tuple[str, str]:
        """(prerequisite, dependent) edge used by the graph algorithms."""
        return (self.depends_on_id, self.issue_id)

    def to_dict(self) -> Dict[str, str]:
        kind = self.kind.value if isinstance(self.kind, DependencyKind) else str(self.kind)
        return {
            "issue_id": self.issue_id,
            "depends_on_id": self.depends_on_id,
            "type": kind,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any], issue_id: Optional[str] = None) -> Dependency:
        """
        Build a Dependency from a store record.

        *issue_id* supplies the dependent when the record is embedded in
        its owning item and omits it.
        """
        owner = data.get("issue_id", issue_id)
        target = data.get("depends_on_id")
        if not owner or not target:
            raise ValueError(f"Dependency record needs issue_id and depends_on_id: {data!r}")
        raw_kind = data.get("type", data.get("kind", DependencyKind.BLOCKS.value))
        kind = DependencyKind.from_string(str(raw_kind)) or str(raw_kind)
        return Dependency(issue_id=str(owner), depends_on_id=str(target), kind=kind)


@dataclass
class WorkItem:
    """Domain entity representing one issue/task (graph vertex)."""
    id: str
    title: str = ""
    status: Union[ItemStatus, str] = ItemStatus.OPEN
    issue_type: Union[ItemType, str] = ItemType.TASK
    dependencies: List[Dependency] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "status": _enum_value(self.status),
            "issue_type": _enum_value(self.issue_type),
            "dependencies": [d.to_dict() for d in self.dependencies],
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> WorkItem:
        item_id = data.get("id")
        if not item_id:
            raise ValueError(f"Work item record has no id: {data!r}")
        return WorkItem(
            id=str(item_id),
            title=data.get("title", ""),
            status=_coerce(ItemStatus, data.get("status", ItemStatus.OPEN.value)),
            issue_type=_coerce(ItemType, data.get("issue_type", ItemType.TASK.value)),
            dependencies=[
                Dependency.from_dict(d, issue_id=str(item_id))
                for d in data.get("dependencies") or []
            ],
        )


def _enum_value(value: Union[Enum, str]) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def _coerce(enum_cls: type, value: Any) -> Union[Enum, str]:
    """Map *value* onto *enum_cls*; unknown values are carried through verbatim."""
    try:
        return enum_cls(value)
    except ValueError:
        return str(value)

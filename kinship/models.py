"""Value types shared by the kinship engine and its stores."""
import enum
from dataclasses import dataclass, field
from datetime import date


class Sex(enum.Enum):
    M = "M"
    F = "F"
    U = "U"

    @classmethod
    def parse(cls, value) -> "Sex":
        """Accept M/F/U codes or MALE/FEMALE words; anything else is unknown."""
        if isinstance(value, Sex):
            return value
        code = str(value or "").strip().upper()[:1]
        return cls(code) if code in ("M", "F") else cls.U


class EdgeType(enum.Enum):
    PARENT_CHILD = "PARENT_CHILD"
    FATHER_CHILD = "FATHER_CHILD"
    MOTHER_CHILD = "MOTHER_CHILD"
    ADOPTED_PARENT_CHILD = "ADOPTED_PARENT_CHILD"
    STEP_PARENT_CHILD = "STEP_PARENT_CHILD"
    SPOUSE = "SPOUSE"
    PARTNER = "PARTNER"
    SIBLING = "SIBLING"


PARENT_CHILD_TYPES = frozenset({
    EdgeType.PARENT_CHILD,
    EdgeType.FATHER_CHILD,
    EdgeType.MOTHER_CHILD,
    EdgeType.ADOPTED_PARENT_CHILD,
    EdgeType.STEP_PARENT_CHILD,
})
SPOUSE_TYPES = frozenset({EdgeType.SPOUSE, EdgeType.PARTNER})


class ConnectionKind(enum.Enum):
    PARENT = "PARENT"
    CHILD = "CHILD"
    SPOUSE = "SPOUSE"
    SIBLING = "SIBLING"


class RelationshipCategory(enum.Enum):
    SELF = "SELF"
    DIRECT_ANCESTOR = "DIRECT_ANCESTOR"
    DIRECT_DESCENDANT = "DIRECT_DESCENDANT"
    SIBLING = "SIBLING"
    SPOUSE = "SPOUSE"
    UNCLE_AUNT = "UNCLE_AUNT"
    NEPHEW_NIECE = "NEPHEW_NIECE"
    COUSIN = "COUSIN"
    GRANDUNCLE_GRANDAUNT = "GRANDUNCLE_GRANDAUNT"
    GRANDNEPHEW_GRANDNIECE = "GRANDNEPHEW_GRANDNIECE"
    IN_LAW = "IN_LAW"
    STEP_FAMILY = "STEP_FAMILY"
    NOT_RELATED = "NOT_RELATED"


@dataclass(frozen=True)
class Person:
    id: str
    given_name: str = ""
    surname: str = ""
    suffix: str = ""
    sex: Sex = Sex.U
    birth_date: date | None = None
    death_date: date | None = None
    tree_id: str = ""

    @property
    def full_name(self) -> str:
        # Vietnamese order: surname, particle, given name
        parts = [p for p in (self.surname, self.suffix, self.given_name) if p]
        return " ".join(parts) if parts else "Unknown"


@dataclass(frozen=True)
class RelationEdge:
    """A stored relation. For parent-child types `from_id` is the parent."""
    from_id: str
    to_id: str
    type: EdgeType


@dataclass(frozen=True)
class Connection:
    neighbor_id: str
    neighbor: Person
    kind: ConnectionKind
    edge_type: EdgeType


@dataclass
class AdjacencyGraph:
    people: dict[str, Person] = field(default_factory=dict)
    adjacency: dict[str, list[Connection]] = field(default_factory=dict)

    def __contains__(self, person_id: str) -> bool:
        return person_id in self.adjacency

    def connections(self, person_id: str) -> list[Connection]:
        return self.adjacency.get(person_id, [])


@dataclass(frozen=True)
class PathNode:
    """One step of a discovered path.

    `previous` is the arena index of the predecessor node, -1 at the root.
    """
    person: Person
    kind: ConnectionKind | None = None
    edge_type: EdgeType | None = None
    previous: int = -1


@dataclass
class RelationshipContext:
    path: list[PathNode]
    generations_up: int = 0
    generations_down: int = 0
    has_spouse_step: bool = False
    sibling_step_index: int = -1
    is_paternal: bool = True
    # uncle/aunt shapes: the collateral relative is older than the lineage parent
    is_elder_than_parent: bool = False
    # cousin shapes: person1's branch is the senior one at the sibling step
    branch_is_elder: bool = True
    target_sex: Sex = Sex.U

    @property
    def has_sibling_step(self) -> bool:
        return self.sibling_step_index > 0

    @property
    def cousin_degree(self) -> int:
        return min(self.generations_up, self.generations_down)

    @property
    def removed(self) -> int:
        return abs(self.generations_up - self.generations_down)


@dataclass(frozen=True)
class Naming:
    category: RelationshipCategory
    from_person1: str
    from_person2: str
    from_person1_vi: str
    from_person2_vi: str

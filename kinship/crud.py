"""Person directory and relation edge store backed by KuzuDB."""
import logging
import uuid
from datetime import date

import kuzu

from .models import EdgeType, Person, RelationEdge, Sex, PARENT_CHILD_TYPES, SPOUSE_TYPES

logger = logging.getLogger(__name__)

_PERSON_COLUMNS = ("p.id, p.given_name, p.surname, p.suffix, p.sex, "
                   "p.birth_date, p.death_date, p.tree_id")


def _iso(value) -> str:
    """Normalize an optional date to its stored ISO string ('' when absent)."""
    if not value:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    try:
        return date.fromisoformat(str(value)).isoformat()
    except ValueError:
        raise ValueError(f"Invalid date '{value}', expected YYYY-MM-DD")


def _load_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def _row_to_dict(row) -> dict:
    person = _row_to_person(row)
    return {
        "id": row[0],
        "given_name": row[1] or "",
        "surname": row[2] or "",
        "suffix": row[3] or "",
        "sex": row[4] or "U",
        "birth_date": row[5] or None,
        "death_date": row[6] or None,
        "tree_id": row[7] or "",
        "full_name": person.full_name,
    }


def _row_to_person(row) -> Person:
    return Person(
        id=row[0],
        given_name=row[1] or "",
        surname=row[2] or "",
        suffix=row[3] or "",
        sex=Sex.parse(row[4]),
        birth_date=_load_date(row[5]),
        death_date=_load_date(row[6]),
        tree_id=row[7] or "",
    )


# ── People ──

def create_person(conn: kuzu.Connection, given_name: str, surname: str = "",
                  sex: str = "U", tree_id: str = "", suffix: str = "",
                  birth_date=None, death_date=None) -> dict:
    pid = str(uuid.uuid4())
    params = {
        "id": pid, "given": given_name.strip(), "surname": (surname or "").strip(),
        "suffix": (suffix or "").strip(), "sex": Sex.parse(sex).value,
        "birth": _iso(birth_date), "death": _iso(death_date), "tid": tree_id or "",
    }
    conn.execute(
        "CREATE (p:Person {id: $id, given_name: $given, surname: $surname, "
        "suffix: $suffix, sex: $sex, birth_date: $birth, death_date: $death, "
        "tree_id: $tid})",
        params
    )
    return get_person(conn, pid)


def get_person(conn: kuzu.Connection, person_id: str, tree_id: str | None = None) -> dict | None:
    query = "MATCH (p:Person) WHERE p.id = $id "
    params = {"id": person_id}
    if tree_id is not None:
        query += "AND p.tree_id = $tid "
        params["tid"] = tree_id
    result = conn.execute(query + f"RETURN {_PERSON_COLUMNS}", params)
    if result.has_next():
        return _row_to_dict(result.get_next())
    return None


def list_people(conn: kuzu.Connection, tree_id: str) -> list[dict]:
    result = conn.execute(
        f"MATCH (p:Person) WHERE p.tree_id = $tid RETURN {_PERSON_COLUMNS} "
        "ORDER BY p.surname, p.given_name",
        {"tid": tree_id}
    )
    people = []
    while result.has_next():
        people.append(_row_to_dict(result.get_next()))
    return people


def get_person_record(conn: kuzu.Connection, person_id: str) -> Person | None:
    """Person Directory lookup: the immutable engine snapshot of one person."""
    result = conn.execute(
        f"MATCH (p:Person) WHERE p.id = $id RETURN {_PERSON_COLUMNS}",
        {"id": person_id}
    )
    if result.has_next():
        return _row_to_person(result.get_next())
    return None


def list_person_records(conn: kuzu.Connection, tree_id: str) -> list[Person]:
    result = conn.execute(
        f"MATCH (p:Person) WHERE p.tree_id = $tid RETURN {_PERSON_COLUMNS}",
        {"tid": tree_id}
    )
    people = []
    while result.has_next():
        people.append(_row_to_person(result.get_next()))
    return people


# ── Relationships ──

def _table_for(rel_type: EdgeType) -> str:
    if rel_type in PARENT_CHILD_TYPES:
        return "PARENT_OF"
    if rel_type in SPOUSE_TYPES:
        return "SPOUSE_OF"
    return "SIBLING_OF"


def create_relationship(conn: kuzu.Connection, from_id: str, to_id: str, rel_type: str) -> dict:
    """Store a relation. For parent-child types `from_id` is the parent."""
    try:
        rt = EdgeType(rel_type)
    except ValueError:
        raise ValueError(f"Invalid relationship type: {rel_type}")
    if from_id == to_id:
        raise ValueError("A person cannot be related to themselves")

    a = get_person(conn, from_id)
    b = get_person(conn, to_id)
    if a is None or b is None:
        raise ValueError("Both people must exist")
    if a["tree_id"] != b["tree_id"]:
        raise ValueError("Both people must belong to the same tree")

    rid = str(uuid.uuid4())
    table = _table_for(rt)
    props = "{id: $rid}"
    params = {"a": from_id, "b": to_id, "rid": rid}
    if table == "PARENT_OF":
        props = "{id: $rid, subtype: $sub}"
        params["sub"] = rt.value
    elif table == "SPOUSE_OF":
        props = "{id: $rid, kind: $sub}"
        params["sub"] = rt.value
    conn.execute(
        "MATCH (a:Person), (b:Person) WHERE a.id = $a AND b.id = $b "
        f"CREATE (a)-[:{table} {props}]->(b)",
        params
    )
    return {"id": rid, "from_person_id": from_id, "to_person_id": to_id, "type": rt.value}


_EDGE_QUERIES = (
    "MATCH (a:Person)-[r:PARENT_OF]->(b:Person) "
    "WHERE a.tree_id = $tid AND b.tree_id = $tid RETURN r.id, a.id, b.id, r.subtype",
    "MATCH (a:Person)-[r:SPOUSE_OF]->(b:Person) "
    "WHERE a.tree_id = $tid AND b.tree_id = $tid RETURN r.id, a.id, b.id, r.kind",
    "MATCH (a:Person)-[r:SIBLING_OF]->(b:Person) "
    "WHERE a.tree_id = $tid AND b.tree_id = $tid RETURN r.id, a.id, b.id, 'SIBLING'",
)


def list_relationships(conn: kuzu.Connection, tree_id: str) -> list[dict]:
    """All stored relations of a tree; cross-tree links are excluded."""
    rels = []
    for query in _EDGE_QUERIES:
        result = conn.execute(query, {"tid": tree_id})
        while result.has_next():
            row = result.get_next()
            rels.append({"id": row[0], "from_person_id": row[1],
                         "to_person_id": row[2], "type": row[3]})
    return rels


def list_edges(conn: kuzu.Connection, tree_id: str) -> list[RelationEdge]:
    """Relation Edge Store: typed edges for the kinship engine."""
    edges = []
    for rel in list_relationships(conn, tree_id):
        try:
            rel_type = EdgeType(rel["type"])
        except ValueError:
            logger.warning("Skipping relationship %s with unknown type %r",
                           rel["id"], rel["type"])
            continue
        edges.append(RelationEdge(rel["from_person_id"], rel["to_person_id"], rel_type))
    return edges

# kinship/importers/family_tree_json.py

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..models import EdgeType, Person, RelationEdge, Sex

# Export-style names accepted alongside the EdgeType values.
# CHILD_OF points from the child to the parent, so it is reversed.
TYPE_ALIASES = {
    "PARENT_OF": (EdgeType.PARENT_CHILD, False),
    "CHILD_OF": (EdgeType.PARENT_CHILD, True),
    "SPOUSE_OF": (EdgeType.SPOUSE, False),
    "SIBLING_OF": (EdgeType.SIBLING, False),
}


def parse_family_tree_json(path: str | Path) -> Dict[str, Any]:
    """
    Parse a family file.

    Expected schema:
    {
      "people": [ { "id": str, "given_name": str, "surname": str, "suffix": str,
                    "sex": "M"|"F"|"U", "birth_date": "YYYY-MM-DD", ... }, ... ],
      "relationships": [ { "from_person_id": str, "to_person_id": str, "type": str }, ... ]
    }
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(str(p))

    with open(p, "r", encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError("JSON root must be an object")

    if "people" not in data or "relationships" not in data:
        raise ValueError("JSON must contain 'people' and 'relationships' arrays")

    if not isinstance(data["people"], list):
        raise ValueError("'people' must be an array")

    if not isinstance(data["relationships"], list):
        raise ValueError("'relationships' must be an array")

    return data


def _parse_date(value: Any) -> Optional[date]:
    if not value:
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        return None


def extract_people(data: Dict[str, Any]) -> List[Person]:
    """People with an id; `display_name` stands in for a missing given name."""
    people: List[Person] = []
    seen = set()
    for p in data.get("people", []):
        if not isinstance(p, dict):
            continue
        person_id = str(p.get("id") or "").strip()
        if not person_id or person_id in seen:
            continue
        seen.add(person_id)
        people.append(Person(
            id=person_id,
            given_name=str(p.get("given_name") or p.get("display_name") or "").strip(),
            surname=str(p.get("surname") or "").strip(),
            suffix=str(p.get("suffix") or "").strip(),
            sex=Sex.parse(p.get("sex")),
            birth_date=_parse_date(p.get("birth_date")),
            death_date=_parse_date(p.get("death_date")),
        ))
    return people


def _edge_type(name: str) -> Optional[Tuple[EdgeType, bool]]:
    if name in TYPE_ALIASES:
        return TYPE_ALIASES[name]
    try:
        return EdgeType(name), False
    except ValueError:
        return None


def extract_edges(data: Dict[str, Any]) -> Tuple[List[RelationEdge], List[str]]:
    """
    Convert the relationships array into engine edges.

    Returns tuple of (edges, warnings). Edges naming unknown people are
    kept; the graph builder skips them.
    """
    edges: List[RelationEdge] = []
    warnings: List[str] = []

    for i, rel in enumerate(data.get("relationships", []), start=1):
        if not isinstance(rel, dict):
            warnings.append(f"Relationship {i}: not an object")
            continue

        from_id = str(rel.get("from_person_id") or "").strip()
        to_id = str(rel.get("to_person_id") or "").strip()
        rel_type = str(rel.get("type") or "").strip().upper()

        if not from_id or not to_id:
            warnings.append(f"Relationship {i}: missing person id")
            continue

        resolved = _edge_type(rel_type)
        if resolved is None:
            warnings.append(f"Relationship {i}: Skipped unknown type '{rel_type}'")
            continue

        edge_type, reverse = resolved
        if reverse:
            from_id, to_id = to_id, from_id
        edges.append(RelationEdge(from_id, to_id, edge_type))

    return edges, warnings

"""Resolve the relationship between two people and assemble the response."""
import logging
from typing import Iterable

import kuzu

from . import crud, terms
from .classifier import name_relationship
from .context import analyze_path
from .graph import build_graph
from .models import (
    PathNode, Person, RelationEdge, RelationshipCategory as Cat,
)
from .pathfinder import find_path

logger = logging.getLogger(__name__)

_ANCESTOR_CATEGORIES = {Cat.UNCLE_AUNT, Cat.GRANDUNCLE_GRANDAUNT, Cat.COUSIN}


class PersonNotFound(LookupError):
    pass


class TreeMismatch(ValueError):
    pass


def person_summary(person: Person | None) -> dict | None:
    if person is None:
        return None
    return {
        "id": person.id,
        "full_name": person.full_name,
        "given_name": person.given_name,
        "surname": person.surname,
        "gender": person.sex.value,
        "birth_date": person.birth_date,
        "death_date": person.death_date,
    }


def build_path_steps(path: list[PathNode]) -> list[dict]:
    """Pair each node with the name of its connection to the next node."""
    steps = []
    for i, node in enumerate(path):
        to_next, to_next_vi = "", ""
        if i + 1 < len(path):
            nxt = path[i + 1]
            to_next = terms.step_label_en(nxt.kind, nxt.person.sex)
            to_next_vi = terms.step_label_vi(nxt.kind, nxt.person.sex)
        steps.append({
            "person": person_summary(node.person),
            "relationship_to_next": to_next,
            "relationship_to_next_vi": to_next_vi,
        })
    return steps


def _response(person1, person2, words, category, path, found=True,
              generations_up=0, generations_down=0, common_ancestor=None,
              cousin_degree=None, cousin_removed=None) -> dict:
    en1, en2, vi1, vi2 = words
    return {
        "person1": person_summary(person1),
        "person2": person_summary(person2),
        "relationship_from_person1": en1,
        "relationship_from_person2": en2,
        "relationship_from_person1_vi": vi1,
        "relationship_from_person2_vi": vi2,
        "category": category.value,
        "generation_difference": generations_down - generations_up,
        "generations_up": generations_up,
        "generations_down": generations_down,
        "cousin_degree": cousin_degree,
        "cousin_removed": cousin_removed,
        "path": path,
        "relationship_found": found,
        "common_ancestor": common_ancestor,
    }


def same_person_response(person: Person) -> dict:
    return _response(person, person, terms.SELF, Cat.SELF,
                     build_path_steps([PathNode(person)]))


def not_related_response(person1: Person, person2: Person) -> dict:
    return _response(person1, person2, terms.NOT_RELATED, Cat.NOT_RELATED, [], found=False)


def assemble(person1: Person, person2: Person, path: list[PathNode],
             dialect: str) -> dict:
    ctx = analyze_path(path)
    naming = name_relationship(ctx, person1, person2, dialect)

    common_ancestor = None
    if naming.category in _ANCESTOR_CATEGORIES and ctx.generations_up < len(path):
        common_ancestor = person_summary(path[ctx.generations_up].person)

    is_cousin = naming.category is Cat.COUSIN
    return _response(
        person1, person2,
        (naming.from_person1, naming.from_person2,
         naming.from_person1_vi, naming.from_person2_vi),
        naming.category,
        build_path_steps(path),
        generations_up=ctx.generations_up,
        generations_down=ctx.generations_down,
        common_ancestor=common_ancestor,
        cousin_degree=ctx.cousin_degree if is_cousin else None,
        cousin_removed=ctx.removed if is_cousin else None,
    )


def resolve(people: Iterable[Person], edges: Iterable[RelationEdge],
            person1_id: str, person2_id: str, dialect: str | None = None) -> dict:
    """Resolve a pair against in-memory people and edges.

    Builds a fresh graph on every call; nothing is cached between calls.
    """
    dialect = terms.get_dialect(dialect)
    directory = {p.id: p for p in people}
    person1 = directory.get(person1_id)
    if person1 is None:
        raise PersonNotFound(f"Person 1 not found with ID: {person1_id}")
    person2 = directory.get(person2_id)
    if person2 is None:
        raise PersonNotFound(f"Person 2 not found with ID: {person2_id}")

    if person1_id == person2_id:
        return same_person_response(person1)

    graph = build_graph(directory.values(), edges)
    path = find_path(graph, person1_id, person2_id)
    if not path:
        return not_related_response(person1, person2)
    return assemble(person1, person2, path, dialect)


def find_relationship(conn: kuzu.Connection, tree_id: str, person1_id: str,
                      person2_id: str, dialect: str | None = None) -> dict:
    """Fetch a tree's people and edges once, then resolve the pair."""
    logger.info("Finding relationship between %s and %s in tree %s",
                person1_id, person2_id, tree_id)
    person1 = crud.get_person_record(conn, person1_id)
    if person1 is None:
        raise PersonNotFound(f"Person 1 not found with ID: {person1_id}")
    person2 = crud.get_person_record(conn, person2_id)
    if person2 is None:
        raise PersonNotFound(f"Person 2 not found with ID: {person2_id}")
    if person1.tree_id != tree_id or person2.tree_id != tree_id:
        raise TreeMismatch("Both individuals must belong to the specified tree")

    people = crud.list_person_records(conn, tree_id)
    edges = crud.list_edges(conn, tree_id)
    return resolve(people, edges, person1_id, person2_id, dialect)

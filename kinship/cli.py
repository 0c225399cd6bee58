from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .importers.family_tree_json import extract_edges, extract_people, parse_family_tree_json
from .models import Person
from .resolver import resolve
from .terms import DEFAULT_DIALECT, DIALECTS

logger = logging.getLogger(__name__)


def find_person(people: list[Person], ref: str) -> Person:
    """Look a person up by id, then by full name."""
    for p in people:
        if p.id == ref:
            return p
    matches = [p for p in people if p.full_name.casefold() == ref.strip().casefold()]
    if not matches:
        raise SystemExit(f"No person with id or name {ref!r}")
    if len(matches) > 1:
        ids = ", ".join(p.id for p in matches)
        raise SystemExit(f"Name {ref!r} is ambiguous, use an id: {ids}")
    return matches[0]


def format_summary(result: dict) -> str:
    p1, p2 = result["person1"], result["person2"]
    lines = [
        f"{p1['full_name']} -> {p2['full_name']}: {result['category']}",
        f"  {p2['full_name']} is {p1['full_name']}'s {result['relationship_from_person2']}"
        f" ({result['relationship_from_person2_vi']})",
        f"  {p1['full_name']} is {p2['full_name']}'s {result['relationship_from_person1']}"
        f" ({result['relationship_from_person1_vi']})",
    ]
    if result["path"]:
        names = [step["person"]["full_name"] for step in result["path"]]
        lines.append("  path: " + " -> ".join(names))
    if result["common_ancestor"]:
        lines.append(f"  common ancestor: {result['common_ancestor']['full_name']}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Name the relationship between two people in a family file")
    parser.add_argument("file_path", help="Path to a family tree .json file")
    parser.add_argument("person1", help="Id or full name of the first person")
    parser.add_argument("person2", help="Id or full name of the second person")
    parser.add_argument("--dialect", choices=DIALECTS, default=DEFAULT_DIALECT,
                        help="Vietnamese naming dialect")
    parser.add_argument("--json", action="store_true", help="Print the full JSON response")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    file_path = Path(args.file_path)
    if not file_path.exists():
        raise SystemExit(f"File not found: {file_path}")

    data = parse_family_tree_json(file_path)
    people = extract_people(data)
    edges, warnings = extract_edges(data)
    for warning in warnings:
        logger.warning(warning)

    person1 = find_person(people, args.person1)
    person2 = find_person(people, args.person2)
    result = resolve(people, edges, person1.id, person2.id, args.dialect)

    if args.json:
        print(json.dumps(result, ensure_ascii=False, indent=2, default=str))
    else:
        print(format_summary(result))


if __name__ == "__main__":
    main()

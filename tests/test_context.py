"""Tests for kinship/context.py: reducing a path to its signature.

Requirements tested:
- REQ-C1: Upward and downward steps are counted separately
- REQ-C2: Side of family comes from the first step's edge subtype, then gender
- REQ-C3: Uncle/aunt shapes re-derive side and seniority at the sibling step
- REQ-C4: Missing birth dates make the other party the elder
"""
from conftest import edge, person
from kinship.context import analyze_path, is_elder
from kinship.graph import build_graph
from kinship.pathfinder import find_path


def _ctx(people, edges, a, b):
    return analyze_path(find_path(build_graph(people, edges), a, b))


class TestIsElder:
    def test_other_born_first(self):
        assert is_elder(person("A", born="1990-01-01"), person("B", born="1980-01-01"))

    def test_other_born_later(self):
        assert not is_elder(person("A", born="1980-01-01"), person("B", born="1990-01-01"))

    def test_missing_date_defaults_to_other(self):
        assert is_elder(person("A"), person("B", born="1990-01-01"))
        assert is_elder(person("A", born="1990-01-01"), person("B"))


class TestCounts:
    def test_ancestor(self, cousins_family):
        ctx = _ctx(*cousins_family, "C1", "GP")
        assert (ctx.generations_up, ctx.generations_down) == (2, 0)
        assert not ctx.has_spouse_step and not ctx.has_sibling_step

    def test_cousin(self, cousins_family):
        ctx = _ctx(*cousins_family, "C1", "GC2")
        assert (ctx.generations_up, ctx.generations_down) == (1, 2)
        assert ctx.sibling_step_index == 2
        assert ctx.cousin_degree == 1
        assert ctx.removed == 1

    def test_spouse_flag(self, cousins_family):
        ctx = _ctx(*cousins_family, "GP", "GM")
        assert ctx.has_spouse_step
        assert ctx.target_sex.value == "F"


class TestPaternalFlag:
    def test_father_subtype(self):
        ctx = _ctx([person("F", "U"), person("C")], [edge("F", "C", "FATHER_CHILD")], "C", "F")
        assert ctx.is_paternal is True

    def test_mother_subtype(self):
        ctx = _ctx([person("M", "U"), person("C")], [edge("M", "C", "MOTHER_CHILD")], "C", "M")
        assert ctx.is_paternal is False

    def test_generic_subtype_uses_gender(self):
        ctx = _ctx([person("M", "F"), person("C")], [edge("M", "C", "PARENT_CHILD")], "C", "M")
        assert ctx.is_paternal is False

    def test_descending_through_daughter(self):
        people = [person("G", "M"), person("D", "F"), person("K")]
        edges = [edge("G", "D", "FATHER_CHILD"), edge("D", "K", "MOTHER_CHILD")]
        ctx = _ctx(people, edges, "G", "K")
        assert ctx.is_paternal is False


class TestUncleAuntRefinement:
    def test_younger_paternal_uncle(self, cousins_family):
        ctx = _ctx(*cousins_family, "C1", "P2")
        assert ctx.is_paternal is True
        assert ctx.is_elder_than_parent is False

    def test_elder_paternal_uncle(self, cousins_family):
        ctx = _ctx(*cousins_family, "C2", "P1")
        assert ctx.is_paternal is True
        assert ctx.is_elder_than_parent is True

    def test_maternal_side_at_sibling_step(self):
        people = [person("M", "F", "1960-01-01"), person("U", "M", "1955-01-01"),
                  person("C", "M", "1990-01-01")]
        edges = [edge("M", "C", "MOTHER_CHILD"), edge("M", "U", "SIBLING")]
        ctx = _ctx(people, edges, "C", "U")
        assert ctx.is_paternal is False
        assert ctx.is_elder_than_parent is True

    def test_nephew_direction_matches(self, cousins_family):
        ctx = _ctx(*cousins_family, "P2", "C1")
        assert ctx.is_paternal is True
        assert ctx.is_elder_than_parent is False


class TestCousinBranch:
    def test_elder_branch(self, cousins_family):
        assert _ctx(*cousins_family, "C1", "C2").branch_is_elder is True

    def test_younger_branch(self, cousins_family):
        assert _ctx(*cousins_family, "C2", "C1").branch_is_elder is False

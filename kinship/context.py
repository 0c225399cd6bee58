"""Reduce a discovered path to the facts the namer needs."""
from .models import (
    ConnectionKind, EdgeType, PathNode, Person, RelationshipContext, Sex,
)


def is_elder(reference: Person, other: Person) -> bool:
    """True if `other` was born before `reference`.

    Without both birth dates `other` is taken to be the elder.
    """
    if reference.birth_date is None or other.birth_date is None:
        return True
    return other.birth_date < reference.birth_date


def _parent_is_father(node: PathNode) -> bool:
    """Side of family for a node reached by a PARENT step."""
    if node.edge_type is EdgeType.FATHER_CHILD:
        return True
    if node.edge_type is EdgeType.MOTHER_CHILD:
        return False
    return node.person.sex is Sex.M


def analyze_path(path: list[PathNode]) -> RelationshipContext:
    ctx = RelationshipContext(path=path, target_sex=path[-1].person.sex)

    for i, node in enumerate(path[1:], start=1):
        if node.kind is ConnectionKind.PARENT:
            ctx.generations_up += 1
            if i == 1:
                ctx.is_paternal = _parent_is_father(node)
        elif node.kind is ConnectionKind.CHILD:
            ctx.generations_down += 1
            if i == 1:
                # going down: nội through a son, ngoại through a daughter
                ctx.is_paternal = node.person.sex is Sex.M
        elif node.kind is ConnectionKind.SPOUSE:
            ctx.has_spouse_step = True
        elif node.kind is ConnectionKind.SIBLING and ctx.sibling_step_index < 0:
            ctx.sibling_step_index = i

    if ctx.has_sibling_step and not ctx.has_spouse_step:
        if ctx.generations_up and not ctx.generations_down:
            _refine_uncle_aunt(ctx)
        elif ctx.generations_down and not ctx.generations_up:
            _refine_nephew_niece(ctx)
        elif ctx.generations_up and ctx.generations_down:
            _refine_cousin(ctx)
    return ctx


def _refine_uncle_aunt(ctx: RelationshipContext):
    # person1 ... lineage parent -[SIBLING]-> uncle/aunt
    lineage = ctx.path[ctx.sibling_step_index - 1]
    collateral = ctx.path[ctx.sibling_step_index]
    if lineage.kind is ConnectionKind.PARENT:
        ctx.is_paternal = _parent_is_father(lineage)
    ctx.is_elder_than_parent = is_elder(lineage.person, collateral.person)


def _refine_nephew_niece(ctx: RelationshipContext):
    # uncle/aunt -[SIBLING]-> lineage parent ... person2
    collateral = ctx.path[ctx.sibling_step_index - 1]
    lineage = ctx.path[ctx.sibling_step_index]
    ctx.is_paternal = lineage.person.sex is Sex.M
    ctx.is_elder_than_parent = is_elder(lineage.person, collateral.person)


def _refine_cousin(ctx: RelationshipContext):
    own_branch = ctx.path[ctx.sibling_step_index - 1]
    other_branch = ctx.path[ctx.sibling_step_index]
    ctx.branch_is_elder = is_elder(other_branch.person, own_branch.person)

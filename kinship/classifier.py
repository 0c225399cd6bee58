"""Map a path signature to a relationship category and its terms."""
from . import terms
from .context import is_elder
from .models import (
    ConnectionKind, Naming, Person, RelationshipCategory as Cat,
    RelationshipContext,
)

# (up > 0, down > 0, sibling step, spouse step) -> category; None matches
# anything. First matching row wins.
DECISION_TABLE = (
    ((False, False, False, True), Cat.SPOUSE),
    ((True, False, False, False), Cat.DIRECT_ANCESTOR),
    ((False, True, False, False), Cat.DIRECT_DESCENDANT),
    ((False, False, True, False), Cat.SIBLING),
    ((True, False, True, False), Cat.UNCLE_AUNT),
    ((False, True, True, False), Cat.NEPHEW_NIECE),
    ((True, True, None, False), Cat.COUSIN),
    ((None, None, None, True), Cat.IN_LAW),
)


def signature(ctx: RelationshipContext) -> tuple[bool, bool, bool, bool]:
    return (ctx.generations_up > 0, ctx.generations_down > 0,
            ctx.has_sibling_step, ctx.has_spouse_step)


def classify(ctx: RelationshipContext) -> Cat:
    key = signature(ctx)
    for pattern, category in DECISION_TABLE:
        if all(want is None or want == got for want, got in zip(pattern, key)):
            if category is Cat.UNCLE_AUNT and ctx.generations_up > 1:
                return Cat.GRANDUNCLE_GRANDAUNT
            if category is Cat.NEPHEW_NIECE and ctx.generations_down > 1:
                return Cat.GRANDNEPHEW_GRANDNIECE
            return category
    return Cat.NOT_RELATED


# Each namer returns (en from person1, en from person2, vi from person1,
# vi from person2), every term naming what that person is to the other.

def _spouse(ctx, p1, p2, dialect):
    return (terms.pick(terms.SPOUSE_EN, p1.sex), terms.pick(terms.SPOUSE_EN, p2.sex),
            terms.pick(terms.SPOUSE_VI, p1.sex), terms.pick(terms.SPOUSE_VI, p2.sex))


def _ancestor(ctx, p1, p2, dialect):
    gen = ctx.generations_up
    return (terms.descendant_en(gen, p1.sex), terms.ancestor_en(gen, p2.sex),
            terms.descendant_vi(gen, p1.sex, ctx.is_paternal),
            terms.ancestor_vi(gen, p2.sex, ctx.is_paternal))


def _descendant(ctx, p1, p2, dialect):
    gen = ctx.generations_down
    return (terms.ancestor_en(gen, p1.sex), terms.descendant_en(gen, p2.sex),
            terms.ancestor_vi(gen, p1.sex, ctx.is_paternal),
            terms.descendant_vi(gen, p2.sex, ctx.is_paternal))


def _sibling(ctx, p1, p2, dialect):
    second_is_elder = is_elder(p1, p2)
    return (terms.pick(terms.SIBLING_EN, p1.sex), terms.pick(terms.SIBLING_EN, p2.sex),
            terms.sibling_vi(p1.sex, not second_is_elder),
            terms.sibling_vi(p2.sex, second_is_elder))


def _collateral_terms(gen, elder_side: Person, younger_side: Person, ctx, dialect):
    """(uncle/aunt en, nephew/niece en, uncle/aunt vi, nephew/niece vi)."""
    paternal, elder = ctx.is_paternal, ctx.is_elder_than_parent
    if gen == 1:
        return (terms.pick(terms.UNCLE_AUNT_EN, elder_side.sex),
                terms.pick(terms.NEPHEW_NIECE_EN, younger_side.sex),
                terms.uncle_aunt_vi(elder_side.sex, paternal, elder, dialect),
                terms.pick(terms.NEPHEW_NIECE_VI, younger_side.sex))
    return (terms.grand_uncle_aunt_en(gen, elder_side.sex),
            terms.grand_nephew_niece_en(gen, younger_side.sex),
            terms.grand_uncle_aunt_vi(gen, elder_side.sex, paternal, elder, dialect),
            terms.grand_nephew_niece_vi(gen, younger_side.sex))


def _uncle_aunt(ctx, p1, p2, dialect):
    uncle_en, nephew_en, uncle_vi, nephew_vi = _collateral_terms(
        ctx.generations_up, p2, p1, ctx, dialect)
    return nephew_en, uncle_en, nephew_vi, uncle_vi


def _nephew_niece(ctx, p1, p2, dialect):
    return _collateral_terms(ctx.generations_down, p1, p2, ctx, dialect)


def _cousin(ctx, p1, p2, dialect):
    degree, removed = ctx.cousin_degree, ctx.removed
    first_is_older_generation = ctx.generations_up < ctx.generations_down
    label = terms.cousin_en(degree, removed)
    return (label, label,
            terms.cousin_vi(degree, removed, p1.sex,
                            ctx.branch_is_elder, first_is_older_generation),
            terms.cousin_vi(degree, removed, p2.sex,
                            not ctx.branch_is_elder, not first_is_older_generation))


def _in_law(ctx, p1, p2, dialect):
    """Resolve in-law terms from where the spouse step sits in the path."""
    P, C, S, SIB = (ConnectionKind.PARENT, ConnectionKind.CHILD,
                    ConnectionKind.SPOUSE, ConnectionKind.SIBLING)
    steps = tuple(node.kind for node in ctx.path[1:])
    middle = ctx.path[1].person if len(ctx.path) > 2 else None

    if steps == (S,):
        return _spouse(ctx, p1, p2, dialect)

    if steps == (S, P):
        # person2 is a parent of person1's spouse
        return (terms.pick(terms.CHILD_IN_LAW_EN, p1.sex),
                terms.pick(terms.PARENT_IN_LAW_EN, p2.sex),
                terms.pick(terms.CHILD_IN_LAW_VI, p1.sex),
                terms.pick(terms.PARENT_IN_LAW_VI[middle.sex], p2.sex))

    if steps == (C, S):
        # person2 is the spouse of person1's child
        return (terms.pick(terms.PARENT_IN_LAW_EN, p1.sex),
                terms.pick(terms.CHILD_IN_LAW_EN, p2.sex),
                terms.pick(terms.PARENT_IN_LAW_VI[middle.sex], p1.sex),
                terms.pick(terms.CHILD_IN_LAW_VI, p2.sex))

    if steps == (P, S):
        # person2 married person1's parent but is not a recorded parent
        return (terms.pick(terms.STEP_CHILD_EN, p1.sex),
                terms.pick(terms.STEP_PARENT_EN, p2.sex),
                terms.pick(terms.STEP_CHILD_VI, p1.sex),
                terms.pick(terms.STEP_PARENT_VI, p2.sex))

    if steps == (S, C):
        return (terms.pick(terms.STEP_PARENT_EN, p1.sex),
                terms.pick(terms.STEP_CHILD_EN, p2.sex),
                terms.pick(terms.STEP_PARENT_VI, p1.sex),
                terms.pick(terms.STEP_CHILD_VI, p2.sex))

    if steps == (SIB, S):
        # person1 is a sibling of person2's spouse
        first_is_elder = is_elder(middle, p1)
        return (terms.pick(terms.SIBLING_IN_LAW_EN, p1.sex),
                terms.pick(terms.SIBLING_IN_LAW_EN, p2.sex),
                terms.sibling_of_spouse_vi(p1.sex, first_is_elder, middle.sex),
                terms.pick(terms.SIBLING_SPOUSE_VI[not first_is_elder], p2.sex))

    if steps == (S, SIB):
        # person2 is a sibling of person1's spouse
        second_is_elder = is_elder(middle, p2)
        return (terms.pick(terms.SIBLING_IN_LAW_EN, p1.sex),
                terms.pick(terms.SIBLING_IN_LAW_EN, p2.sex),
                terms.pick(terms.SIBLING_SPOUSE_VI[not second_is_elder], p1.sex),
                terms.sibling_of_spouse_vi(p2.sex, second_is_elder, middle.sex))

    return terms.RELATIVE_BY_MARRIAGE


_NAMERS = {
    Cat.SPOUSE: _spouse,
    Cat.DIRECT_ANCESTOR: _ancestor,
    Cat.DIRECT_DESCENDANT: _descendant,
    Cat.SIBLING: _sibling,
    Cat.UNCLE_AUNT: _uncle_aunt,
    Cat.GRANDUNCLE_GRANDAUNT: _uncle_aunt,
    Cat.NEPHEW_NIECE: _nephew_niece,
    Cat.GRANDNEPHEW_GRANDNIECE: _nephew_niece,
    Cat.COUSIN: _cousin,
    Cat.IN_LAW: _in_law,
}


def name_relationship(ctx: RelationshipContext, person1: Person, person2: Person,
                      dialect: str = terms.DEFAULT_DIALECT) -> Naming:
    """Classify the path and produce both-direction English/Vietnamese terms.

    A shape no namer handles falls back to a generic "related" label.
    """
    category = classify(ctx)
    namer = _NAMERS.get(category)
    words = namer(ctx, person1, person2, dialect) if namer else terms.RELATED
    return Naming(category, *words)

"""English and Vietnamese kinship vocabulary.

Terms are looked up from tables keyed by the facts that select them:
sex, generation count, side of family (nội/ngoại), birth order and,
for uncle/aunt terms, the Vietnamese dialect. Gendered entries are
(male, female, unknown) triples.

The default dialect is "central", which names all of a father's sisters
"o" and all of a mother's siblings "cậu"/"dì" regardless of birth order,
with the northern word in parentheses. Set KINSHIP_DIALECT=northern to
use "bác"/"cô" by birth order on both sides instead.
"""
import os

from .models import ConnectionKind, Sex

DEFAULT_DIALECT = os.environ.get("KINSHIP_DIALECT", "central")

RELATED = ("related", "related", "có quan hệ họ hàng", "có quan hệ họ hàng")
NOT_RELATED = ("not related", "not related",
               "không có quan hệ họ hàng", "không có quan hệ họ hàng")
SELF = ("self", "self", "chính mình", "chính mình")
RELATIVE_BY_MARRIAGE = ("relative by marriage", "relative by marriage",
                        "họ hàng bên chồng/vợ", "họ hàng bên chồng/vợ")

_SEX_INDEX = {Sex.M: 0, Sex.F: 1, Sex.U: 2}


def pick(triple: tuple[str, str, str], sex: Sex) -> str:
    return triple[_SEX_INDEX[sex]]


# ── English ──

SPOUSE_EN = ("husband", "wife", "spouse")
PARENT_EN = ("father", "mother", "parent")
GRANDPARENT_EN = ("grandfather", "grandmother", "grandparent")
CHILD_EN = ("son", "daughter", "child")
GRANDCHILD_EN = ("grandson", "granddaughter", "grandchild")
SIBLING_EN = ("brother", "sister", "sibling")
UNCLE_AUNT_EN = ("uncle", "aunt", "uncle/aunt")
NEPHEW_NIECE_EN = ("nephew", "niece", "nephew/niece")
GRAND_UNCLE_AUNT_EN = ("grand-uncle", "grand-aunt", "grand-uncle/aunt")
GRAND_NEPHEW_NIECE_EN = ("grand-nephew", "grand-niece", "grand-nephew/niece")
PARENT_IN_LAW_EN = ("father-in-law", "mother-in-law", "parent-in-law")
CHILD_IN_LAW_EN = ("son-in-law", "daughter-in-law", "child-in-law")
SIBLING_IN_LAW_EN = ("brother-in-law", "sister-in-law", "sibling-in-law")
STEP_PARENT_EN = ("step-father", "step-mother", "step-parent")
STEP_CHILD_EN = ("step-son", "step-daughter", "step-child")

_ORDINALS = {1: "1st", 2: "2nd", 3: "3rd"}
_REMOVALS = {1: "once", 2: "twice"}


def _lineal_en(generations: int, sex: Sex, first, second) -> str:
    if generations == 1:
        return pick(first, sex)
    return "great-" * (generations - 2) + pick(second, sex)


def ancestor_en(generations: int, sex: Sex) -> str:
    return _lineal_en(generations, sex, PARENT_EN, GRANDPARENT_EN)


def descendant_en(generations: int, sex: Sex) -> str:
    return _lineal_en(generations, sex, CHILD_EN, GRANDCHILD_EN)


def grand_uncle_aunt_en(generations: int, sex: Sex) -> str:
    return "great-" * max(generations - 2, 0) + pick(GRAND_UNCLE_AUNT_EN, sex)


def grand_nephew_niece_en(generations: int, sex: Sex) -> str:
    return "great-" * max(generations - 2, 0) + pick(GRAND_NEPHEW_NIECE_EN, sex)


def cousin_en(degree: int, removed: int) -> str:
    ordinal = _ORDINALS.get(degree, f"{degree}th")
    if removed == 0:
        return f"{ordinal} cousin"
    return f"{ordinal} cousin {_REMOVALS.get(removed, f'{removed} times')} removed"


# ── Vietnamese ──

SPOUSE_VI = ("chồng", "vợ", "vợ/chồng")
PARENT_VI = ("cha (bố/ba)", "mẹ (má)", "cha/mẹ")
CHILD_VI = ("con trai", "con gái", "con")
NEPHEW_NIECE_VI = ("cháu trai", "cháu gái", "cháu")
GRAND_NEPHEW_NIECE_VI = ("cháu họ (trai)", "cháu họ (gái)", "cháu họ")
CHILD_IN_LAW_VI = ("con rể", "con dâu", "con dâu/rể")
STEP_PARENT_VI = ("cha dượng", "mẹ kế", "cha dượng/mẹ kế")
STEP_CHILD_VI = ("con riêng (trai)", "con riêng (gái)", "con riêng")

# (generations, paternal) -> triple; generation 2 is the first to split nội/ngoại
ANCESTOR_VI = {
    (2, True): ("ông nội", "bà nội", "ông bà nội"),
    (2, False): ("ông ngoại", "bà ngoại", "ông bà ngoại"),
    (3, True): ("cụ ông", "cụ bà", "cụ"),
    (3, False): ("cụ ông", "cụ bà", "cụ"),
    (4, True): ("kỵ ông", "kỵ bà", "kỵ"),
    (4, False): ("kỵ ông", "kỵ bà", "kỵ"),
}
DESCENDANT_VI = {
    (2, True): ("cháu nội (trai)", "cháu nội (gái)", "cháu nội"),
    (2, False): ("cháu ngoại (trai)", "cháu ngoại (gái)", "cháu ngoại"),
    (3, True): ("chắt (trai)", "chắt (gái)", "chắt"),
    (3, False): ("chắt (trai)", "chắt (gái)", "chắt"),
    (4, True): ("chút (trai)", "chút (gái)", "chút"),
    (4, False): ("chút (trai)", "chút (gái)", "chút"),
    (5, True): ("chít (trai)", "chít (gái)", "chít"),
    (5, False): ("chít (trai)", "chít (gái)", "chít"),
}

# (sex, elder) -> sibling term
SIBLING_VI = {
    (Sex.M, True): "anh trai", (Sex.M, False): "em trai",
    (Sex.F, True): "chị gái", (Sex.F, False): "em gái",
    (Sex.U, True): "anh/chị", (Sex.U, False): "em",
}

# dialect -> (paternal, sex, elder than the lineage parent) -> term
UNCLE_AUNT_VI = {
    "central": {
        (True, Sex.M, True): "bác (trai)", (True, Sex.M, False): "chú",
        (True, Sex.F, True): "o (cô)", (True, Sex.F, False): "o (cô)",
        (True, Sex.U, True): "bác", (True, Sex.U, False): "chú/o",
        (False, Sex.M, True): "cậu", (False, Sex.M, False): "cậu",
        (False, Sex.F, True): "dì", (False, Sex.F, False): "dì",
        (False, Sex.U, True): "cậu/dì", (False, Sex.U, False): "cậu/dì",
    },
    "northern": {
        (True, Sex.M, True): "bác (trai)", (True, Sex.M, False): "chú",
        (True, Sex.F, True): "bác (gái)", (True, Sex.F, False): "cô",
        (True, Sex.U, True): "bác", (True, Sex.U, False): "chú/cô",
        (False, Sex.M, True): "bác (trai)", (False, Sex.M, False): "cậu",
        (False, Sex.F, True): "bác (gái)", (False, Sex.F, False): "dì",
        (False, Sex.U, True): "bác", (False, Sex.U, False): "cậu/dì",
    },
}

# Two generations up only; deeper collaterals use a numbered fallback.
GRAND_UNCLE_AUNT_VI = {
    "central": {
        (True, Sex.M, True): "ông bác", (True, Sex.M, False): "ông chú",
        (True, Sex.F, True): "bà o (bà cô)", (True, Sex.F, False): "bà o (bà cô)",
        (False, Sex.M, True): "ông cậu", (False, Sex.M, False): "ông cậu",
        (False, Sex.F, True): "bà dì", (False, Sex.F, False): "bà dì",
    },
    "northern": {
        (True, Sex.M, True): "ông bác", (True, Sex.M, False): "ông chú",
        (True, Sex.F, True): "bà bác", (True, Sex.F, False): "bà cô",
        (False, Sex.M, True): "ông bác", (False, Sex.M, False): "ông cậu",
        (False, Sex.F, True): "bà bác", (False, Sex.F, False): "bà dì",
    },
}

# (sex, parent is the elder sibling) -> first-cousin term
FIRST_COUSIN_VI = {
    (Sex.M, True): "anh họ", (Sex.M, False): "em họ (trai)",
    (Sex.F, True): "chị họ", (Sex.F, False): "em họ (gái)",
    (Sex.U, True): "anh/chị họ", (Sex.U, False): "em họ",
}
ELDER_GENERATION_COUSIN_VI = ("chú họ", "cô họ", "chú/cô họ")
YOUNGER_GENERATION_COUSIN_VI = ("cháu họ (trai)", "cháu họ (gái)", "cháu họ")

# sex of the spouse the in-law is reached through -> parent-in-law triple
PARENT_IN_LAW_VI = {
    Sex.M: ("bố chồng", "mẹ chồng", "bố mẹ chồng"),
    Sex.F: ("bố vợ", "mẹ vợ", "bố mẹ vợ"),
    Sex.U: ("bố chồng/bố vợ", "mẹ chồng/mẹ vợ", "bố mẹ chồng/vợ"),
}
# spouse of an elder / younger sibling
SIBLING_SPOUSE_VI = {
    True: ("anh rể", "chị dâu", "anh/chị dâu/rể"),
    False: ("em rể", "em dâu", "em dâu/rể"),
}

STEP_LABEL_EN = {
    ConnectionKind.PARENT: PARENT_EN,
    ConnectionKind.CHILD: CHILD_EN,
    ConnectionKind.SPOUSE: SPOUSE_EN,
    ConnectionKind.SIBLING: SIBLING_EN,
}
STEP_LABEL_VI = {
    ConnectionKind.PARENT: ("cha", "mẹ", "cha/mẹ"),
    ConnectionKind.CHILD: CHILD_VI,
    ConnectionKind.SPOUSE: SPOUSE_VI,
    ConnectionKind.SIBLING: ("anh/em trai", "chị/em gái", "anh chị em"),
}

DIALECTS = tuple(UNCLE_AUNT_VI)


def get_dialect(name: str | None) -> str:
    dialect = (name or DEFAULT_DIALECT).strip().lower()
    if dialect not in UNCLE_AUNT_VI:
        raise ValueError(f"Unknown dialect '{name}'. Use one of: {', '.join(DIALECTS)}")
    return dialect


def ancestor_vi(generations: int, sex: Sex, paternal: bool) -> str:
    if generations == 1:
        return pick(PARENT_VI, sex)
    triple = ANCESTOR_VI.get((generations, paternal))
    if triple:
        return pick(triple, sex)
    if generations == 5:
        return "tiên tổ đời thứ 5"
    return f"tổ tiên đời thứ {generations}"


def descendant_vi(generations: int, sex: Sex, paternal: bool) -> str:
    if generations == 1:
        return pick(CHILD_VI, sex)
    triple = DESCENDANT_VI.get((generations, paternal))
    if triple:
        return pick(triple, sex)
    return f"hậu duệ đời thứ {generations}"


def sibling_vi(sex: Sex, elder: bool) -> str:
    return SIBLING_VI[(sex, elder)]


def uncle_aunt_vi(sex: Sex, paternal: bool, elder: bool, dialect: str) -> str:
    return UNCLE_AUNT_VI[dialect][(paternal, sex, elder)]


def grand_uncle_aunt_vi(generations: int, sex: Sex, paternal: bool,
                        elder: bool, dialect: str) -> str:
    if generations == 2:
        term = GRAND_UNCLE_AUNT_VI[dialect].get((paternal, sex, elder))
        if term:
            return term
    return f"họ hàng bề trên đời thứ {generations}"


def grand_nephew_niece_vi(generations: int, sex: Sex) -> str:
    if generations == 2:
        return pick(GRAND_NEPHEW_NIECE_VI, sex)
    return f"cháu họ đời thứ {generations}"


def cousin_vi(degree: int, removed: int, sex: Sex,
              parent_is_elder: bool, older_generation: bool) -> str:
    """Term for a cousin as seen from the other side.

    Same-generation first cousins rank by their parents' birth order,
    not their own ages. Across generations the elder side is addressed
    like an uncle/aunt and the younger like a nephew/niece.
    """
    if removed == 0:
        if degree == 1:
            return FIRST_COUSIN_VI[(sex, parent_is_elder)]
        return f"anh chị em họ đời thứ {degree}"
    if older_generation:
        return pick(ELDER_GENERATION_COUSIN_VI, sex)
    return pick(YOUNGER_GENERATION_COUSIN_VI, sex)


def sibling_of_spouse_vi(sex: Sex, elder: bool, spouse_sex: Sex) -> str:
    """anh/chị/em vợ|chồng: a sibling of someone's wife or husband."""
    spouse_word = "vợ" if spouse_sex is Sex.F else "chồng"
    if not elder:
        return f"em {spouse_word}"
    return f"{pick(('anh', 'chị', 'anh/chị'), sex)} {spouse_word}"


def step_label_en(kind: ConnectionKind, sex: Sex) -> str:
    triple = STEP_LABEL_EN.get(kind)
    return pick(triple, sex) if triple else "relative"


def step_label_vi(kind: ConnectionKind, sex: Sex) -> str:
    triple = STEP_LABEL_VI.get(kind)
    return pick(triple, sex) if triple else "họ hàng"

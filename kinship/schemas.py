from datetime import date
from typing import Optional, Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

EdgeTypeName = Literal[
    "PARENT_CHILD", "FATHER_CHILD", "MOTHER_CHILD", "ADOPTED_PARENT_CHILD",
    "STEP_PARENT_CHILD", "SPOUSE", "PARTNER", "SIBLING",
]


class LoginIn(BaseModel):
    email: str
    password: str


class UserOut(BaseModel):
    id: str
    email: str
    display_name: str


class TreeCreate(BaseModel):
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError("Tree name must not be empty")
        return v


class TreeOut(BaseModel):
    id: str
    name: str
    created_at: str
    role: Optional[str] = None


class PersonCreate(BaseModel):
    given_name: str
    surname: str = ""
    suffix: str = ""
    sex: Literal["M", "F", "U"] = "U"
    birth_date: Optional[date] = None
    death_date: Optional[date] = None

    @field_validator("death_date")
    @classmethod
    def validate_death_date(cls, v, info):
        born = info.data.get("birth_date")
        if v and born and v < born:
            raise ValueError("death_date cannot be before birth_date")
        return v


class PersonOut(BaseModel):
    id: str
    given_name: str
    surname: str
    suffix: str
    sex: str
    birth_date: Optional[str] = None
    death_date: Optional[str] = None
    tree_id: str
    full_name: str


class RelCreate(BaseModel):
    """For parent-child types `from_person_id` is the parent."""
    from_person_id: str
    to_person_id: str
    type: EdgeTypeName

    @field_validator("to_person_id")
    @classmethod
    def validate_to_person_id(cls, v, info):
        if v == info.data.get("from_person_id"):
            raise ValueError("A person cannot be related to themselves")
        return v


class RelOut(BaseModel):
    id: str
    from_person_id: str
    to_person_id: str
    type: str


# ── Relationship path (camelCase on the wire) ──

class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonSummary(_CamelModel):
    id: str
    full_name: str
    given_name: str = ""
    surname: str = ""
    gender: Literal["M", "F", "U"] = "U"
    birth_date: Optional[date] = None
    death_date: Optional[date] = None


class PathStep(_CamelModel):
    person: PersonSummary
    relationship_to_next: str = ""
    relationship_to_next_vi: str = ""


class RelationshipPathOut(_CamelModel):
    person1: PersonSummary
    person2: PersonSummary
    relationship_from_person1: str
    relationship_from_person2: str
    relationship_from_person1_vi: str
    relationship_from_person2_vi: str
    category: str
    generation_difference: int
    generations_up: int = 0
    generations_down: int = 0
    cousin_degree: Optional[int] = None
    cousin_removed: Optional[int] = None
    path: list[PathStep] = []
    relationship_found: bool
    common_ancestor: Optional[PersonSummary] = None

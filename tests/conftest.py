"""Shared fixtures for the kinship test suite."""
import os
from datetime import date

# Set env vars BEFORE any kinship imports
os.environ.setdefault("COOKIE_SECRET", "test-secret-key-for-testing")

import pytest
import kuzu
from fastapi.testclient import TestClient

from kinship.db import init_schema, get_conn
from kinship.models import EdgeType, Person, RelationEdge, Sex
from kinship import auth, crud, trees


# Ensure auth module uses test cookie secret
auth.COOKIE_SECRET = os.environ["COOKIE_SECRET"]


# ── In-memory family builders ──

def person(pid, sex="U", born=None, given=None, surname=""):
    """Engine Person with an optional ISO birth date."""
    return Person(
        id=pid,
        given_name=given if given is not None else pid,
        surname=surname,
        sex=Sex.parse(sex),
        birth_date=date.fromisoformat(born) if born else None,
    )


def edge(from_id, to_id, rel_type):
    return RelationEdge(from_id, to_id, EdgeType(rel_type))


@pytest.fixture
def cousins_family():
    """Two brothers with one son each; the elder brother's line is A."""
    people = [
        person("GP", "M", "1920-01-01"),
        person("GM", "F", "1922-01-01"),
        person("P1", "M", "1945-01-01"),
        person("P2", "M", "1950-01-01"),
        person("AUNT", "F", "1955-01-01"),
        person("C1", "M", "1975-01-01"),
        person("C2", "F", "1980-01-01"),
        person("GC2", "M", "2005-01-01"),
    ]
    edges = [
        edge("GP", "P1", "FATHER_CHILD"),
        edge("GP", "P2", "FATHER_CHILD"),
        edge("GP", "AUNT", "FATHER_CHILD"),
        edge("GM", "P1", "MOTHER_CHILD"),
        edge("GM", "P2", "MOTHER_CHILD"),
        edge("GM", "AUNT", "MOTHER_CHILD"),
        edge("GP", "GM", "SPOUSE"),
        edge("P1", "C1", "FATHER_CHILD"),
        edge("P2", "C2", "FATHER_CHILD"),
        edge("C2", "GC2", "MOTHER_CHILD"),
    ]
    return people, edges


# ── Database fixtures ──

@pytest.fixture
def db_path(tmp_path):
    """Temp directory for a fresh KuzuDB."""
    return tmp_path / "test_db"


@pytest.fixture
def db(db_path):
    """Initialized KuzuDB with the full schema."""
    database = kuzu.Database(str(db_path))
    init_schema(database)
    yield database
    database.close()


@pytest.fixture
def conn(db):
    """KuzuDB connection for unit tests."""
    return kuzu.Connection(db)


# ── User fixtures ──

@pytest.fixture
def user_alice(conn):
    return auth.create_user(conn, "alice@example.com", "Alice", "password123")


@pytest.fixture
def user_bob(conn):
    return auth.create_user(conn, "bob@example.com", "Bob", "password456")


# ── Tree fixtures ──

@pytest.fixture
def tree_one(conn, user_alice):
    """Tree owned by Alice."""
    return trees.create_tree(conn, "Tree One", user_alice["id"])


@pytest.fixture
def tree_two(conn, user_bob):
    """Tree owned by Bob."""
    return trees.create_tree(conn, "Tree Two", user_bob["id"])


# ── Person fixtures ──

@pytest.fixture
def person_grandpa(conn, tree_one):
    return crud.create_person(conn, "Văn An", "Nguyễn", "M", tree_id=tree_one["id"],
                              birth_date="1930-03-01")


@pytest.fixture
def person_dad(conn, tree_one):
    return crud.create_person(conn, "Văn Bình", "Nguyễn", "M", tree_id=tree_one["id"],
                              birth_date="1960-05-10")


@pytest.fixture
def person_mom(conn, tree_one):
    return crud.create_person(conn, "Thị Cúc", "Trần", "F", tree_id=tree_one["id"],
                              birth_date="1962-08-20")


@pytest.fixture
def person_child(conn, tree_one):
    return crud.create_person(conn, "Minh", "Nguyễn", "F", tree_id=tree_one["id"],
                              birth_date="1990-01-01")


@pytest.fixture
def family_graph(conn, tree_one, person_grandpa, person_dad, person_mom, person_child):
    """grandpa -> dad -> child, mom -> child, dad <-> mom (spouse)."""
    crud.create_relationship(conn, person_grandpa["id"], person_dad["id"], "FATHER_CHILD")
    crud.create_relationship(conn, person_dad["id"], person_child["id"], "FATHER_CHILD")
    crud.create_relationship(conn, person_mom["id"], person_child["id"], "MOTHER_CHILD")
    crud.create_relationship(conn, person_dad["id"], person_mom["id"], "SPOUSE")
    return {
        "grandpa": person_grandpa,
        "dad": person_dad,
        "mom": person_mom,
        "child": person_child,
        "tree": tree_one,
    }


# ── FastAPI app fixtures ──

@pytest.fixture
def app_with_db(db):
    """FastAPI app with dependency override pointing at test DB."""
    from kinship.main import app

    def override_get_conn():
        c = kuzu.Connection(db)
        try:
            yield c
        finally:
            pass

    app.dependency_overrides[get_conn] = override_get_conn
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app_with_db):
    """Unauthenticated TestClient."""
    return TestClient(app_with_db, raise_server_exceptions=False)


def _make_authenticated_client(app, db, email, display_name, password):
    """Helper: create a user and return an authenticated TestClient."""
    c = kuzu.Connection(db)
    try:
        user = auth.create_user(c, email, display_name, password)
    except ValueError:
        user = auth.get_user_by_email(c, email)
    token = auth.create_session_token(user["id"])
    tc = TestClient(app, raise_server_exceptions=False, cookies={"session": token})
    tc._test_user = user
    return tc


@pytest.fixture
def auth_client(app_with_db, db):
    """Authenticated TestClient (Alice)."""
    return _make_authenticated_client(app_with_db, db, "alice@test.com", "Alice", "password123")


@pytest.fixture
def other_client(app_with_db, db):
    """Second authenticated user (Eve) with no trees of her own."""
    return _make_authenticated_client(app_with_db, db, "eve@test.com", "Eve", "password000")

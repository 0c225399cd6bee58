"""Tests for the HTTP API, centred on the relationship-path endpoint.

Requirements tested:
- REQ-H1: The relationship path is returned with camelCase fields
- REQ-H2: Unknown people are 404, people from another tree are 400
- REQ-H3: Trees the caller cannot see are 404; anonymous callers get 401
- REQ-H4: Only editors and owners may add people and relations
"""
import kuzu

from kinship import trees


def _make_tree(client, name="Họ Nguyễn"):
    return client.post("/api/trees", json={"name": name}).json()


def _add(client, tree_id, given, surname="Nguyễn", sex="M", birth=None):
    body = {"given_name": given, "surname": surname, "sex": sex}
    if birth:
        body["birth_date"] = birth
    return client.post(f"/api/trees/{tree_id}/people", json=body).json()


def _link(client, tree_id, a, b, rel_type):
    return client.post(f"/api/trees/{tree_id}/relationships", json={
        "from_person_id": a["id"], "to_person_id": b["id"], "type": rel_type,
    })


def _path(client, tree_id, a_id, b_id, **params):
    return client.get(f"/api/trees/{tree_id}/relationship-path",
                      params={"person1Id": a_id, "person2Id": b_id, **params})


class TestAuthEndpoints:
    def test_login_sets_cookie(self, client, db):
        from kinship import auth
        auth.create_user(kuzu.Connection(db), "lan@test.com", "Lan", "password123")
        resp = client.post("/api/auth/login",
                           json={"email": "lan@test.com", "password": "password123"})
        assert resp.status_code == 200
        assert "session" in resp.cookies
        assert client.get("/api/auth/me").json()["email"] == "lan@test.com"

    def test_bad_login(self, client):
        resp = client.post("/api/auth/login", json={"email": "x@test.com", "password": "nopenope"})
        assert resp.status_code == 401

    def test_me_requires_session(self, client):
        assert client.get("/api/auth/me").status_code == 401


class TestTreesAndPeople:
    def test_create_and_list(self, auth_client):
        tree = _make_tree(auth_client)
        assert tree["role"] == "owner"
        _add(auth_client, tree["id"], "Văn An")
        people = auth_client.get(f"/api/trees/{tree['id']}/people").json()
        assert [p["full_name"] for p in people] == ["Nguyễn Văn An"]

    def test_death_before_birth_rejected(self, auth_client):
        tree = _make_tree(auth_client)
        resp = auth_client.post(f"/api/trees/{tree['id']}/people", json={
            "given_name": "X", "birth_date": "1990-01-01", "death_date": "1980-01-01"})
        assert resp.status_code == 422

    def test_relationship_listed(self, auth_client):
        tree = _make_tree(auth_client)
        a, b = _add(auth_client, tree["id"], "A"), _add(auth_client, tree["id"], "B")
        assert _link(auth_client, tree["id"], a, b, "FATHER_CHILD").status_code == 200
        rels = auth_client.get(f"/api/trees/{tree['id']}/relationships").json()
        assert [r["type"] for r in rels] == ["FATHER_CHILD"]

    def test_unknown_relationship_type(self, auth_client):
        tree = _make_tree(auth_client)
        a, b = _add(auth_client, tree["id"], "A"), _add(auth_client, tree["id"], "B")
        assert _link(auth_client, tree["id"], a, b, "FRIEND").status_code == 422

    def test_viewer_cannot_write(self, auth_client, other_client, db):
        tree = _make_tree(auth_client)
        trees.grant_user_access(kuzu.Connection(db), tree["id"],
                                other_client._test_user["id"], "viewer")
        resp = other_client.post(f"/api/trees/{tree['id']}/people", json={"given_name": "X"})
        assert resp.status_code == 403


class TestRelationshipPath:
    def test_grandfather(self, auth_client):
        tree = _make_tree(auth_client)
        gp = _add(auth_client, tree["id"], "Văn An", birth="1930-01-01")
        dad = _add(auth_client, tree["id"], "Văn Bình", birth="1960-01-01")
        kid = _add(auth_client, tree["id"], "Minh", sex="F", birth="1990-01-01")
        _link(auth_client, tree["id"], gp, dad, "FATHER_CHILD")
        _link(auth_client, tree["id"], dad, kid, "FATHER_CHILD")

        resp = _path(auth_client, tree["id"], kid["id"], gp["id"])
        assert resp.status_code == 200
        data = resp.json()
        assert data["category"] == "DIRECT_ANCESTOR"
        assert data["relationshipFromPerson2"] == "grandfather"
        assert data["relationshipFromPerson2Vi"] == "ông nội"
        assert data["relationshipFromPerson1Vi"] == "cháu nội (gái)"
        assert data["generationDifference"] == -2
        assert data["relationshipFound"] is True
        assert data["person1"]["fullName"] == "Nguyễn Minh"
        assert data["person2"]["birthDate"] == "1930-01-01"
        assert [s["relationshipToNext"] for s in data["path"]] == ["father", "father", ""]
        assert data["path"][0]["relationshipToNextVi"] == "cha"

    def test_same_person(self, auth_client):
        tree = _make_tree(auth_client)
        a = _add(auth_client, tree["id"], "A")
        data = _path(auth_client, tree["id"], a["id"], a["id"]).json()
        assert data["category"] == "SELF"
        assert data["generationDifference"] == 0

    def test_not_related(self, auth_client):
        tree = _make_tree(auth_client)
        a, b = _add(auth_client, tree["id"], "A"), _add(auth_client, tree["id"], "B")
        data = _path(auth_client, tree["id"], a["id"], b["id"]).json()
        assert data["relationshipFound"] is False
        assert data["category"] == "NOT_RELATED"
        assert data["path"] == []
        assert data["commonAncestor"] is None

    def test_dialect_param(self, auth_client):
        tree = _make_tree(auth_client)
        gp = _add(auth_client, tree["id"], "GP")
        dad = _add(auth_client, tree["id"], "Dad", birth="1960-01-01")
        aunt = _add(auth_client, tree["id"], "Aunt", sex="F", birth="1965-01-01")
        kid = _add(auth_client, tree["id"], "Kid")
        _link(auth_client, tree["id"], gp, dad, "FATHER_CHILD")
        _link(auth_client, tree["id"], gp, aunt, "FATHER_CHILD")
        _link(auth_client, tree["id"], dad, kid, "FATHER_CHILD")

        central = _path(auth_client, tree["id"], kid["id"], aunt["id"]).json()
        northern = _path(auth_client, tree["id"], kid["id"], aunt["id"], dialect="northern").json()
        assert central["category"] == "UNCLE_AUNT"
        assert central["relationshipFromPerson2Vi"] == "o (cô)"
        assert northern["relationshipFromPerson2Vi"] == "cô"

    def test_unknown_dialect(self, auth_client):
        tree = _make_tree(auth_client)
        a, b = _add(auth_client, tree["id"], "A"), _add(auth_client, tree["id"], "B")
        assert _path(auth_client, tree["id"], a["id"], b["id"], dialect="klingon").status_code == 400

    def test_person_not_found(self, auth_client):
        tree = _make_tree(auth_client)
        a = _add(auth_client, tree["id"], "A")
        resp = _path(auth_client, tree["id"], a["id"], "missing")
        assert resp.status_code == 404
        assert "Person 2 not found" in resp.json()["detail"]

    def test_person_in_other_tree(self, auth_client):
        tree = _make_tree(auth_client)
        other = _make_tree(auth_client, "Other")
        a = _add(auth_client, tree["id"], "A")
        b = _add(auth_client, other["id"], "B")
        resp = _path(auth_client, tree["id"], a["id"], b["id"])
        assert resp.status_code == 400

    def test_hidden_tree(self, auth_client, other_client):
        tree = _make_tree(auth_client)
        a = _add(auth_client, tree["id"], "A")
        assert _path(other_client, tree["id"], a["id"], a["id"]).status_code == 404

    def test_viewer_can_resolve(self, auth_client, other_client, db):
        tree = _make_tree(auth_client)
        a = _add(auth_client, tree["id"], "A")
        trees.grant_user_access(kuzu.Connection(db), tree["id"],
                                other_client._test_user["id"], "viewer")
        resp = _path(other_client, tree["id"], a["id"], a["id"])
        assert resp.status_code == 200
        assert resp.json()["category"] == "SELF"

    def test_unknown_tree(self, auth_client):
        assert _path(auth_client, "no-such-tree", "x", "y").status_code == 404

    def test_anonymous(self, client, auth_client):
        tree = _make_tree(auth_client)
        a = _add(auth_client, tree["id"], "A")
        assert _path(client, tree["id"], a["id"], a["id"]).status_code == 401

    def test_missing_query_params(self, auth_client):
        tree = _make_tree(auth_client)
        resp = auth_client.get(f"/api/trees/{tree['id']}/relationship-path")
        assert resp.status_code == 422


class TestHealth:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

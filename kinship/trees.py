"""FamilyTree records and the view/edit permission checks guarding them."""
import uuid
from datetime import datetime, timezone
import kuzu


ROLE_HIERARCHY = {"owner": 3, "editor": 2, "viewer": 1, "none": 0}


def create_tree(conn: kuzu.Connection, name: str, owner_id: str) -> dict:
    """Create a new FamilyTree owned by the given user."""
    tid = str(uuid.uuid4())
    now = datetime.now(timezone.utc).isoformat()
    conn.execute(
        "CREATE (t:FamilyTree {id: $id, name: $name, created_at: $ts})",
        {"id": tid, "name": name, "ts": now}
    )
    conn.execute(
        "MATCH (u:User), (t:FamilyTree) WHERE u.id = $uid AND t.id = $tid "
        "CREATE (u)-[:OWNS]->(t)",
        {"uid": owner_id, "tid": tid}
    )
    return {"id": tid, "name": name, "created_at": now, "role": "owner"}


def get_tree(conn: kuzu.Connection, tree_id: str) -> dict | None:
    result = conn.execute(
        "MATCH (t:FamilyTree) WHERE t.id = $id RETURN t.id, t.name, t.created_at",
        {"id": tree_id}
    )
    if result.has_next():
        row = result.get_next()
        return {"id": row[0], "name": row[1], "created_at": row[2]}
    return None


def list_user_trees(conn: kuzu.Connection, user_id: str) -> list[dict]:
    """Trees the user owns or was granted, with the strongest role for each."""
    trees = {}
    queries = (
        "MATCH (u:User)-[:OWNS]->(t:FamilyTree) WHERE u.id = $uid "
        "RETURN t.id, t.name, t.created_at, 'owner'",
        "MATCH (u:User)-[r:CAN_ACCESS]->(t:FamilyTree) WHERE u.id = $uid "
        "RETURN t.id, t.name, t.created_at, r.role",
    )
    for query in queries:
        result = conn.execute(query, {"uid": user_id})
        while result.has_next():
            tid, name, created_at, role = result.get_next()
            known = trees.get(tid)
            if known is None or ROLE_HIERARCHY.get(role, 0) > ROLE_HIERARCHY.get(known["role"], 0):
                trees[tid] = {"id": tid, "name": name, "created_at": created_at, "role": role}
    return sorted(trees.values(), key=lambda t: t["name"])


def get_user_role(conn: kuzu.Connection, user_id: str, tree_id: str) -> str:
    """Effective role of a user on a tree: 'owner', 'editor', 'viewer' or 'none'."""
    result = conn.execute(
        "MATCH (u:User)-[:OWNS]->(t:FamilyTree) WHERE u.id = $uid AND t.id = $tid "
        "RETURN count(*)",
        {"uid": user_id, "tid": tree_id}
    )
    if result.has_next() and result.get_next()[0] > 0:
        return "owner"

    result = conn.execute(
        "MATCH (u:User)-[r:CAN_ACCESS]->(t:FamilyTree) WHERE u.id = $uid AND t.id = $tid "
        "RETURN r.role",
        {"uid": user_id, "tid": tree_id}
    )
    best = "none"
    while result.has_next():
        role = result.get_next()[0]
        if ROLE_HIERARCHY.get(role, 0) > ROLE_HIERARCHY.get(best, 0):
            best = role
    return best


def can_view(conn: kuzu.Connection, user_id: str, tree_id: str) -> bool:
    return ROLE_HIERARCHY.get(get_user_role(conn, user_id, tree_id), 0) >= ROLE_HIERARCHY["viewer"]


def require_role(conn: kuzu.Connection, user_id: str, tree_id: str, min_role: str):
    """Check that user has at least min_role on tree. Raises HTTPException otherwise."""
    from fastapi import HTTPException
    role = get_user_role(conn, user_id, tree_id)
    if ROLE_HIERARCHY.get(role, 0) < ROLE_HIERARCHY.get(min_role, 0):
        if role == "none":
            raise HTTPException(404, "Tree not found")
        raise HTTPException(403, f"Requires {min_role} access")
    return role


def grant_user_access(conn: kuzu.Connection, tree_id: str, user_id: str, role: str):
    """Grant or update direct user access to a tree."""
    if role not in ("editor", "viewer"):
        raise ValueError(f"Invalid role: {role}")
    now = datetime.now(timezone.utc).isoformat()
    conn.execute(
        "MATCH (u:User)-[r:CAN_ACCESS]->(t:FamilyTree) WHERE u.id = $uid AND t.id = $tid "
        "DELETE r",
        {"uid": user_id, "tid": tree_id}
    )
    conn.execute(
        "MATCH (u:User), (t:FamilyTree) WHERE u.id = $uid AND t.id = $tid "
        "CREATE (u)-[:CAN_ACCESS {role: $role, granted_at: $ts}]->(t)",
        {"uid": user_id, "tid": tree_id, "role": role, "ts": now}
    )

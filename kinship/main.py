"""HTTP API: sign-in, trees, people, relations and the relationship path."""
import logging
from typing import Optional

from fastapi import FastAPI, Depends, HTTPException, Query, Response

from .auth import SESSION_COOKIE, authenticate_user, create_session_token, get_current_user
from .db import get_conn
from .resolver import PersonNotFound, find_relationship
from . import crud, schemas, trees

logger = logging.getLogger(__name__)

app = FastAPI(title="Family Tree Kinship")


# ── Auth ──

@app.post("/api/auth/login", response_model=schemas.UserOut)
def login(body: schemas.LoginIn, response: Response, conn=Depends(get_conn)):
    user = authenticate_user(conn, body.email, body.password)
    if not user:
        raise HTTPException(401, "Invalid email or password")
    response.set_cookie(SESSION_COOKIE, create_session_token(user["id"]),
                        httponly=True, samesite="lax")
    return user


@app.get("/api/auth/me", response_model=schemas.UserOut)
def me(user=Depends(get_current_user)):
    return user


# ── Trees ──

@app.post("/api/trees", response_model=schemas.TreeOut)
def add_tree(body: schemas.TreeCreate, conn=Depends(get_conn), user=Depends(get_current_user)):
    return trees.create_tree(conn, body.name, user["id"])


@app.get("/api/trees", response_model=list[schemas.TreeOut])
def my_trees(conn=Depends(get_conn), user=Depends(get_current_user)):
    return trees.list_user_trees(conn, user["id"])


# ── People ──

@app.get("/api/trees/{tree_id}/people", response_model=list[schemas.PersonOut])
def people(tree_id: str, conn=Depends(get_conn), user=Depends(get_current_user)):
    trees.require_role(conn, user["id"], tree_id, "viewer")
    return crud.list_people(conn, tree_id)


@app.post("/api/trees/{tree_id}/people", response_model=schemas.PersonOut)
def add_person(tree_id: str, body: schemas.PersonCreate,
               conn=Depends(get_conn), user=Depends(get_current_user)):
    trees.require_role(conn, user["id"], tree_id, "editor")
    try:
        return crud.create_person(conn, body.given_name, body.surname, body.sex,
                                  tree_id=tree_id, suffix=body.suffix,
                                  birth_date=body.birth_date, death_date=body.death_date)
    except ValueError as e:
        raise HTTPException(400, str(e))


# ── Relationships ──

@app.get("/api/trees/{tree_id}/relationships", response_model=list[schemas.RelOut])
def relationships(tree_id: str, conn=Depends(get_conn), user=Depends(get_current_user)):
    trees.require_role(conn, user["id"], tree_id, "viewer")
    return crud.list_relationships(conn, tree_id)


@app.post("/api/trees/{tree_id}/relationships", response_model=schemas.RelOut)
def add_rel(tree_id: str, body: schemas.RelCreate,
            conn=Depends(get_conn), user=Depends(get_current_user)):
    trees.require_role(conn, user["id"], tree_id, "editor")
    for person_id in (body.from_person_id, body.to_person_id):
        if crud.get_person(conn, person_id, tree_id=tree_id) is None:
            raise HTTPException(404, f"Person not found: {person_id}")
    try:
        return crud.create_relationship(conn, body.from_person_id, body.to_person_id, body.type)
    except ValueError as e:
        raise HTTPException(400, str(e))


@app.get("/api/trees/{tree_id}/relationship-path",
         response_model=schemas.RelationshipPathOut)
def relationship_path(tree_id: str,
                      person1_id: str = Query(..., alias="person1Id"),
                      person2_id: str = Query(..., alias="person2Id"),
                      dialect: Optional[str] = None,
                      conn=Depends(get_conn), user=Depends(get_current_user)):
    if not trees.can_view(conn, user["id"], tree_id) or trees.get_tree(conn, tree_id) is None:
        raise HTTPException(404, "Tree not found")
    try:
        return find_relationship(conn, tree_id, person1_id, person2_id, dialect)
    except PersonNotFound as e:
        raise HTTPException(404, str(e))
    except ValueError as e:
        logger.info("Rejected relationship request in tree %s: %s", tree_id, e)
        raise HTTPException(400, str(e))


@app.get("/health")
def health():
    return {"status": "ok"}

"""User accounts, signed session cookies and the current-user dependency."""
import hashlib
import hmac
import os
import time
import uuid
from datetime import datetime, timezone

import bcrypt as _bcrypt
import kuzu
from fastapi import Depends, HTTPException, Request

from .db import get_conn

COOKIE_SECRET = os.environ.get("COOKIE_SECRET", "")
SESSION_COOKIE = "session"

_USER_COLUMNS = "u.id, u.email, u.display_name, u.password_hash, u.created_at"


# ── Passwords ──

def hash_password(password: str) -> str:
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters")
    if len(password.encode("utf-8")) > 72:
        raise ValueError("Password is too long (max 72 bytes)")
    return _bcrypt.hashpw(password.encode("utf-8"), _bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return _bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# ── Session tokens ──

def _sign(payload: str) -> str:
    return hmac.new(COOKIE_SECRET.encode(), payload.encode(), hashlib.sha256).hexdigest()


def create_session_token(user_id: str) -> str:
    """user_id:timestamp:signature, signed with COOKIE_SECRET."""
    payload = f"{user_id}:{int(time.time())}"
    return f"{payload}:{_sign(payload)}"


def verify_session_token(token: str | None) -> str | None:
    """Return the user id of a correctly signed token, else None."""
    if not token or not COOKIE_SECRET:
        return None
    payload, _, sig = token.rpartition(":")
    if payload.count(":") != 1:
        return None
    if not hmac.compare_digest(sig, _sign(payload)):
        return None
    return payload.split(":", 1)[0]


# ── Users ──

def _public(user: dict | None) -> dict | None:
    if user is None:
        return None
    return {k: v for k, v in user.items() if k != "password_hash"}


def _find_user(conn: kuzu.Connection, field: str, value: str) -> dict | None:
    result = conn.execute(
        f"MATCH (u:User) WHERE u.{field} = $value RETURN {_USER_COLUMNS}",
        {"value": value}
    )
    if not result.has_next():
        return None
    row = result.get_next()
    return {"id": row[0], "email": row[1], "display_name": row[2],
            "password_hash": row[3], "created_at": row[4]}


def get_user_by_email(conn: kuzu.Connection, email: str) -> dict | None:
    return _find_user(conn, "email", email.strip().lower())


def get_user_by_id(conn: kuzu.Connection, user_id: str) -> dict | None:
    return _find_user(conn, "id", user_id)


def create_user(conn: kuzu.Connection, email: str, display_name: str, password: str) -> dict:
    email = email.strip().lower()
    if get_user_by_email(conn, email):
        raise ValueError("A user with this email already exists")
    user = {"id": str(uuid.uuid4()), "email": email, "display_name": display_name,
            "created_at": datetime.now(timezone.utc).isoformat()}
    conn.execute(
        "CREATE (u:User {id: $id, email: $email, display_name: $display_name, "
        "password_hash: $hash, created_at: $created_at})",
        {**user, "hash": hash_password(password)}
    )
    return user


def authenticate_user(conn: kuzu.Connection, email: str, password: str) -> dict | None:
    user = get_user_by_email(conn, email)
    if not user or not verify_password(password, user["password_hash"]):
        return None
    return _public(user)


# ── FastAPI dependency ──

def get_current_user(request: Request, conn=Depends(get_conn)) -> dict:
    """Resolve the session cookie to a user. Raises 401 if not authenticated."""
    user_id = verify_session_token(request.cookies.get(SESSION_COOKIE))
    if not user_id:
        raise HTTPException(401, "Not authenticated")
    user = get_user_by_id(conn, user_id)
    if not user:
        raise HTTPException(401, "User not found")
    return _public(user)

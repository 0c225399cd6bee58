"""KuzuDB embedded graph database connection."""
import os
import logging
import kuzu
from pathlib import Path

logger = logging.getLogger(__name__)

DB_PATH = Path(os.environ.get("DB_PATH", Path(__file__).resolve().parent.parent / "graph_data"))
_database = None


def get_database():
    global _database
    if _database is None:
        DB_PATH.parent.mkdir(parents=True, exist_ok=True)
        _database = kuzu.Database(str(DB_PATH))
        init_schema(_database)
        logger.info("Opened kinship database at %s", DB_PATH)
    return _database


def init_schema(db):
    conn = kuzu.Connection(db)

    # ── Family data ──
    conn.execute(
        "CREATE NODE TABLE IF NOT EXISTS Person("
        "id STRING, given_name STRING, surname STRING, suffix STRING, "
        "sex STRING, birth_date STRING, death_date STRING, tree_id STRING, "
        "PRIMARY KEY(id))"
    )
    # subtype: PARENT_CHILD, FATHER_CHILD, MOTHER_CHILD, ADOPTED_PARENT_CHILD, STEP_PARENT_CHILD
    conn.execute(
        "CREATE REL TABLE IF NOT EXISTS PARENT_OF("
        "FROM Person TO Person, id STRING, subtype STRING)"
    )
    # kind: SPOUSE or PARTNER
    conn.execute(
        "CREATE REL TABLE IF NOT EXISTS SPOUSE_OF("
        "FROM Person TO Person, id STRING, kind STRING)"
    )
    conn.execute("CREATE REL TABLE IF NOT EXISTS SIBLING_OF(FROM Person TO Person, id STRING)")

    # ── Users & tree access ──
    conn.execute(
        "CREATE NODE TABLE IF NOT EXISTS User("
        "id STRING, email STRING, display_name STRING, "
        "password_hash STRING, created_at STRING, "
        "PRIMARY KEY(id))"
    )
    conn.execute(
        "CREATE NODE TABLE IF NOT EXISTS FamilyTree("
        "id STRING, name STRING, created_at STRING, "
        "PRIMARY KEY(id))"
    )
    conn.execute("CREATE REL TABLE IF NOT EXISTS OWNS(FROM User TO FamilyTree)")
    conn.execute(
        "CREATE REL TABLE IF NOT EXISTS CAN_ACCESS("
        "FROM User TO FamilyTree, role STRING, granted_at STRING)"
    )


def get_conn():
    db = get_database()
    conn = kuzu.Connection(db)
    try:
        yield conn
    finally:
        pass

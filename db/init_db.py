"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Organizations: owners of needs (managed elsewhere, read-only here)
CREATE TABLE IF NOT EXISTS organizations (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(255) NOT NULL,
    logo            TEXT,
    slug            VARCHAR(255) UNIQUE NOT NULL,
    phone           VARCHAR(50),
    about           TEXT,
    video           TEXT,
    email           VARCHAR(255) UNIQUE NOT NULL,
    password        VARCHAR(255),
    created_at      TIMESTAMPTZ DEFAULT NOW()
);

-- Categories: classification of needs (read-only here)
CREATE TABLE IF NOT EXISTS categories (
    id              SERIAL PRIMARY KEY,
    name            VARCHAR(100) NOT NULL,
    slug            VARCHAR(100) UNIQUE NOT NULL
);

-- Needs: a donation/resource request of an organization
CREATE TABLE IF NOT EXISTS needs (
    id              SERIAL PRIMARY KEY,
    category_id     INT NOT NULL REFERENCES categories(id),
    organization_id INT NOT NULL REFERENCES organizations(id) ON DELETE CASCADE,
    title           VARCHAR(255) NOT NULL,
    description     TEXT,
    required_qtd    INT,
    reached_qtd     INT DEFAULT 0,
    due_date        DATE,
    status          VARCHAR(20) NOT NULL DEFAULT 'ACTIVE' CHECK (status IN ('ACTIVE', 'INACTIVE')),
    unit            VARCHAR(50),
    created_at      TIMESTAMPTZ DEFAULT NOW(),
    updated_at      TIMESTAMPTZ
);

-- Need images: created and removed one by one
CREATE TABLE IF NOT EXISTS needs_images (
    id              SERIAL PRIMARY KEY,
    need_id         INT NOT NULL REFERENCES needs(id) ON DELETE CASCADE,
    name            VARCHAR(255),
    url             TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_needs_organization ON needs(organization_id);
CREATE INDEX IF NOT EXISTS idx_needs_images_need ON needs_images(need_id);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool, close_pool
    init_pool()
    try:
        create_tables()
    finally:
        close_pool()

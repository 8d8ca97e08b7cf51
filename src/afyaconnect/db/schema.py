"""
Schema definitions for the AfyaConnect store.

One file (SQLite) or one database (PostgreSQL) holding hospitals,
testimonials, inquiries and users. No migrations: every statement is
idempotent and runs at startup.
"""

import logging
from typing import Any

from afyaconnect.core.config import settings
from afyaconnect.db.connection import get_connection, is_postgres_mode
from afyaconnect.db.seed import seed_hospitals

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS hospitals (
  id SERIAL PRIMARY KEY,
  name TEXT NOT NULL,
  location TEXT NOT NULL DEFAULT '',
  city TEXT,
  state TEXT,
  specialties TEXT,
  description TEXT,
  contact TEXT,
  accreditations TEXT,
  price_range TEXT NOT NULL DEFAULT 'moderate',
  average_rating REAL NOT NULL DEFAULT 0,
  rating_count INTEGER NOT NULL DEFAULT 0,
  created_at TIMESTAMPTZ DEFAULT NOW()
);

CREATE TABLE IF NOT EXISTS users (
  id SERIAL PRIMARY KEY,
  email TEXT NOT NULL UNIQUE,
  password_hash TEXT NOT NULL,
  first_name TEXT NOT NULL,
  last_name TEXT NOT NULL,
  country TEXT,
  phone TEXT,
  date_of_birth TEXT,
  role TEXT NOT NULL DEFAULT 'patient',
  created_at TIMESTAMPTZ DEFAULT NOW(),
  updated_at TIMESTAMPTZ
);

CREATE TABLE IF NOT EXISTS testimonials (
  id SERIAL PRIMARY KEY,
  user_id INTEGER NOT NULL,
  patient_name TEXT NOT NULL,
  patient_country TEXT NOT NULL,
  patient_age INTEGER,
  treatment_type TEXT NOT NULL,
  hospital_name TEXT NOT NULL,
  doctor_name TEXT NOT NULL,
  rating INTEGER NOT NULL CHECK (rating >= 1 AND rating <= 5),
  testimonial_text TEXT NOT NULL,
  treatment_date TEXT,
  treatment_duration TEXT,
  cost_saved REAL,
  before_image TEXT,
  after_image TEXT,
  video_testimonial TEXT,
  tags TEXT,
  is_verified BOOLEAN NOT NULL DEFAULT FALSE,
  is_approved BOOLEAN NOT NULL DEFAULT FALSE,
  is_published BOOLEAN NOT NULL DEFAULT FALSE,
  created_at TIMESTAMPTZ DEFAULT NOW(),
  updated_at TIMESTAMPTZ DEFAULT NOW()
);
CREATE INDEX IF NOT EXISTS idx_testimonials_published ON testimonials(is_published, created_at);
CREATE INDEX IF NOT EXISTS idx_testimonials_user ON testimonials(user_id);

CREATE TABLE IF NOT EXISTS inquiries (
  id SERIAL PRIMARY KEY,
  hospital_name TEXT NOT NULL,
  patient_name TEXT NOT NULL,
  patient_email TEXT NOT NULL,
  message TEXT NOT NULL,
  submitted_at TIMESTAMPTZ DEFAULT NOW()
);
CREATE INDEX IF NOT EXISTS idx_inquiries_submitted ON inquiries(submitted_at);
"""

# SQLite: booleans are INTEGER 0/1 and timestamps ISO-8601 text
SQLITE_SCHEMA_SQL = """
PRAGMA journal_mode=WAL;
PRAGMA synchronous=NORMAL;

CREATE TABLE IF NOT EXISTS hospitals (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL,
  location TEXT NOT NULL DEFAULT '',
  city TEXT,
  state TEXT,
  specialties TEXT,
  description TEXT,
  contact TEXT,
  accreditations TEXT,
  price_range TEXT NOT NULL DEFAULT 'moderate',
  average_rating REAL NOT NULL DEFAULT 0,
  rating_count INTEGER NOT NULL DEFAULT 0,
  created_at TEXT DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS users (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  email TEXT NOT NULL UNIQUE,
  password_hash TEXT NOT NULL,
  first_name TEXT NOT NULL,
  last_name TEXT NOT NULL,
  country TEXT,
  phone TEXT,
  date_of_birth TEXT,
  role TEXT NOT NULL DEFAULT 'patient',
  created_at TEXT DEFAULT (datetime('now')),
  updated_at TEXT
);

CREATE TABLE IF NOT EXISTS testimonials (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  user_id INTEGER NOT NULL,
  patient_name TEXT NOT NULL,
  patient_country TEXT NOT NULL,
  patient_age INTEGER,
  treatment_type TEXT NOT NULL,
  hospital_name TEXT NOT NULL,
  doctor_name TEXT NOT NULL,
  rating INTEGER NOT NULL CHECK (rating >= 1 AND rating <= 5),
  testimonial_text TEXT NOT NULL,
  treatment_date TEXT,
  treatment_duration TEXT,
  cost_saved REAL,
  before_image TEXT,
  after_image TEXT,
  video_testimonial TEXT,
  tags TEXT,
  is_verified INTEGER NOT NULL DEFAULT 0,
  is_approved INTEGER NOT NULL DEFAULT 0,
  is_published INTEGER NOT NULL DEFAULT 0,
  created_at TEXT DEFAULT (datetime('now')),
  updated_at TEXT DEFAULT (datetime('now'))
);
CREATE INDEX IF NOT EXISTS idx_testimonials_published ON testimonials(is_published, created_at);
CREATE INDEX IF NOT EXISTS idx_testimonials_user ON testimonials(user_id);

CREATE TABLE IF NOT EXISTS inquiries (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  hospital_name TEXT NOT NULL,
  patient_name TEXT NOT NULL,
  patient_email TEXT NOT NULL,
  message TEXT NOT NULL,
  submitted_at TEXT DEFAULT (datetime('now'))
);
CREATE INDEX IF NOT EXISTS idx_inquiries_submitted ON inquiries(submitted_at);
"""


def _apply_schema(con: Any, postgres: bool) -> None:
    # psycopg2 has no executescript, so statements go one at a time in a
    # single transaction
    if not postgres:
        con.executescript(SQLITE_SCHEMA_SQL)
        return
    statements = [stmt.strip() for stmt in SCHEMA_SQL.split(";") if stmt.strip()]
    with con.cursor() as cur:
        try:
            for statement in statements:
                cur.execute(statement)
        except Exception:
            con.rollback()
            raise
    con.commit()


def open_db(path: str | None = None) -> Any:
    """Connect and create any missing tables and indexes.

    With DATABASE_URL set the connection is PostgreSQL and ``path`` is unused.
    """
    con = get_connection(path or settings.DB_PATH)
    _apply_schema(con, is_postgres_mode())
    return con


def ensure_db(path: str | None = None) -> int:
    """Ensure the schema exists and seed hospitals into an empty store.

    Returns the number of seed rows inserted (0 when the store already had data).
    """
    con = open_db(path)
    try:
        inserted = seed_hospitals(con)
    finally:
        con.close()
    if inserted:
        logger.info(f"Seeded {inserted} hospitals into empty store")
    return inserted

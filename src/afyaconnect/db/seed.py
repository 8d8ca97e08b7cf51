"""Fixed hospital rows inserted once, when the store is first created empty."""

from typing import Any

from afyaconnect.db.connection import is_postgres_mode, sql_placeholders

SEED_HOSPITALS: tuple[dict[str, str], ...] = (
    {
        "name": "Central Hospital",
        "location": "Downtown, City",
        "city": "City",
        "state": "",
        "specialties": "General Medicine, Surgery, Pediatrics",
        "description": "A leading healthcare facility providing comprehensive medical services.",
        "contact": "Phone: (123) 456-7890, Email: info@centralhospital.com",
        "accreditations": "NABH",
        "price_range": "moderate",
    },
    {
        "name": "City Medical Center",
        "location": "Uptown, City",
        "city": "City",
        "state": "",
        "specialties": "Cardiology, Orthopedics, Neurology",
        "description": "Specialized medical center focusing on advanced treatments.",
        "contact": "Phone: (123) 456-7891, Email: contact@citymedical.com",
        "accreditations": "JCI, NABH",
        "price_range": "premium",
    },
)

_SEED_COLUMNS = (
    "name",
    "location",
    "city",
    "state",
    "specialties",
    "description",
    "contact",
    "accreditations",
    "price_range",
)


def seed_hospitals(con: Any) -> int:
    """Insert SEED_HOSPITALS when the hospitals table is empty. Returns rows inserted.

    Every worker seeds on startup, so the emptiness check and the inserts run
    under a write lock: concurrent callers queue and all but the first see rows.
    """
    cur = con.cursor()
    try:
        if is_postgres_mode():
            cur.execute("LOCK TABLE hospitals IN EXCLUSIVE MODE")
        else:
            cur.execute("BEGIN IMMEDIATE")
        cur.execute("SELECT COUNT(*) FROM hospitals")
        if cur.fetchone()[0] > 0:
            con.rollback()
            return 0

        columns = ", ".join(_SEED_COLUMNS)
        sql = (
            f"INSERT INTO hospitals ({columns}) "
            f"VALUES ({sql_placeholders(len(_SEED_COLUMNS))})"
        )
        for hospital in SEED_HOSPITALS:
            cur.execute(sql, tuple(hospital[col] for col in _SEED_COLUMNS))
        con.commit()
        return len(SEED_HOSPITALS)
    except Exception:
        con.rollback()
        raise
    finally:
        cur.close()

"""
Hospital Directory Service

Read queries (list, substring search, advanced filtered search, lookups)
plus rating submission and admin maintenance for the hospitals table.
Every operation is one statement or one transaction.
"""

import logging
from typing import Any

from afyaconnect.core.config import settings
from afyaconnect.core.errors import NotFoundError, ValidationError
from afyaconnect.db.connection import (
    contains_clause,
    db_cursor,
    fetch_dict,
    fetch_dicts,
    insert_returning_id,
    is_postgres_mode,
    like_pattern,
    sql_placeholder,
    sql_placeholders,
)
from afyaconnect.models.hospital import (
    AdvancedSearchFilters,
    HospitalCreate,
    HospitalUpdate,
    SortKey,
)

logger = logging.getLogger(__name__)

HOSPITAL_COLUMNS = (
    "id, name, location, city, state, specialties, description, contact, "
    "accreditations, price_range, average_rating, rating_count, created_at"
)

# budget < moderate < premium; unknown values sort last
PRICE_ORDER_SQL = (
    "CASE price_range WHEN 'budget' THEN 1 WHEN 'moderate' THEN 2 "
    "WHEN 'premium' THEN 3 ELSE 4 END"
)

ORDER_BY_SQL: dict[SortKey, str] = {
    SortKey.HIGHEST_RATED: "average_rating DESC, rating_count DESC, id",
    SortKey.PRICE_LOW: f"{PRICE_ORDER_SQL} ASC, average_rating DESC, id",
    SortKey.PRICE_HIGH: f"{PRICE_ORDER_SQL} DESC, average_rating DESC, id",
    SortKey.NAME: "name ASC, id",
}

_EDITABLE_COLUMNS = (
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


class HospitalService:
    def __init__(self, db_path: str | None = None):
        self._db_path = db_path

    @property
    def db_path(self) -> str:
        return self._db_path or settings.DB_PATH

    def list_all(self) -> list[dict[str, Any]]:
        """Every hospital, in storage order."""
        with db_cursor(self.db_path) as (_, cur):
            cur.execute(f"SELECT {HOSPITAL_COLUMNS} FROM hospitals ORDER BY id")
            return fetch_dicts(cur)

    def search(self, term: str | None) -> list[dict[str, Any]]:
        """Case-insensitive substring match over name, specialties, location and city."""
        query = (term or "").strip()
        if not query:
            raise ValidationError(
                "Search query is required", fields={"query": "Search query is required"}
            )
        if len(query) > settings.MAX_QUERY_LEN:
            message = f"Search query must be at most {settings.MAX_QUERY_LEN} characters"
            raise ValidationError(message, fields={"query": message})

        matchers = [
            contains_clause(column)
            for column in ("name", "specialties", "location", "city")
        ]
        sql = (
            f"SELECT {HOSPITAL_COLUMNS} FROM hospitals "
            f"WHERE {' OR '.join(matchers)} ORDER BY id"
        )
        pattern = like_pattern(query)
        with db_cursor(self.db_path) as (_, cur):
            cur.execute(sql, (pattern,) * len(matchers))
            return fetch_dicts(cur)

    def advanced_search(self, filters: AdvancedSearchFilters) -> list[dict[str, Any]]:
        """AND-compose every non-empty filter, then sort and cap."""
        ph = sql_placeholder()
        clauses: list[str] = []
        params: list[Any] = []

        def add(clause: str, *values: Any) -> None:
            clauses.append(clause)
            params.extend(values)

        if filters.specialty and filters.specialty.strip():
            add(contains_clause("specialties"), like_pattern(filters.specialty))
        if filters.treatment and filters.treatment.strip():
            pattern = like_pattern(filters.treatment)
            add(
                f"({contains_clause('specialties')} OR {contains_clause('description')})",
                pattern,
                pattern,
            )
        if filters.hospital_name and filters.hospital_name.strip():
            add(contains_clause("name"), like_pattern(filters.hospital_name))
        if filters.city and filters.city.strip():
            add(contains_clause("city"), like_pattern(filters.city))
        if filters.district and filters.district.strip():
            pattern = like_pattern(filters.district)
            add(f"({contains_clause('city')} OR {contains_clause('state')})", pattern, pattern)
        if filters.state and filters.state.strip():
            add(contains_clause("state"), like_pattern(filters.state))
        if filters.price_range and filters.price_range.strip():
            add(f"price_range = {ph}", filters.price_range.strip().lower())
        if filters.accreditation and filters.accreditation.strip():
            add(contains_clause("accreditations"), like_pattern(filters.accreditation))
        if filters.min_rating:
            add(f"average_rating >= {ph}", filters.min_rating)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        limit = filters.limit if filters.limit and filters.limit > 0 else settings.DEFAULT_RESULTS_LIMIT
        limit = min(limit, settings.MAX_RESULTS_LIMIT)
        params.append(limit)

        sql = (
            f"SELECT {HOSPITAL_COLUMNS} FROM hospitals {where} "
            f"ORDER BY {ORDER_BY_SQL[filters.sort_by]} LIMIT {ph}"
        )
        with db_cursor(self.db_path) as (_, cur):
            cur.execute(sql, params)
            return fetch_dicts(cur)

    def get_by_id(self, hospital_id: int) -> dict[str, Any]:
        ph = sql_placeholder()
        with db_cursor(self.db_path) as (_, cur):
            cur.execute(
                f"SELECT {HOSPITAL_COLUMNS} FROM hospitals WHERE id = {ph}",
                (hospital_id,),
            )
            row = fetch_dict(cur)
        if row is None:
            raise NotFoundError("Hospital not found")
        return row

    def get_by_name(self, name: str) -> dict[str, Any]:
        ph = sql_placeholder()
        with db_cursor(self.db_path) as (_, cur):
            cur.execute(
                f"SELECT {HOSPITAL_COLUMNS} FROM hospitals WHERE name = {ph} ORDER BY id",
                (name,),
            )
            row = fetch_dict(cur)
        if row is None:
            raise NotFoundError("Hospital not found")
        return row

    def submit_rating(self, hospital_id: int, rating: int) -> dict[str, Any]:
        """Fold one rating into the running average in a single UPDATE.

        The new average and count are computed from the row's current values
        inside the statement, so concurrent submissions never overwrite each
        other.
        """
        if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
            raise ValidationError(
                "A rating between 1 and 5 is required",
                fields={"rating": "Rating must be a whole number between 1 and 5"},
            )

        ph = sql_placeholder()
        update_sql = (
            "UPDATE hospitals SET "
            f"average_rating = (average_rating * rating_count + {ph}) / (rating_count + 1.0), "
            "rating_count = rating_count + 1 "
            f"WHERE id = {ph}"
        )
        with db_cursor(self.db_path) as (conn, cur):
            try:
                if is_postgres_mode():
                    cur.execute(
                        f"{update_sql} RETURNING average_rating, rating_count",
                        (rating, hospital_id),
                    )
                    row = cur.fetchone()
                else:
                    cur.execute(update_sql, (rating, hospital_id))
                    row = None
                    if cur.rowcount:
                        cur.execute(
                            f"SELECT average_rating, rating_count FROM hospitals WHERE id = {ph}",
                            (hospital_id,),
                        )
                        row = cur.fetchone()
                if row is None:
                    conn.rollback()
                    raise NotFoundError("Hospital not found")
                conn.commit()
            except NotFoundError:
                raise
            except Exception:
                conn.rollback()
                raise

        average, count = row
        logger.info(f"Rating {rating} recorded for hospital {hospital_id} ({count} total)")
        return {
            "success": True,
            "new_average_rating": round(float(average), 2),
            "new_rating_count": int(count),
        }

    def create(self, payload: HospitalCreate) -> dict[str, Any]:
        values = payload.model_dump()
        values["price_range"] = payload.price_range.value
        columns = ", ".join(_EDITABLE_COLUMNS)
        sql = (
            f"INSERT INTO hospitals ({columns}) "
            f"VALUES ({sql_placeholders(len(_EDITABLE_COLUMNS))})"
        )
        with db_cursor(self.db_path) as (conn, cur):
            new_id = insert_returning_id(
                cur, sql, tuple(values[col] for col in _EDITABLE_COLUMNS)
            )
            conn.commit()
        logger.info(f"Hospital {new_id} created: {payload.name}")
        return self.get_by_id(new_id)

    def update(self, hospital_id: int, payload: HospitalUpdate) -> dict[str, Any]:
        changes = payload.model_dump(exclude_unset=True)
        if "price_range" in changes and changes["price_range"] is not None:
            changes["price_range"] = payload.price_range.value
        changes = {k: v for k, v in changes.items() if k in _EDITABLE_COLUMNS}
        if not changes:
            return self.get_by_id(hospital_id)
        if "name" in changes and not changes["name"]:
            raise ValidationError("Hospital name cannot be empty", fields={"name": "Name is required"})

        ph = sql_placeholder()
        assignments = ", ".join(f"{col} = {ph}" for col in changes)
        with db_cursor(self.db_path) as (conn, cur):
            cur.execute(
                f"UPDATE hospitals SET {assignments} WHERE id = {ph}",
                (*changes.values(), hospital_id),
            )
            updated = cur.rowcount
            conn.commit()
        if not updated:
            raise NotFoundError("Hospital not found")
        return self.get_by_id(hospital_id)

    def delete(self, hospital_id: int) -> None:
        ph = sql_placeholder()
        with db_cursor(self.db_path) as (conn, cur):
            cur.execute(f"DELETE FROM hospitals WHERE id = {ph}", (hospital_id,))
            deleted = cur.rowcount
            conn.commit()
        if not deleted:
            raise NotFoundError("Hospital not found")
        logger.info(f"Hospital {hospital_id} deleted")


hospital_service = HospitalService()

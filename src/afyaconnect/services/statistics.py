"""
Statistics Service

Live aggregate counters for the marketing pages. Any counter that comes
back zero is replaced by its published default, so an empty store still
renders sensible figures.
"""

import logging

from afyaconnect.core.config import settings
from afyaconnect.db.connection import db_cursor, sql_placeholder
from afyaconnect.models.statistics import DEFAULT_STATISTICS, Statistics

logger = logging.getLogger(__name__)


class StatisticsService:
    def __init__(self, db_path: str | None = None):
        self._db_path = db_path

    @property
    def db_path(self) -> str:
        return self._db_path or settings.DB_PATH

    def compute(self) -> Statistics:
        ph = sql_placeholder()
        with db_cursor(self.db_path) as (_, cur):
            cur.execute("SELECT COUNT(*) FROM hospitals")
            hospitals = cur.fetchone()[0] or 0

            cur.execute(f"SELECT COUNT(*) FROM users WHERE role = {ph}", ("patient",))
            patients = cur.fetchone()[0] or 0

            cur.execute(
                "SELECT COUNT(*), AVG(rating), SUM(cost_saved) FROM testimonials "
                f"WHERE is_published = {ph}",
                (True,),
            )
            published, avg_rating, savings = cur.fetchone()

        defaults = DEFAULT_STATISTICS
        success_rate = (
            round(float(avg_rating or 0) * 20) if published else defaults.success_rate
        )
        return Statistics(
            successful_treatments=published or defaults.successful_treatments,
            partner_hospitals=hospitals or defaults.partner_hospitals,
            registered_patients=patients or defaults.registered_patients,
            success_rate=success_rate,
            expert_doctors=defaults.expert_doctors,
            patient_coordinators=defaults.patient_coordinators,
            support_available=defaults.support_available,
            total_savings=float(savings) if savings else defaults.total_savings,
        )


statistics_service = StatisticsService()

"""Patient inquiries: insert and admin listing."""

import logging
from typing import Any

from afyaconnect.core.config import settings
from afyaconnect.db.connection import (
    db_cursor,
    fetch_dicts,
    insert_returning_id,
    sql_placeholders,
    utc_now,
)
from afyaconnect.models.inquiry import InquiryCreate

logger = logging.getLogger(__name__)


class InquiryService:
    def __init__(self, db_path: str | None = None):
        self._db_path = db_path

    @property
    def db_path(self) -> str:
        return self._db_path or settings.DB_PATH

    def submit(self, inquiry: InquiryCreate) -> int:
        sql = (
            "INSERT INTO inquiries "
            "(hospital_name, patient_name, patient_email, message, submitted_at) "
            f"VALUES ({sql_placeholders(5)})"
        )
        with db_cursor(self.db_path) as (conn, cur):
            inquiry_id = insert_returning_id(
                cur,
                sql,
                (
                    inquiry.hospital_name.strip(),
                    inquiry.patient_name.strip(),
                    inquiry.patient_email.strip(),
                    inquiry.message.strip(),
                    utc_now(),
                ),
            )
            conn.commit()
        logger.info(f"Inquiry {inquiry_id} received for {inquiry.hospital_name}")
        return inquiry_id

    def list_all(self) -> list[dict[str, Any]]:
        with db_cursor(self.db_path) as (_, cur):
            cur.execute(
                "SELECT id, hospital_name, patient_name, patient_email, message, "
                "submitted_at FROM inquiries ORDER BY submitted_at DESC, id DESC"
            )
            return fetch_dicts(cur)


inquiry_service = InquiryService()

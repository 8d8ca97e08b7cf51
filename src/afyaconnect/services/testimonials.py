"""
Testimonial Service

Submission (validation, image storage, insert), the public published list,
a user's own submissions, and the admin moderation workflow:

    pending -> approved -> published
    any state -> rejected (not approved, not published)
    published -> unpublished
"""

import json
import logging
from collections.abc import Mapping
from typing import Any

from afyaconnect.core.config import settings
from afyaconnect.core.errors import NotFoundError, ValidationError
from afyaconnect.db.connection import (
    contains_clause,
    db_cursor,
    fetch_dict,
    fetch_dicts,
    insert_returning_id,
    like_pattern,
    sql_placeholder,
    sql_placeholders,
    utc_now,
)
from afyaconnect.models.testimonial import (
    TREATMENT_CATEGORIES,
    TestimonialSubmission,
    parse_whole_number,
    validate_testimonial,
)
from afyaconnect.services.uploads import (
    ImageUpload,
    avatar_url,
    remove_files,
    save_image,
    validate_images,
)

logger = logging.getLogger(__name__)

SUBMITTED_MESSAGE = (
    "Testimonial submitted successfully. It will be reviewed before publication."
)

TESTIMONIAL_COLUMNS = (
    "id, user_id, patient_name, patient_country, patient_age, treatment_type, "
    "hospital_name, doctor_name, rating, testimonial_text, treatment_date, "
    "treatment_duration, cost_saved, before_image, after_image, "
    "video_testimonial, tags, is_verified, is_approved, is_published, "
    "created_at, updated_at"
)

_INSERT_COLUMNS = (
    "user_id",
    "patient_name",
    "patient_country",
    "patient_age",
    "treatment_type",
    "hospital_name",
    "doctor_name",
    "rating",
    "testimonial_text",
    "treatment_date",
    "treatment_duration",
    "cost_saved",
    "before_image",
    "after_image",
    "video_testimonial",
    "tags",
    "created_at",
    "updated_at",
)

_FLAGS = ("is_verified", "is_approved", "is_published")


def _decode_row(row: dict[str, Any]) -> dict[str, Any]:
    tags = row.get("tags")
    if isinstance(tags, str) and tags:
        try:
            row["tags"] = json.loads(tags)
        except json.JSONDecodeError:
            logger.warning(f"Testimonial {row.get('id')} has malformed tags")
            row["tags"] = []
    else:
        row["tags"] = []
    for flag in _FLAGS:
        row[flag] = bool(row.get(flag))
    return row


def resolve_treatment_filter(treatment_type: str | None) -> str | None:
    """Map a public category label or raw treatment type to a LIKE term.

    Empty, "all" and unrecognized values mean unfiltered.
    """
    value = (treatment_type or "").strip()
    if not value or value.lower() == "all":
        return None
    if value in TREATMENT_CATEGORIES:
        return TREATMENT_CATEGORIES[value]
    if value in TREATMENT_CATEGORIES.values():
        return value
    return None


def resolve_limit(limit: Any) -> int | None:
    number = parse_whole_number(limit)
    if number is None or number <= 0:
        return None
    return number


class TestimonialService:
    def __init__(self, db_path: str | None = None, upload_dir: str | None = None):
        self._db_path = db_path
        self._upload_dir = upload_dir

    @property
    def db_path(self) -> str:
        return self._db_path or settings.DB_PATH

    @property
    def upload_dir(self) -> str:
        return self._upload_dir or settings.UPLOAD_DIR

    def create(
        self,
        user_id: int,
        fields: Mapping[str, Any],
        images: list[ImageUpload] | None = None,
    ) -> int:
        """Validate, store images, then insert a pending testimonial.

        Nothing touches disk or the database until every field and image has
        passed validation. Images written before a failed insert are removed.
        """
        images = images or []
        errors = validate_testimonial(fields)
        errors.update(validate_images(images))
        if errors:
            raise ValidationError(
                "Testimonial submission has invalid fields", fields=errors
            )

        submission = TestimonialSubmission.from_fields(fields)
        urls: dict[str, str] = {}
        written: list[str] = []
        try:
            for image in images:
                path, url = save_image(image, self.upload_dir)
                written.append(path)
                urls[image.field] = url

            before_image = urls.get("beforeImage")
            if before_image is None and submission.use_profile_image:
                before_image = avatar_url(submission.patient_name)

            now = utc_now()
            values = (
                user_id,
                submission.patient_name,
                submission.patient_country,
                submission.patient_age,
                submission.treatment_type,
                submission.hospital_name,
                submission.doctor_name,
                submission.rating,
                submission.testimonial_text,
                submission.treatment_date,
                submission.treatment_duration,
                submission.cost_saved,
                before_image,
                urls.get("afterImage"),
                submission.video_testimonial,
                json.dumps(submission.tags) if submission.tags else None,
                now,
                now,
            )
            sql = (
                f"INSERT INTO testimonials ({', '.join(_INSERT_COLUMNS)}) "
                f"VALUES ({sql_placeholders(len(_INSERT_COLUMNS))})"
            )
            with db_cursor(self.db_path) as (conn, cur):
                try:
                    testimonial_id = insert_returning_id(cur, sql, values)
                    conn.commit()
                except Exception:
                    conn.rollback()
                    raise
        except Exception:
            remove_files(written)
            raise

        logger.info(f"Testimonial {testimonial_id} submitted by user {user_id}")
        return testimonial_id

    def list_published(
        self, treatment_type: str | None = None, limit: Any = None
    ) -> list[dict[str, Any]]:
        ph = sql_placeholder()
        sql = f"SELECT {TESTIMONIAL_COLUMNS} FROM testimonials WHERE is_published = {ph}"
        params: list[Any] = [True]

        term = resolve_treatment_filter(treatment_type)
        if term:
            sql += f" AND {contains_clause('treatment_type')}"
            params.append(like_pattern(term))

        sql += " ORDER BY created_at DESC, id DESC"
        row_limit = resolve_limit(limit)
        if row_limit is not None:
            sql += f" LIMIT {ph}"
            params.append(row_limit)

        with db_cursor(self.db_path) as (_, cur):
            cur.execute(sql, params)
            return [_decode_row(row) for row in fetch_dicts(cur)]

    def list_for_user(self, user_id: int) -> list[dict[str, Any]]:
        ph = sql_placeholder()
        with db_cursor(self.db_path) as (_, cur):
            cur.execute(
                f"SELECT {TESTIMONIAL_COLUMNS} FROM testimonials WHERE user_id = {ph} "
                "ORDER BY created_at DESC, id DESC",
                (user_id,),
            )
            return [_decode_row(row) for row in fetch_dicts(cur)]

    def list_all(self) -> list[dict[str, Any]]:
        with db_cursor(self.db_path) as (_, cur):
            cur.execute(
                f"SELECT {TESTIMONIAL_COLUMNS} FROM testimonials "
                "ORDER BY created_at DESC, id DESC"
            )
            return [_decode_row(row) for row in fetch_dicts(cur)]

    def get(self, testimonial_id: int) -> dict[str, Any]:
        ph = sql_placeholder()
        with db_cursor(self.db_path) as (_, cur):
            cur.execute(
                f"SELECT {TESTIMONIAL_COLUMNS} FROM testimonials WHERE id = {ph}",
                (testimonial_id,),
            )
            row = fetch_dict(cur)
        if row is None:
            raise NotFoundError("Testimonial not found")
        return _decode_row(row)

    # --- Moderation ---

    def _set_flags(
        self, testimonial_id: int, *, require_approved: bool = False, **flags: bool
    ) -> dict[str, Any]:
        ph = sql_placeholder()
        assignments = ", ".join(f"{name} = {ph}" for name in flags)
        where = f"id = {ph}"
        if require_approved:
            where += f" AND is_approved = {ph}"
        params: list[Any] = [*flags.values(), utc_now(), testimonial_id]
        if require_approved:
            params.append(True)

        with db_cursor(self.db_path) as (conn, cur):
            cur.execute(
                f"UPDATE testimonials SET {assignments}, updated_at = {ph} WHERE {where}",
                params,
            )
            changed = cur.rowcount
            conn.commit()

        if not changed:
            current = self.get(testimonial_id)
            if require_approved and not current["is_approved"]:
                raise ValidationError("Testimonial must be approved before publishing")
        return self.get(testimonial_id)

    def approve(self, testimonial_id: int) -> dict[str, Any]:
        row = self._set_flags(testimonial_id, is_approved=True, is_verified=True)
        logger.info(f"Testimonial {testimonial_id} approved")
        return row

    def reject(self, testimonial_id: int) -> dict[str, Any]:
        row = self._set_flags(testimonial_id, is_approved=False, is_published=False)
        logger.info(f"Testimonial {testimonial_id} rejected")
        return row

    def publish(self, testimonial_id: int) -> dict[str, Any]:
        row = self._set_flags(testimonial_id, require_approved=True, is_published=True)
        logger.info(f"Testimonial {testimonial_id} published")
        return row

    def unpublish(self, testimonial_id: int) -> dict[str, Any]:
        row = self._set_flags(testimonial_id, is_published=False)
        logger.info(f"Testimonial {testimonial_id} unpublished")
        return row


testimonial_service = TestimonialService()

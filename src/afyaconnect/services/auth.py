import logging
import secrets
from typing import Any

import bcrypt
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer

from afyaconnect.core.config import settings
from afyaconnect.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)
from afyaconnect.db.connection import (
    db_cursor,
    fetch_dict,
    insert_returning_id,
    sql_placeholder,
    sql_placeholders,
    utc_now,
)
from afyaconnect.models.auth import ProfileUpdate, RegisterRequest

logger = logging.getLogger(__name__)

TOKEN_SALT = "afyaconnect-auth"
ADMIN_USER_ID = 0
ROLE_ADMIN = "admin"
ROLE_PATIENT = "patient"

_USER_COLUMNS = "id, email, first_name, last_name, country, phone, date_of_birth, role"
ADMIN_ACCOUNT_MESSAGE = "The admin account is managed through environment settings"


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(settings.SECRET_KEY or "", salt=TOKEN_SALT)


def hash_password(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_token(user: dict[str, Any]) -> str:
    return _serializer().dumps(
        {"user_id": user["id"], "email": user["email"], "role": user["role"]}
    )


def decode_token(token: str | None) -> dict[str, Any] | None:
    """Return the token payload, or None when missing, tampered or expired."""
    if not token:
        return None
    try:
        return _serializer().loads(token, max_age=settings.TOKEN_MAX_AGE_SECONDS)
    except (BadSignature, SignatureExpired):
        return None


def _admin_profile() -> dict[str, Any]:
    return {
        "id": ADMIN_USER_ID,
        "email": settings.ADMIN_USERNAME,
        "first_name": "Admin",
        "last_name": "",
        "country": None,
        "phone": None,
        "date_of_birth": None,
        "role": ROLE_ADMIN,
    }


def _is_admin_login(email: str, password: str) -> bool:
    if not settings.ADMIN_USERNAME or not settings.ADMIN_PASSWORD:
        return False
    return secrets.compare_digest(email, settings.ADMIN_USERNAME) and secrets.compare_digest(
        password, settings.ADMIN_PASSWORD
    )


class AuthService:
    def __init__(self, db_path: str | None = None):
        self._db_path = db_path

    @property
    def db_path(self) -> str:
        return self._db_path or settings.DB_PATH

    def register(self, payload: RegisterRequest) -> dict[str, Any]:
        email = payload.email.strip().lower()
        ph = sql_placeholder()
        with db_cursor(self.db_path) as (conn, cur):
            cur.execute(f"SELECT id FROM users WHERE email = {ph}", (email,))
            if cur.fetchone() is not None:
                raise ConflictError("An account with this email already exists")
            user_id = insert_returning_id(
                cur,
                "INSERT INTO users "
                "(email, password_hash, first_name, last_name, country, role, created_at) "
                f"VALUES ({sql_placeholders(7)})",
                (
                    email,
                    hash_password(payload.password),
                    payload.first_name.strip(),
                    payload.last_name.strip(),
                    payload.country,
                    ROLE_PATIENT,
                    utc_now(),
                ),
            )
            conn.commit()
        logger.info(f"Registered user {user_id}")
        return self.get_user(user_id)

    def login(self, email: str, password: str) -> dict[str, Any]:
        if _is_admin_login(email, password):
            logger.info("Admin login")
            return _admin_profile()

        ph = sql_placeholder()
        with db_cursor(self.db_path) as (_, cur):
            cur.execute(
                f"SELECT {_USER_COLUMNS}, password_hash FROM users WHERE email = {ph}",
                (email.strip().lower(),),
            )
            row = fetch_dict(cur)
        if row is None or not verify_password(password, row.pop("password_hash")):
            raise UnauthorizedError("Invalid email or password")
        return row

    def get_user(self, user_id: int) -> dict[str, Any]:
        if user_id == ADMIN_USER_ID:
            return _admin_profile()
        ph = sql_placeholder()
        with db_cursor(self.db_path) as (_, cur):
            cur.execute(f"SELECT {_USER_COLUMNS} FROM users WHERE id = {ph}", (user_id,))
            row = fetch_dict(cur)
        if row is None:
            raise UnauthorizedError("Account no longer exists")
        return row

    def update_profile(self, user_id: int, payload: ProfileUpdate) -> dict[str, Any]:
        if user_id == ADMIN_USER_ID:
            raise ForbiddenError(ADMIN_ACCOUNT_MESSAGE)
        ph = sql_placeholder()
        with db_cursor(self.db_path) as (conn, cur):
            cur.execute(
                f"UPDATE users SET first_name = {ph}, last_name = {ph}, phone = {ph}, "
                f"date_of_birth = {ph}, country = {ph}, updated_at = {ph} WHERE id = {ph}",
                (
                    payload.first_name,
                    payload.last_name,
                    payload.phone or None,
                    payload.date_of_birth or None,
                    payload.country or None,
                    utc_now(),
                    user_id,
                ),
            )
            if cur.rowcount == 0:
                raise NotFoundError("User not found")
            conn.commit()
        logger.info(f"Updated profile of user {user_id}")
        return self.get_user(user_id)

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        if user_id == ADMIN_USER_ID:
            raise ForbiddenError(ADMIN_ACCOUNT_MESSAGE)
        ph = sql_placeholder()
        with db_cursor(self.db_path) as (conn, cur):
            cur.execute(f"SELECT password_hash FROM users WHERE id = {ph}", (user_id,))
            row = cur.fetchone()
            if row is None:
                raise NotFoundError("User not found")
            if not verify_password(current_password, row[0]):
                raise UnauthorizedError("Current password is incorrect")
            cur.execute(
                f"UPDATE users SET password_hash = {ph}, updated_at = {ph} WHERE id = {ph}",
                (hash_password(new_password), utc_now(), user_id),
            )
            conn.commit()
        logger.info(f"User {user_id} changed their password")


auth_service = AuthService()

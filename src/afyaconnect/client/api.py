"""
Async HTTP client for the AfyaConnect API.

One short-lived httpx.AsyncClient per call. Non-2xx responses raise
ApiError carrying the server's `error` message.
"""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from afyaconnect.client.errors import ApiError, AuthenticationRequired
from afyaconnect.client.filters import SearchFilters
from afyaconnect.client.testimonials import (
    ImageFile,
    check_submission,
    form_data,
    multipart_files,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def _api_error(resp: Any) -> ApiError:
    try:
        body = resp.json()
        message = body.get("error") if isinstance(body, dict) else None
    except ValueError:
        message = None
    return ApiError(resp.status_code, message or resp.text or "Request failed")


class AfyaConnectClient:
    def __init__(
        self,
        base_url: str = "http://localhost:3001",
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout

    def _headers(self, auth: bool) -> dict[str, str]:
        if not auth:
            return {}
        if not self.token:
            raise AuthenticationRequired("Please log in to continue")
        return {"Authorization": f"Bearer {self.token}"}

    async def _get(self, path: str, params: Mapping[str, Any] | None = None, auth: bool = False) -> Any:
        headers = self._headers(auth)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(f"{self.base_url}{path}", params=params, headers=headers)
        if resp.status_code >= 400:
            raise _api_error(resp)
        return resp.json()

    async def _post(self, path: str, auth: bool = False, **kwargs: Any) -> Any:
        headers = self._headers(auth)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.post(f"{self.base_url}{path}", headers=headers, **kwargs)
        if resp.status_code >= 400:
            raise _api_error(resp)
        return resp.json()

    async def _put(self, path: str, auth: bool = False, **kwargs: Any) -> Any:
        headers = self._headers(auth)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.put(f"{self.base_url}{path}", headers=headers, **kwargs)
        if resp.status_code >= 400:
            raise _api_error(resp)
        return resp.json()

    # --- Hospitals ---

    async def list_hospitals(self) -> list[dict[str, Any]]:
        return await self._get("/api/hospitals")

    async def search_hospitals(self, query: str) -> list[dict[str, Any]]:
        return await self._get("/api/hospitals/search", params={"query": query})

    async def advanced_search(self, filters: SearchFilters) -> list[dict[str, Any]]:
        return await self._get("/api/hospitals/advanced-search", params=filters.to_params())

    async def get_hospital(self, hospital_id: int) -> dict[str, Any]:
        return await self._get(f"/api/hospitals/{hospital_id}")

    async def submit_rating(self, hospital_id: int, rating: int) -> dict[str, Any]:
        return await self._post(f"/api/hospitals/{hospital_id}/ratings", json={"rating": rating})

    # --- Testimonials & statistics ---

    async def get_statistics(self) -> dict[str, Any]:
        return await self._get("/api/statistics")

    async def list_testimonials(
        self, treatment_type: str | None = None, limit: int | None = None
    ) -> list[dict[str, Any]]:
        params: dict[str, Any] = {}
        if treatment_type:
            params["treatmentType"] = treatment_type
        if limit:
            params["limit"] = limit
        return await self._get("/api/testimonials", params=params)

    async def my_testimonials(self) -> list[dict[str, Any]]:
        return await self._get("/api/testimonials/my", auth=True)

    async def submit_testimonial(
        self,
        fields: Mapping[str, Any],
        images: Mapping[str, ImageFile] | None = None,
    ) -> dict[str, Any]:
        """Validate locally, then send as multipart.

        Raises AuthenticationRequired or TestimonialValidationError without
        making any request.
        """
        self._headers(auth=True)
        check_submission(fields, images)
        return await self._post(
            "/api/testimonials",
            auth=True,
            data=form_data(fields),
            files=multipart_files(images) or None,
        )

    # --- Inquiries & assistant ---

    async def submit_inquiry(
        self, hospital_name: str, patient_name: str, patient_email: str, message: str
    ) -> dict[str, Any]:
        return await self._post(
            "/api/inquiries",
            json={
                "hospitalName": hospital_name,
                "patientName": patient_name,
                "patientEmail": patient_email,
                "message": message,
            },
        )

    async def chat(self, message: str) -> str:
        data = await self._post("/api/chat", json={"message": message})
        return data["response"]

    async def recommendations(self, symptoms: str) -> list[dict[str, Any]]:
        return await self._post("/api/recommendations", json={"symptoms": symptoms})

    # --- Auth ---

    async def login(self, email: str, password: str) -> dict[str, Any]:
        data = await self._post("/api/auth/login", json={"email": email, "password": password})
        self.token = data["token"]
        return data["user"]

    async def register(
        self,
        email: str,
        password: str,
        first_name: str,
        last_name: str,
        country: str | None = None,
    ) -> dict[str, Any]:
        data = await self._post(
            "/api/auth/register",
            json={
                "email": email,
                "password": password,
                "firstName": first_name,
                "lastName": last_name,
                "country": country,
            },
        )
        self.token = data["token"]
        return data["user"]

    async def update_profile(
        self,
        first_name: str,
        last_name: str,
        phone: str | None = None,
        date_of_birth: str | None = None,
        country: str | None = None,
    ) -> dict[str, Any]:
        data = await self._put(
            "/api/auth/profile",
            auth=True,
            json={
                "firstName": first_name,
                "lastName": last_name,
                "phone": phone,
                "dateOfBirth": date_of_birth,
                "country": country,
            },
        )
        return data["user"]

    async def change_password(self, current_password: str, new_password: str) -> None:
        await self._post(
            "/api/auth/change-password",
            auth=True,
            json={"currentPassword": current_password, "newPassword": new_password},
        )

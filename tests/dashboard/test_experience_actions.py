"""
Tests for the dashboard experience actions.
"""

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.models import Experience


def _experience(**overrides) -> dict[str, str]:
    data = {
        "title": "Engineer",
        "company": "Acme",
        "company_url": "https://acme.example",
        "start_date": "2022-03-01",
        "end_date": "2024-02-29",
        "description": "Built the widgets",
    }
    data.update(overrides)
    return data


class TestUpsertExperience:
    """POST /dashboard/experiences."""

    async def test_blank_end_date_is_ongoing(
        self, async_client: AsyncClient, db_session: AsyncSession, owner_headers: dict
    ):
        response = await async_client.post(
            "/dashboard/experiences",
            data=_experience(end_date=""),
            headers=owner_headers,
        )
        assert response.status_code == 200

        experience = await db_session.get(Experience, response.json()["id"], populate_existing=True)
        assert experience.end_date is None

        listing = await async_client.get("/dashboard/experiences", headers=owner_headers)
        assert listing.json()["items"][0]["ongoing"] is True

    async def test_end_date_is_stored(
        self, async_client: AsyncClient, db_session: AsyncSession, owner_headers: dict
    ):
        response = await async_client.post("/dashboard/experiences", data=_experience(), headers=owner_headers)
        experience = await db_session.get(Experience, response.json()["id"], populate_existing=True)
        assert (experience.end_date.year, experience.end_date.month, experience.end_date.day) == (2024, 2, 29)

        listing = await async_client.get("/dashboard/experiences", headers=owner_headers)
        assert listing.json()["items"][0]["ongoing"] is False

    async def test_blank_company_url_is_stored_as_null(
        self, async_client: AsyncClient, db_session: AsyncSession, owner_headers: dict
    ):
        response = await async_client.post(
            "/dashboard/experiences",
            data=_experience(company_url=""),
            headers=owner_headers,
        )
        experience = await db_session.get(Experience, response.json()["id"], populate_existing=True)
        assert experience.company_url is None

    async def test_closing_an_ongoing_experience(
        self, async_client: AsyncClient, db_session: AsyncSession, owner_headers: dict
    ):
        created = await async_client.post(
            "/dashboard/experiences",
            data=_experience(end_date=""),
            headers=owner_headers,
        )
        row_id = created.json()["id"]
        await async_client.post(
            "/dashboard/experiences",
            data=_experience(id=str(row_id), end_date="2025-01-31"),
            headers=owner_headers,
        )

        experience = await db_session.get(Experience, row_id, populate_existing=True)
        assert experience.end_date is not None

    async def test_missing_start_date_is_reported(self, async_client: AsyncClient, owner_headers: dict):
        data = _experience()
        del data["start_date"]
        data["company"] = ""
        response = await async_client.post("/dashboard/experiences", data=data, headers=owner_headers)
        assert response.status_code == 422
        assert set(response.json()["errors"]) == {"start_date", "company"}


class TestDeleteExperience:
    """POST /dashboard/experiences/delete."""

    async def test_delete_unknown_id_succeeds(self, async_client: AsyncClient, owner_headers: dict):
        response = await async_client.post(
            "/dashboard/experiences/delete",
            data={"id": "12345"},
            headers=owner_headers,
        )
        assert response.status_code == 200
        assert response.json()["ok"] is True

"""
Tests for the CSV export of a user's data.
"""

import csv
from io import StringIO

from kazi.services.export_service import BUDGET_HEADER, EXPENSE_HEADER, USER_HEADER

from tests.conftest import create_budget, create_expense


def parse(text):
    return list(csv.reader(StringIO(text)))


class TestCsvDownload:

    async def test_download_layout(self, client, alice):
        budget = await create_budget(client, alice["headers"], category="Food")
        expense = (await create_expense(
            client, alice["headers"], amount=12.5, budget_id=budget["budgetID"], description="Lunch"
        )).json()

        response = await client.get("/api/csv/download", headers=alice["headers"])
        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/csv")
        assert response.headers["content-disposition"] == f"attachment; filename=UserData_{alice['id']}.csv"

        rows = parse(response.text)
        assert rows[0] == ["User Information"]
        assert rows[1] == USER_HEADER
        assert rows[2][:3] == [str(alice["id"]), "alice@kazi.io", "Alice"]
        assert rows[3] == []
        assert rows[4] == ["Budgets"]
        assert rows[5] == BUDGET_HEADER
        assert rows[6][:2] == [str(budget["budgetID"]), "Food"]
        assert rows[6][3] == "2024-01-01"
        assert rows[7] == []
        assert rows[8] == ["Expenses"]
        assert rows[9] == EXPENSE_HEADER
        assert rows[10][:4] == [str(expense["expenseID"]), str(budget["budgetID"]), "Food", "Lunch"]
        assert rows[10][5] == "2024-01-15"
        assert len(rows) == 11

    async def test_fields_are_escaped(self, client, alice):
        await create_budget(client, alice["headers"], category='Food, "fancy"')
        await create_expense(client, alice["headers"], description="line one\nline two")

        response = await client.get("/api/csv/download", headers=alice["headers"])
        assert '"Food, ""fancy"""' in response.text

        rows = parse(response.text)
        budget_row = rows[rows.index(BUDGET_HEADER) + 1]
        expense_row = rows[rows.index(EXPENSE_HEADER) + 1]
        assert budget_row[1] == 'Food, "fancy"'
        assert expense_row[1] == ""
        assert expense_row[3] == "line one\nline two"

    async def test_only_own_data_is_exported(self, client, alice, bob):
        await create_budget(client, bob["headers"], category="BobOnly")
        response = await client.get("/api/csv/download", headers=alice["headers"])
        assert "BobOnly" not in response.text

    async def test_requires_authentication(self, client):
        response = await client.get("/api/csv/download")
        assert response.status_code == 401


class TestAdminCsvDownload:

    async def test_admin_downloads_any_user(self, client, admin, alice):
        response = await client.get(f"/api/csv/download/{alice['id']}", headers=admin["headers"])
        assert response.status_code == 200
        assert "alice@kazi.io" in response.text

    async def test_unknown_user_is_404(self, client, admin):
        response = await client.get("/api/csv/download/999", headers=admin["headers"])
        assert response.status_code == 404

    async def test_regular_user_is_forbidden(self, client, alice, bob):
        response = await client.get(f"/api/csv/download/{bob['id']}", headers=alice["headers"])
        assert response.status_code == 403

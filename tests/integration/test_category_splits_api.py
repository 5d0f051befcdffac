"""Integration tests for category split endpoints."""

from datetime import date
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from fintrack.models.category import Category
from fintrack.models.transaction import Transaction
from fintrack.repositories.category import CategoryRepository
from fintrack.repositories.transaction import TransactionRepository


@pytest.fixture
async def food_category(db_session: AsyncSession, test_user):
    return await CategoryRepository(db_session).create(Category(user_id=test_user.id, name="Food"))


async def create_txn(client, headers, amount=1000):
    response = await client.post(
        "/api/v1/transactions",
        json={"transaction_type": "expense", "txn_date": "2026-03-01", "amount": amount},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


async def create_split(client, headers, transaction_id, category_id, amount):
    return await client.post(
        f"/api/v1/transactions/{transaction_id}/splits",
        json={"category_id": str(category_id), "amount": amount},
        headers=headers,
    )


class TestSplitsCRUD:
    @pytest.mark.asyncio
    async def test_split_transaction(
        self, client: AsyncClient, auth_headers: dict, test_category, food_category
    ):
        txn = await create_txn(client, auth_headers)

        first = await create_split(client, auth_headers, txn["id"], test_category.id, 600)
        second = await create_split(client, auth_headers, txn["id"], food_category.id, 400)

        assert first.status_code == 201
        assert first.json()["category"] == {"id": str(test_category.id), "name": "Transport"}
        assert second.status_code == 201

        listed = await client.get(f"/api/v1/transactions/{txn['id']}/splits", headers=auth_headers)
        data = listed.json()
        assert data["total"] == 2
        assert data["allocated"] == 1000
        assert [s["amount"] for s in data["splits"]] == [600, 400]

    @pytest.mark.asyncio
    async def test_update_and_delete(
        self, client: AsyncClient, auth_headers: dict, test_category, food_category
    ):
        txn = await create_txn(client, auth_headers)
        split = (await create_split(client, auth_headers, txn["id"], test_category.id, 600)).json()
        url = f"/api/v1/category-splits/{split['id']}"

        updated = await client.put(
            url,
            json={"category_id": str(food_category.id), "amount": 250, "note": "lunch"},
            headers=auth_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["category_id"] == str(food_category.id)
        assert updated.json()["amount"] == 250
        assert updated.json()["note"] == "lunch"

        assert (await client.delete(url, headers=auth_headers)).status_code == 204
        assert (await client.delete(url, headers=auth_headers)).status_code == 204

        missing = await client.put(
            url, json={"category_id": str(food_category.id), "amount": 1}, headers=auth_headers
        )
        assert missing.status_code == 404
        assert missing.json()["error_code"] == "SPLIT_001"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("amount", [0, -5])
    async def test_amount_must_be_positive(
        self, client: AsyncClient, auth_headers: dict, test_category, amount
    ):
        txn = await create_txn(client, auth_headers)

        response = await create_split(client, auth_headers, txn["id"], test_category.id, amount)

        assert response.status_code == 400
        assert response.json()["error_code"] == "VAL_001"

    @pytest.mark.asyncio
    async def test_foreign_category_rejected(
        self, client: AsyncClient, auth_headers: dict, db_session: AsyncSession, other_user
    ):
        foreign = await CategoryRepository(db_session).create(
            Category(user_id=other_user.id, name="Theirs")
        )
        txn = await create_txn(client, auth_headers)

        response = await create_split(client, auth_headers, txn["id"], foreign.id, 100)

        assert response.status_code == 400
        assert response.json()["error_code"] == "SPLIT_002"

    @pytest.mark.asyncio
    async def test_other_users_transaction_not_found(
        self,
        client: AsyncClient,
        auth_headers: dict,
        db_session: AsyncSession,
        other_user,
        test_category,
    ):
        theirs = await TransactionRepository(db_session).create(
            Transaction(
                user_id=other_user.id,
                transaction_type="expense",
                txn_date=date(2026, 3, 1),
                amount=100,
            )
        )

        response = await create_split(client, auth_headers, theirs.id, test_category.id, 50)
        unknown = await create_split(client, auth_headers, uuid4(), test_category.id, 50)

        assert response.status_code == 404
        assert response.json()["error_code"] == "TXN_001"
        assert unknown.status_code == 404


class TestSplitTotals:
    @pytest.mark.asyncio
    async def test_totals_by_category(
        self, client: AsyncClient, auth_headers: dict, test_category, food_category
    ):
        first = await create_txn(client, auth_headers)
        second = await create_txn(client, auth_headers)
        await create_split(client, auth_headers, first["id"], test_category.id, 300)
        await create_split(client, auth_headers, second["id"], test_category.id, 200)
        await create_split(client, auth_headers, second["id"], food_category.id, 800)

        response = await client.get("/api/v1/category-splits/totals", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == [
            {"category_id": str(food_category.id), "category": "Food", "total": 800, "count": 1},
            {"category_id": str(test_category.id), "category": "Transport", "total": 500, "count": 2},
        ]

    @pytest.mark.asyncio
    async def test_deleted_transactions_excluded(
        self, client: AsyncClient, auth_headers: dict, test_category
    ):
        txn = await create_txn(client, auth_headers)
        await create_split(client, auth_headers, txn["id"], test_category.id, 300)
        await client.delete(f"/api/v1/transactions/{txn['id']}", headers=auth_headers)

        response = await client.get(
            f"/api/v1/category-splits/totals/{test_category.id}", headers=auth_headers
        )

        assert response.json() == {
            "category_id": str(test_category.id),
            "category": None,
            "total": 0,
            "count": 0,
        }

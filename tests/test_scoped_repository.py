"""
Tests for owner-scoped persistence: visibility, forced ownership,
optimistic concurrency and delete rules.
"""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import func, select

from kazi.exceptions import BadRequestError, ConflictError, NotFoundError
from kazi.models.budget import Budget
from kazi.models.expense import Expense
from kazi.models.notification import Notification
from kazi.models.user import User
from kazi.services.scoped_repository import ScopedRepository


def budget_fields(**overrides):
    fields = {"category": "Food", "amount": Decimal("100.00"), "month_year": date(2024, 1, 1)}
    fields.update(overrides)
    return fields


@pytest.fixture
async def owners(make_user):
    alice = await make_user(email="alice@kazi.io")
    bob = await make_user(email="bob@kazi.io")
    return alice, bob


class TestScoping:
    """A scoped repository only sees its owner's rows."""

    async def test_create_forces_owner(self, session, owners):
        alice, bob = owners
        repo = ScopedRepository(session, Budget, owner_id=alice.id, label="Budget")
        budget = await repo.create(**budget_fields(user_id=bob.id))
        assert budget.user_id == alice.id

    async def test_create_stamps_created_at(self, session, owners):
        alice, _ = owners
        budget = await ScopedRepository(session, Budget, owner_id=alice.id).create(**budget_fields())
        assert budget.created_at is not None
        assert budget.version == 1

    async def test_other_owners_rows_are_invisible(self, session, owners):
        alice, bob = owners
        alice_repo = ScopedRepository(session, Budget, owner_id=alice.id, label="Budget")
        bob_repo = ScopedRepository(session, Budget, owner_id=bob.id, label="Budget")
        budget = await alice_repo.create(**budget_fields())

        assert await bob_repo.find(budget.id) is None
        assert await bob_repo.list() == []
        with pytest.raises(NotFoundError) as exc:
            await bob_repo.get(budget.id)
        assert exc.value.detail == "Budget not found"
        with pytest.raises(NotFoundError):
            await bob_repo.update(budget.id, category="Stolen")
        with pytest.raises(NotFoundError):
            await bob_repo.delete(budget.id)

        assert (await alice_repo.get(budget.id)).category == "Food"

    async def test_unscoped_repository_sees_everything(self, session, owners):
        alice, bob = owners
        await ScopedRepository(session, Budget, owner_id=alice.id).create(**budget_fields())
        await ScopedRepository(session, Budget, owner_id=bob.id).create(**budget_fields())

        everything = ScopedRepository(session, Budget)
        assert not everything.is_scoped
        assert {b.user_id for b in await everything.list()} == {alice.id, bob.id}

    async def test_list_is_ordered_by_id(self, session, owners):
        alice, _ = owners
        repo = ScopedRepository(session, Budget, owner_id=alice.id)
        for category in ("Rent", "Food", "Fun"):
            await repo.create(**budget_fields(category=category))
        ids = [b.id for b in await repo.list()]
        assert ids == sorted(ids)

    async def test_list_accepts_sql_ordering(self, session, owners):
        alice, _ = owners
        repo = ScopedRepository(session, Budget, owner_id=alice.id)
        for category in ("Rent", "Food", "Fun"):
            await repo.create(**budget_fields(category=category))
        budgets = await repo.list(Budget.category.asc())
        assert [b.category for b in budgets] == ["Food", "Fun", "Rent"]

    async def test_create_is_committed(self, session_factory, session, owners):
        alice, _ = owners
        budget = await ScopedRepository(session, Budget, owner_id=alice.id).create(**budget_fields())
        async with session_factory() as other:
            assert await ScopedRepository(other, Budget, owner_id=alice.id).exists(budget.id)

    async def test_missing_id_is_not_found(self, session, owners):
        alice, _ = owners
        repo = ScopedRepository(session, Budget, owner_id=alice.id, label="Budget")
        with pytest.raises(NotFoundError):
            await repo.get(999)
        assert not await repo.exists(999)

    async def test_unknown_owner_is_bad_reference(self, session):
        repo = ScopedRepository(session, Budget, label="Budget")
        with pytest.raises(BadRequestError) as exc:
            await repo.create(**budget_fields(user_id=424242))
        assert exc.value.detail == "Invalid reference for Budget"


class TestConcurrency:
    """Lost update races surface as 409 or 404."""

    async def test_stale_write_is_a_conflict(self, session_factory, session, owners):
        alice, _ = owners
        repo = ScopedRepository(session, Budget, owner_id=alice.id, label="Budget")
        budget = await repo.create(**budget_fields())
        budget_id = budget.id

        async with session_factory() as other:
            competitor = ScopedRepository(other, Budget, owner_id=alice.id, label="Budget")
            await competitor.update(budget_id, category="Groceries")

        with pytest.raises(ConflictError):
            await repo.update(budget_id, category="Dining")

        assert (await repo.get(budget_id)).category == "Groceries"
        assert budget is not None

    async def test_update_after_concurrent_delete_is_not_found(self, session_factory, session, owners):
        alice, _ = owners
        repo = ScopedRepository(session, Budget, owner_id=alice.id, label="Budget")
        budget = await repo.create(**budget_fields())
        budget_id = budget.id

        async with session_factory() as other:
            await ScopedRepository(other, Budget, owner_id=alice.id).delete(budget_id)

        with pytest.raises(NotFoundError):
            await repo.update(budget_id, category="Dining")

    async def test_update_bumps_version(self, session, owners):
        alice, _ = owners
        repo = ScopedRepository(session, Budget, owner_id=alice.id)
        budget = await repo.create(**budget_fields())
        updated = await repo.update(budget.id, amount=Decimal("250.00"))
        assert updated.version == 2
        assert updated.amount == Decimal("250.00")


class TestDeleteRules:
    """Budgets in use cannot be removed; users take their data with them."""

    async def test_budget_with_expenses_cannot_be_deleted(self, session, owners):
        alice, _ = owners
        budgets = ScopedRepository(session, Budget, owner_id=alice.id, label="Budget")
        expenses = ScopedRepository(session, Expense, owner_id=alice.id, label="Expense")
        budget = await budgets.create(**budget_fields())
        budget_id = budget.id
        await expenses.create(
            category="Food", amount=Decimal("5.00"), date=date(2024, 1, 2), budget_id=budget_id
        )

        with pytest.raises(ConflictError) as exc:
            await budgets.delete(budget_id)
        assert exc.value.detail == "Budget is still referenced by other records"
        assert await budgets.exists(budget_id)

    async def test_unused_budget_can_be_deleted(self, session, owners):
        alice, _ = owners
        budgets = ScopedRepository(session, Budget, owner_id=alice.id, label="Budget")
        budget = await budgets.create(**budget_fields())
        await budgets.delete(budget.id)
        assert not await budgets.exists(budget.id)

    async def test_deleting_user_cascades(self, session, owners):
        alice, bob = owners
        budget = await ScopedRepository(session, Budget, owner_id=alice.id).create(**budget_fields())
        await ScopedRepository(session, Expense, owner_id=alice.id).create(
            category="Food", amount=Decimal("5.00"), date=date(2024, 1, 2), budget_id=budget.id
        )
        await ScopedRepository(session, Notification, owner_id=alice.id).create(message="hi")
        await ScopedRepository(session, Budget, owner_id=bob.id).create(**budget_fields())

        await ScopedRepository(session, User, label="User").delete(alice.id)

        for model in (Budget, Expense, Notification):
            remaining = await session.execute(
                select(func.count()).select_from(model).where(model.user_id == alice.id)
            )
            assert remaining.scalar_one() == 0
        bob_budgets = await session.execute(
            select(func.count()).select_from(Budget).where(Budget.user_id == bob.id)
        )
        assert bob_budgets.scalar_one() == 1

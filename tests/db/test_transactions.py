"""Tests for database transaction context managers."""

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from moneycookie.db.session import read_only_transaction, transactional
from moneycookie.models.section import Section

pytestmark = pytest.mark.integration


async def _titles(db: AsyncSession) -> list[str]:
    result = await db.execute(select(Section.title).order_by(Section.title))
    return list(result.scalars().all())


class TestTransactional:
    async def test_commits_on_success(self, test_db: AsyncSession) -> None:
        """Test that changes are committed when the block exits normally."""
        async with transactional(test_db):
            test_db.add(Section(owner="cookie", title="Committed"))

        await test_db.rollback()
        assert await _titles(test_db) == ["Committed"]

    async def test_rolls_back_on_exception(self, test_db: AsyncSession) -> None:
        """Test that an exception discards every change in the block."""
        with pytest.raises(ValueError):
            async with transactional(test_db):
                test_db.add(Section(owner="cookie", title="First"))
                await test_db.flush()
                test_db.add(Section(owner="cookie", title="Second"))
                raise ValueError("Intentional error for testing")

        assert await _titles(test_db) == []

    async def test_commit_false_leaves_transaction_open(self, test_db: AsyncSession) -> None:
        """Test that commit=False defers the commit to the caller."""
        async with transactional(test_db, commit=False):
            test_db.add(Section(owner="cookie", title="Pending"))

        await test_db.rollback()
        assert await _titles(test_db) == []


class TestReadOnlyTransaction:
    async def test_reads_without_committing(self, test_db: AsyncSession) -> None:
        """Test that read-only blocks return data and never commit."""
        async with transactional(test_db):
            test_db.add(Section(owner="cookie", title="Existing"))

        async with read_only_transaction(test_db):
            assert await _titles(test_db) == ["Existing"]
            test_db.add(Section(owner="cookie", title="Never saved"))

        await test_db.rollback()
        assert await _titles(test_db) == ["Existing"]

    async def test_propagates_errors(self, test_db: AsyncSession) -> None:
        """Test that errors inside a read-only block are re-raised."""
        with pytest.raises(RuntimeError):
            async with read_only_transaction(test_db):
                raise RuntimeError("query failed")

"""Integration tests for transactional account and profile writes."""

import asyncio
from collections.abc import Callable
from datetime import datetime
from uuid import UUID

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import (
    AccountNotFoundError,
    DuplicateAccountError,
    TransactionError,
)
from domain.entities.account import Account
from domain.entities.audit import AuditRecord
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.account_service import AccountService
from domain.services.audit_service import AuditService
from domain.services.profile_service import ProfileService
from infrastructure.database.models import AccountModel, ProfileModel
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork
from tests.conftest import TEST_EMAIL, TEST_PASSWORD

UowFactory = Callable[[], SQLAlchemyUnitOfWork]


class FailingAuditService(AuditService):
    """Writes the records, then fails as a lost connection would."""

    async def log(self, uow: IUnitOfWork, records: list[AuditRecord]) -> list[AuditRecord]:
        await super().log(uow, records)
        raise OperationalError("INSERT INTO profile_audit_records", {}, Exception("disk I/O error"))


class RecordingSessionFactory:
    """Session factory that keeps the sessions it hands out."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self.sessions: list[AsyncSession] = []

    def __call__(self) -> AsyncSession:
        session = self._session_factory()
        self.sessions.append(session)
        return session


async def _history(uow_factory: UowFactory, account_id: UUID) -> list[AuditRecord]:
    async with uow_factory() as uow:
        return await uow.audit_records.get_for_account(account_id, limit=100)


class TestRegistrationAtomicity:
    async def test_account_and_profile_are_created_together(
        self, uow_factory: UowFactory, registered_account_id: UUID
    ):
        async with uow_factory() as uow:
            view = await uow.accounts.get_with_profile(registered_account_id)

        assert view is not None
        assert view.email == TEST_EMAIL
        assert view.profile is not None
        assert view.profile.name == "Kim"
        assert view.profile.age == 20

    async def test_failed_profile_insert_leaves_no_account(
        self, account_service: AccountService, uow_factory: UowFactory
    ):
        with pytest.raises(TransactionError):
            await account_service.register(
                email="b@x.com",
                password=TEST_PASSWORD,
                name=None,  # type: ignore[arg-type]
                age=30,
                gender="F",
            )

        async with uow_factory() as uow:
            assert await uow.accounts.get_by_email("b@x.com") is None

    async def test_unique_email_is_enforced_by_storage(
        self, uow_factory: UowFactory, registered_account_id: UUID
    ):
        with pytest.raises(DuplicateAccountError):
            async with uow_factory() as uow:
                await uow.accounts.create(Account(email=TEST_EMAIL, password_hash="x"))
                await uow.commit()

    async def test_concurrent_sign_ups_create_one_account(
        self, account_service: AccountService, uow_factory: UowFactory
    ):
        attempt = dict(email="c@x.com", password=TEST_PASSWORD, name="Lee", age=25, gender="F")

        results = await asyncio.gather(
            account_service.register(**attempt),
            account_service.register(**attempt),
            return_exceptions=True,
        )

        assert results.count(None) == 1
        assert sum(isinstance(r, DuplicateAccountError) for r in results) == 1
        async with uow_factory() as uow:
            assert await uow.accounts.get_by_email("c@x.com") is not None


class TestAuditedUpdate:
    async def test_each_changed_field_is_recorded(
        self,
        profile_service: ProfileService,
        uow_factory: UowFactory,
        registered_account_id: UUID,
    ):
        await profile_service.update_profile(
            registered_account_id,
            {"age": 21, "gender": "F", "profile_image": "https://img.example/kim.png"},
        )

        records = {r.changed_field: r for r in await _history(uow_factory, registered_account_id)}

        assert set(records) == {"age", "gender", "profile_image"}
        assert (records["age"].old_value, records["age"].new_value) == ("20", "21")
        assert (records["gender"].old_value, records["gender"].new_value) == ("M", "F")
        assert records["profile_image"].old_value == "null"
        assert records["profile_image"].new_value == "https://img.example/kim.png"

    async def test_profile_matches_audit_trail(
        self,
        profile_service: ProfileService,
        uow_factory: UowFactory,
        registered_account_id: UUID,
    ):
        await profile_service.update_profile(registered_account_id, {"name": "Park", "age": 20})

        async with uow_factory() as uow:
            profile = await uow.profiles.get_for_account(registered_account_id)
        records = await _history(uow_factory, registered_account_id)

        assert profile is not None
        assert profile.name == "Park"
        assert [(r.changed_field, r.new_value) for r in records] == [("name", "Park")]

    async def test_repeated_update_adds_nothing(
        self,
        profile_service: ProfileService,
        uow_factory: UowFactory,
        registered_account_id: UUID,
    ):
        await profile_service.update_profile(registered_account_id, {"age": 21})
        await profile_service.update_profile(registered_account_id, {"age": 21})

        assert len(await _history(uow_factory, registered_account_id)) == 1

    async def test_failure_rolls_back_profile_and_audit(
        self, uow_factory: UowFactory, registered_account_id: UUID
    ):
        service = ProfileService(uow_factory, audit_service=FailingAuditService(uow_factory))

        with pytest.raises(TransactionError):
            await service.update_profile(registered_account_id, {"age": 99})

        async with uow_factory() as uow:
            profile = await uow.profiles.get_for_account(registered_account_id)
        assert profile is not None
        assert profile.age == 20
        assert await _history(uow_factory, registered_account_id) == []

    async def test_concurrent_updates_serialize(
        self,
        profile_service: ProfileService,
        uow_factory: UowFactory,
        registered_account_id: UUID,
    ):
        await asyncio.gather(
            profile_service.update_profile(registered_account_id, {"name": "A", "age": 30}),
            profile_service.update_profile(registered_account_id, {"name": "B", "age": 40}),
        )

        async with uow_factory() as uow:
            profile = await uow.profiles.get_for_account(registered_account_id)
        assert profile is not None
        # One submission wins as a whole, never a mix of both
        assert (profile.name, profile.age) in {("A", 30), ("B", 40)}

        age_records = [
            r for r in await _history(uow_factory, registered_account_id) if r.changed_field == "age"
        ]
        assert len(age_records) == 2
        first = next(r for r in age_records if r.old_value == "20")
        second = next(r for r in age_records if r is not first)
        assert second.old_value == first.new_value
        assert second.new_value == str(profile.age)


class TestHistory:
    async def test_history_is_paginated(
        self,
        profile_service: ProfileService,
        audit_service: AuditService,
        registered_account_id: UUID,
    ):
        for age in (21, 22, 23):
            await profile_service.update_profile(registered_account_id, {"age": age})

        page = await audit_service.get_history(registered_account_id, limit=2)
        rest = await audit_service.get_history(registered_account_id, limit=2, offset=2)

        assert len(page) == 2
        assert len(rest) == 1
        assert {r.id for r in page}.isdisjoint({r.id for r in rest})

    async def test_history_of_unknown_account(self, audit_service: AuditService):
        with pytest.raises(AccountNotFoundError):
            await audit_service.get_history(UUID(int=1))

    async def test_equal_timestamps_page_in_a_stable_order(
        self, uow_factory: UowFactory, registered_account_id: UUID
    ):
        at = datetime(2026, 1, 1, 12, 0, 0)
        async with uow_factory() as uow:
            for age in ("21", "22", "23", "24"):
                await uow.audit_records.create(
                    AuditRecord(
                        account_id=registered_account_id,
                        changed_field="age",
                        old_value="20",
                        new_value=age,
                        created_at=at,
                    )
                )
            await uow.commit()

        pages = []
        for offset in range(4):
            async with uow_factory() as uow:
                pages += await uow.audit_records.get_for_account(
                    registered_account_id, limit=1, offset=offset
                )

        ids = [r.id for r in pages]
        assert len(set(ids)) == 4
        assert ids == sorted(ids, key=lambda u: u.hex, reverse=True)


class TestTransactionScope:
    async def test_runs_at_requested_isolation_level(
        self, session_factory: async_sessionmaker[AsyncSession]
    ):
        factory = RecordingSessionFactory(session_factory)

        async with SQLAlchemyUnitOfWork(factory, isolation_level="SERIALIZABLE") as uow:  # type: ignore[arg-type]
            connection = await factory.sessions[0].connection()
            assert await connection.get_isolation_level() == "SERIALIZABLE"

            await uow.accounts.create(Account(email="d@x.com", password_hash="x"))
            await uow.commit()

        async with SQLAlchemyUnitOfWork(session_factory) as uow:
            assert await uow.accounts.get_by_email("d@x.com") is not None

    async def test_unknown_isolation_level_fails_the_scope(
        self, session_factory: async_sessionmaker[AsyncSession]
    ):
        uow = SQLAlchemyUnitOfWork(session_factory, isolation_level="NOT A LEVEL")

        with pytest.raises(TransactionError):
            async with uow:
                pass

        with pytest.raises(RuntimeError):
            _ = uow.accounts

    async def test_email_violation_at_commit_is_a_duplicate(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        registered_account_id: UUID,
    ):
        factory = RecordingSessionFactory(session_factory)

        with pytest.raises(DuplicateAccountError):
            async with SQLAlchemyUnitOfWork(factory) as uow:  # type: ignore[arg-type]
                factory.sessions[0].add(AccountModel(email=TEST_EMAIL, password_hash="x"))
                await uow.commit()

    async def test_other_violation_at_commit_is_a_transaction_error(
        self, session_factory: async_sessionmaker[AsyncSession]
    ):
        factory = RecordingSessionFactory(session_factory)

        with pytest.raises(TransactionError):
            async with SQLAlchemyUnitOfWork(factory) as uow:  # type: ignore[arg-type]
                factory.sessions[0].add(
                    ProfileModel(account_id=UUID(int=9), name="X", age=1, gender="F")
                )
                await uow.commit()

"""Integration tests for UserRepositorySQLAlchemy."""

from datetime import datetime, timedelta, timezone

import pytest

from loginapp_identity import Email, EmailAlreadyExistsError, User
from loginapp_identity.infrastructure.persistence.sqlalchemy import (
    UserRepositorySQLAlchemy,
)

pytestmark = pytest.mark.integration

NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)
HOUR = timedelta(hours=1)
DIGEST = "a" * 64


def _new_user(email: str = "alice@example.com", **kwargs) -> User:
    return User.create(
        email=email,
        name=kwargs.get("name", "Alice"),
        password_hash=kwargs.get("password_hash", "$2b$04$original"),
        phone=kwargs.get("phone"),
    )


class TestInsertAndFind:
    @pytest.mark.asyncio
    async def test_insert_assigns_id(self, user_repo):
        user_id = await user_repo.insert(_new_user(phone="+1 555 0100"))

        found = await user_repo.find_by_id(user_id)

        assert found is not None
        assert found.id == user_id
        assert found.email == "alice@example.com"
        assert found.phone == "+1 555 0100"
        assert found.password_hash == "$2b$04$original"

    @pytest.mark.asyncio
    async def test_ids_are_distinct(self, user_repo):
        first = await user_repo.insert(_new_user("a@example.com"))
        second = await user_repo.insert(_new_user("b@example.com"))

        assert first != second

    @pytest.mark.asyncio
    async def test_find_by_email_case_insensitive(self, user_repo):
        await user_repo.insert(_new_user())

        by_str = await user_repo.find_by_email("ALICE@Example.com")
        by_obj = await user_repo.find_by_email(Email("alice@example.com"))

        assert by_str is not None
        assert by_str == by_obj

    @pytest.mark.asyncio
    async def test_find_missing(self, user_repo):
        assert await user_repo.find_by_id(999) is None
        assert await user_repo.find_by_email("nobody@example.com") is None

    @pytest.mark.asyncio
    async def test_duplicate_email_rejected(self, user_repo):
        await user_repo.insert(_new_user())

        with pytest.raises(EmailAlreadyExistsError):
            await user_repo.insert(_new_user("Alice@EXAMPLE.com", name="Other"))

    @pytest.mark.asyncio
    async def test_update_password(self, user_repo):
        user_id = await user_repo.insert(_new_user())

        await user_repo.update_password(user_id, "$2b$04$changed")

        assert (await user_repo.find_by_id(user_id)).password_hash == "$2b$04$changed"


class TestResetTokenColumns:
    @pytest.mark.asyncio
    async def test_set_and_find_by_reset_token(self, user_repo):
        user_id = await user_repo.insert(_new_user())

        await user_repo.set_reset_token(user_id, DIGEST, NOW + HOUR)
        found = await user_repo.find_by_reset_token(DIGEST)

        assert found.id == user_id
        assert found.reset_token_hash == DIGEST
        assert found.reset_token_expiry == NOW + HOUR
        assert found.reset_token_expiry.tzinfo is not None

    @pytest.mark.asyncio
    async def test_find_by_reset_token_returns_expired(self, user_repo):
        """Expiry is judged by the caller, not the lookup."""
        user_id = await user_repo.insert(_new_user())
        await user_repo.set_reset_token(user_id, DIGEST, NOW - HOUR)

        assert (await user_repo.find_by_reset_token(DIGEST)).id == user_id

    @pytest.mark.asyncio
    async def test_set_overwrites_previous_token(self, user_repo):
        user_id = await user_repo.insert(_new_user())
        await user_repo.set_reset_token(user_id, DIGEST, NOW + HOUR)

        await user_repo.set_reset_token(user_id, "b" * 64, NOW + 2 * HOUR)

        assert await user_repo.find_by_reset_token(DIGEST) is None
        assert (await user_repo.find_by_reset_token("b" * 64)).id == user_id

    @pytest.mark.asyncio
    async def test_clear_reset_token(self, user_repo):
        user_id = await user_repo.insert(_new_user())
        await user_repo.set_reset_token(user_id, DIGEST, NOW + HOUR)

        await user_repo.clear_reset_token(user_id)

        user = await user_repo.find_by_id(user_id)
        assert user.reset_token_hash is None
        assert user.reset_token_expiry is None


class TestConsumeResetToken:
    @pytest.mark.asyncio
    async def test_consume_once(self, user_repo):
        user_id = await user_repo.insert(_new_user())
        await user_repo.set_reset_token(user_id, DIGEST, NOW + HOUR)

        first = await user_repo.consume_reset_token(user_id, DIGEST, "$2b$04$new", NOW)
        second = await user_repo.consume_reset_token(
            user_id,
            DIGEST,
            "$2b$04$other",
            NOW,
        )

        assert first is True
        assert second is False
        user = await user_repo.find_by_id(user_id)
        assert user.password_hash == "$2b$04$new"
        assert user.reset_token_hash is None
        assert user.reset_token_expiry is None

    @pytest.mark.asyncio
    async def test_consume_wrong_digest(self, user_repo):
        user_id = await user_repo.insert(_new_user())
        await user_repo.set_reset_token(user_id, DIGEST, NOW + HOUR)

        consumed = await user_repo.consume_reset_token(user_id, "c" * 64, "x", NOW)

        assert consumed is False
        assert (await user_repo.find_by_id(user_id)).reset_token_hash == DIGEST

    @pytest.mark.asyncio
    async def test_consume_at_expiry_refused(self, user_repo):
        user_id = await user_repo.insert(_new_user())
        await user_repo.set_reset_token(user_id, DIGEST, NOW + HOUR)

        consumed = await user_repo.consume_reset_token(
            user_id,
            DIGEST,
            "$2b$04$new",
            NOW + HOUR,
        )

        assert consumed is False
        assert (await user_repo.find_by_id(user_id)).password_hash == "$2b$04$original"

    @pytest.mark.asyncio
    async def test_consume_one_second_before_expiry(self, user_repo):
        user_id = await user_repo.insert(_new_user())
        await user_repo.set_reset_token(user_id, DIGEST, NOW + HOUR)

        consumed = await user_repo.consume_reset_token(
            user_id,
            DIGEST,
            "$2b$04$new",
            NOW + HOUR - timedelta(seconds=1),
        )

        assert consumed is True

    @pytest.mark.asyncio
    async def test_consume_other_users_token_refused(self, user_repo):
        owner = await user_repo.insert(_new_user("owner@example.com"))
        other = await user_repo.insert(_new_user("other@example.com"))
        await user_repo.set_reset_token(owner, DIGEST, NOW + HOUR)

        assert await user_repo.consume_reset_token(other, DIGEST, "x", NOW) is False

    @pytest.mark.asyncio
    async def test_stale_read_loses_to_committed_consume(self, session_maker):
        """A token seen as live by two sessions can still be consumed only once."""
        async with session_maker() as setup:
            repo = UserRepositorySQLAlchemy(setup)
            user_id = await repo.insert(_new_user())
            await repo.set_reset_token(user_id, DIGEST, NOW + HOUR)
            await setup.commit()

        async with session_maker() as first, session_maker() as second:
            first_repo = UserRepositorySQLAlchemy(first)
            second_repo = UserRepositorySQLAlchemy(second)
            assert await first_repo.find_by_reset_token(DIGEST) is not None
            assert await second_repo.find_by_reset_token(DIGEST) is not None

            assert await first_repo.consume_reset_token(
                user_id, DIGEST, "$2b$04$first", NOW
            )
            await first.commit()

            consumed = await second_repo.consume_reset_token(
                user_id,
                DIGEST,
                "$2b$04$second",
                NOW,
            )
            await second.rollback()

        assert consumed is False
        async with session_maker() as check:
            user = await UserRepositorySQLAlchemy(check).find_by_id(user_id)
        assert user.password_hash == "$2b$04$first"

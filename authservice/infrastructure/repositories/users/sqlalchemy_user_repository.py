# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError

from authservice.domain.users.entities import IssuedTokens
from authservice.domain.users.entities import User as DomainUser
from authservice.domain.users.exceptions import EmailAlreadyTakenError
from authservice.domain.users.repositories import UserRepository
from authservice.infrastructure.db.models import User
from authservice.infrastructure.db.session import session_scope
from authservice.shared.logging import logger


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=_as_utc(row.created_at),
        updated_at=_as_utc(row.updated_at),
        access_token=row.access_token,
        refresh_token=row.refresh_token,
        expires_date=_as_utc(row.expires_date),
        token_version=row.token_version,
    )


class SqlAlchemyUserRepository(UserRepository):
    def find_by_email(self, email: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.query(User).filter(User.email == email).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: int) -> DomainUser | None:
        with session_scope() as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def find_by_refresh_token(self, refresh_token: str) -> DomainUser | None:
        with session_scope() as session:
            row = session.query(User).filter(User.refresh_token == refresh_token).first()
            return _to_domain(row) if row else None

    def add(self, user: DomainUser) -> DomainUser:
        try:
            with session_scope() as session:
                row = User(
                    name=user.name,
                    email=user.email,
                    password_hash=user.password_hash,
                    created_at=user.created_at,
                    updated_at=user.updated_at,
                )
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            # lost a registration race to the unique index
            logger.info("users.add: unique constraint rejected email")
            raise EmailAlreadyTakenError() from exc

    def rotate_tokens(
        self,
        user_id: int,
        tokens: IssuedTokens,
        *,
        expected_version: int,
        expected_refresh_token: str | None = None,
    ) -> DomainUser | None:
        stmt = (
            update(User)
            .where(User.id == user_id, User.token_version == expected_version)
            .values(
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
                expires_date=tokens.expires_date,
                token_version=expected_version + 1,
                updated_at=datetime.now(UTC),
            )
            .execution_options(synchronize_session=False)
        )
        if expected_refresh_token is not None:
            stmt = stmt.where(User.refresh_token == expected_refresh_token)

        with session_scope() as session:
            result = session.execute(stmt)
            if result.rowcount != 1:
                logger.debug(f"users.rotate: stale version for user_id={user_id}")
                return None
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

"""High-level data access helpers backed by SQLAlchemy."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update

from revcart.db.models import ActivityLog, OtpToken, User, UserRole
from revcart.db.session import unit_of_work


class SQLRepository:
    """
    CRUD helpers wrapping the SQLAlchemy session.

    Every method joins the caller's ``unit_of_work()`` when one is open, so a
    service operation commits or rolls back as a whole. Called on its own, a
    method runs in (and commits) a transaction of its own.
    """

    # -------------------------- users --------------------------
    def find_user_by_email(self, email: str) -> Optional[User]:
        with unit_of_work() as session:
            stmt = select(User).where(User.email == email)
            return session.execute(stmt).scalar_one_or_none()

    def get_user(self, user_id: int) -> Optional[User]:
        with unit_of_work() as session:
            return session.get(User, user_id)

    def exists_by_email(self, email: str) -> bool:
        with unit_of_work() as session:
            stmt = select(User.id).where(User.email == email).limit(1)
            return session.execute(stmt).first() is not None

    def save_user(
        self,
        *,
        full_name: str,
        email: str,
        password_hash: str,
        phone: str | None = None,
        role: UserRole = UserRole.CUSTOMER,
        authorities: list[str] | None = None,
        email_verified: bool = False,
        active: bool = True,
    ) -> User:
        now = datetime.now(timezone.utc)
        user = User(
            full_name=full_name,
            email=email,
            phone=phone,
            password_hash=password_hash,
            role=role,
            authorities=list(authorities or []),
            email_verified=email_verified,
            active=active,
            created_at=now,
            updated_at=now,
        )
        with unit_of_work() as session:
            session.add(user)
            session.flush()
            session.refresh(user)
            return user

    def update_user_password(self, email: str, password_hash: str) -> None:
        with unit_of_work() as session:
            stmt = (
                update(User)
                .where(User.email == email)
                .values(password_hash=password_hash, updated_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)

    def set_email_verified(self, email: str, verified: bool = True) -> None:
        with unit_of_work() as session:
            stmt = (
                update(User)
                .where(User.email == email)
                .values(email_verified=verified, updated_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)

    def set_user_active(self, email: str, active: bool) -> None:
        with unit_of_work() as session:
            stmt = update(User).where(User.email == email).values(active=active, updated_at=datetime.now(timezone.utc))
            session.execute(stmt)

    def update_user_role(self, email: str, role: UserRole) -> None:
        with unit_of_work() as session:
            stmt = (
                update(User)
                .where(User.email == email)
                .values(role=role, authorities=[f"ROLE_{role.value}"], updated_at=datetime.now(timezone.utc))
            )
            session.execute(stmt)

    # -------------------------- otp tokens --------------------------
    def save_otp(self, email: str, otp_code: str, expires_at: datetime) -> OtpToken:
        entity = OtpToken(
            email=email,
            otp_code=otp_code,
            expires_at=expires_at,
            consumed=False,
            created_at=datetime.now(timezone.utc),
        )
        with unit_of_work() as session:
            session.add(entity)
            session.flush()
            session.refresh(entity)
            return entity

    def find_latest_otp(self, email: str) -> Optional[OtpToken]:
        with unit_of_work() as session:
            stmt = (
                select(OtpToken)
                .where(OtpToken.email == email)
                .order_by(OtpToken.created_at.desc(), OtpToken.id.desc())
                .limit(1)
            )
            return session.execute(stmt).scalars().first()

    def mark_otp_consumed(self, token_id: int) -> None:
        with unit_of_work() as session:
            session.execute(update(OtpToken).where(OtpToken.id == token_id).values(consumed=True))

    # -------------------------- activity log --------------------------
    def add_activity(self, user_id: int | None, action: str, details: dict | None = None) -> ActivityLog:
        entity = ActivityLog(
            user_id=user_id,
            action=action,
            details=dict(details or {}),
            created_at=datetime.now(timezone.utc),
        )
        with unit_of_work() as session:
            session.add(entity)
            session.flush()
            session.refresh(entity)
            return entity

    def list_activity(self, user_id: int) -> list[ActivityLog]:
        with unit_of_work() as session:
            stmt = select(ActivityLog).where(ActivityLog.user_id == user_id).order_by(ActivityLog.id.asc())
            return session.execute(stmt).scalars().all()

"""SQLAlchemy ORM models."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import CheckConstraint, DateTime, Float, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class ProfileModel(Base):
    """User profile model (one row per Supabase auth user)."""

    __tablename__ = "profiles"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        nullable=False,
        unique=True,
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    role: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint(
            "role IN ('citizen', 'officer', 'worker')",
            name="ck_profiles_role",
        ),
        nullable=False,
        default="citizen",
    )
    department: Mapped[str | None] = mapped_column(String(255))
    last_seen: Mapped[datetime | None] = mapped_column(DateTime, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
    )


class ComplaintModel(Base):
    """Citizen complaint model."""

    __tablename__ = "complaints"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    # References auth.users(id) in Supabase; profiles.user_id shares the value.
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        nullable=False,
        index=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint(
            "category IN ('water', 'electricity', 'roads', 'sanitation', 'other')",
            name="ck_complaints_category",
        ),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint(
            "status IN ('pending', 'endorsed', 'ongoing', 'closed')",
            name="ck_complaints_status",
        ),
        nullable=False,
        default="pending",
    )
    urgency_score: Mapped[float] = mapped_column(
        Float,
        CheckConstraint(
            "urgency_score >= 0 AND urgency_score <= 1",
            name="ck_complaints_urgency_score",
        ),
        nullable=False,
        default=0.5,
    )
    score_origin: Mapped[str] = mapped_column(
        String(20),
        CheckConstraint(
            "score_origin IN ('assessed', 'fallback')",
            name="ck_complaints_score_origin",
        ),
        nullable=False,
        default="assessed",
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index("ix_complaints_status_urgency", "status", "urgency_score"),
        Index("ix_complaints_created_at", "created_at"),
    )

"""
Message store abstraction backed by SQLAlchemy, plus an in-memory test implementation.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Protocol

from sqlalchemy import Column, DateTime, Integer, String, Text, create_engine, select
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class MessageStore(Protocol):
    """Interface for persisting and reading contact messages."""

    def save_message(self, record: "MessageRecord") -> "MessageRecord":
        ...

    def list_messages(self) -> list["MessageRecord"]:
        ...

    def close(self) -> None:
        ...


@dataclass
class MessageRecord:
    name: str
    email: str
    message: str
    phone: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: datetime = field(default_factory=_utcnow)

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "message": self.message,
            "createdAt": self.created_at,
        }


class InMemoryMessageStore:
    """Simple in-memory store for development and tests."""

    def __init__(self):
        self.messages: list[MessageRecord] = []

    def save_message(self, record: MessageRecord) -> MessageRecord:
        self.messages.append(record)
        return record

    def list_messages(self) -> list[MessageRecord]:
        # Newest insert first among equal timestamps; sorted() is stable.
        return sorted(
            reversed(self.messages), key=lambda m: m.created_at, reverse=True
        )

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.messages.clear()

    def close(self) -> None:
        pass


class SqlMessageStore:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlMessageStore")
        engine_kwargs: dict = {"future": True, "pool_pre_ping": True}
        url = make_url(database_url)
        if url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:"):
            # One shared connection, otherwise each thread sees an empty database.
            engine_kwargs["poolclass"] = StaticPool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        else:
            engine_kwargs["pool_recycle"] = 1800
        self.engine = create_engine(url, **engine_kwargs)
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_record(self, row: "MessageRow") -> MessageRecord:
        created_at = row.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return MessageRecord(
            id=row.id,
            name=row.name,
            email=row.email,
            phone=row.phone,
            message=row.message,
            created_at=created_at,
        )

    def save_message(self, record: MessageRecord) -> MessageRecord:
        with self.Session() as session:
            row = MessageRow(
                id=record.id,
                name=record.name,
                email=record.email,
                phone=record.phone,
                message=record.message,
                created_at=record.created_at,
            )
            session.add(row)
            session.commit()
        return record

    def list_messages(self) -> list[MessageRecord]:
        with self.Session() as session:
            stmt = select(MessageRow).order_by(
                MessageRow.created_at.desc(), MessageRow.seq.desc()
            )
            rows = session.execute(stmt).scalars().all()
            return [self._to_record(row) for row in rows]

    def close(self) -> None:
        self.engine.dispose()


Base = declarative_base()


class MessageRow(Base):
    __tablename__ = "messages"

    # Insertion order, breaks ties between equal timestamps.
    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, nullable=False, unique=True)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

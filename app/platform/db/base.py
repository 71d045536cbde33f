import sqlalchemy
from sqlalchemy import Column, String
from sqlalchemy.orm import declarative_base
from uuid_extension import uuid7

Base = declarative_base()


def generate_id() -> str:
    """Time-ordered UUIDv7 as a string primary key."""
    return str(uuid7())


class BaseModel(Base):
    __abstract__ = True
    id = Column(String, primary_key=True, default=generate_id, index=True)
    created_at = Column(
        sqlalchemy.DateTime(timezone=True), server_default=sqlalchemy.func.now(), nullable=False
    )
    updated_at = Column(
        sqlalchemy.DateTime(timezone=True),
        server_default=sqlalchemy.func.now(),
        onupdate=sqlalchemy.func.now(),
        nullable=False,
    )

# Models import this Base; app/platform/db/models.py imports every model for alembic and tests.

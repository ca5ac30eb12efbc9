"""
Base model configuration for SQLAlchemy ORM.

Provides the declarative base and the abstract model every table
inherits from.
"""

import re
from uuid import uuid4

from sqlalchemy import String
from sqlalchemy.orm import Mapped, declarative_base, declared_attr, mapped_column

# Create declarative base
Base = declarative_base()


class BaseModel(Base):
    """
    Abstract base model with a UUID string primary key.
    """

    __abstract__ = True

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
        nullable=False,
        comment="Primary key (UUID)"
    )

    @declared_attr
    def __tablename__(cls) -> str:
        """Generate table name from class name."""
        name = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', cls.__name__)
        return re.sub('([a-z0-9])([A-Z])', r'\1_\2', name).lower() + 's'

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={getattr(self, 'id', None)})>"

from datetime import datetime
from typing import List
from uuid import uuid4

from sqlmodel import Field, Relationship, SQLModel

from .task import utcnow


class User(SQLModel, table=True):
    """Account that owns tasks."""
    __tablename__ = "users"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str = Field(default="")
    email: str = Field(unique=True, index=True)
    hashed_password: str
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    tasks: List["Task"] = Relationship(
        back_populates="user",
        sa_relationship_kwargs={"cascade": "all, delete-orphan"},
    )

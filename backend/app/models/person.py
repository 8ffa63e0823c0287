"""
Person model for the group roster.
"""
from sqlalchemy import Column, String
from app.db.base import BaseModel


class Person(BaseModel):
    """A participant in the group. Roster order is insertion (id) order."""
    __tablename__ = "people"

    name = Column(String(100), unique=True, nullable=False, index=True)

"""Database table definition for stored documents"""

from typing import Optional

from sqlalchemy import Column, LargeBinary, String, Text
from sqlmodel import Field, SQLModel


class DocumentRow(SQLModel, table=True):
    """An encrypted document keyed by the SHA-256 of its identifier"""
    __tablename__ = "documents"
    id: str = Field(sa_column=Column(String(64), primary_key=True))
    content: bytes = Field(sa_column=Column(LargeBinary, nullable=False))
    custom: str = Field(default="", sa_column=Column(Text, nullable=False))
    syntax: str = Field(default="", sa_column=Column(Text, nullable=False))
    upload: str = Field(sa_column=Column(String(19), nullable=False))
    expiration: Optional[str] = Field(default=None, sa_column=Column(String(19), nullable=True))
    views: int = Field(default=0, nullable=False)

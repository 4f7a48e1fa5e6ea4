"""Database models for Escape Room."""

import datetime as dt

from sqlmodel import Field, SQLModel


class SavedScenario(SQLModel, table=True):
    id: int | None = Field(default=None, primary_key=True)
    theme: str = ""
    document: bytes  # world document as UTF-8 JSON
    created_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.UTC)
    )

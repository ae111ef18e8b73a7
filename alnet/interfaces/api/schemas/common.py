"""Schemas shared by several resources."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from alnet.domain.entities import Page, User


class PaginationRead(BaseModel):
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def from_page(cls, page: Page) -> "PaginationRead":
        return cls(total=page.total, page=page.page, limit=page.limit, pages=page.pages)


class UserSummaryRead(BaseModel):
    id: int
    name: str
    email: str
    role: str

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_entity(cls, user: User | None) -> "UserSummaryRead | None":
        if user is None:
            return None
        return cls.model_validate(user)


__all__ = ["PaginationRead", "UserSummaryRead"]

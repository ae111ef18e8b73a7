"""Health check schema."""

from pydantic import BaseModel


class HealthRead(BaseModel):
    status: str
    database: str
    online_users: int


__all__ = ["HealthRead"]

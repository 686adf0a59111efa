# model/account.py
from datetime import datetime, timezone
from pydantic import BaseModel, Field

AccountID = str


class Account(BaseModel):
    id: AccountID
    handle: str
    name: str | None = None
    createdAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updatedAt: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def has_temporary_handle(self, temp_prefix: str) -> bool:
        return self.handle.startswith(temp_prefix)

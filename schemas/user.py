"""User collection schema."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserCreate(BaseModel):
    """Body of a create-user request."""
    model_config = ConfigDict(extra="ignore")

    username: Optional[str] = Field(None, description="Display name of the user")

    @field_validator("username", mode="before")
    @classmethod
    def _stringify_username(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)


class UserOut(BaseModel):
    """User as returned by the API."""
    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(..., description="Display name of the user")
    id: str = Field(..., alias="_id", description="Store generated user identifier")

    @classmethod
    def from_document(cls, doc: dict) -> "UserOut":
        return cls(username=doc["username"], id=str(doc["_id"]))

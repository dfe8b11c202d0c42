"""Commit and repository identity data models."""

from pydantic import BaseModel, ConfigDict, Field


class RepositoryIdentity(BaseModel):
    """The account/repository/branch triple a widget tracks."""

    model_config = ConfigDict(frozen=True)

    account: str = Field(min_length=1)
    repository: str = Field(min_length=1)
    branch: str = Field(min_length=1)

    @property
    def full_name(self) -> str:
        return f"{self.account}/{self.repository}"


class Commit(BaseModel):
    """Latest commit on a branch, as shown by the widget."""

    model_config = ConfigDict(frozen=True)

    message: str
    author: str
    # Kept verbatim from the API response
    date: str


FAILED_COMMIT = Commit(message="Failed to load commits", author="", date="")

UNKNOWN_IDENTITY = RepositoryIdentity(account="???", repository="???", branch="???")

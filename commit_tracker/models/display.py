"""Display record and timeline data models."""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from .commit import Commit, RepositoryIdentity


class FailureKind(str, Enum):
    """Why a refresh cycle fell back to the failure commit."""

    MISSING_CONFIGURATION = "missing_configuration"
    TRANSPORT = "transport"
    PARSE = "parse"


class DisplayRecord(BaseModel):
    """Everything the host needs to draw the widget for one refresh cycle."""

    model_config = ConfigDict(frozen=True)

    observed_at: datetime
    commit: Commit
    identity: RepositoryIdentity
    failure: Optional[FailureKind] = None


class Timeline(BaseModel):
    """Records handed back to the host together with the next refresh hint."""

    model_config = ConfigDict(frozen=True)

    entries: List[DisplayRecord]
    refresh_after: datetime
    # 0 - not important, 100 - very important
    relevance: int = 10

"""Host-supplied widget configuration model."""

from typing import Optional

from pydantic import BaseModel

from .commit import RepositoryIdentity


class WidgetConfiguration(BaseModel):
    """
    Configuration input for the configurable widget variant.
    
    Every field is optional: the host may hand over a configuration the
    user never finished filling in.
    """

    account: Optional[str] = None
    repository: Optional[str] = None
    branch: Optional[str] = None

    def to_identity(self) -> Optional[RepositoryIdentity]:
        """
        Build the repository identity, if the configuration is complete.
        
        Returns:
            RepositoryIdentity, or None when any field is absent or blank
        """
        values = (self.account, self.repository, self.branch)
        if any(value is None or not value.strip() for value in values):
            return None

        return RepositoryIdentity(
            account=self.account.strip(),
            repository=self.repository.strip(),
            branch=self.branch.strip(),
        )

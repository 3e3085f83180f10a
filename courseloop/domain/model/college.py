"""College search result from the lookup collaborator."""

from typing import Optional

from courseloop.domain.model.common import DomainModel


class College(DomainModel):
    id: str
    name: str
    city: Optional[str] = None
    state: Optional[str] = None

"""Search colleges use case."""

from pydantic import BaseModel

from courseloop.application.usecase.base import BaseUseCase
from courseloop.domain.gateway import CollegeLookup
from courseloop.domain.model import College


class SearchCollegesRequest(BaseModel):
    """Search colleges request."""

    query: str


class SearchCollegesResponse(BaseModel):
    """Search colleges response."""

    colleges: list[College]


class SearchCollegesUseCase(BaseUseCase):
    """Use case for picking a university during onboarding.

    No session is needed. Lookup failures look like "no matches".
    """

    def __init__(self, college_lookup: CollegeLookup) -> None:
        self.college_lookup = college_lookup

    async def execute(self, request: SearchCollegesRequest) -> SearchCollegesResponse:
        colleges = await self.college_lookup.search(request.query)
        return SearchCollegesResponse(colleges=colleges)

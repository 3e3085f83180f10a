"""College lookup infrastructure providers."""

from dishka import Scope, provide

from courseloop.adapter.collegescorecard import RealCollegeScorecardClient
from courseloop.config import Settings
from courseloop.domain.gateway import CollegeLookup
from courseloop.util.di.base import ProviderBase


class CollegeProvider(ProviderBase):
    """College lookup component base."""

    __mock_component__ = "college"


class ProdCollegeProvider(CollegeProvider):
    """Production College Scorecard provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_college_lookup(self, settings: Settings) -> CollegeLookup:
        """Provide College Scorecard client."""
        lookup = settings.college_lookup
        return RealCollegeScorecardClient(
            base_url=lookup.base_url,
            api_key=lookup.api_key,
            per_page=lookup.per_page,
            timeout=lookup.timeout,
        )

"""Mock college lookup providers for testing."""

from dishka import Scope, alias, provide

from courseloop.adapter.collegescorecard import MockCollegeScorecardClient
from courseloop.domain.gateway import CollegeLookup
from courseloop.util.di.infrastructure.college import CollegeProvider


class MockCollegeProvider(CollegeProvider):
    """Mock College Scorecard provider."""

    __is_mock__ = True

    scope = Scope.APP

    @provide
    def get_mock_college_lookup(self) -> MockCollegeScorecardClient:
        """Provide mock college lookup."""
        return MockCollegeScorecardClient()

    college_lookup = alias(source=MockCollegeScorecardClient, provides=CollegeLookup)

from .client import CollegeScorecardClient, MockCollegeScorecardClient, RealCollegeScorecardClient

__all__ = [
    "CollegeScorecardClient",
    "MockCollegeScorecardClient",
    "RealCollegeScorecardClient",
]

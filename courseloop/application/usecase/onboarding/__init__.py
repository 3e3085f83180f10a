"""Onboarding use cases."""

from .complete_onboarding import (
    CompleteOnboardingRequest,
    CompleteOnboardingResponse,
    CompleteOnboardingUseCase,
    FailedCourse,
    LinkedCourse,
)

__all__ = [
    "CompleteOnboardingRequest",
    "CompleteOnboardingResponse",
    "CompleteOnboardingUseCase",
    "FailedCourse",
    "LinkedCourse",
]

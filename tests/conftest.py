"""Test configuration and helpers."""

from dishka import AsyncContainer

from courseloop.adapter.inmemory import InMemoryAuthGateway
from courseloop.domain.model import Profile
from courseloop.domain.service import ProfileService, SessionManager
from courseloop.domain.value import UserId


async def sign_in(
    session_manager: SessionManager,
    auth: InMemoryAuthGateway,
    email: str = "student@berkeley.edu",
) -> UserId:
    """Run the OTP flow end to end and return the signed-in user's id."""
    await session_manager.request_otp(email)
    await session_manager.verify_otp(email, auth.last_code(email))
    return session_manager.require_user_id()


async def onboard(
    env: AsyncContainer,
    email: str = "student@berkeley.edu",
    username: str = "SwiftEagle42",
) -> Profile:
    """Sign in through the container's session and create a profile."""
    session_manager = await env.get(SessionManager)
    auth = await env.get(InMemoryAuthGateway)
    profile_service = await env.get(ProfileService)

    user_id = await sign_in(session_manager, auth, email)
    return await profile_service.ensure_profile(user_id, username)

"""Profile domain service."""

import random
from typing import Any, Optional

import logfire

from courseloop.domain.error import ConflictError, DuplicateRowError, NotFoundError
from courseloop.domain.gateway import BackendGateway
from courseloop.domain.gateway.mappers import profile_to_dict, row_to_profile
from courseloop.domain.model import Profile, ProfilePatch
from courseloop.domain.value import Table, UserId, Username

from .base import Service
from .session_manager import SessionManager

USERNAME_ADJECTIVES = [
    "Swift", "Bright", "Clever", "Dynamic", "Epic", "Focused", "Golden",
    "Hidden", "Infinite", "Jubilant", "Keen", "Lively", "Mighty", "Noble",
    "Optimal", "Prime", "Quick", "Radiant", "Silent", "Tactical", "Unique",
    "Vibrant", "Whimsical", "Xenial", "Zealous",
]  # fmt: skip

USERNAME_NOUNS = [
    "Eagle", "Tiger", "Scholar", "Genius", "Phoenix", "Voyager", "Pioneer",
    "Hero", "Legend", "Prodigy", "Maven", "Guru", "Master", "Ninja", "Wizard",
    "Champion", "Captain", "Knight", "Sage", "Explorer", "Pilot", "Ranger",
    "Sentinel", "Guardian", "Seeker",
]  # fmt: skip


class ProfileService(Service):
    """Domain service for provisioning and updating user profiles.

    Username uniqueness is enforced by the backend; a collision is a
    recoverable ``ConflictError("username_taken")`` and is never retried
    or auto-suffixed here.
    """

    def __init__(
        self, backend: BackendGateway, session_manager: SessionManager
    ) -> None:
        """Initialize profile service.

        Args:
            backend: Backend gateway
            session_manager: Session gate; notified of provisioned profiles
        """
        self.backend = backend
        self.session_manager = session_manager

    async def get_profile(self, user_id: UserId) -> Optional[Profile]:
        """Get a profile by user ID.

        Returns:
            Profile if found, None otherwise
        """
        with logfire.span("profile_service.get_profile", user_id=str(user_id)):
            rows = await self.backend.select(Table.PROFILES, {"id": user_id}, limit=1)
            if not rows:
                logfire.info("Profile not found", user_id=str(user_id))
                return None
            return row_to_profile(rows[0])

    async def ensure_profile(
        self,
        user_id: UserId,
        username: str,
        full_name: str | None = None,
        avatar_url: str | None = None,
        university: str | None = None,
    ) -> Profile:
        """Create the user's profile, or update it if it already exists.

        Idempotent: repeating the call with the same arguments yields the
        same profile. On update only the supplied fields change.

        Args:
            user_id: Owner of the profile
            username: Desired username
            full_name: Optional full name
            avatar_url: Optional avatar URL
            university: Optional university name

        Returns:
            The stored profile

        Raises:
            ValidationError: Invalid username (no network call)
            AuthError: No active session
            ConflictError: username_taken, if another user holds the name
        """
        name = Username.parse(username, "username")
        patch = ProfilePatch(
            username=name.root,
            full_name=full_name,
            avatar_url=avatar_url,
            university=university,
        )
        self.session_manager.require_session()

        with logfire.span(
            "profile_service.ensure_profile", user_id=str(user_id), username=name.root
        ):
            await self._check_username_available(name, user_id)

            existing = await self.get_profile(user_id)
            if existing is not None:
                profile = await self._apply(user_id, patch.supplied())
            else:
                profile = await self._create(user_id, patch)

            self.session_manager.attach_profile(profile)
            return profile

    async def update_profile(self, user_id: UserId, patch: ProfilePatch) -> Profile:
        """Partially update a profile.

        Absent, None and blank fields are left untouched server-side.

        Raises:
            ValidationError: Invalid username (no network call)
            AuthError: No active session
            NotFoundError: If the profile does not exist
            ConflictError: username_taken
        """
        fields = patch.supplied()
        name = Username.parse(fields["username"], "username") if "username" in fields else None
        self.session_manager.require_session()

        with logfire.span(
            "profile_service.update_profile",
            user_id=str(user_id),
            fields=sorted(fields),
        ):
            if not fields:
                profile = await self.get_profile(user_id)
                if profile is None:
                    raise NotFoundError("Profile", str(user_id))
                return profile

            if name is not None:
                await self._check_username_available(name, user_id)

            profile = await self._apply(user_id, fields)
            self.session_manager.attach_profile(profile)
            return profile

    def suggest_usernames(
        self, count: int = 5, rng: random.Random | None = None
    ) -> list[str]:
        """Suggest valid usernames such as "SwiftEagle42".

        Suggestions are not reserved; ``ensure_profile`` may still conflict.
        """
        rng = rng or random.Random()
        return [
            f"{rng.choice(USERNAME_ADJECTIVES)}{rng.choice(USERNAME_NOUNS)}"
            f"{rng.randint(10, 999)}"
            for _ in range(count)
        ]

    async def _check_username_available(self, name: Username, user_id: UserId) -> None:
        rows = await self.backend.select(Table.PROFILES, {"username": name.root})
        if any(row_to_profile(row).user_id != user_id for row in rows):
            logfire.info("Username taken", username=name.root, user_id=str(user_id))
            raise ConflictError(ConflictError.USERNAME_TAKEN)

    async def _create(self, user_id: UserId, patch: ProfilePatch) -> Profile:
        state = self.session_manager.state
        email = (
            state.email.root
            if state.email is not None
            and state.session is not None
            and state.session.user_id == user_id
            else None
        )
        profile = Profile.model_validate(
            {"user_id": user_id, "email": email, **patch.supplied()}
        )
        try:
            row = await self.backend.insert(Table.PROFILES, profile_to_dict(profile))
        except DuplicateRowError as e:
            if "username" in e.columns:
                raise ConflictError(ConflictError.USERNAME_TAKEN) from None
            if await self.get_profile(user_id) is None:
                # Unknown key and still no profile: the username collided
                raise ConflictError(ConflictError.USERNAME_TAKEN) from None
            logfire.info("Profile created concurrently, updating", user_id=str(user_id))
            return await self._apply(user_id, patch.supplied())

        logfire.info("Profile created", user_id=str(user_id), username=row.get("username"))
        return row_to_profile(row)

    async def _apply(self, user_id: UserId, fields: dict[str, Any]) -> Profile:
        try:
            matched = await self.backend.update(Table.PROFILES, fields, {"id": user_id})
        except DuplicateRowError:
            raise ConflictError(ConflictError.USERNAME_TAKEN) from None
        if not matched:
            logfire.warn("Profile update matched no rows", user_id=str(user_id))
            raise NotFoundError("Profile", str(user_id))

        profile = await self.get_profile(user_id)
        if profile is None:
            raise NotFoundError("Profile", str(user_id))
        logfire.info("Profile updated", user_id=str(user_id), fields=sorted(fields))
        return profile

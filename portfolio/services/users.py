"""Owner accounts: provisioning and matching OAuth logins."""

import logging
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.errors import IdentityProviderError
from portfolio.models.user import User
from portfolio.schemas.auth import GitHubEmail, GitHubProfile, Identity, OwnerCreate
from portfolio.services.content import Clock, utcnow

logger = logging.getLogger(__name__)


async def login_with_provider(
    db: AsyncSession,
    profile: GitHubProfile,
    emails: Sequence[GitHubEmail],
    clock: Clock = utcnow,
) -> Identity:
    """
    Match a provider login against an existing owner.

    Any verified email may match, not only the primary one. On a match the
    owner's cached name and avatar are refreshed from the provider profile.

    Raises:
        IdentityProviderError: no verified email, or no owner with a matching email
    """
    verified = [e.email.lower() for e in emails if e.verified]
    if not verified:
        logger.warning("Login rejected for %s: no verified email", profile.login)
        raise IdentityProviderError("Unauthorized")

    result = await db.execute(
        select(User)
        .where(func.lower(User.email).in_(verified))
        .order_by(User.id)
        .limit(1)
        .execution_options(populate_existing=True)
    )
    user = result.scalar_one_or_none()
    if user is None:
        logger.warning("Login rejected for %s: no owner matches the verified emails", profile.login)
        raise IdentityProviderError("Unauthorized")

    if profile.avatar_url:
        user.avatar = profile.avatar_url
    if profile.name:
        user.name = profile.name
    user.updated_at = clock()
    await db.commit()

    logger.info("Owner signed in", extra={"user_id": user.id})
    return Identity(id=user.id, email=user.email, name=user.name, avatar=user.avatar)


async def provision_owner(db: AsyncSession, data: OwnerCreate, clock: Clock = utcnow) -> User:
    """Create the owner account, or update name/avatar if the email already exists."""
    now = clock()
    result = await db.execute(select(User).where(func.lower(User.email) == data.email.lower()))
    user = result.scalar_one_or_none()

    if user is None:
        user = User(
            name=data.name,
            email=data.email.lower(),
            avatar=data.avatar,
            created_at=now,
            updated_at=now,
        )
        db.add(user)
    else:
        user.name = data.name
        if data.avatar is not None:
            user.avatar = data.avatar
        user.updated_at = now

    await db.commit()
    await db.refresh(user)
    return user

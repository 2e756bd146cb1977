"""Create-or-update and delete operations for every content type.

Each content type gets a ``ContentService`` subclass that names its model and
maps a validated form onto the row's mutable columns. The base class owns the
shared mechanics:

- ``upsert`` is a single ``INSERT ... ON CONFLICT (id) DO UPDATE`` statement.
  A new row gets the caller as owner and both timestamps; a conflicting row
  keeps its id, owner and ``created_at`` and only has its fields and
  ``updated_at`` replaced. Concurrent saves resolve last-write-wins in the
  store.
- ``delete`` removes by id and succeeds whether or not the row existed.

With ``owner_scoped`` enabled, both operations only touch the caller's rows
and rows left without an owner. Updating an ownerless row hands it to the
caller.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import delete, select, text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from portfolio.config import settings
from portfolio.errors import ForbiddenError, PersistenceError
from portfolio.models import Bio, Experience, Post, Project, SocialMedia
from portfolio.schemas.auth import Identity
from portfolio.schemas.common import ContentForm
from portfolio.schemas.experiences import ExperienceForm
from portfolio.schemas.posts import PostForm
from portfolio.schemas.profile import BioForm, SocialMediaForm
from portfolio.schemas.projects import ProjectForm

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
FormT = TypeVar("FormT", bound=ContentForm)

Clock = Callable[[], datetime]

PERSISTENCE_MESSAGE = "Something went wrong while saving. Please try again."


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ContentService(ABC, Generic[ModelT, FormT]):
    """Row actions shared by every content type."""

    model: ClassVar[type]
    resource: ClassVar[str]

    def __init__(
        self,
        db: AsyncSession,
        clock: Clock = utcnow,
        owner_scoped: bool | None = None,
    ):
        self.db = db
        self.clock = clock
        self.owner_scoped = settings.owner_scoped_mutations if owner_scoped is None else owner_scoped

    @abstractmethod
    def mutable_values(self, data: FormT) -> dict[str, Any]:
        """Columns a form is allowed to write."""

    @property
    def dialect(self) -> str:
        return self.db.get_bind().dialect.name

    def _owned_by(self, owner: Identity):
        return (self.model.user_id == owner.id) | self.model.user_id.is_(None)

    def _insert(self):
        if self.dialect == "postgresql":
            return pg_insert(self.model)
        if self.dialect == "sqlite":
            return sqlite_insert(self.model)
        raise PersistenceError(f"Upsert is not supported on {self.dialect}")

    # --- Mutations ---

    async def upsert(self, owner: Identity, data: FormT) -> int:
        """
        Insert a row, or update it in place when ``data.id`` already exists.

        Returns:
            The id of the written row.

        Raises:
            ForbiddenError: owner scoping is on and the id belongs to someone else
            PersistenceError: the store rejected the write
        """
        now = self.clock()
        values = self.mutable_values(data)

        insert_values = {
            **values,
            "user_id": owner.id,
            "created_at": now,
            "updated_at": now,
        }
        if data.id is not None:
            insert_values["id"] = data.id

        update_values = {**values, "updated_at": now}
        if self.owner_scoped:
            update_values["user_id"] = owner.id

        stmt = self._insert().values(**insert_values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[self.model.id],
            set_=update_values,
            where=self._owned_by(owner) if self.owner_scoped else None,
        ).returning(self.model.id)

        try:
            result = await self.db.execute(stmt)
            row_id = result.scalar_one_or_none()
            if row_id is not None and data.id is not None:
                await self._sync_id_sequence()
            if row_id is None:
                await self.db.rollback()
            else:
                await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error(
                "Failed to save %s",
                self.resource,
                exc_info=True,
                extra={"resource": self.resource, "resource_id": data.id, "user_id": owner.id},
            )
            raise PersistenceError(PERSISTENCE_MESSAGE) from exc

        if row_id is None:
            raise ForbiddenError(f"You can only edit your own {self.resource}")

        logger.info(
            "Saved %s",
            self.resource,
            extra={"resource": self.resource, "resource_id": row_id, "user_id": owner.id},
        )
        return row_id

    async def delete(self, owner: Identity, row_id: int) -> None:
        """
        Remove a row by id.

        Deleting an id that does not exist is not an error.
        """
        stmt = delete(self.model).where(self.model.id == row_id)
        if self.owner_scoped:
            stmt = stmt.where(self._owned_by(owner))

        try:
            await self.db.execute(stmt)
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error(
                "Failed to delete %s",
                self.resource,
                exc_info=True,
                extra={"resource": self.resource, "resource_id": row_id, "user_id": owner.id},
            )
            raise PersistenceError(PERSISTENCE_MESSAGE) from exc

        logger.info(
            "Deleted %s",
            self.resource,
            extra={"resource": self.resource, "resource_id": row_id, "user_id": owner.id},
        )

    async def _sync_id_sequence(self) -> None:
        """Move the PostgreSQL id sequence past explicitly inserted ids."""
        if self.dialect != "postgresql":
            return
        table = self.model.__tablename__
        await self.db.execute(
            text(
                f"SELECT setval(pg_get_serial_sequence('{table}', 'id'), "
                f"(SELECT COALESCE(MAX(id), 1) FROM {table}))"
            )
        )

    # --- Loaders ---

    async def list_all(self) -> Sequence[ModelT]:
        """Every row of this type, regardless of owner."""
        result = await self.db.execute(
            select(self.model).order_by(self.model.id).execution_options(populate_existing=True)
        )
        return result.scalars().all()

    async def list_for_owner(self, owner: Identity) -> Sequence[ModelT]:
        """Rows belonging to ``owner``."""
        result = await self.db.execute(
            select(self.model)
            .where(self.model.user_id == owner.id)
            .order_by(self.model.id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().all()

    async def get(self, row_id: int) -> ModelT | None:
        return await self.db.get(self.model, row_id, populate_existing=True)


class BioService(ContentService[Bio, BioForm]):
    model = Bio
    resource = "bio"

    def mutable_values(self, data: BioForm) -> dict[str, Any]:
        return {
            "name": data.name,
            "description": data.description,
            "avatar": data.avatar,
        }

    async def get_for_owner(self, owner: Identity) -> Bio | None:
        """The owner's current bio: the most recently updated row."""
        result = await self.db.execute(
            select(Bio)
            .where(Bio.user_id == owner.id)
            .order_by(Bio.updated_at.desc(), Bio.id.desc())
            .limit(1)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()


class SocialMediaService(ContentService[SocialMedia, SocialMediaForm]):
    model = SocialMedia
    resource = "social media"

    def mutable_values(self, data: SocialMediaForm) -> dict[str, Any]:
        return {
            "platform": data.platform,
            "url": data.url,
        }


class PostService(ContentService[Post, PostForm]):
    model = Post
    resource = "post"

    def mutable_values(self, data: PostForm) -> dict[str, Any]:
        return {
            "title": data.title,
            "content": data.content,
            "status": data.status,
        }


class ProjectService(ContentService[Project, ProjectForm]):
    model = Project
    resource = "project"

    def mutable_values(self, data: ProjectForm) -> dict[str, Any]:
        return {
            "title": data.title,
            "description": data.description,
            "date": data.date,
            "url": data.url,
        }


class ExperienceService(ContentService[Experience, ExperienceForm]):
    model = Experience
    resource = "experience"

    def mutable_values(self, data: ExperienceForm) -> dict[str, Any]:
        return {
            "title": data.title,
            "company": data.company,
            "company_url": data.company_url,
            "start_date": data.start_date,
            "end_date": data.end_date,
            "description": data.description,
        }

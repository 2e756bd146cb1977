"""Post schemas."""

from typing import Literal

from pydantic import BaseModel

from portfolio.schemas.common import CheckboxFlag, ContentForm, ContentResponse, RequiredText

PostStatus = Literal["published", "draft"]


class PostForm(ContentForm):
    """
    Dashboard form for writing a post.

    ``publish`` comes from a checkbox: an unchecked box is not submitted at
    all, which means the post is saved as a draft.
    """

    title: RequiredText
    content: RequiredText
    publish: CheckboxFlag = False

    @property
    def status(self) -> PostStatus:
        return "published" if self.publish else "draft"


class PostResponse(ContentResponse):
    """Full post."""

    title: str
    content: str
    status: PostStatus


class ListPostsResponse(BaseModel):
    """Response for listing posts."""

    items: list[PostResponse]

"""Domain models for album activity (comments and likes)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, model_validator


class AssetVisibility(str, Enum):
	"""Visibility states an asset can be in."""

	ARCHIVE = "archive"
	TIMELINE = "timeline"
	HIDDEN = "hidden"
	LOCKED = "locked"


# Columns of the users table exposed alongside an activity
USER_PUBLIC_COLUMNS = (
	"id",
	"name",
	"email",
	"profile_image_path",
	"avatar_color",
	"profile_changed_at",
)


class ActivityUser(BaseModel):
	"""Public projection of the user who authored an activity."""

	id: UUID
	name: str
	email: str
	profile_image_path: str = ""
	avatar_color: Optional[str] = None
	profile_changed_at: datetime

	model_config = ConfigDict(from_attributes=True)


class Activity(BaseModel):
	"""A comment (is_liked=False) or a like (is_liked=True) inside an album."""

	id: UUID
	user_id: UUID
	album_id: UUID
	asset_id: Optional[UUID] = None
	is_liked: bool
	comment: Optional[str] = None
	created_at: datetime
	updated_at: datetime

	model_config = ConfigDict(from_attributes=True)


class ActivityWithUser(Activity):
	"""Activity row with its author embedded."""

	user: ActivityUser


class ActivityCreate(BaseModel):
	"""Payload for a new activity; id and timestamps are assigned on insert."""

	user_id: UUID
	album_id: UUID
	asset_id: Optional[UUID] = None
	is_liked: bool = False
	comment: Optional[str] = None

	@model_validator(mode="after")
	def _comment_matches_kind(self) -> "ActivityCreate":
		if self.is_liked and self.comment is not None:
			raise ValueError("a like cannot carry a comment")
		if not self.is_liked and self.comment is None:
			raise ValueError("a comment requires text")
		return self


class ActivityStatistics(BaseModel):
	"""Comment and like counts for an album, optionally narrowed to one asset."""

	comments: int = 0
	likes: int = 0


@dataclass(frozen=True, slots=True)
class AnyAsset:
	"""Asset filter that matches every activity."""


@dataclass(frozen=True, slots=True)
class WithoutAsset:
	"""Asset filter that matches only album-level activity (no asset)."""


@dataclass(frozen=True, slots=True)
class ForAsset:
	"""Asset filter that matches activity on exactly one asset."""

	asset_id: UUID


AssetFilter = Union[AnyAsset, WithoutAsset, ForAsset]


@dataclass(frozen=True, slots=True)
class ActivitySearch:
	"""Optional, independent filters for ActivityRepository.search.

	``None`` on ``user_id``, ``album_id`` and ``is_liked`` means "not supplied";
	``is_liked=False`` filters for comments. ``asset`` distinguishes no filter,
	a filter for activity without asset and a filter for one asset.
	"""

	user_id: Optional[UUID] = None
	album_id: Optional[UUID] = None
	asset: AssetFilter = field(default_factory=AnyAsset)
	is_liked: Optional[bool] = None

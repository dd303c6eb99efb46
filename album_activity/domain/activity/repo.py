"""Async repository for album activity backed by asyncpg."""

from __future__ import annotations

import asyncio
import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional
from uuid import UUID, uuid4

import asyncpg

from album_activity.domain.activity import models
from album_activity.domain.activity.exceptions import ActivityConflict, IntegrityViolation, StoreUnavailable
from album_activity.domain.activity.query import QueryConditions
from album_activity.infra.postgres import get_pool
from album_activity.obs.metrics import observe_operation

logger = logging.getLogger(__name__)

_UNAVAILABLE_ERRORS = (
	OSError,
	asyncio.TimeoutError,
	asyncpg.exceptions.PostgresConnectionError,
	asyncpg.exceptions.CannotConnectNowError,
	asyncpg.exceptions.InterfaceError,
)


def _user_json(source: str = "users") -> str:
	pairs = ", ".join(f"'{column}', {source}.{column}" for column in models.USER_PUBLIC_COLUMNS)
	return f"json_build_object({pairs})"


_LIVE_USER_JOIN = "INNER JOIN users ON users.id = activity.user_id AND users.deleted_at IS NULL"
_ASSET_JOIN = "LEFT JOIN assets ON assets.id = activity.asset_id"


def build_search_query(criteria: models.ActivitySearch) -> tuple[str, list[Any]]:
	conditions = QueryConditions()
	conditions.add_if(criteria.user_id is not None, "activity.user_id = {}", str(criteria.user_id))
	asset = criteria.asset
	if isinstance(asset, models.WithoutAsset):
		conditions.add("activity.asset_id IS NULL")
	elif isinstance(asset, models.ForAsset):
		conditions.add("activity.asset_id = {}", str(asset.asset_id))
	conditions.add_if(criteria.album_id is not None, "activity.album_id = {}", str(criteria.album_id))
	conditions.add_if(criteria.is_liked is not None, "activity.is_liked = {}", criteria.is_liked)
	# Holds for rows without an asset, since the outer join leaves deleted_at NULL
	conditions.add("assets.deleted_at IS NULL")
	query = f"""
		SELECT activity.*, {_user_json()} AS "user"
		FROM activity
		{_LIVE_USER_JOIN}
		{_ASSET_JOIN}
		WHERE {conditions.where()}
		ORDER BY activity.created_at ASC
	"""
	return query, conditions.params


def build_statistics_query(*, album_id: UUID, asset_id: Optional[UUID] = None) -> tuple[str, list[Any]]:
	conditions = QueryConditions()
	conditions.add("activity.album_id = {}", str(album_id))
	conditions.add_if(asset_id is not None, "activity.asset_id = {}", str(asset_id))
	conditions.add(
		"((assets.deleted_at IS NULL AND assets.visibility != '%s') OR assets.id IS NULL)"
		% models.AssetVisibility.LOCKED.value
	)
	query = f"""
		SELECT
			COUNT(*) FILTER (WHERE NOT activity.is_liked) AS comments,
			COUNT(*) FILTER (WHERE activity.is_liked) AS likes
		FROM activity
		{_LIVE_USER_JOIN}
		{_ASSET_JOIN}
		WHERE {conditions.where()}
	"""
	return query, conditions.params


def _row_to_activity(record: Any) -> models.ActivityWithUser:
	data = dict(record)
	user = data.get("user")
	if isinstance(user, str):
		data["user"] = json.loads(user)
	return models.ActivityWithUser.model_validate(data)


@asynccontextmanager
async def _acquire() -> AsyncIterator[asyncpg.Connection]:
	try:
		pool = await get_pool()
		async with pool.acquire() as conn:
			yield conn
	except _UNAVAILABLE_ERRORS as exc:
		logger.warning("activity store unavailable", extra={"error": type(exc).__name__})
		raise StoreUnavailable() from exc


class ActivityRepository:
	"""Thin data-access layer for comments and likes."""

	async def search(self, criteria: models.ActivitySearch) -> list[models.ActivityWithUser]:
		query, params = build_search_query(criteria)
		with observe_operation("search"):
			async with _acquire() as conn:
				rows = await conn.fetch(query, *params)
		logger.debug("activity search", extra={"filters": len(params), "rows": len(rows)})
		return [_row_to_activity(row) for row in rows]

	async def create(self, payload: models.ActivityCreate) -> models.ActivityWithUser:
		query = f"""
			INSERT INTO activity (id, user_id, album_id, asset_id, is_liked, comment)
			VALUES ($1, $2, $3, $4, $5, $6)
			RETURNING *, (
				SELECT {_user_json()}
				FROM users
				WHERE users.id = activity.user_id AND users.deleted_at IS NULL
			) AS "user"
		"""
		with observe_operation("create"):
			async with _acquire() as conn:
				async with conn.transaction():
					try:
						record = await conn.fetchrow(
							query,
							uuid4(),
							str(payload.user_id),
							str(payload.album_id),
							str(payload.asset_id) if payload.asset_id else None,
							payload.is_liked,
							payload.comment,
						)
					except asyncpg.UniqueViolationError as exc:  # type: ignore[attr-defined]
						raise ActivityConflict() from exc
					except asyncpg.ForeignKeyViolationError as exc:  # type: ignore[attr-defined]
						logger.warning("activity references missing row", extra={"constraint": getattr(exc, "constraint_name", None)})
						raise IntegrityViolation("activity_reference_invalid") from exc
					except asyncpg.CheckViolationError as exc:  # type: ignore[attr-defined]
						raise IntegrityViolation("activity_payload_invalid") from exc
					if record is None or record["user"] is None:
						logger.warning("activity author is not a live user", extra={"author_id": str(payload.user_id)})
						raise IntegrityViolation()
		return _row_to_activity(record)

	async def delete(self, activity_id: UUID) -> None:
		with observe_operation("delete"):
			async with _acquire() as conn:
				result = await conn.execute("DELETE FROM activity WHERE id=$1", str(activity_id))
		logger.debug("activity delete", extra={"activity_id": str(activity_id), "status": result})

	async def get_statistics(self, *, album_id: UUID, asset_id: Optional[UUID] = None) -> models.ActivityStatistics:
		query, params = build_statistics_query(album_id=album_id, asset_id=asset_id)
		with observe_operation("statistics"):
			async with _acquire() as conn:
				record = await conn.fetchrow(query, *params)
		if not record:
			return models.ActivityStatistics()
		return models.ActivityStatistics(comments=int(record["comments"] or 0), likes=int(record["likes"] or 0))

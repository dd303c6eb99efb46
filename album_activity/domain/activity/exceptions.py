"""Errors raised by the activity store."""

from __future__ import annotations


class ActivityError(Exception):
	"""Base class for activity store errors."""

	reason: str = "activity_error"

	def __init__(self, reason: str | None = None) -> None:
		super().__init__(reason or self.reason)
		if reason:
			self.reason = reason


class IntegrityViolation(ActivityError):
	"""A new activity could not be tied back to a live user or valid references."""

	reason = "activity_user_missing"


class ActivityConflict(IntegrityViolation):
	"""The user already liked this asset in this album."""

	reason = "activity_duplicate_like"


class StoreUnavailable(ActivityError):
	"""The database could not be reached or dropped the connection."""

	reason = "store_unavailable"

"""Helpers for composing WHERE clauses with asyncpg placeholders."""

from __future__ import annotations

from typing import Any


class QueryConditions:
	"""Ordered list of predicates joined with AND.

	Each clause is a format string with one ``{}`` per bound value; values are
	appended to ``params`` and the braces become ``$n`` placeholders numbered
	in insertion order.
	"""

	def __init__(self, params: list[Any] | None = None) -> None:
		self.clauses: list[str] = []
		self.params: list[Any] = list(params or [])

	def add(self, clause: str, *values: Any) -> "QueryConditions":
		placeholders = []
		for value in values:
			self.params.append(value)
			placeholders.append("$%d" % len(self.params))
		self.clauses.append(clause.format(*placeholders))
		return self

	def add_if(self, condition: bool, clause: str, *values: Any) -> "QueryConditions":
		if condition:
			self.add(clause, *values)
		return self

	def where(self) -> str:
		if not self.clauses:
			return "TRUE"
		return " AND ".join(self.clauses)

	def __len__(self) -> int:
		return len(self.clauses)

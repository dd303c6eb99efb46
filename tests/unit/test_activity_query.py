from __future__ import annotations

from uuid import uuid4

from album_activity.domain.activity import models
from album_activity.domain.activity.query import QueryConditions
from album_activity.domain.activity.repo import build_search_query, build_statistics_query


def test_conditions_number_placeholders_in_order():
	conditions = QueryConditions()
	conditions.add("a = {}", 1).add("b IS NULL").add("c BETWEEN {} AND {}", 2, 3)

	assert conditions.where() == "a = $1 AND b IS NULL AND c BETWEEN $2 AND $3"
	assert conditions.params == [1, 2, 3]
	assert len(conditions) == 3


def test_conditions_continue_numbering_after_seed_params():
	conditions = QueryConditions(["seed"])
	conditions.add("x = {}", "value")

	assert conditions.where() == "x = $2"
	assert conditions.params == ["seed", "value"]


def test_conditions_add_if_skips_false_branch():
	conditions = QueryConditions()
	conditions.add_if(False, "skipped = {}", "nope")
	conditions.add_if(True, "kept = {}", "yes")

	assert conditions.where() == "kept = $1"
	assert conditions.params == ["yes"]


def test_empty_conditions_render_true():
	assert QueryConditions().where() == "TRUE"


def test_search_without_filters_keeps_live_user_and_asset_checks():
	query, params = build_search_query(models.ActivitySearch())

	assert params == []
	assert "INNER JOIN users ON users.id = activity.user_id AND users.deleted_at IS NULL" in query
	assert "LEFT JOIN assets ON assets.id = activity.asset_id" in query
	assert "WHERE assets.deleted_at IS NULL" in query
	assert "activity.asset_id IS NULL" not in query
	assert "ORDER BY activity.created_at ASC" in query


def test_search_without_asset_filters_for_null_asset():
	query, params = build_search_query(models.ActivitySearch(asset=models.WithoutAsset()))

	assert "activity.asset_id IS NULL" in query
	assert params == []


def test_search_for_asset_binds_the_asset_id():
	asset_id = uuid4()
	query, params = build_search_query(models.ActivitySearch(asset=models.ForAsset(asset_id)))

	assert "activity.asset_id = $1" in query
	assert params == [str(asset_id)]


def test_search_binds_all_filters_conjunctively():
	user_id, album_id, asset_id = uuid4(), uuid4(), uuid4()
	criteria = models.ActivitySearch(
		user_id=user_id,
		album_id=album_id,
		asset=models.ForAsset(asset_id),
		is_liked=True,
	)

	query, params = build_search_query(criteria)

	assert (
		"activity.user_id = $1 AND activity.asset_id = $2 AND activity.album_id = $3 "
		"AND activity.is_liked = $4 AND assets.deleted_at IS NULL"
	) in query
	assert params == [str(user_id), str(asset_id), str(album_id), True]


def test_search_treats_false_is_liked_as_a_filter():
	query, params = build_search_query(models.ActivitySearch(is_liked=False))

	assert "activity.is_liked = $1" in query
	assert params == [False]


def test_search_projects_public_user_columns():
	query, _ = build_search_query(models.ActivitySearch())

	for column in models.USER_PUBLIC_COLUMNS:
		assert f"'{column}', users.{column}" in query
	assert 'AS "user"' in query


def test_statistics_scopes_album_and_excludes_locked_assets():
	album_id = uuid4()
	query, params = build_statistics_query(album_id=album_id)

	assert params == [str(album_id)]
	assert "activity.album_id = $1" in query
	assert "activity.asset_id =" not in query
	assert "((assets.deleted_at IS NULL AND assets.visibility != 'locked') OR assets.id IS NULL)" in query
	assert "COUNT(*) FILTER (WHERE NOT activity.is_liked) AS comments" in query
	assert "COUNT(*) FILTER (WHERE activity.is_liked) AS likes" in query
	assert "users.deleted_at IS NULL" in query


def test_statistics_optionally_scopes_asset():
	album_id, asset_id = uuid4(), uuid4()
	query, params = build_statistics_query(album_id=album_id, asset_id=asset_id)

	assert "activity.asset_id = $2" in query
	assert params == [str(album_id), str(asset_id)]

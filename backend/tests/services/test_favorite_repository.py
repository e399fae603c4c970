"""FavoriteRepository - SQL mapping against an in-memory database.

Tests:
    - create returns storage-assigned ids, distinct across identical payloads
    - update/delete report affected rows (0 for unknown ids, never raise)
    - find_id raises FavoriteNotFoundError on zero matches
"""

import pytest

from favorites_api.core.domain_types import FavoriteId, SessionId
from favorites_api.core.errors import FavoriteNotFoundError
from favorites_api.schemas.favorite import FavoritePayload
from favorites_api.services.favorite_repository import FavoriteRepository


@pytest.fixture
def repo(test_db):
    return FavoriteRepository(test_db)


@pytest.fixture
def payload(favorite_fields):
    return FavoritePayload(**favorite_fields)


async def test_identical_creates_get_distinct_ids(repo, payload):
    first = await repo.create(payload)
    second = await repo.create(payload)
    assert first.favorite_id != second.favorite_id
    assert len(await repo.list_all()) == 2


async def test_create_drops_payload_favorite_id(repo, favorite_fields):
    created = await repo.create(
        FavoritePayload(**favorite_fields, favorite_id=77),
    )
    assert created.favorite_id != 77


async def test_list_by_session_filters(repo, payload, favorite_fields):
    await repo.create(payload)
    await repo.create(FavoritePayload(**{**favorite_fields, "session_id": "s2"}))

    rows = await repo.list_by_session(SessionId("s2"))

    assert [r.session_id for r in rows] == ["s2"]


async def test_find_id_returns_match(repo, payload):
    created = await repo.create(payload)
    found = await repo.find_id(SessionId("s1"), "Alice", "http://x/img.png")
    assert found == created.favorite_id


async def test_find_id_without_match_raises(repo, payload):
    await repo.create(payload)
    with pytest.raises(FavoriteNotFoundError) as exc_info:
        await repo.find_id(SessionId("s1"), "Bob", "http://x/img.png")
    assert exc_info.value.http_status == 404


async def test_update_unknown_id_affects_nothing(repo, payload):
    assert await repo.update(FavoriteId(12345), payload) == 0


async def test_update_existing_reports_one_row(repo, payload, favorite_fields):
    created = await repo.create(payload)
    changed = FavoritePayload(**{**favorite_fields, "user_name": "renamed"})

    assert await repo.update(FavoriteId(created.favorite_id), changed) == 1
    rows = await repo.list_all()
    assert rows[0].user_name == "renamed"
    assert rows[0].favorite_id == created.favorite_id


async def test_delete_reports_affected_rows(repo, payload):
    created = await repo.create(payload)
    assert await repo.delete(FavoriteId(created.favorite_id)) == 1
    assert await repo.delete(FavoriteId(created.favorite_id)) == 0
    assert await repo.list_all() == []

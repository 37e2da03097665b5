import pytest
from databases import Database

from database.connection import DatabaseState, bootstrap
from errors import InvalidInput, NotFound, StorageUnavailable
from repositories.database import DatabasePostRepository, DatabaseCommentRepository

pytestmark = pytest.mark.anyio


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'nested' / 'repo.sqlite3'}"


@pytest.fixture
async def state(db_url):
    state = DatabaseState(Database(db_url))
    assert await bootstrap(state, db_url)
    yield state
    await state.database.disconnect()


async def test_bootstrap_is_repeatable(state, db_url):
    repo = DatabasePostRepository(state)
    await repo.create({"title": "keep me"})

    assert await bootstrap(state, db_url)

    rows = await state.database.fetch_all(
        "SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name"
    )
    names = {r[0] for r in rows}
    assert {"posts", "comments", "social_media_links", "site_icons"} <= names
    assert [p["title"] for p in await repo.list()] == ["keep me"]


async def test_crud_round(state):
    repo = DatabasePostRepository(state)
    created = await repo.create({"title": "A", "content": "B"})
    assert created == {"id": 1, "title": "A", "content": "B"}

    post = await repo.get_by_id(1)
    assert post["views"] == 0
    assert post["image_location"] is None
    assert post["created_at"] is not None

    updated = await repo.update("1", {"title": "A2"})
    assert (updated["title"], updated["content"]) == ("A2", "B")

    await repo.delete(1)
    with pytest.raises(NotFound):
        await repo.get_by_id(1)


async def test_update_missing_row_is_not_found(state):
    with pytest.raises(NotFound):
        await DatabasePostRepository(state).update(5, {"title": "x"})


async def test_unique_image_id_violation_is_invalid_input(state):
    repo = DatabasePostRepository(state)
    await repo.create({"image_id": "dup"})
    with pytest.raises(InvalidInput):
        await repo.create({"image_id": "dup"})


async def test_post_delete_leaves_comments_in_place(state):
    posts = DatabasePostRepository(state)
    comments = DatabaseCommentRepository(state)
    created = await posts.create({"title": "t"})
    await comments.add(created["id"], {"author": "a", "content": "c"})

    await posts.delete(created["id"])

    # 연쇄 삭제 없음: 고아 댓글이 남는다
    row = await state.database.fetch_one("SELECT COUNT(*) AS cnt FROM comments")
    assert row[0] == 1


async def test_not_ready_state_fails_fast(tmp_path):
    state = DatabaseState(Database(f"sqlite+aiosqlite:///{tmp_path / 'never.sqlite3'}"))
    with pytest.raises(StorageUnavailable) as info:
        await DatabasePostRepository(state).list()
    assert info.value.status_code == 503


async def test_driver_failure_is_storage_unavailable(state):
    repo = DatabasePostRepository(state)
    await repo.create({"title": "t"})
    await state.database.execute("DROP TABLE posts")

    with pytest.raises(StorageUnavailable) as info:
        await repo.list()
    assert info.value.status_code == 500
    assert info.value.message == "Failed to fetch posts"
    assert info.value.details

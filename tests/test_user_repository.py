import pytest

from diary.core.db import Database
from diary.core.errors import ValidationFailedError
from diary.db.repositories.user_repository import UserRepository
from diary.domains.identity.entities import User


@pytest.fixture
async def database(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path / 'users.db'}")
    await database.connect(create_schema=True)
    yield database
    await database.disconnect()


async def test_duplicate_email_rejected_on_insert(database):
    async with database.session_factory() as session:
        repository = UserRepository(session)
        await repository.create(User.create_user("race@example.com", "secret123", "One"))

        with pytest.raises(ValidationFailedError) as excinfo:
            await repository.create(User.create_user("race@example.com", "secret123", "Two"))

        assert await repository.get_by_email("race@example.com") is not None

    assert excinfo.value.status_code == 400
    assert excinfo.value.to_body() == {
        "error": "Email already registered",
        "errors": [{"field": "email", "message": "Email already registered"}],
    }

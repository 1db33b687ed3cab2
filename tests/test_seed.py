from contextlib import contextmanager

from tasklist import seed
from tasklist.models import Task, User


def test_seed_creates_test_user_with_five_tasks(db):
    seed.run(db)

    user = db.query(User).one()
    assert user.email == "test@example.com"
    assert db.query(Task).filter(Task.user_id == user.id).count() == 5


def test_seed_adds_tasks_for_existing_users(db, alice, bob):
    seed.run(db)

    for user in (alice, bob):
        count = db.query(Task).filter(Task.user_id == user.id).count()
        assert 3 <= count <= 8
    assert db.query(User).count() == 2


def test_main_seeds_through_a_managed_session(db, monkeypatch):
    closed = []

    @contextmanager
    def fake_session():
        yield db
        closed.append(True)

    monkeypatch.setattr(seed, "setup_logging", lambda level: None)
    monkeypatch.setattr(seed, "create_tables", lambda: None)
    monkeypatch.setattr(seed, "get_session", fake_session)

    seed.main()

    assert closed == [True]
    assert db.query(User).one().email == "test@example.com"

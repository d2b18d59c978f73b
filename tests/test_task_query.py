from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from taskboard.core.errors import ValidationError
from taskboard.services import category_service, task_service
from taskboard.services.task_query import parse_pagination

BASE = datetime(2026, 10, 1, 9, 0, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("page", "limit", "expected"),
    [
        (None, None, (1, 10)),
        ("2", "5", (2, 5)),
        (3, 20, (3, 20)),
        ("abc", "xyz", (1, 10)),
        ("0", "-4", (1, 10)),
        (" 4 ", "", (4, 10)),
    ],
)
def test_parse_pagination_defaults(page, limit, expected):
    assert parse_pagination(page, limit) == expected


def test_parse_pagination_caps_limit():
    assert parse_pagination("1", "5000", max_limit=100) == (1, 100)
    assert parse_pagination("1", "5000") == (1, 5000)


@pytest.mark.parametrize("page", ["99999999999999999999", str(2**63)])
def test_parse_pagination_rejects_page_beyond_sql_range(page):
    with pytest.raises(ValidationError):
        parse_pagination(page, "10", max_limit=100)


def test_parse_pagination_accepts_largest_representable_offset():
    page = (2**63 - 1) // 10 + 1

    assert parse_pagination(str(page), "10") == (page, 10)


@pytest.fixture
def populated(db, make_user, make_task):
    """Two users; alice owns 12 tasks with increasing created_at, bob owns 3."""
    alice, bob = make_user("alice"), make_user("bob")
    work = category_service.create_category(db, alice.id, "Work")
    home = category_service.create_category(db, alice.id, "Home")

    for i in range(12):
        make_task(
            alice.id,
            f"Alice task {i}",
            status="completed" if i % 3 == 0 else "pending",
            category_id=work.id if i % 2 == 0 else home.id,
            created_at=BASE + timedelta(hours=i),
        )
    for i in range(3):
        make_task(bob.id, f"Bob task {i}", created_at=BASE + timedelta(hours=100 + i))

    return {"alice": alice, "bob": bob, "work": work, "home": home}


def test_list_tasks_is_scoped_to_user(db, populated):
    alice, bob = populated["alice"], populated["bob"]

    for user in (alice, bob):
        tasks = task_service.list_tasks(db, user.id, page=1, limit=100, status="all")
        assert tasks
        assert all(t.user_id == user.id for t in tasks)


def test_list_tasks_orders_newest_first_and_paginates(db, populated):
    alice = populated["alice"]

    page1 = task_service.list_tasks(db, alice.id)
    page2 = task_service.list_tasks(db, alice.id, page="2")

    assert [t.title for t in page1] == [f"Alice task {i}" for i in range(11, 1, -1)]
    assert [t.title for t in page2] == ["Alice task 1", "Alice task 0"]


def test_list_tasks_non_numeric_paging_uses_defaults(db, populated):
    tasks = task_service.list_tasks(db, populated["alice"].id, page="x", limit="y")

    assert len(tasks) == 10


def test_list_tasks_respects_limit_cap(db, populated):
    tasks = task_service.list_tasks(db, populated["alice"].id, limit="1000", max_limit=5)

    assert len(tasks) == 5


def test_search_is_case_insensitive_substring(db, populated, make_task):
    alice = populated["alice"]
    make_task(alice.id, "Call the DENTIST", created_at=BASE)

    tasks = task_service.list_tasks(db, alice.id, search="dentist")

    assert [t.title for t in tasks] == ["Call the DENTIST"]


def test_search_treats_wildcards_literally(db, populated, make_task):
    alice = populated["alice"]
    make_task(alice.id, "100% done", created_at=BASE)

    assert [t.title for t in task_service.list_tasks(db, alice.id, search="0%")] == ["100% done"]
    assert task_service.list_tasks(db, alice.id, search="%") != []
    assert task_service.list_tasks(db, alice.id, search="_task") == []


def test_search_does_not_cross_users(db, populated):
    assert task_service.list_tasks(db, populated["alice"].id, search="Bob") == []


@pytest.mark.parametrize(("status", "expected"), [("all", 12), ("", 12), ("completed", 4), ("pending", 8), ("in_progress", 0)])
def test_status_filter(db, populated, status, expected):
    tasks = task_service.list_tasks(db, populated["alice"].id, limit=100, status=status)

    assert len(tasks) == expected
    if status not in ("all", ""):
        assert all(t.status == status for t in tasks)


def test_category_filter(db, populated):
    alice, work = populated["alice"], populated["work"]

    tasks = task_service.list_tasks(db, alice.id, limit=100, category_id=str(work.id))

    assert len(tasks) == 6
    assert all(t.category_id == work.id for t in tasks)
    assert all(t.category.name == "Work" for t in tasks)


@pytest.mark.parametrize("sentinel", ["", "0", None])
def test_category_sentinels_disable_filter(db, populated, sentinel):
    tasks = task_service.list_tasks(db, populated["alice"].id, limit=100, category_id=sentinel)

    assert len(tasks) == 12


def test_category_filter_rejects_non_numeric(db, populated):
    with pytest.raises(ValidationError):
        task_service.list_tasks(db, populated["alice"].id, category_id="work")


def test_filters_compose(db, populated):
    alice, home = populated["alice"], populated["home"]

    tasks = task_service.list_tasks(
        db, alice.id, limit=100, status="completed", category_id=str(home.id), search="task"
    )

    # completed: i in {0, 3, 6, 9}; home: odd i
    assert sorted(t.title for t in tasks) == ["Alice task 3", "Alice task 9"]


def test_soft_deleted_tasks_are_not_listed(db, populated):
    alice = populated["alice"]
    newest = task_service.list_tasks(db, alice.id, limit=1)[0]

    task_service.delete_task(db, alice.id, newest.id)

    titles = [t.title for t in task_service.list_tasks(db, alice.id, limit=100)]
    assert newest.title not in titles
    assert len(titles) == 11


def test_list_tasks_huge_page_is_a_validation_error(db, populated):
    with pytest.raises(ValidationError):
        task_service.list_tasks(db, populated["alice"].id, page="99999999999999999999")


def test_whitespace_search_is_a_real_filter(db, populated, make_task):
    alice = populated["alice"]
    make_task(alice.id, "Groceries", created_at=BASE)

    titles = [t.title for t in task_service.list_tasks(db, alice.id, limit=100, search=" ")]

    assert len(titles) == 12
    assert "Groceries" not in titles

from collections import Counter
from datetime import datetime

import pytest

from fintrack.backup.services import COLLECTIONS, create_backup, restore_backup
from fintrack.storage import get_storage


@pytest.fixture(params=["memory", "sql"])
def store(request, app, sql_app):
    target = app if request.param == "memory" else sql_app
    with target.app_context():
        yield get_storage()


def _seed(store, username="alice"):
    user = store.create_user(
        {"username": username, "name": "A", "email": f"{username}@x.io", "password": "h"}
    )
    uid = user.id
    store.create_transaction(
        {"user_id": uid, "amount": 50, "category": "food", "description": "groceries",
         "type": "expense", "date": datetime(2024, 2, 1), "note": "weekly"}
    )
    store.create_transaction(
        {"user_id": uid, "amount": 2000, "category": "salary", "description": "pay",
         "type": "income", "date": datetime(2024, 2, 25), "recurring": True}
    )
    store.create_income({"user_id": uid, "source": "Employer", "amount": 2000, "date": datetime(2024, 2, 25)})
    store.create_budget({"user_id": uid, "category": "food", "amount": 300, "period": "monthly"})
    store.create_goal({"user_id": uid, "name": "Holiday", "target_amount": 1500, "current_amount": 200,
                       "deadline": datetime(2024, 12, 1)})
    store.create_category({"user_id": uid, "name": "Food"})
    store.create_category({"user_id": uid, "name": "Salary", "type": "income"})
    return uid


def _without_ids(rows):
    return Counter(
        tuple(sorted((k, v) for k, v in row.items() if k not in ("id", "userId")))
        for row in rows
    )


def test_backup_contains_all_five_collections(store):
    uid = _seed(store)
    backup = create_backup(store, uid)

    assert set(backup) == set(COLLECTIONS)
    assert len(backup["transactions"]) == 2
    assert len(backup["categories"]) == 2
    assert all(row["userId"] == uid for rows in backup.values() for row in rows)


def test_backup_is_in_insertion_order(store):
    uid = _seed(store)
    backup = create_backup(store, uid)

    ids = [row["id"] for row in backup["transactions"]]
    assert ids == sorted(ids)


def test_backup_only_includes_own_rows(store):
    alice = _seed(store, "alice")
    bob = _seed(store, "bob")

    backup = create_backup(store, alice)

    assert all(row["userId"] == alice for rows in backup.values() for row in rows)
    bob_ids = {t.id for t in store.get_transactions(bob)}
    assert len(bob_ids) == 2
    assert bob_ids.isdisjoint(row["id"] for row in backup["transactions"])


def test_round_trip_reproduces_entities(store):
    uid = _seed(store)
    before = create_backup(store, uid)

    result = restore_backup(store, uid, before)
    after = create_backup(store, uid)

    assert result.rejected == []
    for name in COLLECTIONS:
        assert _without_ids(after[name]) == _without_ids(before[name]), name


def test_restore_assigns_fresh_ids(store):
    uid = _seed(store)
    before = create_backup(store, uid)

    restore_backup(store, uid, before)
    after = create_backup(store, uid)

    old_ids = {row["id"] for row in before["transactions"]}
    new_ids = {row["id"] for row in after["transactions"]}
    assert old_ids.isdisjoint(new_ids)


def test_restore_forces_caller_ownership(store):
    alice = _seed(store, "alice")
    bob = _seed(store, "bob")
    stolen = create_backup(store, alice)

    restore_backup(store, bob, stolen)

    assert all(t.user_id == bob for t in store.get_transactions(bob))
    # alice is untouched
    assert len(store.get_transactions(alice)) == 2


def test_omitted_collection_is_cleared_not_repopulated(store):
    uid = _seed(store)
    backup = create_backup(store, uid)
    del backup["goals"]

    result = restore_backup(store, uid, backup)

    assert store.get_goals(uid) == []
    assert "goals" not in result.restored
    assert len(store.get_budgets(uid)) == 1


def test_malformed_rows_are_rejected_individually(store):
    uid = _seed(store)
    data = {
        "transactions": [
            {"amount": 12, "category": "food", "description": "ok", "type": "expense"},
            {"amount": -5, "category": "food", "description": "negative", "type": "expense"},
            "not-a-row",
        ],
        "budgets": [{"category": "fun", "amount": 20, "period": "monthly"}],
    }

    result = restore_backup(store, uid, data)

    assert result.restored == {"transactions": 1, "budgets": 1}
    assert [(r.collection, r.index) for r in result.rejected] == [
        ("transactions", 1),
        ("transactions", 2),
    ]
    assert [t.description for t in store.get_transactions(uid)] == ["ok"]


def test_restore_ignores_other_users_rows(store):
    alice = _seed(store, "alice")
    bob = _seed(store, "bob")

    restore_backup(store, alice, {})

    assert store.get_transactions(alice) == []
    assert len(store.get_transactions(bob)) == 2


def test_restore_rejects_duplicate_category_names(store):
    uid = _seed(store)
    data = {
        "categories": [
            {"name": "Food"},
            {"name": "food"},
            {"name": "Rent"},
            {"name": "FOOD", "type": "income"},
        ]
    }

    result = restore_backup(store, uid, data)

    assert result.restored == {"categories": 2}
    assert [(r.collection, r.index) for r in result.rejected] == [
        ("categories", 1),
        ("categories", 3),
    ]
    assert result.rejected[0].errors[0]["loc"] == ["name"]
    assert sorted(c.name for c in store.get_categories(uid)) == ["Food", "Rent"]

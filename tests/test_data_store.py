"""
Unit tests for the reservation stores

Covers id assignment, ordering, lookup and the atomic add used by intake.
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from data_store import InMemoryReservationStore
from database import SqliteReservationStore
from models import Reservation
from tests.util_constant import FIXED_NOW


def _make(reservation_id: int, name: str = "Taro") -> Reservation:
    return Reservation(
        id=reservation_id,
        name=name,
        email=f"{name.lower()}@example.com",
        date="2099-01-01",
        time="18:00",
        guests=2,
        created_at=FIXED_NOW,
    )


class TestInMemoryReservationStore:
    @pytest.mark.unit
    def test_next_id_starts_at_one_and_never_repeats(self):
        store = InMemoryReservationStore()

        assert [store.next_id() for _ in range(3)] == [1, 2, 3]

    @pytest.mark.unit
    def test_all_returns_records_in_creation_order(self):
        store = InMemoryReservationStore()
        store.add(lambda rid: _make(rid, "Taro"))
        store.add(lambda rid: _make(rid, "Hanako"))

        assert [r.name for r in store.all()] == ["Taro", "Hanako"]
        assert [r.id for r in store.all()] == [1, 2]

    @pytest.mark.unit
    def test_all_is_a_snapshot(self):
        store = InMemoryReservationStore()
        store.add(_make)

        snapshot = store.all()
        snapshot.clear()

        assert len(store) == 1

    @pytest.mark.unit
    def test_find_by_id(self):
        store = InMemoryReservationStore()
        created = store.add(_make)

        assert store.find_by_id(created.id) == created
        assert store.find_by_id(99) is None

    @pytest.mark.unit
    def test_concurrent_adds_get_unique_increasing_ids(self):
        store = InMemoryReservationStore()

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda _: store.add(_make), range(200)))

        ids = [r.id for r in store.all()]
        assert ids == list(range(1, 201))
        assert sorted(r.id for r in results) == ids


class TestSqliteReservationStore:
    @pytest.mark.integration
    def test_add_and_read_back(self, tmp_path):
        store = SqliteReservationStore(str(tmp_path / "reservations.db"))

        created = store.add(_make)

        assert created.id == 1
        assert store.find_by_id(1) == created
        assert store.all() == [created]
        assert store.find_by_id(2) is None

    @pytest.mark.integration
    def test_ids_continue_after_reopen(self, tmp_path):
        db_file = str(tmp_path / "reservations.db")
        first = SqliteReservationStore(db_file)
        first.add(_make)
        first.add(_make)

        reopened = SqliteReservationStore(db_file)
        created = reopened.add(lambda rid: _make(rid, "Hanako"))

        assert created.id == 3
        assert [r.name for r in reopened.all()] == ["Taro", "Taro", "Hanako"]

    @pytest.mark.integration
    def test_string_guest_count_is_kept_as_string(self, tmp_path):
        store = SqliteReservationStore(str(tmp_path / "reservations.db"))
        store.add(lambda rid: _make(rid).model_copy(update={"guests": "6+"}))

        assert store.find_by_id(1).guests == "6+"

    @pytest.mark.integration
    def test_find_by_id_beyond_sqlite_integer_range(self, tmp_path):
        store = SqliteReservationStore(str(tmp_path / "reservations.db"))
        store.add(_make)

        assert store.find_by_id(99999999999999999999999) is None
        assert store.find_by_id(-(2**63) - 1) is None

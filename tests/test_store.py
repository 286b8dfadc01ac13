"""In-memory store tests."""

from __future__ import annotations

import pytest

from greencredits.services.common import MemoryStore, group_by
from greencredits.utils.errors import InvalidInputError


def test_rows_are_isolated_copies(store: MemoryStore) -> None:
    """Mutating a returned row does not change the stored one."""
    store.put("things", {"id": 1, "tags": ["a"]})
    row = store.get("things", 1)
    assert row is not None
    row["tags"].append("b")
    assert store.get("things", "1") == {"id": 1, "tags": ["a"]}


def test_put_requires_id(store: MemoryStore) -> None:
    """Every row needs a primary key."""
    with pytest.raises(InvalidInputError):
        store.put("things", {"name": "no id"})


def test_scan_filters_orders_and_pages(store: MemoryStore) -> None:
    """Scans support equality filters, ordering and paging."""
    for index in range(1, 6):
        store.put("things", {"id": index, "owner": "a" if index % 2 else "b", "rank": index})

    rows = store.scan("things", filters={"owner": "a"}, order_by="rank", descending=True)
    assert [row["id"] for row in rows] == [5, 3, 1]

    page = store.scan("things", order_by="rank", limit=2, offset=1)
    assert [row["id"] for row in page] == [2, 3]
    assert store.count("things", {"owner": "b"}) == 2


def test_next_id_is_monotonic_per_table(store: MemoryStore) -> None:
    """Ids increase independently for each table."""
    assert [store.next_id("a"), store.next_id("a"), store.next_id("b")] == [1, 2, 1]


def test_group_by() -> None:
    """Rows are grouped by the stringified key."""
    grouped = group_by([{"user_id": 1, "v": "x"}, {"user_id": 1, "v": "y"}], "user_id")
    assert [row["v"] for row in grouped["1"]] == ["x", "y"]

import pytest

from slotwise.positional import SlotSpec, SlotTable, TokenCursor


@pytest.fixture
def table():
    return SlotTable.build(
        [
            SlotSpec("src", collection=True, required="1-2"),
            SlotSpec("dest", required=1),
        ]
    )


def test_pop_and_peek():
    cursor = TokenCursor(["a", "b"])
    assert len(cursor) == 2
    assert cursor.peek() == "a"
    assert cursor.pop() == "a"
    assert cursor.remaining == ["b"]
    assert cursor.pop() == "b"
    assert cursor.empty()
    assert cursor.peek() is None
    with pytest.raises(IndexError):
        cursor.pop()


def test_counters_track_minimum(table):
    cursor = TokenCursor(["a", "b", "c"], still_required=table.total_min)
    cursor.begin_slot(table[0], table.remaining_min(0))
    assert cursor.still_required == 2

    cursor.pop()
    assert cursor.claimed_by_slot == 1
    assert cursor.claimed_globally == 1
    assert cursor.still_required == 1

    cursor.pop()
    assert cursor.claimed_by_slot == 2
    assert cursor.still_required == 1
    assert cursor.reserved_for_successors()


def test_unattributed_pop_only_advances_global(table):
    cursor = TokenCursor(["a", "b"])
    cursor.begin_slot(table[1], table.remaining_min(1))
    cursor.pop(attribute=False)
    assert cursor.claimed_globally == 1
    assert cursor.claimed_by_slot == 0
    assert cursor.still_required == 1


def test_snapshot_is_independent(table):
    cursor = TokenCursor(["a", "b", "c"])
    snapshot = cursor.snapshot(table[1], table.total_min)
    assert snapshot.remaining == ["b", "c"]
    assert snapshot.claimed_globally == 1
    assert snapshot.still_required == 1

    snapshot.pop()
    assert snapshot.remaining == ["c"]
    assert cursor.remaining == ["a", "b", "c"]


def test_snapshot_past_the_end(table):
    snapshot = TokenCursor([]).snapshot(table[1], table.total_min)
    assert snapshot.empty()

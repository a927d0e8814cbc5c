import pytest

from slotwise.exceptions import (
    ArgumentCountError,
    ConversionError,
    RequiredArgumentError,
    TooManyArgumentsError,
)
from slotwise.positional import (
    ListValue,
    ScalarValue,
    SequentialAllocator,
    SlotSpec,
    SlotTable,
)


def allocate(specs, tokens, **kwargs):
    table = SlotTable.build(specs, **kwargs)
    allocator = SequentialAllocator(table)
    remainder = allocator.allocate(tokens)
    return table.values(), remainder


def test_scalar_then_unbounded_collection():
    values, remainder = allocate(
        [SlotSpec("target", required=1), SlotSpec("files", collection=True)],
        ["a", "b", "c"],
    )
    assert values == {"target": "a", "files": ["b", "c"]}
    assert remainder == []


def test_collection_short_of_minimum():
    with pytest.raises(RequiredArgumentError) as excinfo:
        allocate([SlotSpec("x", collection=True, required=2)], ["x"])
    assert str(excinfo.value) == (
        "the required argument `x (at least 2 arguments)` was not provided"
    )
    assert excinfo.value.clauses == ["`x (at least 2 arguments)`"]
    assert excinfo.value.names == ["x"]


def test_disabled_last_slot_rejects_tokens():
    with pytest.raises(TooManyArgumentsError) as excinfo:
        allocate([SlotSpec("z", required="0-0")], ["a"])
    assert "`z (zero arguments)`" in str(excinfo.value)
    assert "unexpected value a" in str(excinfo.value)
    assert isinstance(excinfo.value, ArgumentCountError)


def test_bounded_last_collection_overflow():
    with pytest.raises(TooManyArgumentsError) as excinfo:
        allocate(
            [SlotSpec("pair", collection=True, required="1-2")], ["a", "b", "c", "d"]
        )
    assert str(excinfo.value) == (
        "too many arguments for `pair (at most 2 arguments)`: unexpected values c, d"
    )


def test_last_scalar_leaves_remainder():
    values, remainder = allocate([SlotSpec("target", required=1)], ["a", "b"])
    assert values == {"target": "a"}
    assert remainder == ["b"]


def test_reserves_tokens_for_successors():
    values, remainder = allocate(
        [
            SlotSpec("sources", collection=True, required="1-8"),
            SlotSpec("dest", required=1),
        ],
        ["a", "b", "c"],
    )
    assert values == {"sources": ["a", "b"], "dest": "c"}
    assert remainder == []


def test_optional_scalar_is_skipped_when_tokens_are_owed():
    values, _ = allocate(
        [SlotSpec("maybe"), SlotSpec("needed", required=1)],
        ["a"],
    )
    assert values == {"maybe": None, "needed": "a"}


def test_all_required_slots_are_reported():
    with pytest.raises(RequiredArgumentError) as excinfo:
        allocate(
            [
                SlotSpec("first", required=1),
                SlotSpec("pair", collection=True, required="2-2"),
                SlotSpec("last", required=1),
            ],
            ["a", "b"],
        )
    assert excinfo.value.names == ["pair", "last"]
    assert str(excinfo.value) == (
        "the required arguments `pair (at least 2 arguments)` and `last` were not provided"
    )


def test_no_tokens_all_required_missing():
    with pytest.raises(RequiredArgumentError) as excinfo:
        allocate([SlotSpec("a"), SlotSpec("b"), SlotSpec("c")], [], required_all=True)
    assert str(excinfo.value) == (
        "the required arguments `a`, `b` and `c` were not provided"
    )


def test_conversion_error_names_slot_and_token():
    table = SlotTable.build([SlotSpec("count", required=1, value=ScalarValue(int))])
    with pytest.raises(ConversionError) as excinfo:
        SequentialAllocator(table).allocate(["many"])
    assert excinfo.value.slot.name == "count"
    assert excinfo.value.token == "many"
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert "Invalid value for 'count'" in str(excinfo.value)


def test_custom_converter():
    def upper(token, target):
        target.write(token.upper())

    table = SlotTable.build([SlotSpec("names", collection=True)])
    SequentialAllocator(table, converter=upper).allocate(["a", "b"])
    assert table.values() == {"names": ["A", "B"]}


def test_slot_converter_overrides_allocator():
    def reverse(token, target):
        target.write(token[::-1])

    table = SlotTable.build([SlotSpec("word", required=1, converter=reverse)])
    SequentialAllocator(table).allocate(["abc"])
    assert table.values() == {"word": "cba"}


def test_repeated_allocation_does_not_accumulate():
    table = SlotTable.build([SlotSpec("nums", collection=True, value=ListValue(int))])
    allocator = SequentialAllocator(table)
    allocator.allocate(["1", "2"])
    allocator.allocate(["3"])
    assert table.values() == {"nums": [3]}
    assert allocator.last_claims == {"nums": 1}


@pytest.mark.parametrize(
    "tokens",
    [["a"], ["a", "b"], ["a", "b", "c"], ["a", "b", "c", "d", "e"]],
)
def test_claims_respect_bounds(tokens):
    table = SlotTable.build(
        [
            SlotSpec("head", collection=True, required="1-2"),
            SlotSpec("mid"),
            SlotSpec("tail", collection=True),
        ]
    )
    allocator = SequentialAllocator(table)
    remainder = allocator.allocate(tokens)
    claimed = sum(allocator.last_claims.values())
    assert claimed + len(remainder) == len(tokens)
    for slot in table:
        assert slot.minimum <= allocator.last_claims[slot.name]
        assert slot.unbounded or allocator.last_claims[slot.name] <= slot.maximum
    flattened = []
    for value in table.values().values():
        if isinstance(value, list):
            flattened.extend(value)
        elif value is not None:
            flattened.append(value)
    assert flattened == tokens[: len(flattened)]

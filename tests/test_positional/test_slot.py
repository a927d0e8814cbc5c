import pytest

from slotwise.exceptions import SlotConfigError
from slotwise.positional import UNBOUNDED, ListValue, ScalarValue, SlotSpec, parse_range
from slotwise.positional.slot import Slot, resolve_requirements


@pytest.mark.parametrize(
    "required, expected",
    [
        (0, (0, UNBOUNDED)),
        (2, (2, UNBOUNDED)),
        ("3", (3, UNBOUNDED)),
        ("1-3", (1, 3)),
        (" 2 - 2 ", (2, 2)),
        ("0-0", (0, 0)),
        (True, (1, UNBOUNDED)),
        (False, (0, UNBOUNDED)),
    ],
)
def test_parse_range(required, expected):
    assert parse_range(required, "files") == expected


@pytest.mark.parametrize(
    "required", ["", "a", "1-", "-1", "1-x", "1-2-3", "\u00b2", "1-\u00b3", -1, 1.5]
)
def test_parse_range_malformed(required):
    with pytest.raises(SlotConfigError) as excinfo:
        parse_range(required, "files")
    assert "invalid positional 'files'" in str(excinfo.value)


def test_parse_range_inverted():
    with pytest.raises(SlotConfigError, match="smaller than minimum"):
        parse_range("3-1", "files")


@pytest.mark.parametrize(
    "spec, required_all, expected",
    [
        (SlotSpec("target"), False, (0, 1)),
        (SlotSpec("target"), True, (1, 1)),
        (SlotSpec("target", required=1), False, (1, 1)),
        (SlotSpec("target", required="2-5"), False, (1, 1)),
        (SlotSpec("target", required="0-0"), False, (0, 0)),
        (SlotSpec("files", collection=True), False, (0, UNBOUNDED)),
        (SlotSpec("files", collection=True), True, (0, UNBOUNDED)),
        (SlotSpec("files", collection=True, required="2-4"), False, (2, 4)),
        (SlotSpec("files", collection=True, required=2), False, (2, UNBOUNDED)),
    ],
)
def test_resolve_requirements(spec, required_all, expected):
    assert resolve_requirements(spec, required_all) == expected


def make_slot(minimum, maximum, collection=True, start_min=0, start_max=0):
    value = ListValue() if collection else ScalarValue()
    return Slot(
        index=0,
        name="files",
        minimum=minimum,
        maximum=maximum,
        start_min=start_min,
        start_max=start_max,
        value=value,
    )


def test_slot_properties():
    slot = make_slot(1, 3, start_min=2, start_max=5)
    assert slot.is_collection
    assert not slot.unbounded
    assert slot.drift == 3
    assert slot.is_required
    assert not slot.is_full(2)
    assert slot.is_full(3)


def test_unbounded_slot_is_never_full():
    slot = make_slot(0, UNBOUNDED)
    assert slot.unbounded
    assert not slot.is_full(10_000)
    assert not slot.is_required


@pytest.mark.parametrize(
    "minimum, maximum, collection, expected",
    [
        (1, 1, False, "files"),
        (0, 1, False, "[files]"),
        (0, 0, False, ""),
        (0, UNBOUNDED, True, "[files ...]"),
        (1, UNBOUNDED, True, "files [files ...]"),
        (2, 2, True, "files files"),
        (1, 3, True, "files [files x2]"),
    ],
)
def test_usage_text(minimum, maximum, collection, expected):
    assert make_slot(minimum, maximum, collection).get_usage_text() == expected


def test_describe():
    slot = make_slot(1, 2, start_min=1, start_max=2)
    assert slot.describe() == {
        "index": 0,
        "name": "files",
        "minimum": 1,
        "maximum": 2,
        "start_min": 1,
        "start_max": 2,
        "collection": True,
    }

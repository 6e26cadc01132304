from __future__ import annotations

import pytest

from kaiwa import errors
from kaiwa.permissions import BitmaskSet
from kaiwa.permissions import Permission

_SAMPLES = [
    BitmaskSet(),
    BitmaskSet(Permission.SEND_MESSAGES),
    BitmaskSet.from_flags(Permission.VIEW_CHANNEL, Permission.ADMINISTRATOR),
    BitmaskSet(1 << 70 | 1 << 3),
    BitmaskSet.all(),
]


@pytest.mark.parametrize("left", _SAMPLES)
@pytest.mark.parametrize("right", _SAMPLES)
def test_union_has_both_operands(left: BitmaskSet, right: BitmaskSet) -> None:
    union = left.union(right)

    assert union.has_all(left)
    assert union.has_all(right)


@pytest.mark.parametrize("left", _SAMPLES)
@pytest.mark.parametrize("right", _SAMPLES)
def test_intersect_has_all_iff_contained(left: BitmaskSet, right: BitmaskSet) -> None:
    assert left.intersect(right).has_all(left) is right.has_all(left)


def test_bits_past_64_are_not_truncated() -> None:
    mask = BitmaskSet.parse(str(1 << 100 | 1))

    assert int(mask) == 1 << 100 | 1
    assert mask.has_all(BitmaskSet(1 << 100))
    assert str(mask) == str(1 << 100 | 1)


def test_parse_hex() -> None:
    assert BitmaskSet.parse("0x800") == BitmaskSet(Permission.SEND_MESSAGES)
    assert BitmaskSet.parse("0X400") == BitmaskSet(Permission.VIEW_CHANNEL)


@pytest.mark.parametrize("raw", ["", "-1", "0x", "12a", "1_0", "0xZZ", "+5", "1.5"])
def test_parse_rejects_malformed_strings(raw: str) -> None:
    with pytest.raises(errors.ParseError):
        BitmaskSet.parse(raw)


def test_negative_masks_are_rejected() -> None:
    with pytest.raises(errors.ParseError):
        BitmaskSet(-1)


@pytest.mark.parametrize("value", ["5", 1.5, None])
def test_non_int_masks_are_rejected(value: object) -> None:
    with pytest.raises(errors.ParseError, match="BitmaskSet.parse"):
        BitmaskSet(value)  # type: ignore[arg-type]


def test_from_flags_accepts_names() -> None:
    mask = BitmaskSet.from_flags("send_messages", "VIEW_CHANNEL", 1 << 60)

    assert Permission.SEND_MESSAGES in mask
    assert Permission.VIEW_CHANNEL in mask
    assert mask.has_all(1 << 60)


def test_from_flags_rejects_unknown_names() -> None:
    with pytest.raises(errors.ParseError):
        BitmaskSet.from_flags("NOT_A_PERMISSION")


def test_difference_clears_bits() -> None:
    mask = BitmaskSet.from_flags(Permission.SEND_MESSAGES, Permission.VIEW_CHANNEL)

    result = mask.difference(Permission.SEND_MESSAGES)

    assert result == BitmaskSet(Permission.VIEW_CHANNEL)
    assert mask - Permission.VIEW_CHANNEL == BitmaskSet(Permission.SEND_MESSAGES)


def test_operators() -> None:
    view = BitmaskSet(Permission.VIEW_CHANNEL)
    send = BitmaskSet(Permission.SEND_MESSAGES)

    assert view | send == BitmaskSet.from_flags(Permission.VIEW_CHANNEL, Permission.SEND_MESSAGES)
    assert (view | send) & send == send
    assert not view & send
    assert view


def test_str_is_decimal() -> None:
    assert str(BitmaskSet(Permission.SEND_MESSAGES)) == "2048"
    assert str(BitmaskSet()) == "0"


def test_has_any() -> None:
    mask = BitmaskSet(Permission.SEND_MESSAGES)

    assert mask.has_any(BitmaskSet.from_flags(Permission.SEND_MESSAGES, Permission.VIEW_CHANNEL))
    assert not mask.has_any(Permission.VIEW_CHANNEL)


def test_iter_flags() -> None:
    mask = BitmaskSet.from_flags(Permission.SEND_MESSAGES, Permission.KICK_MEMBERS)

    assert list(mask.iter_flags()) == [Permission.KICK_MEMBERS, Permission.SEND_MESSAGES]


def test_all_contains_every_flag() -> None:
    everything = BitmaskSet.all()

    for flag in Permission:
        assert flag in everything

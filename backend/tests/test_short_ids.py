import pytest

from api.files.services import short_ids


@pytest.mark.parametrize(
    ("number", "expected"),
    [
        (1, "1"),
        (5, "5"),
        (10, "A"),
        (35, "Z"),
        (36, "a"),
        (61, "z"),
        (62, "10"),
        (3843, "zz"),
        (3844, "100"),
        (0, "0"),
    ],
)
def test_encode(number: int, expected: str) -> None:
    assert short_ids.encode(number) == expected


def test_encode_is_injective() -> None:
    encoded = {short_ids.encode(n) for n in range(1, 20_000)}
    assert len(encoded) == 20_000 - 1


def test_encode_is_shorter_than_decimal_for_large_ids() -> None:
    assert len(short_ids.encode(1_000_000)) < len("1000000")


def test_encode_rejects_negative() -> None:
    with pytest.raises(ValueError):
        short_ids.encode(-1)


def test_is_short_id() -> None:
    assert short_ids.is_short_id("aZ09")
    assert not short_ids.is_short_id("")
    assert not short_ids.is_short_id("a-b")
    assert not short_ids.is_short_id("../etc")


def test_placeholder_is_never_a_short_id() -> None:
    for _ in range(100):
        placeholder = short_ids.placeholder()
        assert placeholder.startswith("_")
        assert not short_ids.is_short_id(placeholder)


def test_derive_storage_key() -> None:
    assert short_ids.derive_storage_key(42) == "files/42"

"""Tests for relsync.core.result."""

from __future__ import annotations

import pytest

from relsync.core.result import Err, Ok, Result, is_err, is_ok


def _parse_id(raw: str) -> Result[int, str]:
    if not raw.isdigit():
        return Err(f"not an id: {raw}")
    return Ok(int(raw))


class TestOk:
    def test_unwrap_returns_value(self) -> None:
        assert Ok(42).unwrap() == 42

    def test_unwrap_or_ignores_default(self) -> None:
        assert Ok(1).unwrap_or(2) == 1

    def test_map_transforms_value(self) -> None:
        assert Ok(2).map(lambda v: v * 10) == Ok(20)

    def test_map_err_is_noop(self) -> None:
        ok: Ok[int] = Ok(3)
        assert ok.map_err(lambda e: f"wrapped {e}") is ok

    def test_flags(self) -> None:
        assert Ok(None).is_ok() is True
        assert Ok(None).is_err() is False

    def test_is_frozen(self) -> None:
        ok = Ok(1)
        with pytest.raises(AttributeError):
            ok.value = 2  # type: ignore[misc]


class TestErr:
    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="boom"):
            Err("boom").unwrap()

    def test_unwrap_or_returns_default(self) -> None:
        assert Err("boom").unwrap_or(7) == 7

    def test_map_err_transforms_error(self) -> None:
        assert Err("boom").map_err(str.upper) == Err("BOOM")

    def test_map_is_noop(self) -> None:
        err: Err[str] = Err("boom")
        assert err.map(lambda v: v) is err

    def test_repr(self) -> None:
        assert repr(Err("x")) == "Err('x')"
        assert repr(Ok(1)) == "Ok(1)"


def test_type_guards() -> None:
    assert is_ok(_parse_id("12"))
    assert is_err(_parse_id("v1"))


def test_pattern_matching() -> None:
    match _parse_id("nope"):
        case Ok(value):
            pytest.fail(f"unexpected value {value}")
        case Err(error):
            assert error == "not an id: nope"

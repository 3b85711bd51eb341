from __future__ import annotations

import pytest

from generic_rings import (
    ZZ,
    ConstructionError,
    ConversionError,
    DomainError,
    IntModRing,
    RingDefaults,
    RingError,
    TypeMismatch,
    load_defaults,
)
from generic_rings.config import configure_logging


def test_defaults_without_environment() -> None:
    defaults = load_defaults()

    assert defaults == RingDefaults(real_prec=53, padic_prec=20, log_level="WARNING")


def test_defaults_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GENERIC_RINGS_REAL_PREC", "128")
    monkeypatch.setenv("GENERIC_RINGS_PADIC_PREC", " 7 ")
    monkeypatch.setenv("GENERIC_RINGS_LOG_LEVEL", "debug")

    defaults = load_defaults()

    assert defaults.real_prec == 128
    assert defaults.padic_prec == 7
    assert defaults.log_level == "DEBUG"


@pytest.mark.parametrize(
    "name, raw",
    [
        ("GENERIC_RINGS_REAL_PREC", "lots"),
        ("GENERIC_RINGS_REAL_PREC", "1"),
        ("GENERIC_RINGS_PADIC_PREC", "0"),
        ("GENERIC_RINGS_LOG_LEVEL", "CHATTY"),
    ],
)
def test_invalid_environment_values_raise(monkeypatch: pytest.MonkeyPatch, name: str, raw: str) -> None:
    monkeypatch.setenv(name, raw)

    with pytest.raises(ValueError):
        load_defaults()


def test_configure_logging_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        configure_logging("chatty")


def test_error_taxonomy_is_rooted_and_typed() -> None:
    for cls in (ConstructionError, ConversionError, TypeMismatch, DomainError):
        assert issubclass(cls, RingError)
    assert issubclass(RingError, RuntimeError)
    assert issubclass(ConversionError, ValueError)
    assert issubclass(TypeMismatch, TypeError)


def test_conversion_error_names_ring_and_value() -> None:
    with pytest.raises(ConversionError) as info:
        ZZ.new("twelve")

    assert info.value.ring == ZZ
    assert info.value.value == "twelve"
    assert "Integer ring" in str(info.value)
    assert "'twelve'" in str(info.value)


def test_construction_error_carries_bad_value() -> None:
    with pytest.raises(ConstructionError) as info:
        IntModRing(0)

    assert info.value.value == 0

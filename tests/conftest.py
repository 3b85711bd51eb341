from __future__ import annotations

import pytest

from generic_rings import QQ, ZZ, FiniteField, IntModRing, MatSpace, PolyRing


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GENERIC_RINGS_REAL_PREC", "GENERIC_RINGS_PADIC_PREC", "GENERIC_RINGS_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def zx() -> PolyRing:
    return PolyRing(ZZ, "x")


@pytest.fixture
def qx() -> PolyRing:
    return PolyRing(QQ, "x")


@pytest.fixture
def z7() -> IntModRing:
    return IntModRing(7)


@pytest.fixture
def gf9() -> FiniteField:
    return FiniteField(3, 2)


@pytest.fixture
def m23() -> MatSpace:
    return MatSpace(ZZ, 2, 3)

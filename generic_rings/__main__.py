"""
Worked examples from the command line.

    python -m generic_rings --demo poly
    python -m generic_rings --demo all --log-level DEBUG
"""

from __future__ import annotations

import argparse
import logging
from typing import Callable, Dict, List, Optional

from . import (
    QQ,
    ZZ,
    FiniteField,
    IntModRing,
    Integer,
    Map,
    MatSpace,
    PadicField,
    PolyRing,
    Product,
    RatFuncField,
    factor,
    polynomial_ring,
)
from .config import LOG_LEVELS, configure_logging
from .errors import RingError

_logger = logging.getLogger("generic_rings.demo")


def demo_basic() -> None:
    a, b = ZZ("12"), ZZ(30)
    print(f"[ZZ] {a} + {b} = {a + b}, {a} * {b} = {a * b}")
    q = QQ((3, 4)) + QQ("1/6")
    print(f"[QQ] 3/4 + 1/6 = {q}")
    R = IntModRing(7)
    x = R(10)
    print(f"[{R}] 10 = {x}, 10^-1 = {x.inverse()}, as Integer: {x.to(Integer)}, as str: {x.to(str)!r}")
    F = FiniteField(3, 2)
    g = F.gen()
    print(f"[{F}] a^2 = {g ** 2}, a^-1 = {g.inverse()}")
    K = PadicField(5, 6)
    print(f"[{K}] 1/10 = {K(QQ((1, 10)))}")


def demo_poly() -> None:
    zx = PolyRing(ZZ, "x")
    p = zx.new(0)
    p.set_coeff(2, 1)
    p.set_coeff(5, 14)
    print(f"[{zx}] p = {p}, degree {p.degree()}, coefficients {[str(c) for c in p.coefficients()]}")
    print(f"[{zx}] p(2) = {p.evaluate(2)}, p^2 = {p ** 2}")
    tower = polynomial_ring(ZZ, "x", "y", "z")
    print(f"[tower] {tower}")
    zxy = tower.base_ring()
    f = zxy.new([[1, 1], [0, 2]])
    print(f"[{zxy}] f = {f!r}")


def demo_mat() -> None:
    zx = PolyRing(ZZ, "x")
    M = MatSpace(zx, 3, 4)
    m = M.zero()
    m[0, 0] = zx.gen()
    m[2, 3] = zx.new([1, 0, 1])
    print(f"[{M}]\n{m}")
    print(f"[transpose] {m.transpose().parent()}")
    print(f"[m * m^T]\n{m * m.transpose()}")


def demo_factor() -> None:
    print(f"[factor] -360 = {factor(-360)}")
    print(f"[factor] 27/50 = {factor(QQ((27, 50)))}")
    zx = PolyRing(ZZ, "x")
    f = zx.new([-4, 0, 2, 0, 0])  # 2x^2 - 4
    fx = factor(f)
    print(f"[factor] {f} = {fx}; evaluates back: {fx.evaluate() == f}")
    a, b = Product.from_value("a"), Product.from_value("b")
    print(f"[Product] a*b*a = {a * b * a}, commutes: {a * b == b * a}")


def demo_maps() -> None:
    K = RatFuncField(ZZ, "x")
    x = K.gen()
    f = (x ** 2 - 1) / (2 * x + 2)
    print(f"[{K}] (x^2 - 1)/(2*x + 2) = {f}, f(3) = {f(3)}")
    shift = Map(ZZ, ZZ, lambda a: a + 5, lambda b: b - 5)
    scale = Map(ZZ, QQ, lambda a: a * QQ((3, 2)), lambda b: b * QQ((2, 3)))
    m = shift.compose(scale)
    print(f"[{m!r}] 7 -> {m(7)}, preimage of 6: {m.inv(6)}")


DEMOS: Dict[str, Callable[[], None]] = {
    "basic": demo_basic,
    "poly": demo_poly,
    "mat": demo_mat,
    "factor": demo_factor,
    "maps": demo_maps,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="generic_rings worked examples")
    parser.add_argument("--demo", choices=sorted(DEMOS) + ["all"], default="all", help="which example to run (default: all)")
    parser.add_argument(
        "--log-level", choices=LOG_LEVELS, type=str.upper, help="override GENERIC_RINGS_LOG_LEVEL"
    )
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    names = sorted(DEMOS) if args.demo == "all" else [args.demo]
    try:
        for name in names:
            _logger.info("demo %s", name)
            DEMOS[name]()
    except RingError as ex:
        print(f"[FATAL] {ex}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

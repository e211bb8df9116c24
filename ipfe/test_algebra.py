import random

import pytest

from ipfe.algebra import check_scalar, egcd, mod_exp, mod_inv, random_scalar, try_mod_inv
from ipfe.errors import NonInvertibleElement, RangeViolation


def test_mod_exp():
    assert mod_exp(15, 31, 73) == 5
    assert mod_exp(15, 0, 73) == 1
    # La base négative est normalisée dans [0, p)
    assert mod_exp(-2, 3, 7) == 6


def test_mod_exp_domain():
    with pytest.raises(RangeViolation):
        mod_exp(2, 10, 1)
    with pytest.raises(RangeViolation):
        mod_exp(2, -1, 7)


def test_egcd():
    for a, b in [(240, 46), (15, 73), (0, 7), (6, 15)]:
        g, u, v = egcd(a, b)
        assert a * u + b * v == g
    assert egcd(240, 46)[0] == 2


def test_mod_inv():
    assert mod_inv(3, 7) == 5
    for a in range(1, 73):
        assert (a * mod_inv(a, 73)) % 73 == 1


def test_mod_inv_non_invertible():
    assert try_mod_inv(6, 15) is None
    assert try_mod_inv(0, 7) is None

    with pytest.raises(NonInvertibleElement) as exc:
        mod_inv(6, 15)
    assert exc.value.value == 6
    assert exc.value.modulus == 15
    assert exc.value.context == "mod_inv"


def test_random_scalar():
    rng = random.Random(1234)
    values = [random_scalar(73, rng) for _ in range(500)]
    assert all(0 <= v < 73 for v in values)
    assert len(set(values)) > 1

    # Sans source injectée : secrets
    assert 0 <= random_scalar(73) < 73
    assert random_scalar(1) == 0

    with pytest.raises(RangeViolation):
        random_scalar(0)


def test_check_scalar():
    assert check_scalar(0, 73, "x") == 0
    assert check_scalar(72, 73, "x") == 72

    with pytest.raises(RangeViolation) as exc:
        check_scalar(73, 73, "x", index=2, context="encrypt")
    assert exc.value.index == 2
    assert exc.value.name == "x"
    assert "encrypt" in str(exc.value)

    with pytest.raises(RangeViolation):
        check_scalar(0, 73, "message", lower=1)
    with pytest.raises(RangeViolation):
        check_scalar(True, 73, "x")
    with pytest.raises(RangeViolation):
        check_scalar(2.5, 73, "x")

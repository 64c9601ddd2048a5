import itertools
import pytest
from elgamal_kernel.core import (
    InvalidModulus,
    euler_totient,
    euler_totient_from_factors,
    jacobi_symbol,
    legendre_symbol,
)


SMALL_PRIMES = [2, 3, 5, 7, 11, 13, 101, 997]


@pytest.mark.parametrize(
    "n, expected",
    [(1, 1), (2, 1), (9, 6), (36, 12), (97, 96), (100, 40), (1024, 512),
     (3 * 5 * 7 * 11, 480)],
)
def test_euler_totient(n, expected):
    assert euler_totient(n) == expected


def test_euler_totient_rejects_non_positive():
    with pytest.raises(ValueError):
        euler_totient(0)


@pytest.mark.parametrize(
    "p, q", list(itertools.combinations(SMALL_PRIMES, 2))
)
def test_euler_totient_from_factors(p, q):
    assert euler_totient_from_factors(p, q) == euler_totient(p * q)


@pytest.mark.parametrize(
    "a, p, expected",
    [(0, 7, 0), (14, 7, 0), (1, 7, 1), (2, 7, 1), (3, 7, -1), (-1, 7, -1),
     (-1, 13, 1), (2, 1019, -1), (4, 1019, 1)],
)
def test_legendre_symbol(a, p, expected):
    assert legendre_symbol(a, p) == expected


@pytest.mark.parametrize("p", [-3, 0, 1, 2, 10])
def test_legendre_symbol_invalid_modulus(p):
    with pytest.raises(InvalidModulus):
        legendre_symbol(3, p)


@pytest.mark.parametrize(
    "a, n, expected",
    [(1001, 9907, -1), (19, 45, 1), (8, 21, -1), (5, 21, 1), (3, 9, 0),
     (0, 1, 1), (7, 1, 1), (-2, 15, -1)],
)
def test_jacobi_symbol(a, n, expected):
    assert jacobi_symbol(a, n) == expected


@pytest.mark.parametrize("p", [3, 7, 97, 1019])
def test_jacobi_symbol_agrees_with_legendre_symbol(p):
    for a in range(-p, 2 * p):
        assert jacobi_symbol(a, p) == legendre_symbol(a, p)


@pytest.mark.parametrize("n", [-5, 0, 2, 44])
def test_jacobi_symbol_invalid_modulus(n):
    with pytest.raises(InvalidModulus):
        jacobi_symbol(3, n)

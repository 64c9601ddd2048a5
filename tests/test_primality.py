from Crypto.Util import number
import pytest
from elgamal_kernel.core import (
    SearchExhausted,
    generate_prime,
    generate_safe_prime,
    is_probable_prime,
)


PRIME_512 = 0xa6886942c71169464b1b565db7dbed36bf4767935c7775e1d2b96751ed8c9510517f5442e8bb75a406cf66df1812109143f3364a4b69e353d23305be24a897f9
PRIME_160 = 0xd324e6b0ef9964f0e29d5449532101ebb8582ea1


@pytest.mark.parametrize(
    "n",
    [2, 3, 5, 97, 101, 7919, 2 ** 61 - 1, 2 ** 127 - 1, PRIME_160, PRIME_512],
)
def test_known_primes(n):
    assert is_probable_prime(n)


@pytest.mark.parametrize(
    "n",
    [
        -7, 0, 1, 4, 9, 100, 561, 1105, 41041, 3215031751,
        PRIME_160 * PRIME_512, (2 ** 61 - 1) * (2 ** 31 - 1),
    ],
)
def test_known_composites(n):
    assert not is_probable_prime(n)


def test_agrees_with_pycryptodome_on_small_integers(randfunc):
    for n in range(2000):
        expected = n >= 2 and number.isPrime(n)
        assert is_probable_prime(n, rounds=8, randfunc=randfunc) == expected


def test_rounds_must_be_positive():
    with pytest.raises(ValueError):
        is_probable_prime(97, rounds=0)


@pytest.mark.parametrize("bits", [2, 3, 8, 32, 64, 128])
def test_generate_prime_has_requested_length(bits, randfunc):
    p = generate_prime(bits, randfunc=randfunc)
    assert p.bit_length() == bits
    assert number.isPrime(p)


def test_generate_prime_uses_default_source():
    p = generate_prime(96)
    assert p.bit_length() == 96
    assert number.isPrime(p)


def test_generate_prime_exhausts_budget(zero_randfunc):
    # Zero bytes always yield the candidate 2^3 | 1 = 9.
    with pytest.raises(SearchExhausted):
        generate_prime(4, max_attempts=5, randfunc=zero_randfunc)


def test_generate_prime_rejects_invalid_arguments():
    with pytest.raises(ValueError):
        generate_prime(1)
    with pytest.raises(ValueError):
        generate_prime(16, max_attempts=0)


@pytest.mark.parametrize("bits", [3, 16, 64])
def test_generate_safe_prime(bits, randfunc):
    p, q = generate_safe_prime(bits, randfunc=randfunc)
    assert p == 2 * q + 1
    assert p.bit_length() == bits
    assert number.isPrime(p)
    assert number.isPrime(q)


def test_generate_safe_prime_exhausts_budget(zero_randfunc):
    # q is always 2^4 | 1 = 17, and 2 * 17 + 1 = 35 is composite.
    with pytest.raises(SearchExhausted):
        generate_safe_prime(6, max_attempts=3, randfunc=zero_randfunc)

import logging
from typing import Callable, Final
from Crypto.Util import number
from elgamal_kernel.core.errors import SearchExhausted
from elgamal_kernel.core.modular import mod_pow


DEFAULT_ROUNDS: Final = 40

# Odd primes below 100. Candidates divisible by one of them are rejected
# before any modular exponentiation.
_SMALL_PRIMES: Final = (
    3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53, 59, 61, 67,
    71, 73, 79, 83, 89, 97,
)


def is_probable_prime(
    n: int,
    rounds: int = DEFAULT_ROUNDS,
    randfunc: Callable[[int], bytes] | None = None,
) -> bool:
    """Tests whether `n` is prime with the Miller-Rabin algorithm.

    A composite passes with probability at most `4 ** -rounds`. Primes
    always pass.

    Args:
        n: The integer to test.
        rounds: The number of independently drawn witnesses.
        randfunc: A source of cryptographically secure random bytes. If
            `None`, the default source of PyCryptodome is used.

    Returns:
        `True` if `n` is probably prime; `False` if `n` is composite.
    """
    if rounds <= 0:
        errmsg = "The number of rounds must be positive."
        raise ValueError(errmsg)

    if n < 2:
        return False
    if n in (2, 3):
        return True
    if n % 2 == 0:
        return False
    for small_prime in _SMALL_PRIMES:
        if n == small_prime:
            return True
        if n % small_prime == 0:
            return False

    # n - 1 = 2^r * d with d odd.
    r = 0
    d = n - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    for _ in range(rounds):
        a = number.getRandomRange(2, n - 1, randfunc)
        x = mod_pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(r - 1):
            x = mod_pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def generate_prime(
    bits: int,
    max_attempts: int | None = None,
    randfunc: Callable[[int], bytes] | None = None,
) -> int:
    """Generates a random prime of exactly `bits` bits.

    Args:
        bits: The bit length of the prime. Must be at least 2.
        max_attempts: The maximum number of candidates to test. If
            `None`, the search continues until a prime is found.
        randfunc: A source of cryptographically secure random bytes.

    Returns:
        A probable prime `p` with `p.bit_length() == bits`.

    Raises:
        SearchExhausted: No prime was found within `max_attempts`
            candidates.
    """
    if bits < 2:
        errmsg = "The bit length must be at least 2."
        raise ValueError(errmsg)
    if max_attempts is not None and max_attempts <= 0:
        errmsg = "The maximum number of attempts must be positive."
        raise ValueError(errmsg)

    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        # The top bit is forced by `getRandomNBitInteger`.
        candidate = number.getRandomNBitInteger(bits, randfunc) | 1
        if is_probable_prime(candidate, randfunc=randfunc):
            logging.debug(
                "Found a %d-bit prime after %d attempt(s).", bits, attempts
            )
            return candidate

    errmsg = f"No {bits}-bit prime found in {max_attempts} attempt(s)."
    raise SearchExhausted(errmsg)


def generate_safe_prime(
    bits: int,
    max_attempts: int | None = None,
    randfunc: Callable[[int], bytes] | None = None,
) -> tuple[int, int]:
    """Generates a safe prime `p = 2q + 1` where `q` is also prime.

    Args:
        bits: The bit length of `p`. Must be at least 3.
        max_attempts: The maximum number of prime candidates `q` to
            draw. Each draw of `q` is itself bounded by the same budget.
            If `None`, the search is unbounded.
        randfunc: A source of cryptographically secure random bytes.

    Returns:
        A tuple `(p, q)`.

    Raises:
        SearchExhausted: No safe prime was found within the budget.
    """
    if bits < 3:
        errmsg = "The bit length of a safe prime must be at least 3."
        raise ValueError(errmsg)
    if max_attempts is not None and max_attempts <= 0:
        errmsg = "The maximum number of attempts must be positive."
        raise ValueError(errmsg)

    attempts = 0
    while max_attempts is None or attempts < max_attempts:
        attempts += 1
        q = generate_prime(bits - 1, max_attempts, randfunc)
        p = 2 * q + 1
        if is_probable_prime(p, randfunc=randfunc):
            logging.debug(
                "Found a %d-bit safe prime after %d attempt(s).",
                bits,
                attempts,
            )
            return p, q

    errmsg = f"No {bits}-bit safe prime found in {max_attempts} attempt(s)."
    raise SearchExhausted(errmsg)

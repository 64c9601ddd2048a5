from elgamal_kernel.core.errors import InvalidModulus
from elgamal_kernel.core.modular import mod_pow


def euler_totient(n: int) -> int:
    """Computes Euler's totient of `n` by trial division up to sqrt(n)."""
    if n <= 0:
        errmsg = "The argument of the totient must be positive."
        raise ValueError(errmsg)

    result = n
    remaining = n
    factor = 2
    while factor * factor <= remaining:
        if remaining % factor == 0:
            while remaining % factor == 0:
                remaining //= factor
            result -= result // factor
        factor += 1
    if remaining > 1:
        result -= result // remaining
    return result


def euler_totient_from_factors(p: int, q: int) -> int:
    """Computes the totient of `p * q` for distinct primes `p` and `q`."""
    return (p - 1) * (q - 1)


def legendre_symbol(a: int, p: int) -> int:
    """Computes the Legendre symbol `(a / p)` by Euler's criterion.

    Args:
        a: Any integer.
        p: An odd prime.

    Returns:
        1 if `a` is a non-zero quadratic residue modulo `p`, -1 if it is
        a non-residue, and 0 if `p` divides `a`.

    Raises:
        InvalidModulus: `p` is less than 3 or even.
    """
    if p < 3 or p % 2 == 0:
        errmsg = f"{p}: The modulus must be an odd prime."
        raise InvalidModulus(errmsg)

    result = mod_pow(a, (p - 1) // 2, p)
    return -1 if result == p - 1 else result


def jacobi_symbol(a: int, n: int) -> int:
    """Computes the Jacobi symbol `(a / n)` by quadratic reciprocity.

    Args:
        a: Any integer.
        n: A positive odd integer.

    Returns:
        One of -1, 0, or 1.

    Raises:
        InvalidModulus: `n` is non-positive or even.
    """
    if n <= 0 or n % 2 == 0:
        errmsg = f"{n}: The modulus must be positive and odd."
        raise InvalidModulus(errmsg)

    a %= n
    result = 1
    while a != 0:
        while a % 2 == 0:
            a //= 2
            if n % 8 in (3, 5):
                result = -result
        a, n = n, a
        if a % 4 == 3 and n % 4 == 3:
            result = -result
        a %= n
    return result if n == 1 else 0

from typing import TypeAlias
from elgamal_kernel.core.errors import NoInverseExists, NonCoprimeModuli
from elgamal_kernel.core.modular import mod_inverse, mod_pow


CRTSystem: TypeAlias = tuple[list[int], list[int]]


def solve_crt(system: CRTSystem) -> int:
    """Solves a system of congruences `x = remainders[i] (mod moduli[i])`.

    Args:
        system: A pair of parallel lists `(remainders, moduli)`. The
            moduli must be positive and pairwise coprime.

    Returns:
        The unique solution in the range [0, prod(moduli)).

    Raises:
        NonCoprimeModuli: Some pair of moduli shares a common factor.
    """
    remainders, moduli = system
    if len(remainders) != len(moduli):
        errmsg = "The number of remainders and moduli must be the same."
        raise ValueError(errmsg)
    if len(moduli) == 0:
        errmsg = "The system must contain at least one congruence."
        raise ValueError(errmsg)
    if any(m <= 0 for m in moduli):
        errmsg = "The moduli must be positive."
        raise ValueError(errmsg)

    M = 1
    for m in moduli:
        M *= m

    result = 0
    for remainder, m in zip(remainders, moduli):
        Mi = M // m
        try:
            yi = mod_inverse(Mi, m)
        except NoInverseExists as e:
            errmsg = f"The modulus {m} is not coprime to the others."
            raise NonCoprimeModuli(errmsg) from e
        result = (result + remainder * Mi * yi) % M
    return result


def crt_components(p: int, q: int, d: int) -> tuple[int, int, int]:
    """Computes the CRT exponents of an RSA-shaped private key.

    Args:
        p: The first prime factor of the modulus.
        q: The second prime factor of the modulus.
        d: The private exponent.

    Returns:
        A tuple `(dp, dq, q_inv)` as consumed by
        `crt_accelerated_decrypt`.
    """
    return d % (p - 1), d % (q - 1), mod_inverse(q, p)


def crt_accelerated_decrypt(
    ciphertext: int, p: int, q: int, dp: int, dq: int, q_inv: int
) -> int:
    """Computes `ciphertext ** d mod p*q` from its two prime halves.

    The two half-size exponentiations replace one full-size one, which
    makes RSA-shaped decryption about four times faster.
    """
    m1 = mod_pow(ciphertext, dp, p)
    m2 = mod_pow(ciphertext, dq, q)
    h = (q_inv * (m1 - m2)) % p
    return m2 + h * q

import logging
from math import isqrt
from typing import Callable, Final
from Crypto.Util import number
from elgamal_kernel.core.errors import NoInverseExists
from elgamal_kernel.core.modular import mod_inverse, mod_pow


DEFAULT_MAX_STEPS: Final = 1_000_000
POLLARD_RHO_MAX_ITERATIONS: Final = 1_000_000


def baby_step_giant_step(
    g: int, h: int, p: int, max_steps: int = DEFAULT_MAX_STEPS
) -> int | None:
    """Solves `g ** x = h (mod p)` by the baby-step giant-step method.

    The search covers every exponent below `n * n`, where
    `n = ceil(sqrt(max_steps))`, using O(n) time and memory.

    Args:
        g: The base. Must be invertible modulo `p`.
        h: The target element.
        p: The modulus.
        max_steps: An upper bound on the exponents to search.

    Returns:
        The smallest exponent `x` found, or `None` if no exponent below
        the bound satisfies the congruence.

    Raises:
        NoInverseExists: `g` is not invertible modulo `p`.
    """
    if max_steps <= 0:
        errmsg = "The maximum number of steps must be positive."
        raise ValueError(errmsg)

    n = isqrt(max_steps - 1) + 1

    # Baby steps: g^j for j in [0, n).
    table: dict[int, int] = {}
    value = 1 % p
    for j in range(n):
        table.setdefault(value, j)
        value = (value * g) % p

    # Giant steps: h * g^(-n*i) for i in [0, n).
    factor = mod_inverse(mod_pow(g, n, p), p)
    gamma = h % p
    for i in range(n):
        j = table.get(gamma)
        if j is not None:
            return i * n + j
        gamma = (gamma * factor) % p

    logging.debug(
        "Baby-step giant-step found no logarithm below %d.", n * n
    )
    return None


def pollard_rho(
    g: int,
    h: int,
    p: int,
    order: int,
    max_iterations: int = POLLARD_RHO_MAX_ITERATIONS,
    randfunc: Callable[[int], bytes] | None = None,
) -> int | None:
    """Solves `g ** x = h (mod p)` by Pollard's rho method.

    The walk tracks triples `(x, a, b)` with `x = g^a * h^b (mod p)` and
    runs Floyd's cycle detection until two triples collide. When the
    collision does not determine the logarithm, the walk restarts from
    a random point.

    Args:
        g: The base.
        h: The target element.
        p: The modulus.
        order: The order of `g`. Works best when it is prime.
        max_iterations: The total number of steps over all walks.
        randfunc: A source of random bytes for restart points.

    Returns:
        The logarithm modulo `order`, or `None` if none was found within
        `max_iterations` steps.
    """
    if order <= 0:
        errmsg = "The order must be positive."
        raise ValueError(errmsg)

    h %= p
    if h == 1 % p:
        return 0

    def step(x: int, a: int, b: int) -> tuple[int, int, int]:
        partition = x % 3
        if partition == 0:
            return (x * x) % p, (2 * a) % order, (2 * b) % order
        elif partition == 1:
            return (x * g) % p, (a + 1) % order, b
        else:
            return (x * h) % p, a, (b + 1) % order

    x1, a1, b1 = 1, 0, 0
    x2, a2, b2 = 1, 0, 0
    for _ in range(max_iterations):
        x1, a1, b1 = step(x1, a1, b1)
        x2, a2, b2 = step(*step(x2, a2, b2))
        if x1 != x2:
            continue

        numerator = (a1 - a2) % order
        denominator = (b2 - b1) % order
        try:
            result = (numerator * mod_inverse(denominator, order)) % order
        except NoInverseExists:
            result = None
        if result is not None and mod_pow(g, result, p) == h:
            return result

        # Restart from g^a * h^b for random a and b.
        logging.debug("Pollard's rho collision was degenerate; restarting.")
        a1 = number.getRandomRange(0, order, randfunc)
        b1 = number.getRandomRange(0, order, randfunc)
        x1 = (mod_pow(g, a1, p) * mod_pow(h, b1, p)) % p
        x2, a2, b2 = x1, a1, b1

    logging.debug(
        "Pollard's rho found no logarithm in %d iterations.", max_iterations
    )
    return None

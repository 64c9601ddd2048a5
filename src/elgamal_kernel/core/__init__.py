from .errors import (
    NoInverseExists,
    NonCoprimeModuli,
    MessageTooLarge,
    InvalidModulus,
    SearchExhausted,
)  # noqa: F401
from .modular import mod_pow, extended_gcd, mod_inverse  # noqa: F401
from .primality import (
    is_probable_prime,
    generate_prime,
    generate_safe_prime,
)  # noqa: F401
from .crt import (
    CRTSystem,
    solve_crt,
    crt_components,
    crt_accelerated_decrypt,
)  # noqa: F401
from .discrete_log import baby_step_giant_step, pollard_rho  # noqa: F401
from .number_theory import (
    euler_totient,
    euler_totient_from_factors,
    legendre_symbol,
    jacobi_symbol,
)  # noqa: F401
from .el_gamal import (
    Group as ElGamalGroup,
    PublicKey as ElGamalPublicKey,
    Ciphertext as ElGamalCiphertext,
    Signature as ElGamalSignature,
    KeyGenState,
    ElGamalKeyGen,
    ElGamal,
    find_generator,
    generate_key_pair,
    encrypt,
    decrypt,
    encrypt_bytes,
    decrypt_bytes,
    hash_message,
    sign,
    verify,
)  # noqa: F401
from .diffie_hellman import (
    MODP_2048,
    MODP_3072,
    DiffieHellman,
)  # noqa: F401

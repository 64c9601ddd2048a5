from typing import Callable, Final
from Crypto.Hash import SHA256
from Crypto.Protocol.KDF import HKDF
from Crypto.Util import number
from elgamal_kernel.core.el_gamal import Group
from elgamal_kernel.core.modular import mod_pow
from elgamal_kernel.core.primality import generate_safe_prime


# The 2048-bit MODP group of RFC 3526.
MODP_2048: Final[Group] = (
    0xffffffffffffffffc90fdaa22168c234c4c6628b80dc1cd129024e088a67cc74020bbea63b139b22514a08798e3404ddef9519b3cd3a431b302b0a6df25f14374fe1356d6d51c245e485b576625e7ec6f44c42e9a637ed6b0bff5cb6f406b7edee386bfb5a899fa5ae9f24117c4b1fe649286651ece45b3dc2007cb8a163bf0598da48361c55d39a69163fa8fd24cf5f83655d23dca3ad961c62f356208552bb9ed529077096966d670c354e4abc9804f1746c08ca18217c32905e462e36ce3be39e772c180e86039b2783a2ec07a28fb5c55df06f4c52c9de2bcbf6955817183995497cea956ae515d2261898fa051015728e5a8aacaa68ffffffffffffffff,
    2,
)

# The 3072-bit MODP group of RFC 3526.
MODP_3072: Final[Group] = (
    0xffffffffffffffffc90fdaa22168c234c4c6628b80dc1cd129024e088a67cc74020bbea63b139b22514a08798e3404ddef9519b3cd3a431b302b0a6df25f14374fe1356d6d51c245e485b576625e7ec6f44c42e9a637ed6b0bff5cb6f406b7edee386bfb5a899fa5ae9f24117c4b1fe649286651ece45b3dc2007cb8a163bf0598da48361c55d39a69163fa8fd24cf5f83655d23dca3ad961c62f356208552bb9ed529077096966d670c354e4abc9804f1746c08ca18217c32905e462e36ce3be39e772c180e86039b2783a2ec07a28fb5c55df06f4c52c9de2bcbf6955817183995497cea956ae515d2261898fa051015728e5a8aaac42dad33170d04507a33a85521abdf1cba64ecfb850458dbef0a8aea71575d060c7db3970f85a6e1e4c7abf5ae8cdb0933d71e8c94e04a25619dcee3d2261ad2ee6bf12ffa06d98a0864d87602733ec86a64521f2b18177b200cbbe117577a615d6c770988c0bad946e208e24fa074e5ab3143db5bfce0fd108e4b82d120a93ad2caffffffffffffffff,
    2,
)

_DEFAULT_CONTEXT: Final = b"DH Key Derivation"


class DiffieHellman:
    def __init__(
        self,
        group: Group = MODP_2048,
        randfunc: Callable[[int], bytes] | None = None,
    ) -> None:
        """Creates a new instance of `DiffieHellman`.

        Args:
            group: The group `(p, g)`. Defaults to the 2048-bit MODP
                group of RFC 3526.
            randfunc: A source of cryptographically secure random bytes.
                If `None`, the default source of PyCryptodome is used.
        """
        p, g = group
        if p < 5:
            raise ValueError("An invalid modulus.")
        if g <= 1 or g >= p - 1:
            raise ValueError("An invalid generator.")

        self._p: Final = p
        self._g: Final = g
        self._randfunc: Final = randfunc

    @classmethod
    def generate(
        cls,
        bits: int,
        max_attempts: int | None = None,
        randfunc: Callable[[int], bytes] | None = None,
    ) -> "DiffieHellman":
        """Creates an instance over a freshly generated safe prime with
        generator 2."""
        p, _ = generate_safe_prime(bits, max_attempts, randfunc)
        return cls((p, 2), randfunc)

    @property
    def parameters(self) -> Group:
        """Returns the group `(p, g)`."""
        return self._p, self._g

    def generate_key_pair(self) -> tuple[int, int]:
        """Generates a new key pair.

        Returns:
            A tuple of two integers: a private key and the corresponding
            public key.
        """
        private_key = number.getRandomRange(1, self._p - 1, self._randfunc)
        public_key = mod_pow(self._g, private_key, self._p)
        return private_key, public_key

    def compute_shared_secret(
        self, their_public_key: int, private_key: int
    ) -> int:
        """Computes the shared secret with another party.

        Args:
            their_public_key: The public key of the other party. Must be
                in the range [2, p-2].
            private_key: Our private key.

        Returns:
            The shared secret.
        """
        if their_public_key < 2 or their_public_key >= self._p - 1:
            raise ValueError("An invalid public key.")

        return mod_pow(their_public_key, private_key, self._p)

    def derive_key(
        self,
        shared_secret: int,
        salt: bytes | None = None,
        context: bytes = _DEFAULT_CONTEXT,
    ) -> bytes:
        """Derives a 32-byte symmetric key from a shared secret with
        HKDF-SHA256."""
        length = (self._p.bit_length() + 7) // 8
        secret = number.long_to_bytes(shared_secret, length)
        if salt is None:
            salt = bytes(32)
        return HKDF(secret, 32, salt, SHA256, context=context)

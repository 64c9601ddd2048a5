#!/usr/bin/env python3

import enum
from hashlib import sha256
import logging
from typing import Callable, Final, TypeAlias
from Crypto.Util import number
from elgamal_kernel.core.errors import (
    MessageTooLarge,
    NoInverseExists,
    SearchExhausted,
)
from elgamal_kernel.core.modular import mod_inverse, mod_pow
from elgamal_kernel.core.primality import generate_safe_prime


Group: TypeAlias = tuple[int, int]
PublicKey: TypeAlias = tuple[int, int, int]
Ciphertext: TypeAlias = tuple[int, int]
Signature: TypeAlias = tuple[int, int]

# Every plaintext block carries this leading byte so that leading zero
# bytes of the block survive the integer round trip.
_BLOCK_SENTINEL: Final = b"\x01"


class KeyGenState(enum.Enum):
    IDLE = enum.auto()
    SEARCHING_SAFE_PRIME = enum.auto()
    SEARCHING_GENERATOR = enum.auto()
    DONE = enum.auto()


def find_generator(p: int, max_attempts: int | None = None) -> int:
    """Finds the smallest primitive root of a safe prime `p = 2q + 1`.

    Candidates `g = 2, 3, ...` are tried until `g^2 != 1` and
    `g^q != 1 (mod p)`.

    Args:
        p: A safe prime.
        max_attempts: The maximum number of candidates to try. If
            `None`, every candidate in [2, p) may be tried.

    Returns:
        The generator.

    Raises:
        SearchExhausted: No candidate passed within `max_attempts`.
    """
    if p < 5:
        errmsg = "The modulus must be a safe prime of at least 5."
        raise ValueError(errmsg)

    q = (p - 1) // 2
    limit = p - 2 if max_attempts is None else min(max_attempts, p - 2)
    for attempt, g in enumerate(range(2, 2 + limit), start=1):
        if mod_pow(g, 2, p) != 1 and mod_pow(g, q, p) != 1:
            logging.debug("Found a generator after %d attempt(s).", attempt)
            return g

    errmsg = f"No generator found in {limit} attempt(s)."
    raise SearchExhausted(errmsg)


def generate_key_pair(
    group: Group, randfunc: Callable[[int], bytes] | None = None
) -> tuple[int, PublicKey]:
    """Generates a new key pair over the group `(p, g)`.

    Returns:
        A tuple of the private key `x`, drawn uniformly from [1, p-2],
        and the public key `(p, g, g^x mod p)`.
    """
    p, g = group
    private_key = number.getRandomRange(1, p - 1, randfunc)
    public_key = (p, g, mod_pow(g, private_key, p))
    return private_key, public_key


class ElGamalKeyGen:
    def _transition(self, state: KeyGenState) -> None:
        logging.debug(
            "Key generation: %s -> %s.", self._state.name, state.name
        )
        self._state = state

    def __init__(
        self,
        bits: int,
        max_attempts: int | None = None,
        randfunc: Callable[[int], bytes] | None = None,
    ) -> None:
        """Creates a new instance of `ElGamalKeyGen`.

        Args:
            bits: The length of the modulus `p` in bits. Must be at
                least 3.
            max_attempts: The attempt budget of each search. If `None`,
                the safe-prime search is unbounded.
            randfunc: A source of cryptographically secure random bytes.
                If `None`, the default source of PyCryptodome is used.
        """
        if bits < 3:
            errmsg = "The parameter `bits' must be at least 3."
            raise ValueError(errmsg)

        self._bits: Final = bits
        self._max_attempts: Final = max_attempts
        self._randfunc: Final = randfunc
        self._state = KeyGenState.IDLE
        self._group: Group | None = None

    @property
    def state(self) -> KeyGenState:
        """The current state of the key generation."""
        return self._state

    @property
    def group(self) -> Group | None:
        """The generated group, or `None` before generation completes."""
        return self._group

    def generate_group(self) -> Group:
        """Generates a safe prime `p` and a generator `g` of `(Z/pZ)*`.

        Returns:
            The group `(p, g)`.

        Raises:
            SearchExhausted: A search ran out of its attempt budget.

        The state returns to `IDLE` whenever the search is interrupted,
        including by an exception raised by the caller's scheduling
        layer such as `KeyboardInterrupt`.
        """
        self._transition(KeyGenState.SEARCHING_SAFE_PRIME)
        try:
            p, _ = generate_safe_prime(
                self._bits, self._max_attempts, self._randfunc
            )
            self._transition(KeyGenState.SEARCHING_GENERATOR)
            g = find_generator(p, self._max_attempts)
        except BaseException:
            self._transition(KeyGenState.IDLE)
            raise

        self._group = (p, g)
        self._transition(KeyGenState.DONE)
        return self._group

    def generate_key_pair(self) -> tuple[int, PublicKey]:
        """Generates a new key pair, generating the group first if needed.

        Returns:
            A tuple of the private key and the public key `(p, g, y)`.
        """
        group = self._group
        if group is None:
            group = self.generate_group()
        return generate_key_pair(group, self._randfunc)


def encrypt(
    message: int,
    public_key: PublicKey,
    randfunc: Callable[[int], bytes] | None = None,
) -> Ciphertext:
    """Encrypts a plaintext using the ElGamal cryptosystem.

    A fresh ephemeral exponent is drawn on every call.

    Args:
        message: The plaintext. Must be in the range [0, p).
        public_key: The public key `(p, g, y)`.
        randfunc: A source of cryptographically secure random bytes.

    Returns:
        The ciphertext `(c1, c2)`.

    Raises:
        MessageTooLarge: The plaintext is not in the range [0, p).
    """
    p, g, y = public_key
    if y <= 0 or y >= p:
        raise ValueError("An invalid public key.")
    if message < 0 or message >= p:
        errmsg = "The plaintext must be in the range [0, p)."
        raise MessageTooLarge(errmsg)

    k = number.getRandomRange(1, p - 1, randfunc)
    c1 = mod_pow(g, k, p)
    s = mod_pow(y, k, p)
    c2 = (message * s) % p
    return c1, c2


def decrypt(ciphertext: Ciphertext, private_key: int, p: int) -> int:
    """Decrypts a ciphertext using the ElGamal cryptosystem.

    Args:
        ciphertext: The ciphertext `(c1, c2)`.
        private_key: The private key `x`.
        p: The modulus of the group.

    Returns:
        The plaintext.
    """
    c1, c2 = ciphertext
    if c1 <= 0 or c1 >= p:
        raise ValueError("An invalid ciphertext.")

    s = mod_pow(c1, private_key, p)
    s_inv = mod_inverse(s, p)
    return (c2 * s_inv) % p


def encrypt_bytes(
    data: bytes,
    public_key: PublicKey,
    randfunc: Callable[[int], bytes] | None = None,
) -> list[Ciphertext]:
    """Encrypts a byte string block by block.

    Args:
        data: The plaintext bytes.
        public_key: The public key `(p, g, y)`. The modulus must be at
            least 17 bits long.
        randfunc: A source of cryptographically secure random bytes.

    Returns:
        One ciphertext per block, in order.
    """
    p, _, _ = public_key
    block_size = (p.bit_length() - 1) // 8 - len(_BLOCK_SENTINEL)
    if block_size <= 0:
        errmsg = "The modulus is too small to encrypt bytes."
        raise ValueError(errmsg)

    ciphertexts: list[Ciphertext] = []
    for i in range(0, len(data), block_size):
        block = _BLOCK_SENTINEL + data[i:i + block_size]
        ciphertexts.append(
            encrypt(number.bytes_to_long(block), public_key, randfunc)
        )
    return ciphertexts


def decrypt_bytes(
    ciphertexts: list[Ciphertext], private_key: int, p: int
) -> bytes:
    """Decrypts the output of `encrypt_bytes`."""
    blocks: list[bytes] = []
    for ciphertext in ciphertexts:
        block = number.long_to_bytes(decrypt(ciphertext, private_key, p))
        if not block.startswith(_BLOCK_SENTINEL):
            raise ValueError("An invalid ciphertext.")
        blocks.append(block[len(_BLOCK_SENTINEL):])
    return b"".join(blocks)


def hash_message(data: bytes) -> int:
    """Returns the SHA-256 digest of `data` as a big-endian integer."""
    return int.from_bytes(sha256(data).digest(), "big")


def sign(
    message_hash: int,
    private_key: int,
    public_key: PublicKey,
    randfunc: Callable[[int], bytes] | None = None,
) -> Signature:
    """Signs a message digest using the ElGamal signature scheme.

    Args:
        message_hash: The digest of the message. It is reduced modulo
            `p - 1`.
        private_key: The private key `x`.
        public_key: The public key `(p, g, y)` matching `private_key`.
        randfunc: A source of cryptographically secure random bytes.

    Returns:
        The signature `(r, s)`.
    """
    p, g, _ = public_key
    if message_hash < 0:
        errmsg = "The message hash must be non-negative."
        raise ValueError(errmsg)

    while True:
        k = number.getRandomRange(1, p - 1, randfunc)
        try:
            k_inv = mod_inverse(k, p - 1)
        except NoInverseExists:
            continue
        break

    r = mod_pow(g, k, p)
    s = (k_inv * (message_hash - private_key * r)) % (p - 1)
    assert (
        message_hash % (p - 1) == (private_key * r + k * s) % (p - 1)
    )

    return r, s


def verify(
    message_hash: int, signature: Signature, public_key: PublicKey
) -> bool:
    """Verifies a signature using the ElGamal signature scheme.

    Args:
        message_hash: The digest of the message.
        signature: The signature `(r, s)`.
        public_key: The public key `(p, g, y)`.

    Returns:
        `True` if the signature is valid; otherwise, `False`.
    """
    p, g, y = public_key
    if message_hash < 0:
        errmsg = "The message hash must be non-negative."
        raise ValueError(errmsg)

    r, s = signature
    if r <= 0 or r >= p:
        return False
    if s < 0 or s >= p - 1:
        return False

    lhs = mod_pow(g, message_hash % (p - 1), p)
    rhs = (mod_pow(y, r, p) * mod_pow(r, s, p)) % p
    return lhs == rhs


class ElGamal:
    def __init__(
        self,
        group: Group,
        randfunc: Callable[[int], bytes] | None = None,
    ) -> None:
        """Creates a new instance of `ElGamal` over the group `(p, g)`.

        Args:
            group: The group `(p, g)`, for example one produced by
                `ElGamalKeyGen.generate_group`.
            randfunc: A source of cryptographically secure random bytes.
                If `None`, the default source of PyCryptodome is used.
        """
        p, g = group
        if p < 5:
            raise ValueError("An invalid modulus.")
        if g <= 1 or g >= p:
            raise ValueError("An invalid generator.")

        self._p: Final = p
        self._g: Final = g
        self._randfunc: Final = randfunc

    @property
    def parameters(self) -> Group:
        """Returns the group `(p, g)`."""
        return self._p, self._g

    def _public_key(self, y: int) -> PublicKey:
        return self._p, self._g, y

    def generate_key_pair(self) -> tuple[int, int]:
        """Generates a new key pair.

        Returns:
            A tuple of two integers: a private key and the corresponding
            public key.
        """
        private_key, (_, _, y) = generate_key_pair(
            self.parameters, self._randfunc
        )
        return private_key, y

    def encrypt(self, public_key: int, m: int) -> Ciphertext:
        """Encrypts the plaintext `m` under the public key `public_key`."""
        return encrypt(m, self._public_key(public_key), self._randfunc)

    def decrypt(self, private_key: int, ciphertext: Ciphertext) -> int:
        """Decrypts a ciphertext with the private key."""
        return decrypt(ciphertext, private_key, self._p)

    def encrypt_bytes(
        self, public_key: int, data: bytes
    ) -> list[Ciphertext]:
        """Encrypts a byte string block by block."""
        return encrypt_bytes(
            data, self._public_key(public_key), self._randfunc
        )

    def decrypt_bytes(
        self, private_key: int, ciphertexts: list[Ciphertext]
    ) -> bytes:
        """Decrypts the output of `encrypt_bytes`."""
        return decrypt_bytes(ciphertexts, private_key, self._p)

    def sign(self, private_key: int, message_hash: int) -> Signature:
        """Signs a message digest.

        Args:
            private_key: The private key.
            message_hash: The digest of the message.

        Returns:
            The signature.
        """
        public_key = mod_pow(self._g, private_key, self._p)
        return sign(
            message_hash,
            private_key,
            self._public_key(public_key),
            self._randfunc,
        )

    def verify(
        self, public_key: int, message_hash: int, signature: Signature
    ) -> bool:
        """Verifies a signature over a message digest.

        Returns:
            `True` if the signature is valid; otherwise, `False`.
        """
        return verify(message_hash, signature, self._public_key(public_key))


def _main() -> None:
    logging.basicConfig(level=logging.DEBUG)

    key_gen = ElGamalKeyGen(256)
    private_key, public_key = key_gen.generate_key_pair()
    p, _, _ = public_key

    plaintext = 0xDEADBEEF
    ciphertext = encrypt(plaintext, public_key)
    assert decrypt(ciphertext, private_key, p) == plaintext

    data = b"\x00\x00mental arithmetic"
    ciphertexts = encrypt_bytes(data, public_key)
    assert decrypt_bytes(ciphertexts, private_key, p) == data

    message_hash = hash_message(data)
    signature = sign(message_hash, private_key, public_key)
    assert verify(message_hash, signature, public_key)
    assert not verify(message_hash ^ 1, signature, public_key)


if __name__ == "__main__":
    _main()

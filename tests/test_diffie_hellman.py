from Crypto.Util import number
import pytest
from elgamal_kernel.core import (
    MODP_2048,
    MODP_3072,
    DiffieHellman,
    legendre_symbol,
)


@pytest.mark.parametrize(
    "group, bits", [(MODP_2048, 2048), (MODP_3072, 3072)]
)
def test_modp_groups_are_safe_primes(group, bits):
    p, g = group
    assert p.bit_length() == bits
    assert g == 2
    assert number.isPrime(p)
    assert number.isPrime((p - 1) // 2)
    # 2 generates the subgroup of quadratic residues.
    assert legendre_symbol(g, p) == 1


def test_key_agreement_in_modp_3072_group():
    dh = DiffieHellman(MODP_3072)
    alice_private, alice_public = dh.generate_key_pair()
    bob_private, bob_public = dh.generate_key_pair()
    assert dh.compute_shared_secret(
        bob_public, alice_private
    ) == dh.compute_shared_secret(alice_public, bob_private)


def test_key_agreement_in_modp_group():
    dh = DiffieHellman()
    alice_private, alice_public = dh.generate_key_pair()
    bob_private, bob_public = dh.generate_key_pair()
    alice_secret = dh.compute_shared_secret(bob_public, alice_private)
    bob_secret = dh.compute_shared_secret(alice_public, bob_private)
    assert alice_secret == bob_secret
    assert dh.derive_key(alice_secret) == dh.derive_key(bob_secret)
    assert len(dh.derive_key(alice_secret)) == 32


def test_key_agreement_in_generated_group(randfunc):
    dh = DiffieHellman.generate(64, randfunc=randfunc)
    p, g = dh.parameters
    assert p.bit_length() == 64
    assert g == 2

    alice_private, alice_public = dh.generate_key_pair()
    bob_private, bob_public = dh.generate_key_pair()
    assert 1 <= alice_private <= p - 2
    assert alice_public == pow(g, alice_private, p)
    assert dh.compute_shared_secret(
        bob_public, alice_private
    ) == dh.compute_shared_secret(alice_public, bob_private)


def test_derive_key_depends_on_salt_and_context():
    dh = DiffieHellman()
    secret = 0x1234
    assert dh.derive_key(secret, salt=b"a" * 32) != dh.derive_key(secret)
    assert dh.derive_key(secret, context=b"other") != dh.derive_key(secret)


@pytest.mark.parametrize("public_key", [0, 1, MODP_2048[0] - 1, MODP_2048[0]])
def test_rejects_invalid_public_keys(public_key):
    dh = DiffieHellman()
    private_key, _ = dh.generate_key_pair()
    with pytest.raises(ValueError):
        dh.compute_shared_secret(public_key, private_key)


@pytest.mark.parametrize("group", [(3, 2), (23, 1), (23, 22)])
def test_rejects_invalid_groups(group):
    with pytest.raises(ValueError):
        DiffieHellman(group)

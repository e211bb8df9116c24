"""
ElGamal multiplicatif :
- c0 = g^r mod p
- c1 = m * h^r mod p (où h = g^x est la clé publique)

Déchiffrement : c1 * (c0^x)^(-1) = m * g^(xr) * g^(-xr) = m

Le produit de deux chiffrés (c0, c1) * (c0', c1') = (g^(r+r'), m*m' * h^(r+r'))
est un chiffré de m*m'.
"""
import random

import pytest

from ipfe.elgamal import (
    Ciphertext, KeyPair, EG_commitment, EG_decrypt, EG_decrypt_with_keypair,
    EG_encrypt, EG_generate_keys, check_key_pair
)
from ipfe.errors import NonInvertibleElement, RangeViolation
from ipfe.params import GroupParameters, RFC5114_PARAMS, TOY_PARAMS


def test_generate_keys():
    rng = random.Random(42)
    for _ in range(20):
        kp = EG_generate_keys(TOY_PARAMS, rng)
        assert 0 <= kp.private_key < TOY_PARAMS.q
        assert kp.public_key == pow(TOY_PARAMS.g, kp.private_key, TOY_PARAMS.p)
        assert check_key_pair(kp, TOY_PARAMS)


def test_generate_keys_is_driven_by_rng():
    assert EG_generate_keys(TOY_PARAMS, random.Random(7)) == EG_generate_keys(TOY_PARAMS, random.Random(7))


def test_round_trip_toy_group():
    p = TOY_PARAMS.p
    for x in range(TOY_PARAMS.q):
        h = pow(TOY_PARAMS.g, x, p)
        for m in (1, 2, 5, 42, p - 1):
            for r in (0, 1, 17, 71):
                ct = EG_encrypt(m, r, h, TOY_PARAMS)
                assert EG_decrypt(ct, x, TOY_PARAMS) == m


def test_round_trip_rfc5114_group():
    rng = random.Random(2024)
    kp = EG_generate_keys(RFC5114_PARAMS, rng)
    for m in (1, RFC5114_PARAMS.g, pow(RFC5114_PARAMS.g, 123456, RFC5114_PARAMS.p)):
        r = EG_commitment(RFC5114_PARAMS, rng)
        ct = EG_encrypt(m, r, kp.public_key, RFC5114_PARAMS)
        assert EG_decrypt_with_keypair(kp, ct, RFC5114_PARAMS) == m


def test_encrypt_uses_given_randomness():
    kp = KeyPair(5, pow(15, 5, 73))
    ct = EG_encrypt(2, 10, kp.public_key, TOY_PARAMS)
    assert ct.c0 == pow(15, 10, 73)
    assert ct.c1 == (pow(kp.public_key, 10, 73) * 2) % 73


def test_multiplicative_homomorphism():
    kp = EG_generate_keys(TOY_PARAMS, random.Random(1))
    m1, m2 = 12, 35
    ct1 = EG_encrypt(m1, 20, kp.public_key, TOY_PARAMS)
    ct2 = EG_encrypt(m2, 33, kp.public_key, TOY_PARAMS)

    product = Ciphertext((ct1.c0 * ct2.c0) % 73, (ct1.c1 * ct2.c1) % 73)
    assert EG_decrypt_with_keypair(kp, product, TOY_PARAMS) == (m1 * m2) % 73


def test_encrypt_rejects_invalid_inputs():
    h = pow(15, 5, 73)
    with pytest.raises(RangeViolation):
        EG_encrypt(0, 3, h, TOY_PARAMS)
    with pytest.raises(RangeViolation):
        EG_encrypt(73, 3, h, TOY_PARAMS)
    with pytest.raises(RangeViolation):
        EG_encrypt(2, -1, h, TOY_PARAMS)
    with pytest.raises(RangeViolation):
        EG_encrypt(2, 3, 0, TOY_PARAMS)


def test_decrypt_rejects_invalid_key():
    with pytest.raises(RangeViolation):
        EG_decrypt(Ciphertext(3, 5), 73, TOY_PARAMS)


def test_decrypt_non_invertible():
    # Module composé : c0 = 3 partage un facteur avec p = 21
    params = GroupParameters(p=21, q=6, g=2)
    with pytest.raises(NonInvertibleElement) as exc:
        EG_decrypt(Ciphertext(3, 5), 1, params)
    assert exc.value.context == "EG_decrypt"
    assert exc.value.modulus == 21
    assert exc.value.value == 3


def test_check_key_pair():
    assert check_key_pair(KeyPair(5, pow(15, 5, 73)), TOY_PARAMS)
    assert not check_key_pair(KeyPair(5, pow(15, 5, 73) + 1), TOY_PARAMS)


def test_private_key_not_in_repr():
    assert "987654321" not in repr(KeyPair(987654321, 6))

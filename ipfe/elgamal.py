from dataclasses import dataclass, field

from ipfe.algebra import check_scalar, mod_exp, mod_inv, random_scalar
from ipfe.errors import NonInvertibleElement
from ipfe.params import GroupParameters


@dataclass(frozen=True)
class KeyPair:
    """Paire de clés ElGamal d'un participant"""
    private_key: int = field(repr=False)  # x dans [0, q)
    public_key: int                       # h = g^x mod p


@dataclass(frozen=True)
class Ciphertext:
    """Texte chiffré ElGamal (c0, c1)"""
    c0: int
    c1: int


def EG_generate_keys(params: GroupParameters, rng=None) -> KeyPair:
    """
    Génère une paire de clés ElGamal

    Args:
        params: Les paramètres du groupe
        rng: Source d'aléa injectée (secrets par défaut)

    Returns:
        KeyPair: (clé privée x, clé publique h = g^x mod p)
    """
    # Clé privée aléatoire dans [0, q)
    private_key = random_scalar(params.q, rng)

    # Calcule la clé publique h = g^x mod p
    public_key = mod_exp(params.g, private_key, params.p)

    return KeyPair(private_key, public_key)


def EG_commitment(params: GroupParameters, rng=None) -> int:
    """Tire l'aléa r d'un chiffrement, partagé par toutes les composantes d'un vecteur"""
    return random_scalar(params.q, rng)


def EG_encrypt(message: int, randomness: int, public_key: int, params: GroupParameters) -> Ciphertext:
    """
    Chiffre un élément du groupe avec ElGamal (version multiplicative)

    Args:
        message: L'élément à chiffrer, typiquement g^m
        randomness: L'aléa r, fourni par l'appelant
        public_key: La clé publique h du destinataire
        params: Les paramètres du groupe

    Returns:
        Ciphertext: (c0, c1) = (g^r mod p, h^r * message mod p)

    Raises:
        RangeViolation: Si le message, l'aléa ou la clé publique sont invalides
    """
    p = params.p
    check_scalar(message, p, "message", context="EG_encrypt", lower=1)
    check_scalar(randomness, p, "randomness", context="EG_encrypt")
    check_scalar(public_key, p, "public_key", context="EG_encrypt", lower=1)

    # Calcule c0 = g^r mod p
    c0 = mod_exp(params.g, randomness, p)

    # Calcule c1 = h^r * m mod p
    c1 = (mod_exp(public_key, randomness, p) * message) % p

    return Ciphertext(c0, c1)


def EG_decrypt(ciphertext: Ciphertext, exponent_key: int, params: GroupParameters) -> int:
    """
    Déchiffre un texte ElGamal avec une clé fournie explicitement

    La couche IPFE l'appelle avec la clé dérivée sk_y, et non avec la clé
    privée d'une KeyPair.

    Args:
        ciphertext: Le texte chiffré (c0, c1)
        exponent_key: La clé de déchiffrement
        params: Les paramètres du groupe

    Returns:
        int: L'élément déchiffré

    Raises:
        RangeViolation: Si la clé ou le chiffré sortent de Z_p
        NonInvertibleElement: Si c0^k n'est pas inversible modulo p
    """
    p = params.p
    check_scalar(exponent_key, p, "exponent_key", context="EG_decrypt")
    check_scalar(ciphertext.c0, p, "c0", context="EG_decrypt")
    check_scalar(ciphertext.c1, p, "c1", context="EG_decrypt")

    # Calcule s = c0^k mod p
    shared = mod_exp(ciphertext.c0, exponent_key, p)

    # Calcule m = c1 * s^(-1) mod p
    try:
        shared_inv = mod_inv(shared, p)
    except NonInvertibleElement as exc:
        raise NonInvertibleElement(exc.value, exc.modulus, context="EG_decrypt") from exc

    return (ciphertext.c1 * shared_inv) % p


def EG_decrypt_with_keypair(key_pair: KeyPair, ciphertext: Ciphertext, params: GroupParameters) -> int:
    """Déchiffre avec la clé privée du destinataire"""
    return EG_decrypt(ciphertext, key_pair.private_key, params)


def check_key_pair(key_pair: KeyPair, params: GroupParameters) -> bool:
    """Vérifie que h = g^x mod p"""
    return mod_exp(params.g, key_pair.private_key, params.p) == key_pair.public_key

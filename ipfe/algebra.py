from secrets import randbelow
from typing import Optional, Tuple

from ipfe.errors import NonInvertibleElement, RangeViolation


def check_scalar(value: int, bound: int, name: str, index: Optional[int] = None,
                 context: Optional[str] = None, lower: int = 0) -> int:
    """
    Vérifie qu'un scalaire est un entier de [lower, bound)

    Args:
        value: Le scalaire à vérifier
        bound: La borne supérieure (exclue)
        name: Le nom du paramètre, repris dans le message d'erreur
        index: La position dans le vecteur, le cas échéant
        context: L'opération appelante
        lower: La borne inférieure (incluse)

    Returns:
        int: Le scalaire, inchangé

    Raises:
        RangeViolation: Si le scalaire n'est pas un entier ou sort de l'intervalle
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise RangeViolation(name, value, index=index, context=context)
    if not lower <= value < bound:
        raise RangeViolation(name, value, bound, index=index, context=context, lower=lower)
    return value


def mod_exp(base: int, exponent: int, modulus: int) -> int:
    """
    Exponentiation modulaire, résultat normalisé dans [0, modulus)

    Raises:
        RangeViolation: Si modulus <= 1 ou si l'exposant est négatif
    """
    if modulus <= 1:
        raise RangeViolation("modulus", modulus, context="mod_exp")
    if exponent < 0:
        raise RangeViolation("exponent", exponent, context="mod_exp")
    return pow(base % modulus, exponent, modulus)


def egcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Algorithme d'Euclide étendu (version itérative)

    Returns:
        Tuple[int, int, int]: (g, u, v) tels que a*u + b*v = g = gcd(a, b)
    """
    old_r, r = a, b
    old_u, u = 1, 0
    old_v, v = 0, 1
    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_u, u = u, old_u - quotient * u
        old_v, v = v, old_v - quotient * v
    return old_r, old_u, old_v


def try_mod_inv(a: int, modulus: int) -> Optional[int]:
    """Inverse de a modulo modulus, ou None si gcd(a, modulus) != 1"""
    if modulus <= 1:
        raise RangeViolation("modulus", modulus, context="mod_inv")
    g, u, _ = egcd(a % modulus, modulus)
    if g != 1:
        return None
    return u % modulus


def mod_inv(a: int, modulus: int) -> int:
    """
    Calcule l'inverse modulaire de a

    Args:
        a: L'élément à inverser
        modulus: Le module

    Returns:
        int: L'inverse dans [0, modulus)

    Raises:
        NonInvertibleElement: Si a et modulus ne sont pas premiers entre eux
    """
    inverse = try_mod_inv(a, modulus)
    if inverse is None:
        raise NonInvertibleElement(a, modulus, context="mod_inv")
    return inverse


def random_scalar(modulus: int, rng=None) -> int:
    """
    Tire un scalaire uniforme dans [0, modulus)

    Args:
        modulus: La borne supérieure (exclue)
        rng: Source d'aléa exposant randrange(stop). Par défaut, le générateur
            cryptographique du module secrets

    Returns:
        int: Le scalaire tiré
    """
    if modulus < 1:
        raise RangeViolation("modulus", modulus, context="random_scalar")
    if rng is None:
        return randbelow(modulus)
    return rng.randrange(modulus)

"""
Chiffrement fonctionnel pour le produit scalaire (IPFE) sous l'hypothèse DDH

Construction de la section 5 de "Simple Functional Encryption Schemes for
Inner Products" (Abdalla, Bourse, De Caro, Pointcheval, 2015) au-dessus du
chiffrement ElGamal :

- Setup : l paires ElGamal (s_i, h_i = g^s_i)
- KeyDer : sk_y = Σ y_i * s_i mod q
- Encrypt : c0 = g^r, c1_i = h_i^r * g^x_i
- Decrypt : Π c1_i^y_i / c0^sk_y = g^<x,y>

Comme Π h_i^y_i = g^(Σ s_i y_i) et g^q = 1, c0^sk_y = g^(r * sk_y) annule
exactement le masque et il reste g^<x,y> mod p. Retrouver l'entier <x,y>
(logarithme discret) reste à la charge de l'appelant.
"""

from dataclasses import dataclass, field
from secrets import randbelow
from typing import List, Optional, Sequence, Tuple

from ipfe.algebra import check_scalar, mod_exp
from ipfe.config import (
    DEFAULT_VECTOR_LENGTH, DEMO_MESSAGE_BOUND, DEMO_NUM_CLIENTS, DEMO_WEIGHT_BOUND
)
from ipfe.elgamal import (
    Ciphertext, KeyPair, EG_commitment, EG_decrypt, EG_encrypt,
    EG_generate_keys, check_key_pair
)
from ipfe.errors import (
    InvalidParameters, InvalidVectorLength, KeyVectorMismatch, NonInvertibleElement,
    UninitializedParameters
)
from ipfe.logging_config import Tracer
from ipfe.params import GroupParameters, TOY_PARAMS, validate_params


@dataclass(frozen=True)
class FECiphertext:
    """Texte chiffré IPFE : c0 partagé, une composante c1_i par position"""
    c0: int
    c1: Tuple[int, ...]


@dataclass(frozen=True)
class FESecretKey:
    """Clé dérivée sk_y, valable pour un seul vecteur y"""
    sk_y: int = field(repr=False)
    length: int


@dataclass(frozen=True)
class SchemeState:
    """État du schéma après Setup : paramètres et l paires de clés"""
    params: GroupParameters
    key_pairs: Tuple[KeyPair, ...]
    tracer: Optional[Tracer] = field(default=None, repr=False, compare=False)

    @property
    def length(self) -> int:
        return len(self.key_pairs)

    @property
    def public_keys(self) -> Tuple[int, ...]:
        return tuple(kp.public_key for kp in self.key_pairs)

    def trace(self, message: str) -> None:
        if self.tracer is not None:
            self.tracer(message)


def _check_length(operation: str, expected: int, vector: Sequence[int]) -> None:
    if len(vector) != expected:
        raise InvalidVectorLength(operation, expected, len(vector))


def _check_vector(operation: str, name: str, vector: Sequence[int], p: int, lower: int = 0) -> None:
    for i, value in enumerate(vector):
        check_scalar(value, p, name, index=i, context=operation, lower=lower)


def setup(length: int, params: Optional[GroupParameters], rng=None,
          tracer: Optional[Tracer] = None) -> SchemeState:
    """
    Setup : génère l paires de clés ElGamal indépendantes

    Args:
        length: La longueur l des vecteurs
        params: Les paramètres du groupe
        rng: Source d'aléa injectée (secrets par défaut)
        tracer: Traceur optionnel recevant les événements du schéma

    Returns:
        SchemeState: L'état du schéma (paramètres et paires de clés)

    Raises:
        UninitializedParameters: Si aucun paramètre n'est fourni
        InvalidParameters: Si les paramètres sont invalides
        InvalidVectorLength: Si l < 1
    """
    if params is None:
        raise UninitializedParameters("Paramètres du groupe non initialisés", context="setup")
    if not validate_params(params):
        raise InvalidParameters("Paramètres du groupe invalides", context="setup")
    if length < 1:
        raise InvalidVectorLength("setup", 1, length)

    key_pairs = tuple(EG_generate_keys(params, rng) for _ in range(length))
    state = SchemeState(params, key_pairs, tracer)
    state.trace(f"setup: {length} paires de clés générées")
    return state


def derive_key(state: SchemeState, y: Sequence[int]) -> FESecretKey:
    """
    KeyDer : calcule sk_y = Σ y_i * s_i mod q

    Fonction pure : les clés privées ne sont ni modifiées ni consommées, et
    plusieurs clés peuvent être dérivées pour des vecteurs différents.

    Raises:
        InvalidVectorLength: Si len(y) != l
        RangeViolation: Si un y_i sort de [0, p)
    """
    params = state.params
    _check_length("derive_key", state.length, y)
    _check_vector("derive_key", "y", y, params.p)

    sk_y = 0
    for y_i, kp in zip(y, state.key_pairs):
        sk_y = (sk_y + y_i * kp.private_key) % params.q

    state.trace(f"derive_key: clé dérivée pour l={state.length}")
    return FESecretKey(sk_y, state.length)


def encrypt(state: SchemeState, x: Sequence[int], rng=None) -> FECiphertext:
    """
    Chiffre le vecteur x

    Un seul aléa r est tiré et partagé par toutes les composantes, condition
    nécessaire à l'homomorphisme utilisé au déchiffrement.

    Raises:
        InvalidVectorLength: Si len(x) != l
        RangeViolation: Si un x_i sort de [0, p)
    """
    params = state.params
    _check_length("encrypt", state.length, x)
    _check_vector("encrypt", "x", x, params.p)

    r = EG_commitment(params, rng)
    c0 = mod_exp(params.g, r, params.p)

    c1 = []
    for x_i, h_i in zip(x, state.public_keys):
        # Encode x_i dans le groupe : g^x_i
        encoded = mod_exp(params.g, x_i, params.p)
        # Le c0 de chaque composante est identique, seul c1 est conservé
        c1.append(EG_encrypt(encoded, r, h_i, params).c1)

    state.trace(f"encrypt: {state.length} composantes chiffrées")
    return FECiphertext(c0, tuple(c1))


def decrypt(ciphertext: FECiphertext, secret_key: FESecretKey, y: Sequence[int],
            params: Optional[GroupParameters]) -> int:
    """
    Déchiffre un texte IPFE avec la clé dérivée pour y

    Args:
        ciphertext: Le texte chiffré (c0, [c1_i])
        secret_key: La clé sk_y
        y: Le vecteur ayant servi à dériver sk_y
        params: Les paramètres du groupe

    Returns:
        int: L'élément g^<x,y> mod p

    Raises:
        UninitializedParameters: Si aucun paramètre n'est fourni
        InvalidVectorLength: Si y, c1 et la clé n'ont pas la même longueur
        RangeViolation: Si un y_i sort de [0, p) ou un c1_i de [1, p)
        NonInvertibleElement: Si c0^sk_y n'est pas inversible
    """
    if params is None:
        raise UninitializedParameters("Paramètres du groupe non initialisés", context="decrypt")

    length = secret_key.length
    _check_length("decrypt", length, y)
    _check_length("decrypt", length, ciphertext.c1)
    _check_vector("decrypt", "y", y, params.p)
    _check_vector("decrypt", "c1", ciphertext.c1, params.p, lower=1)

    # Combine les composantes : Π c1_i^y_i mod p
    aggregate = 1
    for c1_i, y_i in zip(ciphertext.c1, y):
        aggregate = (aggregate * mod_exp(c1_i, y_i, params.p)) % params.p

    try:
        return EG_decrypt(Ciphertext(ciphertext.c0, aggregate), secret_key.sk_y, params)
    except NonInvertibleElement as exc:
        raise NonInvertibleElement(exc.value, exc.modulus, context="decrypt") from exc


def verify_scheme(state: SchemeState) -> List[bool]:
    """Vérifie pour chaque position que h_i = g^s_i mod p"""
    return [check_key_pair(kp, state.params) for kp in state.key_pairs]


def inner_product_element(x: Sequence[int], y: Sequence[int], params: GroupParameters) -> int:
    """Valeur attendue g^(Σ x_i * y_i) mod p, calculée en clair"""
    if len(x) != len(y):
        raise InvalidVectorLength("inner_product_element", len(x), len(y))
    return mod_exp(params.g, sum(x_i * y_i for x_i, y_i in zip(x, y)), params.p)


class InnerProductFE:
    def __init__(self, params: Optional[GroupParameters] = None, rng=None,
                 tracer: Optional[Tracer] = None):
        """
        Schéma IPFE avec état, à la manière d'un participant unique

        Args:
            params: Les paramètres du groupe
            rng: Source d'aléa utilisée par setup() et encrypt()
            tracer: Traceur optionnel
        """
        self.params = params
        self.rng = rng
        self.tracer = tracer
        self.state: Optional[SchemeState] = None

        # Dernière clé dérivée, utilisée par défaut au déchiffrement
        self.last_vector: Optional[Tuple[int, ...]] = None
        self.last_key: Optional[FESecretKey] = None

    @property
    def is_ready(self) -> bool:
        return self.state is not None

    @property
    def length(self) -> int:
        return self._require_state("length").length

    def _require_state(self, operation: str) -> SchemeState:
        if self.state is None:
            raise UninitializedParameters("setup() n'a pas été appelé", context=operation)
        return self.state

    def setup(self, length: int = DEFAULT_VECTOR_LENGTH) -> List[int]:
        """Génère les l paires de clés et retourne les clés publiques"""
        self.state = setup(length, self.params, self.rng, self.tracer)
        self.last_vector = None
        self.last_key = None
        return list(self.state.public_keys)

    def derive_key(self, y: Sequence[int]) -> FESecretKey:
        """Dérive sk_y et la mémorise pour decrypt()"""
        key = derive_key(self._require_state("derive_key"), y)
        self.last_vector = tuple(y)
        self.last_key = key
        return key

    def encrypt(self, x: Sequence[int]) -> FECiphertext:
        return encrypt(self._require_state("encrypt"), x, self.rng)

    def decrypt(self, ciphertext: FECiphertext, secret_key: Optional[FESecretKey] = None,
                y: Optional[Sequence[int]] = None) -> int:
        """
        Déchiffre, avec la dernière clé dérivée si aucune n'est fournie

        Sans clé explicite, y doit être omis ou égal au vecteur de la dernière
        dérivation : sk_y n'est valable que pour ce vecteur.

        Raises:
            UninitializedParameters: Si setup() ou derive_key() n'ont pas été appelés
            KeyVectorMismatch: Si y diffère du vecteur de la dernière clé dérivée
            ValueError: Si une clé explicite est fournie sans y
        """
        state = self._require_state("decrypt")
        if secret_key is None:
            if self.last_key is None:
                raise UninitializedParameters("Aucune clé dérivée", context="decrypt")
            if y is not None and tuple(y) != self.last_vector:
                raise KeyVectorMismatch("La dernière clé dérivée ne correspond pas à y", context="decrypt")
            secret_key = self.last_key
            y = self.last_vector
        elif y is None:
            raise ValueError("decrypt: le vecteur y est requis avec une clé explicite")
        return decrypt(ciphertext, secret_key, y, state.params)

    def info(self) -> List[Tuple[int, int, bool]]:
        """Retourne (position, clé publique, cohérence) pour chaque paire"""
        state = self._require_state("info")
        return [
            (i + 1, kp.public_key, ok)
            for i, (kp, ok) in enumerate(zip(state.key_pairs, verify_scheme(state)))
        ]


def run_demo(num_clients: int = DEMO_NUM_CLIENTS, params: Optional[GroupParameters] = None,
             rng=None, tracer: Optional[Tracer] = None) -> Tuple[int, int]:
    """Exécute une démonstration complète et retourne (déchiffré, attendu)"""
    params = params or TOY_PARAMS
    scheme = InnerProductFE(params, rng=rng, tracer=tracer)
    scheme.setup(num_clients)

    for index, public_key, ok in scheme.info():
        print(f"Clé publique du client {index}: {public_key} ({'valide' if ok else 'invalide'})")

    def draw(bound: int) -> int:
        return (rng.randrange(bound) if rng is not None else randbelow(bound)) + 1

    # Poids y_i dans [1, 7] et messages x_i dans [1, 72]
    y = [draw(DEMO_WEIGHT_BOUND) for _ in range(num_clients)]
    x = [draw(DEMO_MESSAGE_BOUND) for _ in range(num_clients)]
    print(f"Messages x: {x}")
    print(f"Poids y: {y}")

    scheme.derive_key(y)
    ciphertext = scheme.encrypt(x)
    print(f"Chiffré: c0 = {ciphertext.c0}, c1 = {list(ciphertext.c1)}")

    decrypted = scheme.decrypt(ciphertext)
    expected = inner_product_element(x, y, params)
    print(f"Message déchiffré: {decrypted}")
    print(f"Résultat attendu: {expected}")
    return decrypted, expected


if __name__ == "__main__":
    from ipfe.logging_config import logger_tracer, setup_logging

    setup_logging(level="DEBUG")
    run_demo(tracer=logger_tracer())

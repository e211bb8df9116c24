from typing import Optional


class IPFEError(Exception):
    """Exception de base du schéma de chiffrement fonctionnel"""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(f"[{context}] {message}" if context else message)


class UninitializedParameters(IPFEError, RuntimeError):
    """Opération demandée avant l'établissement des paramètres du groupe"""
    pass


class InvalidParameters(IPFEError, ValueError):
    """Paramètres du groupe (p, q, g) invalides"""
    pass


class InvalidVectorLength(IPFEError, ValueError):
    """Longueur de vecteur différente de la longueur l du schéma"""

    def __init__(self, operation: str, expected: int, actual: int, context: Optional[str] = None):
        self.operation = operation
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{operation}: longueur {actual} reçue, {expected} attendue",
            context or operation
        )


class RangeViolation(IPFEError, ValueError):
    """Scalaire fourni hors de l'intervalle autorisé"""

    def __init__(self, name: str, value, bound: Optional[int] = None,
                 index: Optional[int] = None, context: Optional[str] = None,
                 lower: int = 0):
        self.name = name
        self.value = value
        self.bound = bound
        self.lower = lower
        self.index = index
        label = name if index is None else f"{name}[{index}]"
        if bound is None:
            message = f"{label} invalide ({value!r})"
        else:
            message = f"{label} invalide ({value!r}), doit être dans [{lower}, {bound})"
        super().__init__(message, context)


class NonInvertibleElement(IPFEError, ArithmeticError):
    """L'inverse modulaire n'existe pas (gcd(a, m) != 1)"""

    def __init__(self, value: int, modulus: int, context: Optional[str] = None):
        self.value = value
        self.modulus = modulus
        super().__init__(
            f"{value} n'est pas inversible modulo {modulus}",
            context
        )


class KeyVectorMismatch(IPFEError, ValueError):
    """Clé dérivée utilisée avec un vecteur y différent de celui de la dérivation"""
    pass

class NoInverseExists(ValueError):
    """Raised when a modular inverse is requested for non-coprime
    operands."""


class NonCoprimeModuli(ValueError):
    """Raised when the moduli of a CRT system are not pairwise
    coprime."""


class MessageTooLarge(ValueError):
    """Raised when a plaintext does not fit below the group modulus."""


class InvalidModulus(ValueError):
    """Raised when a residue symbol is requested for an unsupported
    modulus."""


class SearchExhausted(RuntimeError):
    """Raised when a randomized search runs out of its attempt
    budget."""

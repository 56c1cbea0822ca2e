### src/isbn_errors.py
### Errores del parser/validador de ISBN

from enum import Enum


class ErrorKind(Enum):
    """Tipos de error posibles. El valor de cada miembro es su mensaje fijo."""

    EMPTY = "given string is empty"
    INVALID_LENGTH = "invalid code length"
    INVALID_PREFIX = "invalid prefix: prefix should be 978 or 979"
    INVALID = "invalid ISBN"


class ISBNError(ValueError):
    """
    Error lanzado por parse() y ISBNCode.update().

    Attributes:
        kind (ErrorKind): tipo de error
        code (ISBNCode): siempre el código vacío (valor "sin resultado")
    """

    def __init__(self, kind, code=None):
        super().__init__(kind.value)
        self.kind = kind
        self.code = code

    def __repr__(self):
        return f"ISBNError({self.kind.name})"

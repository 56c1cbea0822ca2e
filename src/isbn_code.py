### src/isbn_code.py
### Parseo, validación y actualización de códigos ISBN (ISBN-10 e ISBN-13)

from collections import namedtuple

from isbn_errors import ErrorKind, ISBNError

ISBN_MARKER = "ISBN"
SEPARATOR = "-"
GS1_PREFIXES = ("978", "979")
LEGACY_PREFIX = "978"

LEGACY_LENGTH = 10
CURRENT_LENGTH = 13

_DIGITS = "0123456789"
_CURRENT_WEIGHTS = (1, 3, 1, 3, 1, 3, 1, 3, 1, 3, 1, 3)


# ============================================================
# CHECKSUMS
# ============================================================

def legacy_check_digit(body):
    """
    Calcula el dígito de control de un ISBN-10 (pesos 10, 9, ..., módulo 11).

    Args:
        body (str): grupo + editorial + publicación (sin dígito de control)

    Returns:
        int | None: 11 - (suma % 11), o None si hay caracteres no decimales
        o más de 10 caracteres (los pesos van de 10 a 1).
        Con resto 0 devuelve 11, que nunca coincide con un checksum guardado.

    Example:
        >>> legacy_check_digit("400310101")
        4
    """
    if len(body) > LEGACY_LENGTH:
        return None
    total = 0
    for i, c in enumerate(body):
        if c not in _DIGITS:
            return None
        total += int(c) * (10 - i)
    return 11 - total % 11


def current_check_digit(body):
    """
    Calcula el dígito de control de un ISBN-13 (pesos 1, 3, 1, 3..., módulo 10).

    Args:
        body (str): prefijo + grupo + editorial + publicación (12 dígitos)

    Returns:
        int | None: 10 - (suma % 10), o None si el cuerpo no son 12 dígitos.
        Con resto 0 devuelve 10, que nunca coincide con un checksum guardado.

    Example:
        >>> current_check_digit("978400310101")
        8
    """
    if len(body) != len(_CURRENT_WEIGHTS):
        return None
    total = 0
    for c, weight in zip(body, _CURRENT_WEIGHTS):
        if c not in _DIGITS:
            return None
        total += int(c) * weight
    return 10 - total % 10


def render_check_digit(value, legacy):
    """Representación textual de un dígito de control ('X' = 10 solo en ISBN-10)"""
    if legacy and value == 10:
        return "X"
    return str(value)


# ============================================================
# MODELO
# ============================================================

_ISBNFields = namedtuple(
    "_ISBNFields",
    ["prefix", "registration_group", "registrant", "publication", "checksum", "is_legacy"],
    defaults=("", "", "", "", "", False),
)


class ISBNCode(_ISBNFields):
    """
    Código ISBN descompuesto en sus campos. Inmutable: update() devuelve uno nuevo.

    Para ISBN-10 el prefijo es siempre "978" y no se muestra al formatear.
    ISBNCode() (todo vacío) es el valor "sin resultado".
    """

    __slots__ = ()

    def is_valid(self):
        """Comprueba el checksum guardado. Nunca lanza: si no se puede calcular, False."""
        if self.is_legacy:
            body = self.registration_group + self.registrant + self.publication
            check_digit = legacy_check_digit(body)
        else:
            check_digit = current_check_digit(self._current_body())
        if check_digit is None:
            return False
        return render_check_digit(check_digit, self.is_legacy) == self.checksum

    def update(self):
        """
        Convierte un ISBN-10 en su equivalente ISBN-13.

        El checksum se recalcula con el algoritmo de 13 dígitos sin mirar el
        checksum antiguo. Un ISBN-13 se devuelve tal cual.

        Raises:
            ISBNError: INVALID si el cuerpo contiene caracteres no decimales
        """
        if not self.is_legacy:
            return self
        check_digit = current_check_digit(self._current_body())
        if check_digit is None:
            raise ISBNError(ErrorKind.INVALID, EMPTY_CODE)
        return self._replace(
            checksum=render_check_digit(check_digit, legacy=False),
            is_legacy=False,
        )

    def format(self):
        """
        Forma canónica: "ISBN" + [prefijo-] + grupo-editorial-publicación-checksum

        Example:
            >>> ISBNCode("978", "4", "10", "109205", "2", True).format()
            'ISBN4-10-109205-2'
        """
        parts = [self.registration_group, self.registrant, self.publication, self.checksum]
        if not self.is_legacy:
            parts.insert(0, self.prefix)
        return ISBN_MARKER + SEPARATOR.join(parts)

    def _current_body(self):
        return self.prefix + self.registration_group + self.registrant + self.publication

    def __str__(self):
        return self.format()


EMPTY_CODE = ISBNCode()


# ============================================================
# PARSER
# ============================================================

def parse(raw):
    """
    Parsea un ISBN en texto ("ISBN978-4-00-310101-8", "4-00-310101-4", ...).

    Solo se comprueba la forma (longitud, número de segmentos y prefijo GS1);
    el contenido de los campos lo valida is_valid().

    Args:
        raw (str): ISBN con guiones, con o sin el literal "ISBN" delante

    Returns:
        ISBNCode: código parseado

    Raises:
        ISBNError: EMPTY, INVALID_LENGTH o INVALID_PREFIX
    """
    if not raw:
        raise ISBNError(ErrorKind.EMPTY, EMPTY_CODE)

    if raw.startswith(ISBN_MARKER):
        raw = raw[len(ISBN_MARKER):]

    segments = raw.split(SEPARATOR)
    codelen = len("".join(segments))

    if codelen == LEGACY_LENGTH:
        return _parse_legacy(segments)
    if codelen == CURRENT_LENGTH:
        return _parse_current(segments)
    raise ISBNError(ErrorKind.INVALID_LENGTH, EMPTY_CODE)


def _parse_legacy(segments):
    # grupo-editorial-publicación-checksum
    if len(segments) != 4:
        raise ISBNError(ErrorKind.INVALID_LENGTH, EMPTY_CODE)
    group, registrant, publication, checksum = segments
    return ISBNCode(
        prefix=LEGACY_PREFIX,
        registration_group=group,
        registrant=registrant,
        publication=publication,
        checksum=checksum,
        is_legacy=True,
    )


def _parse_current(segments):
    # prefijo-grupo-editorial-publicación-checksum
    if len(segments) != 5:
        raise ISBNError(ErrorKind.INVALID_LENGTH, EMPTY_CODE)
    prefix, group, registrant, publication, checksum = segments
    if prefix not in GS1_PREFIXES:
        raise ISBNError(ErrorKind.INVALID_PREFIX, EMPTY_CODE)
    return ISBNCode(
        prefix=prefix,
        registration_group=group,
        registrant=registrant,
        publication=publication,
        checksum=checksum,
        is_legacy=False,
    )

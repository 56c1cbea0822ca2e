### src/utils_isbn.py
### Utilidades para normalizar ISBNs sueltos o columnas de un DataFrame

import pandas as pd

from isbn_code import parse
from isbn_errors import ErrorKind, ISBNError

def clean_isbn(isbn):
    """
    Prepara un valor para parse().

    - Nulos, NaN y cadenas vacías → None.
    - El resto se convierte a string sin espacios alrededor.
    - No corrige nada más: guiones, letras o dígitos sobrantes se dejan tal cual
      para que parse()/is_valid() los rechacen.

    Args:
        isbn (str|int|float): ISBN tal y como viene de la fuente.

    Returns:
        str | None: ISBN como texto o None si no hay valor.
    """
    # Nulos o NaN
    if isbn is None or (isinstance(isbn, float) and pd.isna(isbn)):
        return None

    s = str(isbn).strip()
    return s if s else None

def normalize_isbn(isbn):
    """
    Normaliza un ISBN: parsea, valida y, si es válido, lo pasa a ISBN-13.

    Args:
        isbn (str): ISBN a normalizar

    Returns:
        dict: {'isbn': str, 'isbn13': str, 'valid': bool,
               'type': 'isbn10'|'isbn13'|None, 'error': str|None}

    Example:
        >>> normalize_isbn("4-00-310101-4")
        {'isbn': 'ISBN4-00-310101-4', 'isbn13': 'ISBN978-4-00-310101-8', 'valid': True, 'type': 'isbn10', 'error': None}
    """
    try:
        code = parse(clean_isbn(isbn))
    except ISBNError as e:
        return {'isbn': None, 'isbn13': None, 'valid': False, 'type': None, 'error': e.kind.name}

    valid = code.is_valid()
    return {
        'isbn': code.format(),
        # Solo se actualiza si el checksum original es correcto
        'isbn13': code.update().format() if valid else None,
        'valid': valid,
        'type': 'isbn10' if code.is_legacy else 'isbn13',
        'error': None,
    }

def isbn10_to_isbn13(isbn10):
    """
    Convierte un ISBN-10 a ISBN-13 en forma canónica.

    Un ISBN-13 válido se devuelve normalizado, sin cambios.

    Args:
        isbn10 (str): ISBN-10 válido

    Returns:
        str: ISBN-13 o None si el input no es válido

    Example:
        >>> isbn10_to_isbn13("ISBN4-10-109205-2")
        'ISBN978-4-10-109205-8'
    """
    return normalize_isbn(isbn10)['isbn13']

def normalize_isbn_column(df, column):
    """
    Añade a una copia del DataFrame las columnas de normalización de `column`.

    Columnas nuevas: isbn_canonical, isbn13, isbn_type, isbn_valid, isbn_error.

    Args:
        df (pd.DataFrame): DataFrame
        column (str): Nombre de la columna con ISBNs

    Returns:
        pd.DataFrame: copia de df con las columnas añadidas
    """
    df_norm = df.copy()
    results = pd.DataFrame(
        [normalize_isbn(x) for x in df_norm[column]],
        index=df_norm.index,
        columns=['isbn', 'isbn13', 'valid', 'type', 'error'],
    )

    # Huecos siempre como None, sea cual sea el dtype que infiera pandas
    for col in ['isbn', 'isbn13', 'type', 'error']:
        results[col] = results[col].astype(object).where(results[col].notna(), None)

    df_norm['isbn_canonical'] = results['isbn']
    df_norm['isbn13'] = results['isbn13']
    df_norm['isbn_type'] = results['type']
    df_norm['isbn_valid'] = results['valid'].astype(bool)
    df_norm['isbn_error'] = results['error']
    return df_norm

def validate_isbn_column(df, column):
    """
    Valida una columna de ISBNs.

    Args:
        df (pd.DataFrame): DataFrame
        column (str): Nombre de la columna

    Returns:
        dict: Estadísticas de validación
    """
    if column not in df.columns:
        return {'error': f'Column {column} not found'}

    errors = {kind.name: 0 for kind in ErrorKind}
    total = int(df[column].notna().sum())
    if total == 0:
        return {
            'total_non_null': 0,
            'valid_count': 0,
            'valid_percentage': 0.0,
            'legacy_count': 0,
            'errors': errors,
        }

    valid_count = 0
    legacy_count = 0
    for value in df[column].dropna():
        result = normalize_isbn(value)
        if result['error']:
            errors[result['error']] += 1
            continue
        if result['valid']:
            valid_count += 1
        if result['type'] == 'isbn10':
            legacy_count += 1

    return {
        'total_non_null': total,
        'valid_count': valid_count,
        'valid_percentage': (valid_count / total) * 100,
        'legacy_count': legacy_count,
        'errors': errors,
    }

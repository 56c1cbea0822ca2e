###
### src/normalize_isbns.py
###

# ============================================================
# 0. IMPORTS
# ============================================================
import json
import os
import sys
from datetime import datetime
from pathlib import Path

import pandas as pd
from dotenv import find_dotenv, load_dotenv

from utils_isbn import normalize_isbn_column, validate_isbn_column

# .env y rutas relativas se buscan desde el directorio de ejecución
load_dotenv(find_dotenv(usecwd=True))
ISBN_INPUT_CSV = os.getenv("ISBN_INPUT_CSV", "landing/isbns.csv")
ISBN_COLUMN = os.getenv("ISBN_COLUMN", "isbn")
ISBN_OUTPUT_DIR = os.getenv("ISBN_OUTPUT_DIR", "standard")
ISBN_MIN_VALID_PCT = float(os.getenv("ISBN_MIN_VALID_PCT", "0"))


def resolver_ruta(ruta):
    """Rutas relativas → relativas al directorio de ejecución"""
    ruta = Path(ruta)
    return ruta if ruta.is_absolute() else Path.cwd() / ruta

# ============================================================
# 1. LECTURA
# ============================================================

def leer_csv(filepath):
    """Lee el CSV de entrada como texto (sin perder ceros a la izquierda ni la X)"""
    print(f"📖 Leyendo {filepath}...")

    df = pd.read_csv(filepath, dtype=str, encoding='utf-8')
    print(f"   ✓ {len(df)} registros")
    return df

# ============================================================
# 2. NORMALIZACIÓN
# ============================================================

def normalizar_df(df, column):
    """Parsea, valida y pasa a ISBN-13 la columna de ISBNs"""
    print(f"🔄 Normalizando columna '{column}'...")

    df_norm = normalize_isbn_column(df, column)

    validos = int(df_norm['isbn_valid'].sum())
    legacy = int((df_norm['isbn_type'] == 'isbn10').sum())
    errores = int(df_norm['isbn_error'].notna().sum())

    print(f"   ✓ {validos} ISBNs válidos")
    print(f"   ✓ {legacy} ISBN-10 convertidos a ISBN-13 (si eran válidos)")
    print(f"   ✓ {errores} valores no parseables")
    return df_norm

# ============================================================
# 3. QUALITY METRICS
# ============================================================

def generar_quality_metrics(df, column, run_ts):
    """Calcula las métricas de calidad de la columna de ISBNs"""
    print("📊 Generando métricas de calidad...")

    return {
        'run_ts': run_ts,
        'row_count': int(len(df)),
        'column': column,
        'validation': validate_isbn_column(df, column),
    }

# ============================================================
# 4. ASERCIONES BLOQUEANTES
# ============================================================

def assert_calidad(metrics, min_valid_pct):
    """Aserciones que deben cumplirse o el pipeline falla"""
    print("✅ Ejecutando aserciones bloqueantes...")

    validation = metrics['validation']

    # 1. La columna existe
    assert 'error' not in validation, f"❌ ERROR: {validation.get('error')}"
    print(f"   ✓ Columna '{metrics['column']}' presente")

    # 2. Porcentaje mínimo de ISBNs válidos
    pct = validation['valid_percentage']
    assert pct >= min_valid_pct, (
        f"❌ ERROR: Solo {pct:.1f}% de ISBNs válidos (mínimo {min_valid_pct:.1f}%)"
    )
    print(f"   ✓ ISBNs válidos: {pct:.1f}%")

    print("   ✅ Todas las aserciones pasadas")

# ============================================================
# 5. EMITIR OUTPUTS
# ============================================================

def guardar_csv(df, full_path):
    """Guarda DataFrame como CSV"""
    df.to_csv(full_path, index=False, encoding='utf-8')
    size_kb = os.path.getsize(full_path) / 1024
    print(f"   ✓ {full_path} ({size_kb:.2f} KB)")


def guardar_json(data, full_path):
    """Guarda dict como JSON"""
    with open(full_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    size_kb = os.path.getsize(full_path) / 1024
    print(f"   ✓ {full_path} ({size_kb:.2f} KB)")

# ============================================================
# MAIN PIPELINE
# ============================================================

def main():
    print("=" * 60)
    print("  NORMALIZACIÓN DE ISBNs")
    print("=" * 60)
    print()

    run_ts = datetime.now().isoformat()
    output_dir = resolver_ruta(ISBN_OUTPUT_DIR)

    try:
        os.makedirs(output_dir, exist_ok=True)

        # 1. LECTURA
        df_raw = leer_csv(resolver_ruta(ISBN_INPUT_CSV))
        print()

        # 2. QUALITY METRICS (sobre los datos de entrada)
        metrics = generar_quality_metrics(df_raw, ISBN_COLUMN, run_ts)
        print()

        # 3. ASERCIONES
        assert_calidad(metrics, ISBN_MIN_VALID_PCT)
        print()

        # 4. NORMALIZACIÓN
        df_norm = normalizar_df(df_raw, ISBN_COLUMN)
        print()

        # 5. EMITIR OUTPUTS
        print("💾 Guardando outputs...")
        guardar_csv(df_norm, output_dir / 'isbns_normalized.csv')
        guardar_json(metrics, output_dir / 'isbn_quality.json')

        print()
        print("=" * 60)
        print("  ✅ NORMALIZACIÓN COMPLETADA CON ÉXITO")
        print("=" * 60)
        print(f"   - Registros: {metrics['row_count']}")
        print(f"   - ISBNs válidos: {metrics['validation']['valid_percentage']:.1f}%")
        print("=" * 60)

    except Exception as e:
        print()
        print("=" * 60)
        print("  ❌ ERROR EN LA NORMALIZACIÓN")
        print("=" * 60)
        print(f"  {str(e)}")
        print("=" * 60)
        sys.exit(1)


if __name__ == '__main__':
    main()

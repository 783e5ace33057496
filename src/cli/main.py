"""
Punto de entrada CLI: camt-export.

Uso:
    # Convertir un solo extracto CAMT a CSV
    camt-export /ruta/extracto.xml -o /ruta/salida

    # Convertir todos los XML de una carpeta (genera además un consolidado)
    camt-export /ruta/carpeta_camt -o /ruta/salida --format xlsx

    # Sin -o, la salida se genera en el mismo directorio del XML
    camt-export /ruta/extracto.xml --delimiter , --bom

Este módulo es el ÚNICO lugar donde se ensamblan los componentes:
- Crea las instancias concretas (CamtParser, tabla GVC, writers, etc.)
- Las inyecta en el StatementProcessor.
- Ejecuta el procesamiento.

No contiene lógica de negocio, solo "fontanería" (wiring).
"""

import argparse
import sys
from pathlib import Path

from src.adapters.input.camt.camt_parser import CamtParser
from src.adapters.input.reference_codes.embedded_gvc_table import get_default_table
from src.adapters.output.loggers.console_logger import ConsoleLogger
from src.domain.exceptions import OutputError
from src.domain.models.export_options import ExportOptions
from src.domain.services.row_projector import RowProjector
from src.domain.services.statement_processor import StatementProcessor
from src.infrastructure.registry import create_default_registry


def main(argv: list[str] | None = None) -> None:
    """Punto de entrada principal del CLI."""
    args = _parse_args(argv)

    input_path = Path(args.input_path)
    output_dir = Path(args.output_dir) if args.output_dir else None

    try:
        options = _build_options(args)
    except ValueError as e:
        print(f"❌ Opciones inválidas: {e}")
        sys.exit(2)

    # --- Ensamblar componentes ---
    logger = ConsoleLogger()
    writer_registry = create_default_registry()
    writer = writer_registry.get(args.format)

    processor = StatementProcessor(
        parser=CamtParser(strict_amounts=options.strict_amounts),
        projector=RowProjector(lookup=get_default_table()),
        logger=logger,
        options=options,
    )

    # --- Determinar directorio de salida ---
    if output_dir is None:
        output_dir = input_path.parent if input_path.is_file() else input_path

    # --- Procesar ---
    print("=" * 60)
    print("CAMT STATEMENT EXPORT")
    print("=" * 60)
    print(f"  Entrada:  {input_path}")
    print(f"  Salida:   {output_dir}")
    print(f"  Formato:  {writer.format_name}")
    print()

    if input_path.is_file():
        resultado = processor.process_file(input_path)
        if resultado is None:
            print("\n❌ No se pudo procesar el archivo.")
            sys.exit(1)
        resultados = [resultado]

    elif input_path.is_dir():
        resultados = processor.process_directory(input_path)
        if not resultados:
            print("\n❌ No se procesó ningún archivo.")
            sys.exit(1)

    else:
        print(f"❌ La ruta no existe: {input_path}")
        sys.exit(1)

    output_dir.mkdir(parents=True, exist_ok=True)

    try:
        for resultado in resultados:
            nombre_base = Path(resultado.archivo_origen).stem
            output_file = output_dir / f"movimientos_{nombre_base}{writer.extension}"
            logger.log_output_written(writer.write_single(resultado, output_file, options))

        # Consolidado si hay más de un resultado
        if len(resultados) > 1:
            consolidado = output_dir / f"consolidado{writer.extension}"
            logger.log_output_written(writer.write_consolidated(resultados, consolidado, options))
    except OutputError as e:
        print(f"\n❌ {e}")
        sys.exit(1)

    # --- Resumen final ---
    logger.print_summary()


def _build_options(args: argparse.Namespace) -> ExportOptions:
    """Traduce los argumentos a ExportOptions (valida el delimitador)."""
    return ExportOptions(
        delimiter=args.delimiter,
        include_header=not args.no_header,
        write_utf8_bom=args.bom,
        signed_amount=not args.unsigned_amount,
        credit_as_bool=not args.credit_text,
        remittance_separator=args.remittance_separator,
        use_effective_credit=args.effective_credit,
        prefer_ultimate_counterparty=not args.prefer_direct,
        unicode_normalization=not args.ascii_only,
        sort_rows=not args.no_sort,
        use_booking_date=not args.value_date,
        include_fingerprint=args.fingerprint,
        strict_amounts=args.strict_amounts,
    )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parsea los argumentos de línea de comandos."""
    parser = argparse.ArgumentParser(
        description="Convierte extractos bancarios CAMT (camt.052/053/054) a CSV o Excel",
        epilog="Ejemplo: camt-export /ruta/camt -o /ruta/salida --format xlsx",
    )

    parser.add_argument(
        "input_path",
        help="Ruta a un archivo XML o a un directorio con archivos XML",
    )
    parser.add_argument(
        "-o",
        "--output-dir",
        dest="output_dir",
        help="Directorio de salida. Si no se especifica, se usa el mismo "
        "directorio del XML.",
    )
    parser.add_argument(
        "--format",
        choices=["csv", "xlsx"],
        default="csv",
        help="Formato de salida (default: csv)",
    )

    # --- Presentación ---
    parser.add_argument("--delimiter", default=";", help="Delimitador CSV (default: ';')")
    parser.add_argument("--no-header", action="store_true", help="No escribir encabezado")
    parser.add_argument("--bom", action="store_true", help="Escribir BOM UTF-8 al inicio")

    # --- Proyección ---
    parser.add_argument(
        "--unsigned-amount",
        action="store_true",
        help="Amount siempre positivo (la dirección solo en CreditDebit)",
    )
    parser.add_argument(
        "--credit-text",
        action="store_true",
        help="Columna CreditDebit con CRDT/DBIT en vez de IsCredit 1/0",
    )
    parser.add_argument(
        "--remittance-separator",
        default="",
        help="Texto para unir varias líneas de remesa (default: ninguno)",
    )
    parser.add_argument(
        "--effective-credit",
        action="store_true",
        help="La columna de dirección muestra la dirección después de la reversión",
    )
    parser.add_argument(
        "--prefer-direct",
        action="store_true",
        help="Nombre de contraparte: Dbtr/Cdtr antes que UltmtDbtr/UltmtCdtr",
    )
    parser.add_argument(
        "--ascii-only",
        action="store_true",
        help="Normalizar texto libre solo con reglas ASCII",
    )

    # --- Orden, huella y montos ---
    parser.add_argument("--no-sort", action="store_true", help="Mantener el orden del documento")
    parser.add_argument(
        "--value-date",
        action="store_true",
        help="Ordenar por fecha valor en vez de fecha de contabilización",
    )
    parser.add_argument(
        "--fingerprint",
        action="store_true",
        help="Agregar columna Fingerprint (SHA-256) para detectar duplicados",
    )
    parser.add_argument(
        "--strict-amounts",
        action="store_true",
        help="Fallar si un monto no cabe en 64 bits (por defecto se toma 0)",
    )

    return parser.parse_args(argv)


if __name__ == "__main__":
    main()

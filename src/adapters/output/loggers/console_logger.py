"""
Adaptador de salida: Logger a consola.

Implementación simple de ProcessLogger que imprime eventos a stdout con
un formato consistente y un resumen final.

Útil para:
- Ejecución manual desde terminal.
- Tests: get_summary() expone los contadores sin leer stdout.

Para un pipeline desatendido se podría implementar un FileLogger que
implemente la misma interfaz sin cambiar el dominio.
"""

from pathlib import Path

from src.domain.ports.process_logger import ProcessLogger


class ConsoleLogger(ProcessLogger):
    """Logger que imprime eventos de procesamiento a consola."""

    def __init__(self) -> None:
        self._archivos_recibidos: int = 0
        self._archivos_procesados: int = 0
        self._archivos_descartados: int = 0
        self._total_filas: int = 0
        self._tipos_cambio_ajustados: int = 0
        self._salidas: list[str] = []
        self._errores: list[dict] = []

    # --- Fase 1: Recepción ---

    def log_file_received(self, file_path: Path, file_type: str) -> None:
        self._archivos_recibidos += 1
        print(f"  📄 Recibido: {file_path.name} ({file_type})")

    def log_file_skipped(self, file_path: Path, reason: str) -> None:
        self._archivos_descartados += 1
        print(f"  ⏭️  Descartado: {file_path.name}: {reason}")

    # --- Fase 2: Parseo y proyección ---

    def log_document_parsed(
        self, file_path: Path, kind: str, num_statements: int, num_entries: int
    ) -> None:
        print(
            f"  🔍 {kind}: {file_path.name}, "
            f"{num_statements} statements, {num_entries} entradas"
        )

    def log_fx_rate_adjusted(
        self, file_path: Path, entry_ordinal: int, supplied: float, effective: float, inverted: bool
    ) -> None:
        self._tipos_cambio_ajustados += 1
        motivo = "invertido" if inverted else "reemplazado"
        print(
            f"  ⚠️  Tipo de cambio {motivo} en {file_path.name} "
            f"(entrada {entry_ordinal}): informado {supplied}, usado {effective:.6f}"
        )

    def log_rows_exported(self, file_path: Path, num_rows: int) -> None:
        self._archivos_procesados += 1
        self._total_filas += num_rows
        print(f"  ✅ Completado: {file_path.name}, {num_rows} filas")

    def log_error(self, file_path: Path, error: Exception) -> None:
        self._errores.append({"archivo": str(file_path.name), "error": str(error)})
        print(f"  ❌ Error: {file_path.name}: {error}")

    # --- Fase 3: Escritura ---

    def log_output_written(self, output_path: Path) -> None:
        self._salidas.append(str(output_path))
        print(f"  💾 Generado: {output_path}")

    # --- Resumen ---

    def get_summary(self) -> dict:
        return {
            "archivos_recibidos": self._archivos_recibidos,
            "archivos_procesados": self._archivos_procesados,
            "archivos_descartados": self._archivos_descartados,
            "archivos_con_error": len(self._errores),
            "total_filas": self._total_filas,
            "tipos_cambio_ajustados": self._tipos_cambio_ajustados,
            "salidas": list(self._salidas),
            "errores": list(self._errores),
        }

    def print_summary(self) -> None:
        """Imprime el resumen final del procesamiento."""
        print("\n" + "=" * 60)
        print("RESUMEN DE PROCESAMIENTO")
        print("=" * 60)
        print(f"  Archivos recibidos:      {self._archivos_recibidos}")
        print(f"  Archivos procesados:     {self._archivos_procesados}")
        print(f"  Archivos descartados:    {self._archivos_descartados}")
        print(f"  Archivos con error:      {len(self._errores)}")
        print(f"  Total filas:             {self._total_filas}")
        print(f"  Tipos de cambio ajust.:  {self._tipos_cambio_ajustados}")

        if self._errores:
            print("\n  ERRORES:")
            for err in self._errores:
                print(f"    - {err['archivo']}: {err['error']}")

        print("=" * 60)

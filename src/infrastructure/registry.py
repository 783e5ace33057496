"""
Registro de writers de salida disponibles.

Centraliza la relación formato → writer_instance.
Agregar un nuevo formato al sistema requiere solo 2 pasos:
1. Crear la clase XxxWriter que implemente OutputWriter.
2. Registrarla aquí con register() o agregarla a create_default_registry().

¿Por qué un registro separado y no hardcodear en el CLI?
Porque el CLI no debe saber qué formatos existen. Solo pide "dame el
writer para csv" y el registro se lo da. Agregar formato = agregar
código, no modificar.
"""

from src.domain.ports.output_writer import OutputWriter


class OutputWriterRegistry:
    """Registro de writers de salida disponibles."""

    def __init__(self) -> None:
        self._writers: dict[str, OutputWriter] = {}

    def register(self, writer: OutputWriter) -> None:
        """Registra un writer. La clave es writer.format_name (minúsculas).

        Args:
            writer: Instancia de un OutputWriter concreto.

        Raises:
            ValueError: Si ya existe un writer para ese formato.
        """
        name = writer.format_name.lower()
        if name in self._writers:
            raise ValueError(
                f"Ya existe un writer registrado para '{name}': "
                f"{type(self._writers[name]).__name__}. "
                f"No se puede registrar {type(writer).__name__}."
            )
        self._writers[name] = writer

    def get(self, format_name: str) -> OutputWriter | None:
        """Obtiene el writer para un formato.

        Args:
            format_name: Nombre del formato (case-insensitive), p.ej. "CSV".

        Returns:
            OutputWriter si existe, None si no hay writer para ese formato.
        """
        return self._writers.get(format_name.lower())

    @property
    def available_formats(self) -> list[str]:
        """Lista de formatos con writer disponible."""
        return sorted(self._writers.keys())

    def __len__(self) -> int:
        return len(self._writers)


def create_default_registry() -> OutputWriterRegistry:
    """Crea un registro con todos los writers disponibles.

    Returns:
        OutputWriterRegistry con csv y xlsx registrados.
    """
    registry = OutputWriterRegistry()

    # Se importan aquí (no al inicio del archivo) para que si un writer
    # tiene un error de importación, no rompa todo el registro.

    from src.adapters.output.writers.csv_writer import CsvWriter

    registry.register(CsvWriter())

    from src.adapters.output.writers.excel_writer import ExcelWriter

    registry.register(ExcelWriter())

    return registry

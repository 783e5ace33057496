"""
Tests para ExcelWriter.

Un .xlsx es un zip de XML; se inspecciona con zipfile para no depender
de un lector de Excel.
"""

import zipfile

import pytest

from src.adapters.output.writers.excel_writer import ExcelWriter
from src.domain.exceptions import OutputError
from src.domain.models import ExportOptions


def _contenido(ruta) -> str:
    """Libro y cadenas compartidas concatenados como texto."""
    with zipfile.ZipFile(ruta) as libro:
        partes = [libro.read("xl/workbook.xml")]
        if "xl/sharedStrings.xml" in libro.namelist():
            partes.append(libro.read("xl/sharedStrings.xml"))
    return b"".join(partes).decode("utf-8")


class TestExcelWriter:
    @pytest.fixture
    def writer(self):
        return ExcelWriter()

    def test_genera_xlsx_con_dos_hojas(self, writer, resultado_dos_tx, tmp_path):
        ruta = writer.write_single(resultado_dos_tx, tmp_path / "salida.xlsx", ExportOptions())

        assert zipfile.is_zipfile(ruta)
        contenido = _contenido(ruta)
        assert 'name="Resumen"' in contenido
        assert 'name="Movimientos"' in contenido

    def test_valores_como_texto(self, writer, resultado_dos_tx, tmp_path):
        ruta = writer.write_single(resultado_dos_tx, tmp_path / "salida.xlsx", ExportOptions())

        contenido = _contenido(ruta)
        assert "Müller GmbH" in contenido
        assert "100.00" in contenido
        assert "dos_tx.xml" in contenido

    def test_agrega_extension(self, writer, resultado_dos_tx, tmp_path):
        ruta = writer.write_single(resultado_dos_tx, tmp_path / "salida", ExportOptions())
        assert ruta.suffix == ".xlsx"

    def test_consolidado(self, writer, resultado_dos_tx, resultado_fx, tmp_path):
        ruta = writer.write_consolidated(
            [resultado_dos_tx, resultado_fx], tmp_path / "consolidado.xlsx", ExportOptions()
        )

        contenido = _contenido(ruta)
        assert "fx.xml" in contenido
        assert "ZINS-Q1" in contenido

    def test_huella(self, writer, resultado_dos_tx, tmp_path):
        opciones = ExportOptions(include_fingerprint=True)
        ruta = writer.write_single(resultado_dos_tx, tmp_path / "salida.xlsx", opciones)
        assert "Fingerprint" in _contenido(ruta)

    def test_consolidado_vacio(self, writer, tmp_path):
        with pytest.raises(OutputError):
            writer.write_consolidated([], tmp_path / "consolidado.xlsx", ExportOptions())

    def test_ruta_invalida(self, writer, resultado_dos_tx, tmp_path):
        bloqueo = tmp_path / "archivo"
        bloqueo.write_text("no soy un directorio", encoding="utf-8")

        with pytest.raises(OutputError):
            writer.write_single(resultado_dos_tx, bloqueo / "salida.xlsx", ExportOptions())

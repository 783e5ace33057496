"""
Tests para CsvWriter.

Se lee el archivo generado como texto: lo que importa es el formato
exacto (delimitador, comillas, BOM, fin de línea), no lo que pandas
interpretaría al volver a leerlo.
"""

import pytest

from src.adapters.output.writers.csv_writer import CsvWriter, escape_cell
from src.domain.exceptions import OutputError
from src.domain.models import (
    DocKind,
    Document,
    ExportField,
    ExportOptions,
    ExportRow,
    FieldValue,
    ResultadoExportacion,
)
from src.domain.services.row_normalizer import fingerprint_sha256


def _leer(path) -> str:
    with open(path, encoding="utf-8", newline="") as fh:
        return fh.read()


def _resultado_con(valor: str) -> ResultadoExportacion:
    fila = ExportRow.from_mapping({ExportField.REMITTANCE_LINE: FieldValue(valor)})
    return ResultadoExportacion(documento=Document(kind=DocKind.STATEMENT), filas=(fila,))


class TestEscapeCell:
    @pytest.mark.parametrize(
        "valor, esperado",
        [
            ("EUR", "EUR"),
            ("a;b", '"a;b"'),
            ("a\rb", '"a\rb"'),
            ("a\nb", '"a\nb"'),
            ('di "hola"', '"di ""hola"""'),
            ("a,b", "a,b"),
            ("", ""),
        ],
    )
    def test_escape(self, valor, esperado):
        assert escape_cell(valor, ";") == esperado

    def test_depende_del_delimitador(self):
        assert escape_cell("a,b", ",") == '"a,b"'


class TestCsvWriter:
    @pytest.fixture
    def writer(self):
        return CsvWriter()

    def test_formato_por_defecto(self, writer, resultado_dos_tx, tmp_path):
        ruta = writer.write_single(resultado_dos_tx, tmp_path / "salida.csv", ExportOptions())

        lineas = _leer(ruta).split("\n")
        assert lineas[0].startswith("BookingDate;ValueDate;Amount;IsCredit;Currency;")
        assert lineas[0].endswith(";EntryOrdinal;TxOrdinal")
        assert lineas[-1] == ""
        assert len(lineas) == 4

    def test_valores_de_la_primera_fila(self, writer, resultado_dos_tx, tmp_path):
        ruta = writer.write_single(resultado_dos_tx, tmp_path / "salida.csv", ExportOptions())

        campos = _leer(ruta).split("\n")[1].split(";")
        assert len(campos) == 33
        assert campos[ExportField.AMOUNT] == "100.00"
        assert campos[ExportField.COUNTERPARTY_NAME] == "Müller GmbH"
        assert campos[ExportField.COUNTERPARTY_IBAN] == "de02 1001 0010 0006 8201 01"
        assert campos[ExportField.RUNNING_BALANCE] == "100"
        assert campos[ExportField.CLOSING_BALANCE] == " "
        assert campos[ExportField.GVC_CODE] == "166"

    def test_sin_retorno_de_carro(self, writer, resultado_dos_tx, tmp_path):
        ruta = writer.write_single(resultado_dos_tx, tmp_path / "salida.csv", ExportOptions())
        assert b"\r" not in ruta.read_bytes()

    def test_sin_encabezado(self, writer, resultado_dos_tx, tmp_path):
        opciones = ExportOptions(include_header=False)
        ruta = writer.write_single(resultado_dos_tx, tmp_path / "salida.csv", opciones)

        assert _leer(ruta).startswith("2024-03-15;")

    def test_credit_debit_como_texto(self, writer, resultado_dos_tx, tmp_path):
        opciones = ExportOptions(credit_as_bool=False)
        ruta = writer.write_single(resultado_dos_tx, tmp_path / "salida.csv", opciones)

        assert ";CreditDebit;" in _leer(ruta).split("\n")[0]

    def test_delimitador(self, writer, resultado_dos_tx, tmp_path):
        ruta = writer.write_single(
            resultado_dos_tx, tmp_path / "salida.csv", ExportOptions(delimiter="\t")
        )
        assert _leer(ruta).split("\n")[0].count("\t") == 32

    def test_bom(self, writer, resultado_dos_tx, tmp_path):
        con_bom = writer.write_single(
            resultado_dos_tx, tmp_path / "bom.csv", ExportOptions(write_utf8_bom=True)
        )
        sin_bom = writer.write_single(resultado_dos_tx, tmp_path / "sin.csv", ExportOptions())

        assert con_bom.read_bytes().startswith(b"\xef\xbb\xbf")
        assert not sin_bom.read_bytes().startswith(b"\xef\xbb\xbf")

    def test_comillas_cuando_hay_delimitador(self, writer, tmp_path):
        ruta = writer.write_single(
            _resultado_con('Rechnung; "Nr" 5'), tmp_path / "salida.csv", ExportOptions()
        )
        assert ';"Rechnung; ""Nr"" 5";' in _leer(ruta)

    def test_comillas_cuando_hay_salto_de_linea(self, writer, tmp_path):
        opciones = ExportOptions(include_header=False)
        ruta = writer.write_single(_resultado_con("linea 1\nlinea 2"), tmp_path / "salida.csv", opciones)
        assert '"linea 1\nlinea 2"' in _leer(ruta)

    def test_comillas_cuando_hay_retorno_de_carro(self, writer, tmp_path):
        opciones = ExportOptions(include_header=False)
        ruta = writer.write_single(_resultado_con("a\rb"), tmp_path / "salida.csv", opciones)
        assert b';"a\rb";' in ruta.read_bytes()

    def test_comillas_internas_sin_delimitador(self, writer, tmp_path):
        opciones = ExportOptions(include_header=False)
        ruta = writer.write_single(_resultado_con('x"y'), tmp_path / "salida.csv", opciones)
        assert ';"x""y";' in _leer(ruta)

    def test_sin_comillas_innecesarias(self, writer, resultado_dos_tx, tmp_path):
        ruta = writer.write_single(resultado_dos_tx, tmp_path / "salida.csv", ExportOptions())
        assert '"' not in _leer(ruta)

    def test_agrega_extension(self, writer, resultado_dos_tx, tmp_path):
        ruta = writer.write_single(resultado_dos_tx, tmp_path / "salida.txt", ExportOptions())
        assert ruta.name == "salida.csv"
        assert ruta.exists()

    def test_crea_directorios(self, writer, resultado_dos_tx, tmp_path):
        ruta = writer.write_single(resultado_dos_tx, tmp_path / "a" / "b" / "salida.csv", ExportOptions())
        assert ruta.exists()

    def test_huella(self, writer, resultado_dos_tx, tmp_path):
        opciones = ExportOptions(include_fingerprint=True)
        ruta = writer.write_single(resultado_dos_tx, tmp_path / "salida.csv", opciones)

        lineas = _leer(ruta).split("\n")
        assert lineas[0].endswith(";TxOrdinal;Fingerprint")
        huella = lineas[1].split(";")[-1]
        assert len(huella) == 64

    def test_huella_sigue_la_regla_de_texto_libre(self, writer, tmp_path):
        resultado = _resultado_con("ÄRGER")
        opciones = ExportOptions(
            include_header=False, include_fingerprint=True, unicode_normalization=False
        )
        ruta = writer.write_single(resultado, tmp_path / "salida.csv", opciones)

        huella = _leer(ruta).split("\n")[0].split(";")[-1]
        fila = resultado.filas[0]
        assert huella == fingerprint_sha256(fila, unicode_normalization=False)
        assert huella != fingerprint_sha256(fila)

    def test_consolidado_en_orden(self, writer, resultado_dos_tx, resultado_fx, tmp_path):
        ruta = writer.write_consolidated(
            [resultado_fx, resultado_dos_tx], tmp_path / "consolidado.csv", ExportOptions()
        )

        lineas = [l for l in _leer(ruta).split("\n") if l]
        assert len(lineas) == 5
        assert lineas[1].split(";")[ExportField.BANK_REF] == "ZINS-Q1"
        assert lineas[-1].split(";")[ExportField.COUNTERPARTY_NAME] == "Stadtwerke Holding"

    def test_consolidado_vacio(self, writer, tmp_path):
        with pytest.raises(OutputError, match="No hay resultados"):
            writer.write_consolidated([], tmp_path / "consolidado.csv", ExportOptions())

    def test_ruta_invalida(self, writer, resultado_dos_tx, tmp_path):
        bloqueo = tmp_path / "archivo"
        bloqueo.write_text("no soy un directorio", encoding="utf-8")

        with pytest.raises(OutputError):
            writer.write_single(resultado_dos_tx, bloqueo / "salida.csv", ExportOptions())

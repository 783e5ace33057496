"""
Tests para src.domain.shared.money

Cada caso de prueba viene de un formato real encontrado en extractos CAMT:
- "1234.56"     → formato XML estándar (la mayoría de bancos)
- "1.234,56"    → exportaciones con locale alemán
- "1'234.56"    → bancos suizos
- "(50,00)"     → convención contable de algunos ERP
"""

import pytest

from src.domain.exceptions import DesbordamientoError
from src.domain.models.currency_amount import CurrencyAmount
from src.domain.shared.money import (
    currency_exponent,
    format_amount,
    format_scaled,
    fraction_digits,
    minor_to_major,
    parse_decimal,
    parse_scaled,
)


class TestCurrencyExponent:
    def test_euro_dos_decimales(self):
        assert currency_exponent("EUR") == 2

    def test_yen_sin_decimales(self):
        assert currency_exponent("JPY") == 0

    def test_dinar_kuwaiti_tres_decimales(self):
        assert currency_exponent("KWD") == 3

    def test_moneda_vacia_usa_default(self):
        assert currency_exponent("") == 2

    def test_moneda_desconocida_usa_default(self):
        assert currency_exponent("XYZ") == 2


class TestParseDecimal:
    """Pruebas para parse_decimal (nunca lanza en modo normal)."""

    # --- Formatos estándar ---

    def test_monto_simple(self):
        assert parse_decimal("1234.56", "EUR") == 123456

    def test_monto_entero(self):
        assert parse_decimal("70", "EUR") == 7000

    def test_monto_cero(self):
        assert parse_decimal("0.00", "EUR") == 0

    # --- Separadores localizados ---

    def test_coma_decimal_con_punto_de_miles(self):
        assert parse_decimal("1.234,56", "EUR") == 123456

    def test_punto_decimal_con_coma_de_miles(self):
        assert parse_decimal("1,234.56", "EUR") == 123456

    def test_ambos_formatos_dan_el_mismo_valor(self):
        assert parse_decimal("1.234,56", "EUR") == parse_decimal("1,234.56", "EUR")

    def test_solo_coma_decimal(self):
        assert parse_decimal("25,00", "EUR") == 2500

    def test_apostrofe_suizo(self):
        assert parse_decimal("1'234.56", "CHF") == 123456

    def test_guion_bajo_como_agrupador(self):
        assert parse_decimal("1_000.00", "EUR") == 100000

    def test_espacio_duro(self):
        assert parse_decimal("1\u00a0234,56", "EUR") == 123456

    def test_espacios_alrededor(self):
        assert parse_decimal("  12.50\n", "EUR") == 1250

    # --- Signos ---

    def test_parentesis_es_negativo(self):
        assert parse_decimal("(50,00)", "EUR") == -5000

    def test_signo_menos(self):
        assert parse_decimal("-30.00", "EUR") == -3000

    def test_signo_mas(self):
        assert parse_decimal("+30.00", "EUR") == 3000

    def test_menos_dentro_de_parentesis_se_anula(self):
        assert parse_decimal("(-5.00)", "EUR") == 500

    # --- Exponente de la moneda ---

    def test_fraccion_se_trunca(self):
        assert parse_decimal("12.5", "JPY") == 12

    def test_fraccion_se_rellena(self):
        assert parse_decimal("1.5", "KWD") == 1500

    def test_fraccion_larga_se_trunca_sin_redondear(self):
        assert parse_decimal("0.999", "EUR") == 99

    def test_sin_parte_entera(self):
        assert parse_decimal(".50", "EUR") == 50

    # --- Entradas inválidas → 0 ---

    @pytest.mark.parametrize("texto", ["", "abc", "12a.00", "1.2.x", "--5", "٣.٠٠"])
    def test_invalido_devuelve_cero(self, texto):
        assert parse_decimal(texto, "EUR") == 0

    # --- Desbordamiento ---

    def test_desbordamiento_devuelve_cero(self):
        assert parse_decimal("99999999999999999999.00", "EUR") == 0

    def test_desbordamiento_estricto_lanza(self):
        with pytest.raises(DesbordamientoError, match="fuera de rango"):
            parse_decimal("99999999999999999999.00", "EUR", strict=True)

    def test_valor_grande_valido_no_lanza(self):
        assert parse_decimal("92233720368547758.07", "EUR", strict=True) == 2**63 - 1


class TestFormatAmount:
    def test_positivo(self):
        assert format_amount(CurrencyAmount("EUR", 123456)) == "1234.56"

    def test_negativo(self):
        assert format_amount(CurrencyAmount("EUR", -5000)) == "-50.00"

    def test_centavos_con_cero_inicial(self):
        assert format_amount(CurrencyAmount("EUR", 5)) == "0.05"

    def test_coma_decimal(self):
        assert format_amount(CurrencyAmount("EUR", 5), decimal_comma=True) == "0,05"

    def test_yen_sin_punto(self):
        assert format_amount(CurrencyAmount("JPY", 1200)) == "1200"

    def test_tres_decimales(self):
        assert format_amount(CurrencyAmount("KWD", 1500)) == "1.500"

    def test_monto_vacio(self):
        assert format_amount(CurrencyAmount()) == "0.00"

    @pytest.mark.parametrize(
        "texto,moneda",
        [("1234.56", "EUR"), ("-0.01", "EUR"), ("1200", "JPY"), ("7.125", "BHD")],
    )
    def test_ida_y_vuelta(self, texto, moneda):
        assert format_amount(CurrencyAmount(moneda, parse_decimal(texto, moneda))) == texto


class TestMinorToMajor:
    def test_euro(self):
        assert minor_to_major(CurrencyAmount("EUR", 9200)) == pytest.approx(92.0)

    def test_yen(self):
        assert minor_to_major(CurrencyAmount("JPY", 150)) == pytest.approx(150.0)


class TestEnterosEscalados:
    """fraction_digits / parse_scaled / format_scaled (saldo recalculado)."""

    def test_digitos_fraccion(self):
        assert fraction_digits("100.00") == 2

    def test_digitos_fraccion_sin_punto(self):
        assert fraction_digits("1200") == 0

    def test_parse_scaled_rellena(self):
        assert parse_scaled("123.4", 2) == 12340

    def test_parse_scaled_trunca(self):
        assert parse_scaled("1.239", 2) == 123

    def test_parse_scaled_invalido(self):
        assert parse_scaled("abc", 2) == 0

    def test_format_scaled_quita_ceros(self):
        assert format_scaled(7000, 2) == "70"

    def test_format_scaled_negativo(self):
        assert format_scaled(-1250, 2) == "-12.5"

    def test_format_scaled_menor_que_uno(self):
        assert format_scaled(5, 3) == "0.005"

    def test_format_scaled_cero(self):
        assert format_scaled(0, 2) == "0"

    def test_format_scaled_escala_cero(self):
        assert format_scaled(-42, 0) == "-42"

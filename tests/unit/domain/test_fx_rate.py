"""
Tests para src.domain.shared.fx_rate

Caso central: instruido 100.00 USD, liquidado 92.00 EUR. El tipo
derivado es 0.92 EUR por USD; un banco que informa 1.0870 lo está dando
al revés (USD por EUR).
"""

import pytest

from src.domain.models.currency_amount import CurrencyAmount
from src.domain.models.fx_rate_info import FxRateInfo
from src.domain.shared.fx_rate import derived_rate, parse_exchange_rate, reconcile_ccyxchg

USD_100 = CurrencyAmount("USD", 10000)
EUR_92 = CurrencyAmount("EUR", 9200)


def _fx(rate: float = 0.0, decimales: int = 0) -> FxRateInfo:
    return FxRateInfo(
        src_ccy="USD",
        trgt_ccy="EUR",
        rate=rate,
        has=rate > 0,
        supplied_rate=rate,
        rate_decimals=decimales,
    )


class TestParseExchangeRate:
    def test_punto_decimal(self):
        assert parse_exchange_rate("1.0870") == (pytest.approx(1.087), 4)

    def test_coma_decimal(self):
        assert parse_exchange_rate("1,5") == (pytest.approx(1.5), 1)

    def test_entero(self):
        assert parse_exchange_rate("2") == (pytest.approx(2.0), 0)

    @pytest.mark.parametrize("texto", ["", "n/a", "nan", "inf"])
    def test_invalido(self, texto):
        assert parse_exchange_rate(texto) == (0.0, 0)


class TestDerivedRate:
    def test_destino_entre_origen(self):
        assert derived_rate(USD_100, EUR_92) == pytest.approx(0.92)

    def test_falta_un_monto(self):
        assert derived_rate(None, EUR_92) == 0.0

    def test_monto_en_cero(self):
        assert derived_rate(CurrencyAmount("USD", 0), EUR_92) == 0.0

    def test_destino_en_cero(self):
        assert derived_rate(USD_100, CurrencyAmount("EUR", 0)) == 0.0

    def test_sin_moneda(self):
        assert derived_rate(CurrencyAmount("", 10000), EUR_92) == 0.0

    def test_exponentes_distintos(self):
        """10000 JPY → 61.50 EUR: los exponentes de cada moneda cuentan."""
        assert derived_rate(CurrencyAmount("JPY", 10000), CurrencyAmount("EUR", 6150)) == (
            pytest.approx(0.00615)
        )


class TestReconcileCcyXchg:
    def test_tipo_invertido_se_detecta(self):
        resultado = reconcile_ccyxchg(_fx(1.0870, 4), USD_100, EUR_92)

        assert resultado.inverted is True
        assert resultado.rate == pytest.approx(0.92)
        assert resultado.supplied_rate == pytest.approx(1.087)

    def test_tipo_directo_se_conserva(self):
        resultado = reconcile_ccyxchg(_fx(0.92, 2), USD_100, EUR_92)

        assert resultado.inverted is False
        assert resultado.rate == pytest.approx(0.92)

    def test_reciproco_exacto_sin_decimales_informados(self):
        resultado = reconcile_ccyxchg(_fx(1 / 0.92), USD_100, EUR_92)

        assert resultado.inverted is True
        assert resultado.rate == pytest.approx(0.92)

    def test_tipo_inverosimil_se_reemplaza(self):
        resultado = reconcile_ccyxchg(_fx(3.5, 1), USD_100, EUR_92)

        assert resultado.inverted is False
        assert resultado.rate == pytest.approx(0.92)
        assert resultado.supplied_rate == pytest.approx(3.5)

    def test_sin_tipo_informado_se_adopta_derivado(self):
        resultado = reconcile_ccyxchg(_fx(), USD_100, EUR_92)

        assert resultado.has is True
        assert resultado.rate == pytest.approx(0.92)

    def test_sin_montos_no_cambia(self):
        fx = _fx(1.0870, 4)
        assert reconcile_ccyxchg(fx, None, None) == fx

    def test_no_modifica_el_original(self):
        fx = _fx(1.0870, 4)
        reconcile_ccyxchg(fx, USD_100, EUR_92)
        assert fx.inverted is False

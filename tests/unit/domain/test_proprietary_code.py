"""
Tests para src.domain.shared.proprietary_code
"""

from src.domain.shared.proprietary_code import split_composite_code


class TestSplitCompositeCode:
    def test_codigo_completo(self):
        assert split_composite_code("NTRF+166+9310") == ("NTRF", "166", "9310")

    def test_sin_primanota(self):
        assert split_composite_code("NMSC+201") == ("NMSC", "201", "")

    def test_sin_separador(self):
        assert split_composite_code("NTRF") == ("NTRF", "", "")

    def test_vacio(self):
        assert split_composite_code("") == ("", "", "")

    def test_prefijo_vacio(self):
        assert split_composite_code("+116") == ("", "116", "")

    def test_mas_de_dos_separadores(self):
        """Todo lo que sigue al segundo '+' es primanota."""
        assert split_composite_code("NTRF+166+9310+X") == ("NTRF", "166", "9310+X")

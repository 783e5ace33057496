"""
Adaptador: Tabla embebida de códigos de referencia (GVC).

Los bancos alemanes clasifican cada movimiento con un
Geschäftsvorfallcode (GVC) de tres dígitos, heredado de DTA/MT940. En
CAMT suele venir dentro del código propietario ("NTRF+166+9310"), pero
cuando no viene se puede deducir de la clasificación ISO:

    PMNT / RCDT / ESCT / C   →   166   (SEPA Credit Transfer, abono)

Formato de la tabla (separada por ';'):

    GVC;DC;Domain;Family;SubFamily;DomDesc;FamDesc;SubDesc;Comment

Solo se usan las cinco primeras columnas; las descriptivas se ignoran.

CARGA ÚNICA:
La tabla se indexa la primera vez que se consulta, protegida por un Lock
(doble verificación). Después es de solo lectura y se puede compartir
entre hilos sin sincronización.

CLAVES DUPLICADAS:
Varias filas pueden tener la misma clave (p.ej. 116 y 191 son las dos
transferencias SEPA de cargo: individual y por lote). Se conservan todas
y `lookup` devuelve la primera insertada.
"""

import threading

from src.domain.ports.reference_code_lookup import ReferenceCodeLookup

GVC_TABLE_CSV = """\
GVC;DC;Domain;Family;SubFamily;DomDesc;FamDesc;SubDesc;Comment
166;C;PMNT;RCDT;ESCT;Payments;Received Credit Transfers;SEPA Credit Transfer;SEPA Gutschrift
116;D;PMNT;ICDT;ESCT;Payments;Issued Credit Transfers;SEPA Credit Transfer;SEPA Überweisung Einzelbuchung
191;D;PMNT;ICDT;ESCT;Payments;Issued Credit Transfers;SEPA Credit Transfer;SEPA Überweisung Sammler
159;C;PMNT;ICDT;RRTN;Payments;Issued Credit Transfers;Reversal due to Payment Return;SEPA Überweisung Retoure
153;C;PMNT;RCDT;SALA;Payments;Received Credit Transfers;Payroll/Salary Payment;SEPA Lohn Gehalt Rente
152;C;PMNT;RCDT;STDO;Payments;Received Credit Transfers;Standing Order;Dauerauftrag Gutschrift
117;D;PMNT;ICDT;STDO;Payments;Issued Credit Transfers;Standing Order;Dauerauftrag Belastung
058;C;PMNT;RCDT;VCOM;Payments;Received Credit Transfers;Credit Transfer with agreed Commercial Information;Zahlungseingang mit Belegdaten
105;D;PMNT;RDDT;ESDD;Payments;Received Direct Debits;SEPA Core Direct Debit;SEPA Basislastschrift Belastung
107;D;PMNT;RDDT;BBDD;Payments;Received Direct Debits;SEPA B2B Direct Debit;SEPA Firmenlastschrift Belastung
171;C;PMNT;IDDT;ESDD;Payments;Issued Direct Debits;SEPA Core Direct Debit;SEPA Basislastschrift Einreichung
174;C;PMNT;IDDT;BBDD;Payments;Issued Direct Debits;SEPA B2B Direct Debit;SEPA Firmenlastschrift Einreichung
109;D;PMNT;IDDT;UPDD;Payments;Issued Direct Debits;Reversal due to Return/Unpaid Direct Debit;SEPA Rücklastschrift
106;D;PMNT;CCRD;POSD;Payments;Customer Card Transactions;Point-of-Sale Debit;Kartenzahlung
083;D;PMNT;CCRD;CWDL;Payments;Customer Card Transactions;Cash Withdrawal;Barauszahlung Geldautomat
082;C;PMNT;CNTR;CDPT;Payments;Counter Transactions;Cash Deposit;Bareinzahlung
808;D;ACMT;MDOP;CHRG;Account Management;Miscellaneous Debit Operations;Charges;Gebühren
814;C;ACMT;MCOP;INTR;Account Management;Miscellaneous Credit Operations;Interest;Zinsen Gutschrift
814;D;ACMT;MDOP;INTR;Account Management;Miscellaneous Debit Operations;Interest;Zinsen Belastung
"""

_TITULOS = ("GVC", "ReferenceCode")


def build_key(domain: str, family: str, sub_family: str, credit_flag: str) -> str:
    """Clave del índice: "DOMAIN;FAMILY;SUBFAMILY;C" en mayúsculas y sin espacios."""
    partes = (domain, family, sub_family, credit_flag)
    return ";".join(p.strip().upper() for p in partes)


class EmbeddedGvcTable(ReferenceCodeLookup):
    """Tabla (dominio, familia, subfamilia, C/D) → GVC, cargada una sola vez."""

    def __init__(self, csv_text: str = GVC_TABLE_CSV) -> None:
        """
        Args:
            csv_text: Contenido de la tabla. Por defecto la tabla embebida;
                      se puede inyectar otra (tests, tablas de un banco).
        """
        self._csv_text = csv_text
        self._indice: dict[str, list[str]] | None = None
        self._lock = threading.Lock()

    def lookup(self, domain: str, family: str, sub_family: str, credit_flag: str) -> str:
        codigos = self.codes_for(domain, family, sub_family, credit_flag)
        return codigos[0] if codigos else ""

    def codes_for(self, domain: str, family: str, sub_family: str, credit_flag: str) -> list[str]:
        """Todos los códigos de la clave, en orden de inserción."""
        indice = self._cargar()
        return list(indice.get(build_key(domain, family, sub_family, credit_flag), []))

    def __len__(self) -> int:
        return sum(len(codigos) for codigos in self._cargar().values())

    def _cargar(self) -> dict[str, list[str]]:
        indice = self._indice
        if indice is not None:
            return indice

        with self._lock:
            if self._indice is None:
                self._indice = _indexar(self._csv_text)
            return self._indice


def _indexar(csv_text: str) -> dict[str, list[str]]:
    """Construye el índice a partir del texto de la tabla.

    Se descartan: el encabezado, filas con menos de 5 columnas, filas sin
    código, con un indicador distinto de C/D o sin dominio/familia/
    subfamilia.
    """
    indice: dict[str, list[str]] = {}
    for linea in csv_text.splitlines():
        columnas = [c.strip() for c in linea.split(";")]
        if len(columnas) < 5 or columnas[0] in _TITULOS:
            continue

        codigo, dc, domain, family, sub_family = columnas[:5]
        dc = dc.upper()
        if not codigo or dc not in ("C", "D") or not (domain and family and sub_family):
            continue

        clave = build_key(domain, family, sub_family, dc)
        indice.setdefault(clave, []).append(codigo)
    return indice


_tabla_default: EmbeddedGvcTable | None = None
_tabla_default_lock = threading.Lock()


def get_default_table() -> EmbeddedGvcTable:
    """Instancia compartida de la tabla embebida (una por proceso)."""
    global _tabla_default
    if _tabla_default is None:
        with _tabla_default_lock:
            if _tabla_default is None:
                _tabla_default = EmbeddedGvcTable()
    return _tabla_default

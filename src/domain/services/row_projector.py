"""
Servicio de dominio: Proyección de un Document a filas exportables.

Convierte el modelo extraído del XML en filas de 33 campos (ExportField),
cada uno con su valor display y, donde la proyección ya lo conoce, su
valor canónico. El resto de canónicos los completa row_normalizer.

REGLAS PRINCIPALES:

1. Una fila por transacción (<TxDtls>). Una entrada sin transacciones
   genera una sola fila con los campos de transacción vacíos.

2. Dirección:
   - "cruda": <CdtDbtInd> de la transacción si lo trae; si no, el de la
     entrada.
   - "efectiva": la cruda invertida UNA vez si la entrada es reversión.
   El signo del monto, el saldo corrido y la contraparte usan la
   efectiva. La columna CreditDebit usa la cruda salvo que las opciones
   pidan la efectiva; su canónico es siempre la cruda.

3. Contraparte: si el movimiento es (efectivamente) un abono, la
   contraparte es quien paga (Dbtr); si es un cargo, quien cobra (Cdtr).

4. Saldos de apertura/cierre: el global (OPBD/PRCD y CLBD) solo en la
   primera y última fila del statement. Si no hay global, se usa un
   saldo intermedio (ITBD/ITAV) con la misma fecha que la entrada. Si
   tampoco hay, un espacio " ".

Ejemplo (cuenta EUR, dos transacciones):
    +100.00 CRDT  → Amount "100.00",  RunningBalance "100.00"
     -30.00 DBIT  → Amount "-30.00",  RunningBalance "70.00"
"""

from dataclasses import dataclass

from src.domain.models.balance import Balance
from src.domain.models.currency_amount import CurrencyAmount
from src.domain.models.document import Document
from src.domain.models.entry import Entry
from src.domain.models.entry_transaction import EntryTransaction
from src.domain.models.export_options import ExportOptions
from src.domain.models.export_row import ExportField, ExportRow, FieldValue, header_names
from src.domain.models.statement import Statement
from src.domain.ports.reference_code_lookup import ReferenceCodeLookup
from src.domain.services.row_normalizer import normalize_field
from src.domain.shared.money import format_amount
from src.domain.shared.proprietary_code import split_composite_code

# Separador canónico entre líneas de remesa (ASCII Group Separator)
REMITTANCE_CANONICAL_SEPARATOR = "\x1d"

# Valor de Opening/Closing cuando no hay saldo aplicable
SIN_SALDO = " "

_NO_INFORMADO = "NOTPROVIDED"


@dataclass
class _EstadoStatement:
    """Acumuladores que viven mientras se proyecta un statement."""

    run_ccy: str
    total_filas: int
    apertura_global: str
    cierre_global: str
    running_minor: int = 0
    fila: int = 0


class RowProjector:
    """Proyecta Documents a listas de ExportRow.

    Es sin estado entre llamadas: dos proyecciones del mismo documento
    con las mismas opciones producen filas idénticas.
    """

    def __init__(self, lookup: ReferenceCodeLookup | None = None) -> None:
        """
        Args:
            lookup: Tabla de códigos GVC para cuando el código propietario
                    no trae uno. None → la columna GVCCode queda vacía en
                    esos casos.
        """
        self._lookup = lookup

    def header(self, options: ExportOptions) -> list[str]:
        """Títulos de columna según las opciones."""
        return header_names(options.credit_as_bool)

    def project(self, document: Document, options: ExportOptions) -> list[ExportRow]:
        """Proyecta todos los statements del documento, en orden.

        Returns:
            Filas en orden de documento (statement, entrada, transacción).
            Sin ordenar ni normalizar.
        """
        filas: list[ExportRow] = []
        for statement in document.statements:
            filas.extend(self._proyectar_statement(statement, options))
        return filas

    # =================================================================
    # Statement
    # =================================================================

    def _proyectar_statement(self, st: Statement, options: ExportOptions) -> list[ExportRow]:
        estado = _EstadoStatement(
            run_ccy=st.account.currency,
            total_filas=st.num_transactions,
            apertura_global=_saldo_texto(st, st.first_balance("OPBD", "PRCD")),
            cierre_global=_saldo_texto(st, st.last_balance("CLBD")),
        )

        filas: list[ExportRow] = []
        for entry in st.entries:
            if entry.transactions:
                for tx in entry.transactions:
                    filas.append(self._proyectar_fila(st, entry, tx, estado, options))
            else:
                filas.append(self._proyectar_fila(st, entry, None, estado, options))
        return filas

    # =================================================================
    # Fila
    # =================================================================

    def _proyectar_fila(
        self,
        st: Statement,
        entry: Entry,
        tx: EntryTransaction | None,
        estado: _EstadoStatement,
        options: ExportOptions,
    ) -> ExportRow:
        # 1) Dirección
        credit = tx.is_credit if tx is not None and tx.has_cdt_dbt_ind else entry.is_credit
        effective_credit = credit != entry.reversal

        # 2) Contraparte y remesa
        cp_name, cp_iban, cp_bic = _contraparte(tx, effective_credit, options.prefer_ultimate_counterparty)
        remesa_libre, remesa_estructurada = _remesa(tx, options)

        # 3) Códigos
        bk_tx_cd = ""
        booking_code = ""
        if tx is not None:
            codigo = tx.bank_tx_code
            if not codigo.is_empty:
                bk_tx_cd = f"{codigo.domain}:{codigo.family}:{codigo.sub_family}"
            booking_code = tx.proprietary_bank_tx_code.code
        swift_code = booking_code[:4]
        _, gvc, primanota = split_composite_code(booking_code)

        if not gvc and tx is not None and self._lookup is not None:
            codigo = tx.bank_tx_code
            gvc = self._lookup.lookup(
                codigo.domain, codigo.family, codigo.sub_family, "C" if credit else "D"
            )

        # 4) Monto y saldo corrido
        amt = tx.tx_amount if tx is not None and tx.tx_amount is not None else entry.amount
        if not estado.run_ccy:
            estado.run_ccy = amt.currency or entry.amount.currency

        abs_minor = abs(amt.minor)
        signed_minor = abs_minor if effective_credit else -abs_minor
        estado.running_minor += signed_minor

        monto_display = format_amount(amt.with_minor(signed_minor if options.signed_amount else abs_minor))
        monto_canonico = format_amount(amt.with_minor(abs_minor))
        saldo_corrido = format_amount(CurrencyAmount(estado.run_ccy, estado.running_minor))

        # 5) Apertura / cierre
        apertura, cierre = self._saldos_fila(st, entry, estado)

        # 6) Comisiones
        comisiones, comisiones_incluidas = _sumar_comisiones(entry, tx)

        # 7) Resto de columnas
        mostrar_credito = effective_credit if options.use_effective_credit else credit
        if options.credit_as_bool:
            credit_display = "1" if mostrar_credito else "0"
        else:
            credit_display = "CRDT" if mostrar_credito else "DBIT"

        currency = st.account.currency or amt.currency or estado.run_ccy
        bank_ref = tx.refs.acct_svcr_ref if tx is not None and tx.refs.acct_svcr_ref else entry.acct_svcr_ref
        reversal = "1" if entry.reversal else "0"
        incluidas = "1" if comisiones_incluidas else "0"
        ordinal_tx = str(tx.ordinal) if tx is not None else ""

        valores = {
            ExportField.BOOKING_DATE: FieldValue(entry.booking_date, str(entry.booking_date_int)),
            ExportField.VALUE_DATE: FieldValue(entry.value_date, str(entry.value_date_int)),
            ExportField.AMOUNT: FieldValue(monto_display, monto_canonico),
            ExportField.CREDIT_DEBIT: FieldValue(credit_display, "1" if credit else "0"),
            ExportField.CURRENCY: FieldValue(currency),
            ExportField.COUNTERPARTY_NAME: FieldValue(cp_name),
            ExportField.COUNTERPARTY_IBAN: FieldValue(cp_iban),
            ExportField.COUNTERPARTY_BIC: FieldValue(cp_bic),
            ExportField.REMITTANCE_LINE: remesa_libre,
            ExportField.REMITTANCE_STRUCTURED: remesa_estructurada,
            ExportField.END_TO_END_ID: FieldValue(tx.refs.end_to_end_id if tx is not None else ""),
            ExportField.MANDATE_ID: FieldValue(tx.refs.mandate_id if tx is not None else ""),
            ExportField.TX_ID: FieldValue(tx.refs.tx_id if tx is not None else ""),
            ExportField.BANK_REF: FieldValue(bank_ref),
            ExportField.ACCOUNT_IBAN: FieldValue(st.account.id.identifier),
            ExportField.ACCOUNT_BIC: FieldValue(st.account.servicer.bic),
            ExportField.BK_TX_CD: FieldValue(bk_tx_cd),
            ExportField.BOOKING_CODE: FieldValue(booking_code),
            ExportField.STATUS: FieldValue(entry.status),
            ExportField.REVERSAL: FieldValue(reversal, reversal),
            ExportField.RUNNING_BALANCE: FieldValue(saldo_corrido, saldo_corrido),
            ExportField.SERVICER_BANK_NAME: FieldValue(st.account.servicer.name),
            ExportField.OPENING_BALANCE: FieldValue(apertura, apertura),
            ExportField.CLOSING_BALANCE: FieldValue(cierre, cierre),
            ExportField.PRIMANOTA: FieldValue(primanota),
            ExportField.DTA_CODE: FieldValue(booking_code),
            ExportField.GVC_CODE: FieldValue(gvc),
            ExportField.SWIFT_TRANSACTION_CODE: FieldValue(swift_code),
            ExportField.CHARGES_AMOUNT: FieldValue(format_amount(comisiones), format_amount(comisiones)),
            ExportField.CHARGES_CURRENCY: FieldValue(comisiones.currency),
            ExportField.CHARGES_INCLUDED: FieldValue(incluidas, incluidas),
            ExportField.ENTRY_ORDINAL: FieldValue(str(entry.ordinal), str(entry.ordinal)),
            ExportField.TRANSACTION_ORDINAL: FieldValue(ordinal_tx, ordinal_tx),
        }

        estado.fila += 1
        return ExportRow.from_mapping(valores)

    @staticmethod
    def _saldos_fila(st: Statement, entry: Entry, estado: _EstadoStatement) -> tuple[str, str]:
        """Opening/Closing de la fila actual (antes de incrementar estado.fila)."""
        apertura = SIN_SALDO
        cierre = SIN_SALDO
        intermedio = None
        if not estado.apertura_global or not estado.cierre_global:
            intermedio = _saldo_intermedio(st, entry)

        if estado.apertura_global:
            if estado.fila == 0:
                apertura = estado.apertura_global
        elif intermedio is not None:
            apertura = _saldo_texto(st, intermedio)

        if estado.cierre_global:
            if estado.fila + 1 == estado.total_filas:
                cierre = estado.cierre_global
        elif intermedio is not None:
            cierre = _saldo_texto(st, intermedio)

        return apertura, cierre


# =================================================================
# Helpers
# =================================================================


def _provisto(nombre: str) -> bool:
    """Un nombre cuenta si no está vacío ni es el marcador NOTPROVIDED."""
    return bool(nombre) and nombre != _NO_INFORMADO


def _contraparte(
    tx: EntryTransaction | None, effective_credit: bool, prefer_ultimate: bool
) -> tuple[str, str, str]:
    """Nombre, IBAN y BIC de la contraparte según la dirección efectiva."""
    if tx is None:
        return "", "", ""

    partes = tx.parties
    if effective_credit:
        directo, ultimo = partes.debtor.name, partes.ultimate_debtor.name
        iban = partes.debtor_account.iban
        bic = tx.agents.debtor_agent.bic
    else:
        directo, ultimo = partes.creditor.name, partes.ultimate_creditor.name
        iban = partes.creditor_account.iban
        bic = tx.agents.creditor_agent.bic

    if prefer_ultimate:
        nombre = ultimo if _provisto(ultimo) else directo
    else:
        nombre = directo if _provisto(directo) else ultimo
    return nombre, iban, bic


def _remesa(tx: EntryTransaction | None, options: ExportOptions) -> tuple[FieldValue, FieldValue]:
    """Valores de RemittanceLine y RemittanceStructured."""
    if tx is None:
        return FieldValue(), FieldValue()

    lineas = tx.remittance.unstructured
    libre = FieldValue(
        options.remittance_separator.join(lineas),
        REMITTANCE_CANONICAL_SEPARATOR.join(
            normalize_field(ExportField.REMITTANCE_LINE, linea, options.unicode_normalization)
            for linea in lineas
        ),
    )

    estructurada = FieldValue()
    if tx.remittance.structured:
        bloque = tx.remittance.structured[0]
        base = bloque.creditor_ref or bloque.additional_info
        estructurada = FieldValue(
            base,
            normalize_field(ExportField.REMITTANCE_STRUCTURED, base, options.unicode_normalization),
        )
    return libre, estructurada


def _sumar_comisiones(entry: Entry, tx: EntryTransaction | None) -> tuple[CurrencyAmount, bool]:
    """Suma con signo de los registros de comisión de la transacción.

    La dirección de cada registro se toma con prioridad
    registro > transacción > entrada, y luego se invierte si la entrada
    es una reversión. Los registros sin moneda se ignoran; la moneda del
    total es la del primer registro que sí la trae.
    """
    if tx is None:
        return CurrencyAmount(), False

    moneda = ""
    total = 0
    incluidas = False

    for registro in tx.charges.records:
        if not registro.amount.currency:
            continue
        if not moneda:
            moneda = registro.amount.currency

        credito = entry.is_credit
        if tx.has_cdt_dbt_ind:
            credito = tx.is_credit
        if registro.has_cdt_dbt_ind:
            credito = registro.is_credit
        if entry.reversal:
            credito = not credito

        magnitud = abs(registro.amount.minor)
        total += magnitud if credito else -magnitud
        if registro.included:
            incluidas = True

    return CurrencyAmount(moneda, total), incluidas


def _saldo_texto(st: Statement, balance: Balance | None) -> str:
    """Monto del saldo sin moneda, con signo de su <CdtDbtInd>.

    Si el saldo no trae moneda se usa la de la cuenta (solo para saber
    cuántos decimales mostrar). Sin saldo → "".
    """
    if balance is None:
        return ""
    monto = balance.signed_amount
    if not monto.currency:
        monto = CurrencyAmount(st.account.currency, monto.minor)
    return format_amount(monto)


def _saldo_intermedio(st: Statement, entry: Entry) -> Balance | None:
    """Primer ITBD/ITAV cuya fecha coincide con la de contabilización o valor."""
    for balance in st.balances:
        if balance.type not in ("ITBD", "ITAV"):
            continue
        if entry.booking_date and balance.date == entry.booking_date:
            return balance
        if entry.value_date and balance.date == entry.value_date:
            return balance
    return None

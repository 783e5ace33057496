"""
Adaptador de entrada: Parser de documentos CAMT (camt.052 / .053 / .054).

Convierte el XML de un extracto ISO 20022 al modelo Document. Es
tolerante por diseño con las variantes reales de los bancos:

- Namespaces: toda búsqueda es por nombre LOCAL (ver XmlNode), así que
  camt.053.001.02, .001.08 o un XML sin namespace se leen igual.
- Envoltorios: el payload (<BkToCstmrStmt>, ...) se busca en la raíz, en
  los hijos de <Document> y, si no, en cualquier profundidad.
- Campos faltantes o ilegibles: nunca lanzan. Se usan valores por
  defecto ("", 0, sin tipo de cambio).

Solo lanzan los errores ESTRUCTURALES: entrada vacía, XML mal formado o
un XML que no es CAMT. En esos casos no se devuelve nada parcial.

Estructura esperada (simplificada):

    Document
      BkToCstmrStmt
        GrpHdr (MsgId, CreDtTm, MsgRcpt/Nm)
        Stmt                       ← Rpt en camt.052, Ntfctn en camt.054
          Id, CreDtTm
          Acct (Id/IBAN, Ccy, Nm, Svcr/FinInstnId/BIC)
          Bal*  (Tp/CdOrPrtry/Cd, Amt, CdtDbtInd, Dt/Dt)
          Ntry* (Amt, CdtDbtInd, RvslInd, Sts, BookgDt, ValDt, AcctSvcrRef)
            NtryDtls
              TxDtls* (Refs, AmtDtls, BkTxCd, RltdPties, RltdAgts, RmtInf...)
"""

from pathlib import Path
from typing import BinaryIO
from xml.etree import ElementTree as ET

from src.adapters.input.camt.etree_node import EtreeNode
from src.domain.exceptions import (
    DocumentoVacioError,
    ExtractionError,
    FormatoInvalidoError,
    RaizNoSoportadaError,
    XmlMalformadoError,
)
from src.domain.models import (
    PAYLOAD_KINDS,
    Account,
    AccountId,
    Agent,
    Balance,
    BankTransactionCode,
    Charges,
    ChargesRecord,
    CurrencyAmount,
    Document,
    Entry,
    EntryTransaction,
    FxRateInfo,
    GroupHeader,
    Party,
    ProprietaryBankTransactionCode,
    Purpose,
    References,
    RelatedAgents,
    RelatedParties,
    RemittanceInformation,
    Statement,
    StructuredRemittance,
)
from src.domain.ports.document_parser import DocumentParser
from src.domain.ports.xml_node import XmlNode
from src.domain.shared.date_parser import date_prefix, parse_iso_date_int
from src.domain.shared.fx_rate import parse_exchange_rate, reconcile_ccyxchg
from src.domain.shared.money import parse_decimal

# Contenedores de statement según el tipo de mensaje
_STATEMENT_TAGS = ("Stmt", "Ntfctn", "Rpt")

# Orden de búsqueda profunda del payload
_PAYLOAD_TAGS = ("BkToCstmrStmt", "BkToCstmrDbtCdtNtfctn", "BkToCstmrAcctRpt")


class CamtParser(DocumentParser):
    """Parser de extractos CAMT basado en xml.etree.ElementTree."""

    def __init__(self, strict_amounts: bool = False) -> None:
        """
        Args:
            strict_amounts: Si True, un monto que no cabe en 64 bits lanza
                            DesbordamientoError en lugar de leerse como 0.
        """
        self._strict = strict_amounts

    @property
    def format_name(self) -> str:
        return "CAMT"

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix.lower() == ".xml"

    # =================================================================
    # ADQUISICIÓN: archivo, bytes, texto, stream
    # =================================================================

    def parse_file(self, file_path: Path) -> Document:
        if not file_path.is_file():
            raise FormatoInvalidoError(str(file_path), "archivo XML CAMT", "no existe")

        try:
            data = file_path.read_bytes()
        except OSError as e:
            raise ExtractionError(str(file_path), str(e)) from e

        return self.parse_bytes(data, source_name=file_path.name)

    def parse_stream(self, stream: BinaryIO, source_name: str = "<stream>") -> Document:
        """Parsea un documento leyendo un stream binario completo."""
        try:
            data = stream.read()
        except OSError as e:
            raise ExtractionError(source_name, str(e)) from e

        return self.parse_bytes(data, source_name=source_name)

    def parse_string(self, text: str, source_name: str = "<string>") -> Document:
        """Parsea un documento desde un str (se codifica como UTF-8)."""
        return self.parse_bytes(text.encode("utf-8"), source_name=source_name)

    def parse_bytes(self, data: bytes, source_name: str = "<bytes>") -> Document:
        if not data or not data.strip():
            raise DocumentoVacioError(source_name)

        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise XmlMalformadoError(source_name, str(e)) from e

        return self.parse_root(EtreeNode(root), source_name=source_name)

    # =================================================================
    # DOCUMENTO
    # =================================================================

    def parse_root(self, root: XmlNode, source_name: str = "<xml>") -> Document:
        """Convierte un árbol XML ya parseado a Document.

        Raises:
            RaizNoSoportadaError: Si no se encuentra ningún payload CAMT.
        """
        payload = _buscar_payload(root)
        if payload is None:
            raise RaizNoSoportadaError(source_name, root.local_name)

        kind = PAYLOAD_KINDS[payload.local_name]

        encabezado = GroupHeader()
        nodo_hdr = payload.child("GrpHdr")
        if nodo_hdr is not None:
            encabezado = _extraer_encabezado(nodo_hdr)

        statements = tuple(
            self._extraer_statement(hijo, encabezado)
            for hijo in payload.children()
            if hijo.local_name in _STATEMENT_TAGS
        )
        return Document(kind=kind, statements=statements)

    def _extraer_statement(self, stmt: XmlNode, encabezado: GroupHeader) -> Statement:
        cuenta = Account()
        nodo_cuenta = stmt.child("Acct")
        if nodo_cuenta is not None:
            cuenta = _extraer_cuenta(nodo_cuenta)

        saldos = tuple(self._extraer_saldo(n) for n in stmt.children_named("Bal"))

        # La moneda de la cuenta se pasa hacia abajo: decide qué monto de
        # <AmtDtls> se prefiere en cada transacción.
        entradas = tuple(
            self._extraer_entrada(n, ordinal, cuenta.currency)
            for ordinal, n in enumerate(stmt.children_named("Ntry"))
        )

        return Statement(
            id=stmt.child_text("Id"),
            creation_date_time=stmt.child_text("CreDtTm"),
            account=cuenta,
            group_header=encabezado,
            balances=saldos,
            entries=entradas,
        )

    # =================================================================
    # SALDOS
    # =================================================================

    def _extraer_saldo(self, bal: XmlNode) -> Balance:
        nodo_cdi = bal.child("CdtDbtInd")
        nodo_monto = bal.child("Amt")
        return Balance(
            type=_tipo_saldo(bal),
            amount=self._monto(nodo_monto) if nodo_monto is not None else CurrencyAmount(),
            date=_leer_fecha(bal, "Dt"),
            has_cdt_dbt_ind=nodo_cdi is not None,
            is_credit=nodo_cdi is not None and nodo_cdi.text == "CRDT",
        )

    # =================================================================
    # ENTRADAS
    # =================================================================

    def _extraer_entrada(self, ntry: XmlNode, ordinal: int, moneda_cuenta: str) -> Entry:
        nodo_monto = ntry.child("Amt")
        fecha_contable = _leer_fecha(ntry, "BookgDt")
        fecha_valor = _leer_fecha(ntry, "ValDt")

        transacciones: tuple[EntryTransaction, ...] = ()
        detalles = ntry.child("NtryDtls")
        if detalles is not None:
            transacciones = tuple(
                self._extraer_transaccion(td, tx_ordinal, moneda_cuenta)
                for tx_ordinal, td in enumerate(detalles.children_named("TxDtls"))
            )

        return Entry(
            amount=self._monto(nodo_monto) if nodo_monto is not None else CurrencyAmount(),
            is_credit=ntry.child_text("CdtDbtInd") == "CRDT",
            booking_date=fecha_contable,
            value_date=fecha_valor,
            booking_date_int=parse_iso_date_int(fecha_contable),
            value_date_int=parse_iso_date_int(fecha_valor),
            entry_ref=ntry.child_text("NtryRef"),
            status=_leer_estado(ntry),
            reversal=_es_verdadero(ntry.child_text("RvslInd")),
            acct_svcr_ref=ntry.child_text("AcctSvcrRef"),
            ordinal=ordinal,
            transactions=transacciones,
        )

    # =================================================================
    # TRANSACCIONES (<TxDtls>)
    # =================================================================

    def _extraer_transaccion(self, tx: XmlNode, ordinal: int, moneda_cuenta: str) -> EntryTransaction:
        # --- Clasificación ---
        codigo = BankTransactionCode()
        propietario = ProprietaryBankTransactionCode()
        nodo_bktx = tx.child("BkTxCd")
        if nodo_bktx is not None:
            codigo = _extraer_codigo_bancario(nodo_bktx)
            propietario = ProprietaryBankTransactionCode(
                code=nodo_bktx.child_text("Prtry", "Cd"),
                issuer=nodo_bktx.child_text("Prtry", "Issr"),
            )

        # El código DTA y el GVC salen del <BkTxCd><Prtry>, ANTES de que
        # <PrtryBkTxCd> pueda reemplazar el código propietario.
        dta_code = propietario.code
        _, _, gvc = dta_code.partition("+")

        nodo_pbtc = tx.child("PrtryBkTxCd")
        if nodo_pbtc is not None:
            propietario = ProprietaryBankTransactionCode(
                code=nodo_pbtc.child_text("Cd") or propietario.code,
                issuer=nodo_pbtc.child_text("Issr") or propietario.issuer,
            )

        # --- Dirección propia de la transacción ---
        nodo_cdi = tx.child("CdtDbtInd")

        # --- Montos ---
        monto_tx: CurrencyAmount | None = None
        nodo_monto = tx.child("Amt")
        if nodo_monto is not None:
            monto_tx = self._monto(nodo_monto)
        else:
            nodo_tx_amt = tx.path("AmtDtls", "TxAmt", "Amt")
            if nodo_tx_amt is not None:
                monto_tx = self._monto(nodo_tx_amt)

        detalles = tx.child("AmtDtls")
        instruido = liquidado = contravalor = None
        fx = FxRateInfo()
        if detalles is not None:
            instruido = self._monto_detalle(detalles, "InstdAmt")
            liquidado = self._monto_detalle(detalles, "TxAmt")
            contravalor = self._monto_detalle(detalles, "CntrValAmt")
            nodo_xchg = detalles.path("InstdAmt", "CcyXchg")
            if instruido is not None and nodo_xchg is not None:
                fx = _extraer_tipo_cambio(nodo_xchg)

            # Preferir el monto en moneda de la cuenta
            if moneda_cuenta:
                preferido = _primero_en_moneda(
                    (liquidado, instruido, contravalor), moneda_cuenta
                )
                if preferido is not None and (
                    monto_tx is None or monto_tx.currency != moneda_cuenta
                ):
                    monto_tx = preferido

        if fx.has:
            origen, destino = _mapear_origen_destino(fx, instruido, liquidado, contravalor)
            fx = reconcile_ccyxchg(fx, origen, destino)

        return EntryTransaction(
            refs=_extraer_referencias(tx.child("Refs")),
            parties=_extraer_partes(tx.child("RltdPties")),
            agents=_extraer_agentes(tx.child("RltdAgts")),
            remittance=_extraer_remesa(tx.child("RmtInf")),
            purpose=Purpose(
                code=tx.child_text("Purp", "Cd"),
                proprietary=tx.child_text("Purp", "Prtry"),
            ),
            bank_tx_code=codigo,
            proprietary_bank_tx_code=propietario,
            charges=self._extraer_comisiones(tx.child("Chrgs")),
            additional_info=tx.child_text("AddtlTxInf"),
            tx_amount=monto_tx,
            dta_code=dta_code,
            gvc=gvc,
            has_cdt_dbt_ind=nodo_cdi is not None,
            is_credit=nodo_cdi is not None and nodo_cdi.text == "CRDT",
            fx=fx,
            fx_instructed_amount=instruido,
            fx_settlement_amount=liquidado,
            fx_counter_value_amount=contravalor,
            ordinal=ordinal,
        )

    def _extraer_comisiones(self, chrgs: XmlNode | None) -> Charges:
        if chrgs is None:
            return Charges()

        total = None
        nodo_total = chrgs.child("TtlChrgsAndTaxAmt")
        if nodo_total is not None:
            total = self._monto(nodo_total)

        registros = []
        for rcrd in chrgs.children_named("Rcrd"):
            nodo_monto = rcrd.child("Amt")
            nodo_agente = rcrd.child("Agt")
            nodo_cdi = rcrd.child("CdtDbtInd")
            registros.append(
                ChargesRecord(
                    amount=self._monto(nodo_monto) if nodo_monto is not None else CurrencyAmount(),
                    agent=_extraer_agente(nodo_agente) if nodo_agente is not None else Agent(),
                    has_cdt_dbt_ind=nodo_cdi is not None,
                    is_credit=nodo_cdi is not None and nodo_cdi.text == "CRDT",
                    included=_es_verdadero(rcrd.child_text("ChrgInclInd")),
                )
            )
        return Charges(total=total, records=tuple(registros))

    # =================================================================
    # MONTOS
    # =================================================================

    def _monto(self, amt: XmlNode) -> CurrencyAmount:
        """<Amt Ccy="EUR">1234.56</Amt> → CurrencyAmount("EUR", 123456)."""
        moneda = amt.attribute("Ccy").strip()
        return CurrencyAmount(moneda, parse_decimal(amt.text, moneda, strict=self._strict))

    def _monto_detalle(self, detalles: XmlNode, tag: str) -> CurrencyAmount | None:
        """Monto de <AmtDtls><tag><Amt>, o None si no viene."""
        nodo = detalles.path(tag, "Amt")
        return self._monto(nodo) if nodo is not None else None


# =====================================================================
# FUNCIONES AUXILIARES (sin estado)
# =====================================================================


def _buscar_payload(root: XmlNode) -> XmlNode | None:
    """Raíz → hijos de <Document> → búsqueda profunda, en ese orden."""
    if root.local_name in PAYLOAD_KINDS:
        return root

    if root.local_name == "Document":
        for hijo in root.children():
            if hijo.local_name in PAYLOAD_KINDS:
                return hijo

    for tag in _PAYLOAD_TAGS:
        encontrado = root.descendant(tag)
        if encontrado is not None:
            return encontrado
    return None


def _extraer_encabezado(grp_hdr: XmlNode) -> GroupHeader:
    return GroupHeader(
        msg_id=grp_hdr.child_text("MsgId"),
        creation_date_time=grp_hdr.child_text("CreDtTm"),
        message_recipient=grp_hdr.child_text("MsgRcpt", "Nm"),
    )


def _extraer_cuenta(acct: XmlNode) -> Account:
    nodo_id = acct.child("Id")
    nodo_svcr = acct.child("Svcr")
    return Account(
        id=_extraer_id_cuenta(nodo_id) if nodo_id is not None else AccountId(),
        name=acct.child_text("Nm"),
        currency=acct.child_text("Ccy"),
        servicer=_extraer_agente(nodo_svcr) if nodo_svcr is not None else Agent(),
    )


def _extraer_id_cuenta(id_node: XmlNode) -> AccountId:
    """IBAN (en cualquier profundidad) o, si no hay, <Othr><Id>."""
    iban = id_node.descendant_text("IBAN")
    if iban:
        return AccountId(iban=iban)
    return AccountId(other=id_node.child_text("Othr", "Id"))


def _extraer_agente(node: XmlNode) -> Agent:
    """<FinInstnId>: BIC (versiones viejas) o BICFI (nuevas), y nombre."""
    return Agent(
        bic=node.child_text("FinInstnId", "BIC") or node.child_text("FinInstnId", "BICFI"),
        name=node.child_text("FinInstnId", "Nm"),
    )


def _extraer_parte(node: XmlNode) -> Party:
    """Parte relacionada. El nombre puede venir en <Nm> o en <Pty><Nm>
    según la versión del esquema, por eso la búsqueda es profunda."""
    return Party(
        name=node.descendant_text("Nm"),
        iban=node.descendant_text("IBAN"),
        bic=node.descendant_text("BIC") or node.descendant_text("BICFI"),
    )


def _extraer_partes(rltd: XmlNode | None) -> RelatedParties:
    if rltd is None:
        return RelatedParties()

    def parte(tag: str) -> Party:
        nodo = rltd.child(tag)
        return _extraer_parte(nodo) if nodo is not None else Party()

    def cuenta(tag: str) -> AccountId:
        nodo = rltd.path(tag, "Id")
        return _extraer_id_cuenta(nodo) if nodo is not None else AccountId()

    return RelatedParties(
        debtor=parte("Dbtr"),
        debtor_account=cuenta("DbtrAcct"),
        ultimate_debtor=parte("UltmtDbtr"),
        creditor=parte("Cdtr"),
        creditor_account=cuenta("CdtrAcct"),
        ultimate_creditor=parte("UltmtCdtr"),
    )


def _extraer_agentes(rltd: XmlNode | None) -> RelatedAgents:
    if rltd is None:
        return RelatedAgents()
    deudor = rltd.child("DbtrAgt")
    acreedor = rltd.child("CdtrAgt")
    return RelatedAgents(
        debtor_agent=_extraer_agente(deudor) if deudor is not None else Agent(),
        creditor_agent=_extraer_agente(acreedor) if acreedor is not None else Agent(),
    )


def _extraer_referencias(refs: XmlNode | None) -> References:
    if refs is None:
        return References()
    return References(
        end_to_end_id=refs.child_text("EndToEndId"),
        tx_id=refs.child_text("TxId"),
        acct_svcr_ref=refs.child_text("AcctSvcrRef"),
        mandate_id=refs.child_text("MndtId"),
    )


def _extraer_remesa(rmt: XmlNode | None) -> RemittanceInformation:
    if rmt is None:
        return RemittanceInformation()

    lineas: list[str] = []
    bloques: list[StructuredRemittance] = []
    for hijo in rmt.children():
        if hijo.local_name == "Ustrd":
            if hijo.text:
                lineas.append(hijo.text)
        elif hijo.local_name == "Strd":
            tipo = ""
            ref_tp = hijo.descendant("RefTp")
            if ref_tp is not None:
                tipo = ref_tp.descendant_text("Cd") or ref_tp.descendant_text("Prtry")
            cdtr_ref = hijo.descendant("CdtrRefInf")
            bloques.append(
                StructuredRemittance(
                    creditor_ref_type=tipo,
                    creditor_ref=cdtr_ref.child_text("Ref") if cdtr_ref is not None else "",
                    additional_info=hijo.child_text("AddtlRmtInf"),
                )
            )
    return RemittanceInformation(unstructured=tuple(lineas), structured=tuple(bloques))


def _extraer_codigo_bancario(bktx: XmlNode) -> BankTransactionCode:
    propietario = bktx.child_text("Prtry", "Cd") or bktx.child_text("Prtry")
    return BankTransactionCode(
        domain=bktx.child_text("Domn", "Cd"),
        family=bktx.child_text("Domn", "Fmly", "Cd"),
        sub_family=bktx.child_text("Domn", "Fmly", "SubFmlyCd"),
        proprietary=propietario,
    )


def _extraer_tipo_cambio(ccy_xchg: XmlNode) -> FxRateInfo:
    nodo_rate = ccy_xchg.child("XchgRate")
    rate, decimales = (0.0, 0)
    if nodo_rate is not None:
        rate, decimales = parse_exchange_rate(nodo_rate.text)
    return FxRateInfo(
        src_ccy=ccy_xchg.child_text("SrcCcy"),
        trgt_ccy=ccy_xchg.child_text("TrgtCcy"),
        unit_ccy=ccy_xchg.child_text("UnitCcy"),
        rate=rate,
        has=nodo_rate is not None,
        supplied_rate=rate,
        rate_decimals=decimales,
    )


def _mapear_origen_destino(
    fx: FxRateInfo,
    instruido: CurrencyAmount | None,
    liquidado: CurrencyAmount | None,
    contravalor: CurrencyAmount | None,
) -> tuple[CurrencyAmount | None, CurrencyAmount | None]:
    """Identifica qué montos son origen y destino según SrcCcy/TrgtCcy.

    Primero (instruido, liquidado), después (contravalor, instruido), en
    cualquiera de las dos direcciones. Si SrcCcy y TrgtCcy son iguales no
    hay forma de distinguir los montos y no se mapea nada.
    """
    if not fx.src_ccy or not fx.trgt_ccy or fx.src_ccy == fx.trgt_ccy:
        return None, None

    for a, b in ((instruido, liquidado), (contravalor, instruido)):
        if a is None or b is None:
            continue
        if a.currency == fx.src_ccy and b.currency == fx.trgt_ccy:
            return a, b
        if b.currency == fx.src_ccy and a.currency == fx.trgt_ccy:
            return b, a
    return None, None


def _primero_en_moneda(
    candidatos: tuple[CurrencyAmount | None, ...], moneda: str
) -> CurrencyAmount | None:
    for monto in candidatos:
        if monto is not None and monto.currency == moneda:
            return monto
    return None


def _tipo_saldo(bal: XmlNode) -> str:
    """Tipo de saldo (OPBD, CLBD...) tolerando las variantes de esquema.

    1. <Tp><CdOrPrtry><Cd> / <Prtry>   (caso normal)
    2. <Tp><Cd> / <Prtry>              (algunos bancos omiten CdOrPrtry)
    3. Cualquier <Cd> / <Prtry> dentro de <Tp>
    """
    tp = bal.child("Tp")
    if tp is None:
        return ""
    return (
        tp.child_text("CdOrPrtry", "Cd")
        or tp.child_text("CdOrPrtry", "Prtry")
        or tp.child_text("Cd")
        or tp.child_text("Prtry")
        or tp.descendant_text("Cd")
        or tp.descendant_text("Prtry")
    )


def _leer_fecha(parent: XmlNode, tag: str) -> str:
    """Fecha de <tag>: <Dt>, si no los 10 primeros caracteres de <DtTm>,
    si no el texto directo de <tag>."""
    nodo = parent.child(tag)
    if nodo is None:
        return ""

    fecha = nodo.descendant_text("Dt")
    if not fecha:
        fecha = date_prefix(nodo.descendant_text("DtTm"))
    if not fecha:
        fecha = nodo.text
    return fecha


def _leer_estado(ntry: XmlNode) -> str:
    """<Sts>BOOK</Sts> en versiones viejas, <Sts><Cd>BOOK</Cd></Sts> desde v08."""
    nodo = ntry.child("Sts")
    if nodo is None:
        return ""
    return nodo.text or nodo.descendant_text("Cd") or nodo.descendant_text("Prtry")


def _es_verdadero(text: str) -> bool:
    return text in ("true", "1")

"""
Extractos CAMT de ejemplo compartidos por los tests.

Son documentos pequeños pero con la forma real de los bancos alemanes:
- CAMT053_DOS_TX: camt.053.001.08 con namespace por defecto. Una entrada
  que agrupa dos transacciones (+100.00 y -30.00) y saldos OPBD/CLBD.
- CAMT054_REVERSION: camt.054.001.02 con prefijo de namespace. Una
  reversión de un abono (la contraparte pasa a ser el acreedor).
- CAMT052_FX: camt.052.001.02 sin namespace. Una transferencia en USD
  liquidada en EUR con el tipo de cambio informado al revés, una entrada
  sin detalle y un saldo intermedio ITBD.
"""

import pytest

from src.adapters.input.camt.camt_parser import CamtParser
from src.adapters.input.reference_codes.embedded_gvc_table import EmbeddedGvcTable
from src.domain.models import ExportOptions, ResultadoExportacion
from src.domain.services.row_normalizer import normalize_row, sort_rows
from src.domain.services.row_projector import RowProjector

CAMT053_DOS_TX = """<?xml version="1.0" encoding="UTF-8"?>
<Document xmlns="urn:iso:std:iso:20022:tech:xsd:camt.053.001.08">
  <BkToCstmrStmt>
    <GrpHdr>
      <MsgId>MSG-20240315-001</MsgId>
      <CreDtTm>2024-03-15T18:30:00</CreDtTm>
      <MsgRcpt><Nm>Beispiel GmbH</Nm></MsgRcpt>
    </GrpHdr>
    <Stmt>
      <Id>STMT-2024-03-15</Id>
      <CreDtTm>2024-03-15T18:30:00</CreDtTm>
      <Acct>
        <Id><IBAN>DE89370400440532013000</IBAN></Id>
        <Ccy>EUR</Ccy>
        <Nm>Geschaeftskonto</Nm>
        <Svcr><FinInstnId><BIC>COBADEFFXXX</BIC><Nm>Commerzbank AG</Nm></FinInstnId></Svcr>
      </Acct>
      <Bal>
        <Tp><CdOrPrtry><Cd>OPBD</Cd></CdOrPrtry></Tp>
        <Amt Ccy="EUR">0.00</Amt>
        <CdtDbtInd>CRDT</CdtDbtInd>
        <Dt><Dt>2024-03-14</Dt></Dt>
      </Bal>
      <Bal>
        <Tp><CdOrPrtry><Cd>CLBD</Cd></CdOrPrtry></Tp>
        <Amt Ccy="EUR">70.00</Amt>
        <CdtDbtInd>CRDT</CdtDbtInd>
        <Dt><Dt>2024-03-15</Dt></Dt>
      </Bal>
      <Ntry>
        <NtryRef>1</NtryRef>
        <Amt Ccy="EUR">70.00</Amt>
        <CdtDbtInd>CRDT</CdtDbtInd>
        <Sts><Cd>BOOK</Cd></Sts>
        <BookgDt><Dt>2024-03-15</Dt></BookgDt>
        <ValDt><Dt>2024-03-15</Dt></ValDt>
        <AcctSvcrRef>ENTRY-REF-1</AcctSvcrRef>
        <NtryDtls>
          <TxDtls>
            <Refs>
              <AcctSvcrRef>BANK-REF-100</AcctSvcrRef>
              <EndToEndId>E2E-0001</EndToEndId>
              <TxId>TX-0001</TxId>
            </Refs>
            <Amt Ccy="EUR">100.00</Amt>
            <CdtDbtInd>CRDT</CdtDbtInd>
            <BkTxCd>
              <Domn><Cd>PMNT</Cd><Fmly><Cd>RCDT</Cd><SubFmlyCd>ESCT</SubFmlyCd></Fmly></Domn>
              <Prtry><Cd>NTRF+166+9310</Cd><Issr>DK</Issr></Prtry>
            </BkTxCd>
            <RltdPties>
              <Dbtr><Pty><Nm>Müller GmbH</Nm></Pty></Dbtr>
              <DbtrAcct><Id><IBAN>de02 1001 0010 0006 8201 01</IBAN></Id></DbtrAcct>
              <UltmtDbtr><Pty><Nm>NOTPROVIDED</Nm></Pty></UltmtDbtr>
            </RltdPties>
            <RltdAgts>
              <DbtrAgt><FinInstnId><BICFI>PBNKDEFFXXX</BICFI></FinInstnId></DbtrAgt>
            </RltdAgts>
            <RmtInf>
              <Ustrd>Rechnung 4711</Ustrd>
              <Ustrd>Kunde 42</Ustrd>
            </RmtInf>
          </TxDtls>
          <TxDtls>
            <Refs>
              <EndToEndId>E2E-0002</EndToEndId>
              <MndtId>MANDAT-77</MndtId>
            </Refs>
            <Amt Ccy="EUR">30.00</Amt>
            <CdtDbtInd>DBIT</CdtDbtInd>
            <BkTxCd>
              <Domn><Cd>PMNT</Cd><Fmly><Cd>ICDT</Cd><SubFmlyCd>ESCT</SubFmlyCd></Fmly></Domn>
              <Prtry><Cd>NTRF</Cd></Prtry>
            </BkTxCd>
            <RltdPties>
              <Cdtr><Pty><Nm>Stadtwerke München</Nm></Pty></Cdtr>
              <CdtrAcct><Id><IBAN>DE21700519950000007229</IBAN></Id></CdtrAcct>
              <UltmtCdtr><Pty><Nm>Stadtwerke Holding</Nm></Pty></UltmtCdtr>
            </RltdPties>
            <RltdAgts>
              <CdtrAgt><FinInstnId><BICFI>SSKMDEMMXXX</BICFI></FinInstnId></CdtrAgt>
            </RltdAgts>
            <RmtInf>
              <Strd>
                <CdtrRefInf>
                  <Tp><CdOrPrtry><Cd>SCOR</Cd></CdOrPrtry></Tp>
                  <Ref>RF18 5390 0754 7034</Ref>
                </CdtrRefInf>
              </Strd>
            </RmtInf>
            <Chrgs>
              <Rcrd>
                <Amt Ccy="EUR">1.50</Amt>
                <CdtDbtInd>DBIT</CdtDbtInd>
                <ChrgInclInd>true</ChrgInclInd>
              </Rcrd>
            </Chrgs>
          </TxDtls>
        </NtryDtls>
      </Ntry>
    </Stmt>
  </BkToCstmrStmt>
</Document>
"""

CAMT054_REVERSION = """<?xml version="1.0" encoding="UTF-8"?>
<ns:Document xmlns:ns="urn:iso:std:iso:20022:tech:xsd:camt.054.001.02">
  <ns:BkToCstmrDbtCdtNtfctn>
    <ns:GrpHdr><ns:MsgId>NTF-1</ns:MsgId></ns:GrpHdr>
    <ns:Ntfctn>
      <ns:Id>NTF-1-1</ns:Id>
      <ns:Acct>
        <ns:Id><ns:Othr><ns:Id>1234567</ns:Id></ns:Othr></ns:Id>
        <ns:Ccy>EUR</ns:Ccy>
      </ns:Acct>
      <ns:Ntry>
        <ns:Amt Ccy="EUR">25,00</ns:Amt>
        <ns:CdtDbtInd>CRDT</ns:CdtDbtInd>
        <ns:RvslInd>true</ns:RvslInd>
        <ns:Sts>BOOK</ns:Sts>
        <ns:BookgDt><ns:DtTm>2024-04-02T10:15:00</ns:DtTm></ns:BookgDt>
        <ns:ValDt><ns:Dt>2024-04-02</ns:Dt></ns:ValDt>
        <ns:NtryDtls>
          <ns:TxDtls>
            <ns:Refs><ns:EndToEndId>RUECK-1</ns:EndToEndId></ns:Refs>
            <ns:RltdPties>
              <ns:Dbtr><ns:Nm>Debitor AG</ns:Nm></ns:Dbtr>
              <ns:DbtrAcct><ns:Id><ns:IBAN>DE75512108001245126199</ns:IBAN></ns:Id></ns:DbtrAcct>
              <ns:Cdtr><ns:Nm>Kreditor KG</ns:Nm></ns:Cdtr>
              <ns:CdtrAcct><ns:Id><ns:IBAN>DE12500105170648489890</ns:IBAN></ns:Id></ns:CdtrAcct>
            </ns:RltdPties>
            <ns:RltdAgts>
              <ns:DbtrAgt><ns:FinInstnId><ns:BIC>SOGEDEFFXXX</ns:BIC></ns:FinInstnId></ns:DbtrAgt>
              <ns:CdtrAgt><ns:FinInstnId><ns:BIC>INGDDEFFXXX</ns:BIC></ns:FinInstnId></ns:CdtrAgt>
            </ns:RltdAgts>
          </ns:TxDtls>
        </ns:NtryDtls>
      </ns:Ntry>
    </ns:Ntfctn>
  </ns:BkToCstmrDbtCdtNtfctn>
</ns:Document>
"""

CAMT052_FX = """<?xml version="1.0" encoding="UTF-8"?>
<Document>
  <BkToCstmrAcctRpt>
    <GrpHdr><MsgId>RPT-1</MsgId></GrpHdr>
    <Rpt>
      <Id>RPT-1-1</Id>
      <Acct>
        <Id><IBAN>DE89370400440532013000</IBAN></Id>
        <Ccy>EUR</Ccy>
      </Acct>
      <Bal>
        <Tp><CdOrPrtry><Cd>ITBD</Cd></CdOrPrtry></Tp>
        <Amt Ccy="EUR">500.00</Amt>
        <CdtDbtInd>CRDT</CdtDbtInd>
        <Dt><Dt>2024-03-15</Dt></Dt>
      </Bal>
      <Ntry>
        <Amt Ccy="EUR">92.00</Amt>
        <CdtDbtInd>DBIT</CdtDbtInd>
        <Sts>BOOK</Sts>
        <BookgDt><Dt>2024-03-15</Dt></BookgDt>
        <ValDt><Dt>2024-03-15</Dt></ValDt>
        <NtryDtls>
          <TxDtls>
            <Refs><EndToEndId>FX-1</EndToEndId></Refs>
            <AmtDtls>
              <InstdAmt>
                <Amt Ccy="USD">100.00</Amt>
                <CcyXchg>
                  <SrcCcy>USD</SrcCcy>
                  <TrgtCcy>EUR</TrgtCcy>
                  <XchgRate>1.0870</XchgRate>
                </CcyXchg>
              </InstdAmt>
              <TxAmt><Amt Ccy="EUR">92.00</Amt></TxAmt>
            </AmtDtls>
            <RltdPties>
              <Cdtr><Nm>ACME Inc.</Nm></Cdtr>
            </RltdPties>
          </TxDtls>
        </NtryDtls>
      </Ntry>
      <Ntry>
        <Amt Ccy="EUR">10.00</Amt>
        <CdtDbtInd>CRDT</CdtDbtInd>
        <Sts>BOOK</Sts>
        <BookgDt><Dt>2024-03-14</Dt></BookgDt>
        <ValDt><Dt>2024-03-14</Dt></ValDt>
        <AcctSvcrRef>ZINS-Q1</AcctSvcrRef>
      </Ntry>
    </Rpt>
  </BkToCstmrAcctRpt>
</Document>
"""


@pytest.fixture
def camt_parser():
    return CamtParser()


@pytest.fixture
def gvc_table():
    return EmbeddedGvcTable()


@pytest.fixture
def doc_dos_tx(camt_parser):
    return camt_parser.parse_string(CAMT053_DOS_TX, source_name="dos_tx.xml")


@pytest.fixture
def doc_reversion(camt_parser):
    return camt_parser.parse_string(CAMT054_REVERSION, source_name="reversion.xml")


@pytest.fixture
def doc_fx(camt_parser):
    return camt_parser.parse_string(CAMT052_FX, source_name="fx.xml")


@pytest.fixture
def camt_dir(tmp_path):
    """Directorio con los tres extractos como archivos .xml."""
    (tmp_path / "dos_tx.xml").write_text(CAMT053_DOS_TX, encoding="utf-8")
    (tmp_path / "reversion.xml").write_text(CAMT054_REVERSION, encoding="utf-8")
    (tmp_path / "fx.xml").write_text(CAMT052_FX, encoding="utf-8")
    return tmp_path


def _resultado(documento, archivo: str, lookup=None) -> ResultadoExportacion:
    filas = RowProjector(lookup=lookup).project(documento, ExportOptions())
    filas = sort_rows([normalize_row(f) for f in filas])
    return ResultadoExportacion(documento=documento, filas=tuple(filas), archivo_origen=archivo)


@pytest.fixture
def resultado_dos_tx(doc_dos_tx, gvc_table):
    return _resultado(doc_dos_tx, "dos_tx.xml", gvc_table)


@pytest.fixture
def resultado_fx(doc_fx, gvc_table):
    return _resultado(doc_fx, "fx.xml", gvc_table)

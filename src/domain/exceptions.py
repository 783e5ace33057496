"""
Excepciones de dominio del proyecto camt-statement-export.

¿Por qué excepciones propias en lugar de usar ValueError/RuntimeError?
Porque permiten que el orquestador (StatementProcessor) distinga entre
"el archivo no existe", "el XML está roto" y "no es un extracto CAMT", y
registre cada caso en la bitácora sin detener el resto del lote.

Solo los errores ESTRUCTURALES lanzan excepción. Un campo faltante o un
monto ilegible nunca lanza: se resuelve a un valor por defecto ("", 0).

Jerarquía:
    ParserBaseError
    ├── FormatoInvalidoError        → El archivo no tiene el formato esperado
    ├── ExtractionError             → Error al leer el archivo
    ├── ParseError                  → Error estructural del documento
    │   ├── XmlMalformadoError      → El XML no se puede parsear
    │   ├── DocumentoVacioError     → No hay contenido / no hay raíz
    │   └── RaizNoSoportadaError    → No es camt.052/053/054
    ├── DesbordamientoError         → Monto fuera de rango (modo estricto)
    └── OutputError                 → Error al generar el archivo de salida
"""


class ParserBaseError(Exception):
    """Excepción base del proyecto. Todas las demás heredan de esta.

    ¿Por qué una base común? Para poder capturar CUALQUIER error del proyecto
    con un solo `except ParserBaseError` en el orquestador, mientras que los
    handlers específicos pueden capturar subclases individuales.
    """


class FormatoInvalidoError(ParserBaseError):
    """Se lanza cuando un archivo no tiene el formato esperado.

    Ejemplos:
    - Se esperaba un XML pero el archivo no existe o es un directorio.
    - Se pidió un formato de salida que no está registrado.
    """

    def __init__(self, archivo: str, formato_esperado: str, detalle: str = ""):
        self.archivo = archivo
        self.formato_esperado = formato_esperado
        mensaje = f"Formato inválido en '{archivo}'. Se esperaba: {formato_esperado}"
        if detalle:
            mensaje += f" ({detalle})"
        super().__init__(mensaje)


class ExtractionError(ParserBaseError):
    """Se lanza cuando falla la lectura del archivo de entrada.

    Esto puede pasar porque:
    - No hay permisos de lectura.
    - El stream se cerró o lanzó un error de E/S.
    """

    def __init__(self, archivo: str, causa: str):
        self.archivo = archivo
        self.causa = causa
        super().__init__(f"Error leyendo '{archivo}': {causa}")


class ParseError(ParserBaseError):
    """Se lanza cuando un documento no se puede convertir al modelo.

    Nunca se devuelve un Document parcial: o se extrae completo o se lanza
    una subclase de esta excepción.
    """

    def __init__(self, origen: str, archivo: str, causa: str):
        self.origen = origen
        self.archivo = archivo
        self.causa = causa
        super().__init__(f"Error parseando {origen} en '{archivo}': {causa}")


class XmlMalformadoError(ParseError):
    """El texto de entrada no es XML bien formado."""

    def __init__(self, archivo: str, causa: str):
        super().__init__("XML", archivo, causa)


class DocumentoVacioError(ParseError):
    """La entrada está vacía o no tiene elemento raíz."""

    def __init__(self, archivo: str):
        super().__init__("CAMT", archivo, "Empty document")


class RaizNoSoportadaError(ParseError):
    """El XML no contiene ninguno de los payloads CAMT conocidos.

    Payloads soportados:
    - BkToCstmrAcctRpt        (camt.052)
    - BkToCstmrStmt           (camt.053)
    - BkToCstmrDbtCdtNtfctn   (camt.054)
    """

    def __init__(self, archivo: str, raiz: str):
        self.raiz = raiz
        super().__init__("CAMT", archivo, f"Unsupported CAMT root: <{raiz}>")


class DesbordamientoError(ParserBaseError):
    """Se lanza en modo estricto cuando un monto no cabe en 64 bits.

    En modo normal el monto se degrada a 0 sin lanzar.
    """

    def __init__(self, texto: str, moneda: str):
        self.texto = texto
        self.moneda = moneda
        super().__init__(f"Monto fuera de rango: '{texto}' {moneda}".rstrip())


class OutputError(ParserBaseError):
    """Se lanza cuando falla la generación del archivo de salida.

    Esto puede pasar porque:
    - No hay permisos de escritura en el directorio de salida.
    - El disco está lleno.
    - Hay un error en el formato del Excel.
    """

    def __init__(self, ruta_salida: str, causa: str):
        self.ruta_salida = ruta_salida
        self.causa = causa
        super().__init__(f"Error generando salida en '{ruta_salida}': {causa}")

"""
Encodage DER / PEM des structures ASN.1
"""

import base64
import binascii
import textwrap
from typing import Tuple

from pyasn1.codec.der import decoder, encoder
from pyasn1.error import PyAsn1Error

from .exceptions import EncodingError

# Libellés PEM
PEM_CERTIFICATE = "CERTIFICATE"
PEM_PRIVATE_KEY = "PRIVATE KEY"
PEM_PUBLIC_KEY = "PUBLIC KEY"
PEM_CSR = "CERTIFICATE REQUEST"
PEM_CRL = "X509 CRL"

PEM_LINE_LENGTH = 64


def der_encode(value) -> bytes:
    """
    Encode une structure pyasn1 en DER

    Raises:
        EncodingError: Si la structure est incomplète ou invalide
    """
    try:
        return encoder.encode(value)
    except PyAsn1Error as e:
        raise EncodingError(f"Encodage DER impossible ({value.__class__.__name__}): {e}") from e


def der_decode(data: bytes, spec):
    """
    Décode des octets DER selon une spécification pyasn1

    Args:
        data: Octets DER
        spec: Instance du type attendu (ex: rfc5280.Certificate())

    Returns:
        Structure pyasn1 décodée

    Raises:
        EncodingError: Si les données sont invalides ou suivies d'octets en trop
    """
    try:
        value, rest = decoder.decode(data, asn1Spec=spec)
    except PyAsn1Error as e:
        raise EncodingError(f"Décodage DER impossible ({spec.__class__.__name__}): {e}") from e

    if rest:
        raise EncodingError(f"{len(rest)} octets en trop après la structure {spec.__class__.__name__}")
    return value


def pem_encode(der: bytes, label: str) -> bytes:
    """
    Enveloppe des octets DER dans un bloc PEM (base64, lignes de 64 caractères)
    """
    b64 = base64.b64encode(der).decode("ascii")
    lines = textwrap.wrap(b64, PEM_LINE_LENGTH)
    pem = [f"-----BEGIN {label}-----", *lines, f"-----END {label}-----", ""]
    return "\n".join(pem).encode("ascii")


def pem_decode(data: bytes) -> Tuple[str, bytes]:
    """
    Extrait le premier bloc PEM

    Returns:
        tuple: (libellé, octets_DER)

    Raises:
        EncodingError: Si aucun bloc PEM valide n'est trouvé
    """
    text = data.decode("ascii", errors="replace")
    begin = text.find("-----BEGIN ")
    if begin < 0:
        raise EncodingError("Aucun bloc PEM trouvé")

    header_end = text.find("-----", begin + 11)
    if header_end < 0:
        raise EncodingError("En-tête PEM incomplet")
    label = text[begin + 11:header_end]

    footer = f"-----END {label}-----"
    end = text.find(footer, header_end)
    if end < 0:
        raise EncodingError(f"Pied de bloc PEM introuvable: {footer}")

    body = "".join(text[header_end + 5:end].split())
    try:
        der = base64.b64decode(body, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Contenu base64 invalide dans le bloc {label}: {e}") from e

    return label, der


def is_pem(data: bytes) -> bool:
    return data.lstrip().startswith(b"-----BEGIN ")


__all__ = [
    'PEM_CERTIFICATE', 'PEM_PRIVATE_KEY', 'PEM_PUBLIC_KEY', 'PEM_CSR', 'PEM_CRL',
    'der_encode', 'der_decode', 'pem_encode', 'pem_decode', 'is_pem'
]

"""
Helpers ASN.1 (pyasn1 / RFC 5280)

Les noms et les valeurs d'extensions sont produits par cryptography.x509
puis décodés dans les structures pyasn1 qui seront signées par le
fournisseur post-quantique.
"""

from datetime import datetime
from typing import Union

from cryptography import x509
from pyasn1.type import univ, useful
from pyasn1_modules import rfc5280

from .encoding import der_decode
from .models import Algorithm, DistinguishedName

# Au-delà de 2049, RFC 5280 impose GeneralizedTime
UTC_TIME_MAX_YEAR = 2049


def object_identifier(dotted: str) -> univ.ObjectIdentifier:
    return univ.ObjectIdentifier(dotted)


def fill_algorithm_identifier(component: rfc5280.AlgorithmIdentifier, algorithm: Algorithm) -> None:
    """
    Renseigne un AlgorithmIdentifier: OID de l'algorithme, paramètres absents
    """
    component['algorithm'] = object_identifier(algorithm.identifier)


def build_name(dn: Union[DistinguishedName, str]) -> rfc5280.Name:
    """
    Construit un Name RFC 5280 à partir d'un DN

    Args:
        dn: DistinguishedName ou chaîne RFC 4514 (ex: "CN=BC dilithium2 Test TA")

    Returns:
        rfc5280.Name: Nom encodable en DER
    """
    if isinstance(dn, DistinguishedName):
        name = dn.to_x509()
    else:
        name = x509.Name.from_rfc4514_string(dn)
    return der_decode(name.public_bytes(), rfc5280.Name())


def set_time(component: rfc5280.Time, dt: datetime) -> None:
    """
    Renseigne un champ Time (UTCTime jusqu'en 2049, GeneralizedTime ensuite)
    Les fractions de seconde sont ignorées.
    """
    if dt.year <= UTC_TIME_MAX_YEAR:
        component['utcTime'] = useful.UTCTime(dt.strftime("%y%m%d%H%M%SZ"))
    else:
        component['generalTime'] = useful.GeneralizedTime(dt.strftime("%Y%m%d%H%M%SZ"))


def build_extension(value: x509.ExtensionType, critical: bool) -> rfc5280.Extension:
    """
    Construit une extension X.509 à partir d'une valeur cryptography.x509

    Args:
        value: Valeur d'extension (BasicConstraints, KeyUsage, CRLReason...)
        critical: Drapeau critique

    Returns:
        rfc5280.Extension: Extension dont extnValue contient le DER de la valeur
    """
    extension = rfc5280.Extension()
    extension['extnID'] = object_identifier(value.oid.dotted_string)
    extension['critical'] = critical
    extension['extnValue'] = value.public_bytes()
    return extension


def bit_string(data: bytes) -> univ.BitString:
    return univ.BitString.fromOctetString(data)


__all__ = [
    'object_identifier',
    'fill_algorithm_identifier',
    'build_name',
    'set_time',
    'build_extension',
    'bit_string'
]

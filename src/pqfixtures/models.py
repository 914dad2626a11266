"""
Modèles de données pour le générateur de fixtures PKI
Classes représentant les entités d'une hiérarchie TA / CA / EE
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from cryptography import x509

from . import config


@dataclass(frozen=True)
class Algorithm:
    """
    Algorithme de signature du catalogue (OID + nom lisible)
    """
    identifier: str
    name: str


@dataclass(frozen=True)
class KeyPair:
    """
    Paire de clés liée à un algorithme
    Les clés sont conservées sous forme brute (octets du fournisseur)
    """
    algorithm: Algorithm
    public_key: bytes = field(repr=False)
    secret_key: bytes = field(repr=False)


@dataclass(frozen=True)
class DistinguishedName:
    """
    Représente le Distinguished Name (DN) d'un rôle de la hiérarchie
    """
    algorithm_name: str
    role: str

    def to_string(self) -> str:
        """Convertit le DN en chaîne RFC4514"""
        return config.get_subject_dn(self.algorithm_name, self.role)

    def to_x509(self) -> x509.Name:
        return x509.Name.from_rfc4514_string(self.to_string())


@dataclass(frozen=True)
class RolePolicy:
    """
    Politique d'extensions X.509v3 d'un rôle (TA, CA ou EE)

    Les deux extensions sont toujours critiques.
    """
    role: str
    ca: bool
    path_length: Optional[int]
    key_cert_sign: bool
    crl_sign: bool
    digital_signature: bool

    def basic_constraints(self) -> x509.BasicConstraints:
        return x509.BasicConstraints(ca=self.ca, path_length=self.path_length)

    def key_usage(self) -> x509.KeyUsage:
        return x509.KeyUsage(
            digital_signature=self.digital_signature,
            content_commitment=False,
            key_encipherment=False,
            data_encipherment=False,
            key_agreement=False,
            key_cert_sign=self.key_cert_sign,
            crl_sign=self.crl_sign,
            encipher_only=False,
            decipher_only=False
        )


# TA: peut signer des CA (pathLength=1), certificats et CRL
TA_POLICY = RolePolicy(
    role="TA", ca=True, path_length=1,
    key_cert_sign=True, crl_sign=True, digital_signature=False
)

# CA: peut signer des certificats finaux uniquement (pathLength=0)
CA_POLICY = RolePolicy(
    role="CA", ca=True, path_length=0,
    key_cert_sign=True, crl_sign=True, digital_signature=False
)

# EE: certificat final, signature numérique seulement
EE_POLICY = RolePolicy(
    role="EE", ca=False, path_length=None,
    key_cert_sign=False, crl_sign=False, digital_signature=True
)


@dataclass(frozen=True)
class HierarchyArtifacts:
    """
    Les trois paires de clés et les sept artefacts d'un algorithme
    Chaque artefact est conservé en DER
    """
    algorithm: Algorithm
    ta_key_pair: KeyPair
    ca_key_pair: KeyPair
    ee_key_pair: KeyPair
    ta_certificate: bytes = field(repr=False)
    ta_crl: bytes = field(repr=False)
    ca_csr: bytes = field(repr=False)
    ca_certificate: bytes = field(repr=False)
    ca_crl: bytes = field(repr=False)
    ee_csr: bytes = field(repr=False)
    ee_certificate: bytes = field(repr=False)

    def certificates(self) -> Tuple[bytes, bytes, bytes]:
        """Retourne (TA, CA, EE)"""
        return self.ta_certificate, self.ca_certificate, self.ee_certificate


__all__ = [
    'Algorithm',
    'KeyPair',
    'DistinguishedName',
    'RolePolicy',
    'TA_POLICY',
    'CA_POLICY',
    'EE_POLICY',
    'HierarchyArtifacts'
]

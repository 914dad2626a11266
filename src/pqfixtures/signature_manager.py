"""
Signature Manager
Signe les structures « to-be-signed » (certificat, CRL, CSR) avec la clé
secrète de l'émetteur via son fournisseur post-quantique
"""

import logging
from typing import Optional, Tuple

from . import asn1
from .encoding import der_encode
from .models import Algorithm, KeyPair
from .providers import ProviderRegistry, default_registry

logger = logging.getLogger(__name__)


class SignatureManager:
    """
    Gestionnaire de signatures numériques
    """

    def __init__(self, registry: Optional[ProviderRegistry] = None):
        self.registry = registry or default_registry

    # ============================================
    # ✍️ SIGNATURE
    # ============================================

    def sign(self, key_pair: KeyPair, data: bytes) -> bytes:
        """
        Signe des octets avec la clé secrète d'une paire

        Raises:
            UnsupportedAlgorithmError: Si l'algorithme n'a pas de fournisseur
            SigningError: Si le fournisseur échoue
        """
        provider = self.registry.get(key_pair.algorithm)
        signature = provider.sign(key_pair.secret_key, data)
        logger.debug("%d octets signés (%s, signature: %d octets)",
                     len(data), provider.name, len(signature))
        return signature

    def sign_structure(self, tbs, key_pair: KeyPair) -> Tuple[bytes, bytes]:
        """
        Encode une structure pyasn1 en DER puis la signe

        Returns:
            tuple: (DER de la structure, signature)
        """
        tbs_der = der_encode(tbs)
        return tbs_der, self.sign(key_pair, tbs_der)

    def finalize(self, signed, tbs_field: str, tbs, key_pair: KeyPair) -> bytes:
        """
        Complète une structure signée (Certificate, CertificateList,
        CertificationRequest) et retourne son encodage DER

        Args:
            signed: Structure enveloppe vide
            tbs_field: Nom du champ « to-be-signed » dans l'enveloppe
            tbs: Structure à signer
            key_pair: Paire de clés du signataire
        """
        _, signature = self.sign_structure(tbs, key_pair)

        signed[tbs_field] = tbs
        asn1.fill_algorithm_identifier(signed['signatureAlgorithm'], key_pair.algorithm)
        signed['signature'] = asn1.bit_string(signature)
        return der_encode(signed)

    # ============================================
    # 🔍 VÉRIFICATION
    # ============================================

    def verify(self, algorithm: Algorithm, public_key: bytes, data: bytes, signature: bytes) -> bool:
        """Vérifie une signature brute avec le fournisseur de l'algorithme"""
        provider = self.registry.get(algorithm)
        return provider.verify(public_key, data, signature)


__all__ = ['SignatureManager']

"""
Registration Authority (RA)
Produit les demandes de certificats PKCS#10 (CSR) de la hiérarchie
"""

import logging
from typing import Optional

from pyasn1_modules import rfc2986

from . import asn1, config
from .keygen import KeyGenerator
from .models import DistinguishedName, KeyPair
from .signature_manager import SignatureManager

logger = logging.getLogger(__name__)


class RegistrationAuthority:
    """
    Autorité d'Enregistrement (RA)
    Construit et signe les CSR avant émission par la CA
    """

    def __init__(
            self,
            signer: Optional[SignatureManager] = None,
            key_gen: Optional[KeyGenerator] = None
    ):
        self.signer = signer or SignatureManager()
        self.key_gen = key_gen or KeyGenerator(self.signer.registry)

    # ============================================
    # 📝 CRÉATION CSR
    # ============================================

    def create_csr(self, subject: DistinguishedName, key_pair: KeyPair) -> bytes:
        """
        Crée une Certificate Signing Request

        La CSR porte la clé publique de la paire et est signée par sa clé
        secrète. Aucun attribut n'est demandé.

        Args:
            subject: DN demandé
            key_pair: Paire de clés du demandeur

        Returns:
            bytes: CSR encodée en DER
        """
        request_info = rfc2986.CertificationRequestInfo()
        request_info['version'] = config.CSR_VERSION
        request_info['subject'] = asn1.build_name(subject)
        request_info['subjectPKInfo'] = self.key_gen.public_key_info(key_pair)
        request_info['attributes'].clear()

        csr = self.signer.finalize(
            rfc2986.CertificationRequest(), 'certificationRequestInfo', request_info, key_pair
        )

        logger.debug("CSR créée pour %s", subject.to_string())
        return csr


__all__ = ['RegistrationAuthority']

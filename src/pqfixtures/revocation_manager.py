"""
Revocation Manager
Génère les CRL de test: une seule entrée révoquée, synthétique
"""

import logging
from datetime import datetime
from typing import Optional

from cryptography import x509
from pyasn1_modules import rfc5280

from . import asn1, config, utils
from .models import DistinguishedName, KeyPair
from .signature_manager import SignatureManager

logger = logging.getLogger(__name__)

# Raison unique des entrées révoquées
REVOCATION_REASON = x509.ReasonFlags(config.REVOCATION_REASON)


class RevocationManager:
    """
    Gestionnaire de révocation
    """

    def __init__(self, signer: Optional[SignatureManager] = None):
        self.signer = signer or SignatureManager()

    # ============================================
    # 📋 GESTION CRL
    # ============================================

    def generate_crl(
            self,
            issuer: DistinguishedName,
            issuer_key: KeyPair,
            revoked_serial: int,
            now: Optional[datetime] = None
    ) -> bytes:
        """
        Génère une Certificate Revocation List (CRL) à une entrée

        Args:
            issuer: DN de l'émetteur de la CRL
            issuer_key: Paire de clés de l'émetteur
            revoked_serial: Numéro de série révoqué (1 pour le TA, 10 pour la CA)
            now: Date de la CRL et de la révocation (défaut: maintenant)

        Returns:
            bytes: CRL signée encodée en DER
        """
        tbs = self.build_tbs_crl(issuer, issuer_key, revoked_serial, now)
        crl = self.signer.finalize(rfc5280.CertificateList(), 'tbsCertList', tbs, issuer_key)

        logger.debug("CRL de %s générée (SN révoqué: %d)", issuer.to_string(), revoked_serial)
        return crl

    def build_tbs_crl(
            self,
            issuer: DistinguishedName,
            issuer_key: KeyPair,
            revoked_serial: int,
            now: Optional[datetime] = None
    ) -> rfc5280.TBSCertList:
        """Assemble le TBSCertList (thisUpdate = date de révocation = now)"""
        if now is None:
            now = utils.now_utc()

        tbs = rfc5280.TBSCertList()
        tbs['version'] = config.CRL_VERSION
        asn1.fill_algorithm_identifier(tbs['signature'], issuer_key.algorithm)
        tbs['issuer'] = asn1.build_name(issuer)
        asn1.set_time(tbs['thisUpdate'], now)

        revoked_certificates = tbs['revokedCertificates']
        entry = revoked_certificates.componentType.clone()
        entry['userCertificate'] = revoked_serial
        asn1.set_time(entry['revocationDate'], now)
        entry['crlEntryExtensions'].append(
            asn1.build_extension(x509.CRLReason(REVOCATION_REASON), critical=False)
        )
        revoked_certificates.append(entry)

        return tbs


__all__ = ['RevocationManager', 'REVOCATION_REASON']

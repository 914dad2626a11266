"""
Certificate Issuer
Émet les certificats X.509v3 des trois rôles (TA, CA, EE) selon leur politique
"""

import logging
from datetime import datetime
from typing import Optional

from pyasn1_modules import rfc5280

from . import asn1, config, utils
from .keygen import KeyGenerator
from .models import DistinguishedName, KeyPair, RolePolicy
from .serial import SerialNumberGenerator
from .signature_manager import SignatureManager

logger = logging.getLogger(__name__)


class CertificateIssuer:
    """
    Émetteur de certificats
    Une seule opération paramétrée par la politique du rôle
    """

    def __init__(
            self,
            serials: SerialNumberGenerator,
            signer: Optional[SignatureManager] = None,
            key_gen: Optional[KeyGenerator] = None
    ):
        self.serials = serials
        self.signer = signer or SignatureManager()
        self.key_gen = key_gen or KeyGenerator(self.signer.registry)

    # ============================================
    # 📜 ÉMISSION CERTIFICATS
    # ============================================

    def issue_certificate(
            self,
            subject: DistinguishedName,
            issuer: DistinguishedName,
            issuer_key: KeyPair,
            subject_key: KeyPair,
            policy: RolePolicy,
            now: Optional[datetime] = None
    ) -> bytes:
        """
        Construit et signe un certificat

        Args:
            subject: DN du sujet
            issuer: DN de l'émetteur (égal au sujet pour un TA auto-signé)
            issuer_key: Paire de clés de l'émetteur (signe le certificat)
            subject_key: Paire de clés du sujet (seule la clé publique est utilisée)
            policy: Politique d'extensions du rôle
            now: Instant de référence (défaut: maintenant)

        Returns:
            bytes: Certificat signé encodé en DER
        """
        tbs = self.build_tbs_certificate(subject, issuer, issuer_key, subject_key, policy, now)
        certificate = self.signer.finalize(rfc5280.Certificate(), 'tbsCertificate', tbs, issuer_key)

        logger.debug("Certificat %s construit et signé (SN: %X)", policy.role, int(tbs['serialNumber']))
        return certificate

    def build_tbs_certificate(
            self,
            subject: DistinguishedName,
            issuer: DistinguishedName,
            issuer_key: KeyPair,
            subject_key: KeyPair,
            policy: RolePolicy,
            now: Optional[datetime] = None
    ) -> rfc5280.TBSCertificate:
        """Assemble le TBSCertificate (consomme un numéro de série)"""
        if now is None:
            now = utils.now_utc()

        # Dates de validité: tolérance d'horloge avant, un an après
        not_before = now - config.BEFORE_DELTA
        not_after = now + config.AFTER_DELTA

        tbs = rfc5280.TBSCertificate()
        tbs['version'] = config.CERTIFICATE_VERSION
        tbs['serialNumber'] = self.serials.next_serial()
        asn1.fill_algorithm_identifier(tbs['signature'], issuer_key.algorithm)
        tbs['issuer'] = asn1.build_name(issuer)
        asn1.set_time(tbs['validity']['notBefore'], not_before)
        asn1.set_time(tbs['validity']['notAfter'], not_after)
        tbs['subject'] = asn1.build_name(subject)
        tbs['subjectPublicKeyInfo'] = self.key_gen.public_key_info(subject_key)

        self._add_extensions(tbs, policy)
        return tbs

    def _add_extensions(self, tbs: rfc5280.TBSCertificate, policy: RolePolicy) -> None:
        """
        Ajoute les extensions X.509v3 du rôle

        1. BasicConstraints (CRITIQUE)
        2. KeyUsage (CRITIQUE)
        """
        extensions = tbs['extensions']
        extensions.append(asn1.build_extension(policy.basic_constraints(), critical=True))
        extensions.append(asn1.build_extension(policy.key_usage(), critical=True))


__all__ = ['CertificateIssuer']

"""
Générateur de clés post-quantiques
Génère les paires de clés via les fournisseurs enregistrés et les encode
en SubjectPublicKeyInfo (clé publique) et OneAsymmetricKey / PKCS#8 (clé privée)
"""

import logging
from typing import Dict, Optional, Tuple

from pyasn1_modules import rfc5280, rfc5958

from . import asn1, config, utils
from .encoding import (
    PEM_PRIVATE_KEY, PEM_PUBLIC_KEY,
    der_decode, der_encode, pem_encode
)
from .models import Algorithm, KeyPair
from .providers import ProviderRegistry, default_registry

logger = logging.getLogger(__name__)

# OneAsymmetricKey v2: la clé publique accompagne la clé privée
ONE_ASYMMETRIC_KEY_V2 = 1


class KeyGenerator:
    """
    Classe pour générer et encoder les clés des trois rôles
    """

    def __init__(self, registry: Optional[ProviderRegistry] = None):
        """Initialise le générateur avec le registre de fournisseurs"""
        self.registry = registry or default_registry

    # ============================================
    # 🔐 GÉNÉRATION DE CLÉS
    # ============================================

    def generate_key_pair(self, algorithm: Algorithm) -> KeyPair:
        """
        Génère une nouvelle paire de clés pour un algorithme

        Args:
            algorithm: Algorithme du catalogue

        Returns:
            KeyPair: Paire de clés fraîche

        Raises:
            UnsupportedAlgorithmError: Si aucun fournisseur n'est disponible
        """
        provider = self.registry.get(algorithm)
        public_key, secret_key = provider.generate_key_pair()

        logger.debug(
            "Paire de clés %s générée via %s (pub: %d octets, priv: %d octets)",
            algorithm.name, provider.name, len(public_key), len(secret_key)
        )
        return KeyPair(algorithm=algorithm, public_key=public_key, secret_key=secret_key)

    # ============================================
    # 📦 ENCODAGE DES CLÉS
    # ============================================

    def public_key_info(self, key_pair: KeyPair) -> rfc5280.SubjectPublicKeyInfo:
        """Construit le SubjectPublicKeyInfo d'une paire de clés"""
        spki = rfc5280.SubjectPublicKeyInfo()
        asn1.fill_algorithm_identifier(spki['algorithm'], key_pair.algorithm)
        spki['subjectPublicKey'] = asn1.bit_string(key_pair.public_key)
        return spki

    def public_key_der(self, key_pair: KeyPair) -> bytes:
        return der_encode(self.public_key_info(key_pair))

    def private_key_der(self, key_pair: KeyPair) -> bytes:
        """
        Encode la clé privée en OneAsymmetricKey (RFC 5958, PKCS#8 v2)
        La clé publique est incluse dans le champ publicKey.
        """
        key_info = rfc5958.OneAsymmetricKey()
        key_info['version'] = ONE_ASYMMETRIC_KEY_V2
        asn1.fill_algorithm_identifier(key_info['privateKeyAlgorithm'], key_pair.algorithm)
        key_info['privateKey'] = key_pair.secret_key
        key_info['publicKey'] = key_info['publicKey'].clone(hexValue=key_pair.public_key.hex())
        return der_encode(key_info)

    def public_key_pem(self, key_pair: KeyPair) -> bytes:
        return pem_encode(self.public_key_der(key_pair), PEM_PUBLIC_KEY)

    def private_key_pem(self, key_pair: KeyPair) -> bytes:
        return pem_encode(self.private_key_der(key_pair), PEM_PRIVATE_KEY)

    # ============================================
    # 📂 DÉCODAGE DES CLÉS
    # ============================================

    @staticmethod
    def decode_public_key(der: bytes) -> Tuple[str, bytes]:
        """
        Décode un SubjectPublicKeyInfo

        Returns:
            tuple: (OID de l'algorithme, clé publique brute)
        """
        spki = der_decode(der, rfc5280.SubjectPublicKeyInfo())
        return str(spki['algorithm']['algorithm']), spki['subjectPublicKey'].asOctets()

    @staticmethod
    def decode_private_key(der: bytes) -> Tuple[str, bytes, Optional[bytes]]:
        """
        Décode un OneAsymmetricKey

        Returns:
            tuple: (OID de l'algorithme, clé secrète brute, clé publique brute ou None)
        """
        key_info = der_decode(der, rfc5958.OneAsymmetricKey())
        public_key = None
        if key_info['publicKey'].isValue:
            public_key = key_info['publicKey'].asOctets()
        return (
            str(key_info['privateKeyAlgorithm']['algorithm']),
            bytes(key_info['privateKey']),
            public_key
        )

    # ============================================
    # 🔍 INFORMATIONS SUR LES CLÉS
    # ============================================

    def get_key_info(self, key_pair: KeyPair) -> Dict[str, str]:
        """
        Récupère les informations détaillées sur une paire de clés

        Returns:
            dict: Informations (algorithme, OID, fournisseur, tailles)
        """
        provider = self.registry.find(key_pair.algorithm)
        return {
            'algorithm': key_pair.algorithm.name,
            'oid': key_pair.algorithm.identifier,
            'provider': provider.name if provider else "N/A",
            'public_key_size': f"{len(key_pair.public_key)} octets",
            'secret_key_size': f"{len(key_pair.secret_key)} octets",
            'format': 'SPKI / PKCS#8 v2'
        }

    def display_key_info(self, key_pair: KeyPair) -> None:
        """
        Affiche les informations d'une paire de clés de manière formatée avec Rich
        """
        info = self.get_key_info(key_pair)

        table = utils.create_table(
            f"{config.CLI_SYMBOLS['key']} Informations de la clé",
            ["Propriété", "Valeur"]
        )

        for key, value in info.items():
            table.add_row(key.replace('_', ' ').title(), str(value))

        utils.console.print(table)


# ============================================
# 🎯 INSTANCE GLOBALE
# ============================================

# Instance par défaut pour utilisation directe
keygen = KeyGenerator()

__all__ = [
    'KeyGenerator',
    'keygen'
]

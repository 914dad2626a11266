"""
Configuration globale du générateur de fixtures PKI post-quantiques
Contient toutes les constantes et paramètres du projet
"""

from pathlib import Path
from datetime import timedelta

# ============================================
# 📁 CHEMINS DES RÉPERTOIRES
# ============================================

# Répertoire de sortie par défaut (relatif au répertoire courant)
ARTIFACTS_DIR = Path("artifacts")

# Sous-répertoires d'un algorithme
TA_DIR_NAME = "ta"
CA_DIR_NAME = "ca"
EE_DIR_NAME = "ee"
CRL_DIR_NAME = "crl"

# ============================================
# 📜 PARAMÈTRES DES CERTIFICATS X.509
# ============================================

# Tolérance de décalage d'horloge appliquée à notBefore (60 000 ms)
BEFORE_DELTA = timedelta(milliseconds=60 * 1000)

# Durée de validité appliquée à notAfter
AFTER_DELTA = timedelta(days=365)

# Modèle des Distinguished Names: "CN=BC <algorithme> Test <rôle>"
DN_TEMPLATE = "CN=BC {algorithm} Test {role}"

# Version X.509 (v3 = 2) et version des CRL (v2 = 1)
CERTIFICATE_VERSION = 2
CRL_VERSION = 1

# Version PKCS#10
CSR_VERSION = 0

# ============================================
# 📋 PARAMÈTRES CRL
# ============================================

# Numéros de série révoqués (valeurs synthétiques, pas de vrais certificats)
TA_REVOKED_SERIAL = 1
CA_REVOKED_SERIAL = 10

# Raison de révocation (valeur RFC 5280 de x509.ReasonFlags)
REVOCATION_REASON = "cessationOfOperation"

# ============================================
# 🔢 NUMÉROS DE SÉRIE
# ============================================

# Valeur initiale du compteur partagé
SERIAL_COUNTER_START = 1

# Masques appliqués au premier octet du condensat: bits de poids fort = 01
SERIAL_CLEAR_MASK = 0x7F
SERIAL_SET_MASK = 0x40

# ============================================
# 🎨 PARAMÈTRES D'AFFICHAGE CLI
# ============================================

# Symboles pour l'affichage
CLI_SYMBOLS = {
    "success": "✓",
    "error": "✗",
    "warning": "⚠",
    "info": "ℹ",
    "cert": "📜",
    "key": "🔑",
    "crl": "📋",
    "csr": "📝"
}

# ============================================
# 📊 PARAMÈTRES DE LOGS
# ============================================

LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# ============================================
# 🔒 SÉCURITÉ
# ============================================

# Permissions des fichiers (Unix)
PRIVATE_KEY_PERMISSIONS = 0o600  # rw------- (propriétaire seulement)
CERT_PERMISSIONS = 0o644  # rw-r--r-- (lecture publique)


# ============================================
# 🛠️ FONCTIONS UTILITAIRES DE CONFIG
# ============================================

def get_subject_dn(algorithm_name: str, role: str) -> str:
    """
    Retourne le Distinguished Name d'un rôle pour un algorithme

    Args:
        algorithm_name: Nom lisible de l'algorithme (ex: "dilithium2")
        role: Rôle dans la hiérarchie ("TA", "CA" ou "EE")

    Returns:
        str: DN au format RFC 4514 (ex: "CN=BC dilithium2 Test TA")
    """
    return DN_TEMPLATE.format(algorithm=algorithm_name, role=role)


def get_algorithm_dir(base_dir: Path, identifier: str) -> Path:
    """
    Retourne le répertoire d'un algorithme (nommé par son OID)

    Args:
        base_dir: Répertoire racine des artefacts
        identifier: OID de l'algorithme

    Returns:
        Path: Chemin du répertoire de l'algorithme
    """
    return Path(base_dir) / identifier


def get_role_dir(base_dir: Path, identifier: str, dir_name: str) -> Path:
    """Retourne un sous-répertoire (ta/, ca/, ee/, crl/) d'un algorithme"""
    return get_algorithm_dir(base_dir, identifier) / dir_name


# ============================================
# 🚀 EXPORTS
# ============================================

__all__ = [
    # Répertoires
    'ARTIFACTS_DIR', 'TA_DIR_NAME', 'CA_DIR_NAME', 'EE_DIR_NAME', 'CRL_DIR_NAME',

    # Certificats
    'BEFORE_DELTA', 'AFTER_DELTA', 'DN_TEMPLATE',
    'CERTIFICATE_VERSION', 'CRL_VERSION', 'CSR_VERSION',

    # Révocations
    'TA_REVOKED_SERIAL', 'CA_REVOKED_SERIAL', 'REVOCATION_REASON',

    # Numéros de série
    'SERIAL_COUNTER_START', 'SERIAL_CLEAR_MASK', 'SERIAL_SET_MASK',

    # Interface CLI
    'CLI_SYMBOLS',

    # Logs
    'LOG_LEVEL', 'LOG_FORMAT', 'LOG_DATE_FORMAT',

    # Sécurité
    'PRIVATE_KEY_PERMISSIONS', 'CERT_PERMISSIONS',

    # Fonctions utilitaires
    'get_subject_dn', 'get_algorithm_dir', 'get_role_dir'
]

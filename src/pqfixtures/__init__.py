"""
PQ Fixtures - Fixtures PKI post-quantiques
==========================================

Génère, pour chaque algorithme de signature post-quantique du catalogue,
une hiérarchie de test complète:
- Trust Anchor (TA) auto-signé
- CA subordonnée signée par le TA
- End Entity (EE) signée par la CA
- CSR PKCS#10 et CRL v2 associées
- Écriture en DER et PEM

Modules principaux:
- config: Configuration globale
- utils: Fonctions utilitaires
- algorithms: Catalogue des algorithmes
- providers: Fournisseurs de signature (dilithium-py, liboqs)
- keygen: Génération et encodage des clés
- hierarchy: Assemblage des hiérarchies

Version: 1.0.0
"""

__version__ = "1.0.0"

# Imports principaux
from . import config
from . import utils
from .algorithms import ALGORITHMS, get_algorithm, select_algorithms
from .exceptions import (
    FixtureGenerationError, UnsupportedAlgorithmError,
    SigningError, EncodingError, ArtifactWriteError
)
from .keygen import KeyGenerator, keygen
from .models import Algorithm, KeyPair, DistinguishedName, RolePolicy, HierarchyArtifacts
from .serial import SerialNumberGenerator
from .hierarchy import HierarchyAssembler
from .writer import ArtifactWriter

# Exports
__all__ = [
    'config',
    'utils',
    'ALGORITHMS',
    'get_algorithm',
    'select_algorithms',
    'FixtureGenerationError',
    'UnsupportedAlgorithmError',
    'SigningError',
    'EncodingError',
    'ArtifactWriteError',
    'KeyGenerator',
    'keygen',
    'Algorithm',
    'KeyPair',
    'DistinguishedName',
    'RolePolicy',
    'HierarchyArtifacts',
    'SerialNumberGenerator',
    'HierarchyAssembler',
    'ArtifactWriter',
]

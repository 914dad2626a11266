"""
Exceptions du générateur de fixtures

Aucune de ces erreurs n'est rattrapée localement: la première interrompt
toute la génération.
"""


class FixtureGenerationError(Exception):
    """Erreur de base de la génération des artefacts"""


class UnsupportedAlgorithmError(FixtureGenerationError, ValueError):
    """Aucun fournisseur de signature disponible pour l'algorithme demandé"""


class SigningError(FixtureGenerationError):
    """Échec du fournisseur lors de la signature ou de la vérification"""


class EncodingError(FixtureGenerationError):
    """Échec de l'encodage ou du décodage DER / PEM"""


class ArtifactWriteError(FixtureGenerationError, OSError):
    """Échec de création d'un répertoire ou d'un fichier"""


__all__ = [
    'FixtureGenerationError',
    'UnsupportedAlgorithmError',
    'SigningError',
    'EncodingError',
    'ArtifactWriteError'
]

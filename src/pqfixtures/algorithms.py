"""
Catalogue ordonné des algorithmes de signature post-quantiques
"""

from typing import Iterable, Optional, Tuple

from .exceptions import UnsupportedAlgorithmError
from .models import Algorithm

DILITHIUM2 = Algorithm("1.3.6.1.4.1.2.267.7.4.4", "dilithium2")
DILITHIUM3 = Algorithm("1.3.6.1.4.1.2.267.7.6.5", "dilithium3")
DILITHIUM5 = Algorithm("1.3.6.1.4.1.2.267.7.8.7", "dilithium5")
DILITHIUM2_AES = Algorithm("1.3.6.1.4.1.2.267.11.4.4", "dilithium2-aes")
DILITHIUM3_AES = Algorithm("1.3.6.1.4.1.2.267.11.6.5", "dilithium3-aes")
DILITHIUM5_AES = Algorithm("1.3.6.1.4.1.2.267.11.8.7", "dilithium5-aes")
FALCON_512 = Algorithm("1.3.9999.3.6", "falcon-512")
FALCON_1024 = Algorithm("1.3.9999.3.9", "falcon-1024")

# L'ordre du catalogue est l'ordre de génération
ALGORITHMS: Tuple[Algorithm, ...] = (
    DILITHIUM2,
    DILITHIUM3,
    DILITHIUM5,
    DILITHIUM2_AES,
    DILITHIUM3_AES,
    DILITHIUM5_AES,
    FALCON_512,
    FALCON_1024,
)


def get_algorithm(name: str) -> Algorithm:
    """
    Retrouve un algorithme du catalogue par son nom ou son OID

    Raises:
        UnsupportedAlgorithmError: Si l'algorithme n'est pas au catalogue
    """
    for algorithm in ALGORITHMS:
        if name in (algorithm.name, algorithm.identifier):
            return algorithm

    raise UnsupportedAlgorithmError(
        f"Algorithme inconnu: {name}. "
        f"Algorithmes du catalogue: {[a.name for a in ALGORITHMS]}"
    )


def select_algorithms(names: Optional[Iterable[str]] = None) -> Tuple[Algorithm, ...]:
    """
    Restreint le catalogue à une sélection, en conservant l'ordre du catalogue

    Args:
        names: Noms (ou OID) à conserver; None = tout le catalogue

    Returns:
        tuple: Algorithmes sélectionnés
    """
    if names is None:
        return ALGORITHMS

    wanted = {get_algorithm(name) for name in names}
    return tuple(algorithm for algorithm in ALGORITHMS if algorithm in wanted)


__all__ = [
    'ALGORITHMS',
    'DILITHIUM2', 'DILITHIUM3', 'DILITHIUM5',
    'DILITHIUM2_AES', 'DILITHIUM3_AES', 'DILITHIUM5_AES',
    'FALCON_512', 'FALCON_1024',
    'get_algorithm',
    'select_algorithms'
]

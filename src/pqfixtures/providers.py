"""
Fournisseurs de signature post-quantiques
Enregistre, pour chaque algorithme du catalogue, les bibliothèques capables
de générer des clés, signer et vérifier:

- dilithium-py (Python pur) pour Dilithium 2/3/5
- liboqs-python (optionnel) pour Falcon et les variantes Dilithium-AES
"""

import logging
from typing import Dict, List, Optional, Tuple

from dilithium_py.dilithium import Dilithium2, Dilithium3, Dilithium5

from . import algorithms
from .exceptions import SigningError, UnsupportedAlgorithmError
from .models import Algorithm

logger = logging.getLogger(__name__)


class SignatureProvider:
    """
    Interface commune des fournisseurs de signature
    Les clés sont manipulées sous forme brute (bytes)
    """

    name = "abstract"

    def is_available(self) -> bool:
        raise NotImplementedError

    def generate_key_pair(self) -> Tuple[bytes, bytes]:
        """Retourne (clé_publique, clé_secrète)"""
        raise NotImplementedError

    def sign(self, secret_key: bytes, message: bytes) -> bytes:
        raise NotImplementedError

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.name}>"


# ============================================
# 🐍 DILITHIUM-PY (Python pur)
# ============================================

class DilithiumPyProvider(SignatureProvider):
    """
    Dilithium (round 3) via la bibliothèque dilithium-py
    """

    SCHEMES = {
        "Dilithium2": Dilithium2,
        "Dilithium3": Dilithium3,
        "Dilithium5": Dilithium5,
    }

    def __init__(self, scheme_name: str):
        if scheme_name not in self.SCHEMES:
            raise ValueError(
                f"Schéma dilithium-py non supporté: {scheme_name}. "
                f"Valeurs autorisées: {list(self.SCHEMES)}"
            )
        self.name = f"dilithium-py:{scheme_name}"
        self.scheme = self.SCHEMES[scheme_name]

    def is_available(self) -> bool:
        return True

    def generate_key_pair(self) -> Tuple[bytes, bytes]:
        try:
            public_key, secret_key = self.scheme.keygen()
        except Exception as e:
            raise UnsupportedAlgorithmError(f"Génération de clés impossible ({self.name}): {e}") from e
        return bytes(public_key), bytes(secret_key)

    def sign(self, secret_key: bytes, message: bytes) -> bytes:
        try:
            return bytes(self.scheme.sign(secret_key, message))
        except Exception as e:
            raise SigningError(f"Échec de la signature {self.name}: {e}") from e

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        try:
            return bool(self.scheme.verify(public_key, message, signature))
        except Exception as e:
            raise SigningError(f"Échec de la vérification {self.name}: {e}") from e


# ============================================
# 🔐 LIBOQS (optionnel)
# ============================================

class OqsProvider(SignatureProvider):
    """
    Mécanisme de signature liboqs via liboqs-python (module ``oqs``)
    Disponible uniquement si le module est installé et que le mécanisme
    est activé dans la bibliothèque liboqs chargée.
    """

    _oqs = None
    _import_failed = False

    def __init__(self, mechanism: str):
        self.name = f"liboqs:{mechanism}"
        self.mechanism = mechanism

    @classmethod
    def _load_oqs(cls):
        if cls._oqs is None and not cls._import_failed:
            try:
                import oqs
            except (ImportError, RuntimeError) as e:
                logger.info("liboqs-python indisponible: %s", e)
                cls._import_failed = True
            else:
                cls._oqs = oqs
        return cls._oqs

    def is_available(self) -> bool:
        oqs = self._load_oqs()
        if oqs is None:
            return False
        return self.mechanism in oqs.get_enabled_sig_mechanisms()

    def _module(self):
        oqs = self._load_oqs()
        if oqs is None:
            raise UnsupportedAlgorithmError(f"liboqs-python requis pour {self.mechanism}")
        return oqs

    def generate_key_pair(self) -> Tuple[bytes, bytes]:
        oqs = self._module()
        try:
            with oqs.Signature(self.mechanism) as signer:
                public_key = signer.generate_keypair()
                secret_key = signer.export_secret_key()
        except Exception as e:
            raise UnsupportedAlgorithmError(f"Génération de clés impossible ({self.name}): {e}") from e
        return bytes(public_key), bytes(secret_key)

    def sign(self, secret_key: bytes, message: bytes) -> bytes:
        oqs = self._module()
        try:
            with oqs.Signature(self.mechanism, secret_key=secret_key) as signer:
                return bytes(signer.sign(message))
        except Exception as e:
            raise SigningError(f"Échec de la signature {self.name}: {e}") from e

    def verify(self, public_key: bytes, message: bytes, signature: bytes) -> bool:
        oqs = self._module()
        try:
            with oqs.Signature(self.mechanism) as verifier:
                return bool(verifier.verify(message, signature, public_key))
        except Exception as e:
            raise SigningError(f"Échec de la vérification {self.name}: {e}") from e


# ============================================
# 📚 REGISTRE
# ============================================

class ProviderRegistry:
    """
    Associe chaque algorithme à une liste ordonnée de fournisseurs candidats
    Le premier fournisseur disponible est retenu.
    """

    def __init__(self):
        self._providers: Dict[str, List[SignatureProvider]] = {}

    def register(self, algorithm: Algorithm, provider: SignatureProvider) -> None:
        self._providers.setdefault(algorithm.identifier, []).append(provider)

    def candidates(self, algorithm: Algorithm) -> List[SignatureProvider]:
        return list(self._providers.get(algorithm.identifier, []))

    def find(self, algorithm: Algorithm) -> Optional[SignatureProvider]:
        for provider in self.candidates(algorithm):
            if provider.is_available():
                return provider
        return None

    def get(self, algorithm: Algorithm) -> SignatureProvider:
        """
        Retourne le fournisseur à utiliser pour un algorithme

        Raises:
            UnsupportedAlgorithmError: Si aucun fournisseur n'est disponible
        """
        provider = self.find(algorithm)
        if provider is None:
            tried = [p.name for p in self.candidates(algorithm)] or ["aucun"]
            raise UnsupportedAlgorithmError(
                f"Algorithme {algorithm.name} ({algorithm.identifier}) indisponible. "
                f"Fournisseurs essayés: {', '.join(tried)}"
            )
        return provider

    def is_available(self, algorithm: Algorithm) -> bool:
        return self.find(algorithm) is not None


def register_default_providers(registry: ProviderRegistry) -> ProviderRegistry:
    """Enregistre les fournisseurs par défaut pour tout le catalogue"""
    registry.register(algorithms.DILITHIUM2, DilithiumPyProvider("Dilithium2"))
    registry.register(algorithms.DILITHIUM2, OqsProvider("Dilithium2"))
    registry.register(algorithms.DILITHIUM3, DilithiumPyProvider("Dilithium3"))
    registry.register(algorithms.DILITHIUM3, OqsProvider("Dilithium3"))
    registry.register(algorithms.DILITHIUM5, DilithiumPyProvider("Dilithium5"))
    registry.register(algorithms.DILITHIUM5, OqsProvider("Dilithium5"))

    registry.register(algorithms.DILITHIUM2_AES, OqsProvider("Dilithium2-AES"))
    registry.register(algorithms.DILITHIUM3_AES, OqsProvider("Dilithium3-AES"))
    registry.register(algorithms.DILITHIUM5_AES, OqsProvider("Dilithium5-AES"))

    registry.register(algorithms.FALCON_512, OqsProvider("Falcon-512"))
    registry.register(algorithms.FALCON_1024, OqsProvider("Falcon-1024"))
    return registry


# ============================================
# 🎯 INSTANCE GLOBALE
# ============================================

default_registry = register_default_providers(ProviderRegistry())

__all__ = [
    'SignatureProvider',
    'DilithiumPyProvider',
    'OqsProvider',
    'ProviderRegistry',
    'register_default_providers',
    'default_registry'
]

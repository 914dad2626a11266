"""
Hierarchy Assembler
Construit, pour chaque algorithme du catalogue, la hiérarchie TA → CA → EE
(clés, certificats, CSR, CRL) puis la confie à l'écrivain d'artefacts
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import Iterable, List, Optional, Tuple, Union

from tqdm import tqdm

from . import algorithms as catalog
from . import config, utils
from .certificate_issuer import CertificateIssuer
from .exceptions import FixtureGenerationError
from .keygen import KeyGenerator
from .models import (
    CA_POLICY, EE_POLICY, TA_POLICY,
    Algorithm, DistinguishedName, HierarchyArtifacts, KeyPair
)
from .providers import ProviderRegistry, default_registry
from .registration_authority import RegistrationAuthority
from .revocation_manager import RevocationManager
from .serial import SerialNumberGenerator
from .signature_manager import SignatureManager
from .writer import ArtifactWriter

logger = logging.getLogger(__name__)

TOTAL_STEPS = 8


class HierarchyAssembler:
    """
    Assembleur des hiérarchies de test
    Le générateur de numéros de série est partagé par tous les algorithmes.
    """

    def __init__(
            self,
            writer: Optional[ArtifactWriter] = None,
            serials: Optional[SerialNumberGenerator] = None,
            registry: Optional[ProviderRegistry] = None,
            show_progress: bool = True
    ):
        """
        Args:
            writer: Écrivain des artefacts (None: construction en mémoire seulement)
            serials: Générateur de numéros de série partagé
            registry: Registre des fournisseurs de signature
            show_progress: Affiche une barre de progression tqdm
        """
        self.registry = registry or default_registry
        self.serials = serials or SerialNumberGenerator()
        self.signer = SignatureManager(self.registry)
        self.key_gen = KeyGenerator(self.registry)
        self.issuer = CertificateIssuer(self.serials, self.signer, self.key_gen)
        self.revocation = RevocationManager(self.signer)
        self.ra = RegistrationAuthority(self.signer, self.key_gen)
        self.writer = writer
        self.show_progress = show_progress

    # ============================================
    # 🏗️ CONSTRUCTION D'UNE HIÉRARCHIE
    # ============================================

    def build_hierarchy(self, algorithm: Algorithm, now: Optional[datetime] = None) -> HierarchyArtifacts:
        """
        Construit la hiérarchie complète d'un algorithme, dans l'ordre de signature

        Args:
            algorithm: Algorithme du catalogue
            now: Instant de référence des certificats et CRL (défaut: maintenant)

        Returns:
            HierarchyArtifacts: Clés et artefacts DER

        Raises:
            FixtureGenerationError: (ou sous-classe) avec l'algorithme et l'étape en échec
        """
        if now is None:
            now = utils.now_utc()

        ta_dn = DistinguishedName(algorithm.name, "TA")
        ca_dn = DistinguishedName(algorithm.name, "CA")
        ee_dn = DistinguishedName(algorithm.name, "EE")

        ta_key, ca_key, ee_key = self._step(
            algorithm, 1, "génération des paires de clés",
            self._generate_key_pairs, algorithm
        )

        ta_certificate = self._step(
            algorithm, 2, "certificat TA auto-signé",
            self.issuer.issue_certificate, ta_dn, ta_dn, ta_key, ta_key, TA_POLICY, now
        )

        ta_crl = self._step(
            algorithm, 3, "CRL du TA",
            self.revocation.generate_crl, ta_dn, ta_key, config.TA_REVOKED_SERIAL, now=now
        )

        # La CSR de la CA porte la clé publique de l'EE et est signée par sa clé
        ca_csr = self._step(
            algorithm, 4, "CSR de la CA",
            self.ra.create_csr, ca_dn, ee_key
        )

        ca_certificate = self._step(
            algorithm, 5, "certificat CA",
            self.issuer.issue_certificate, ca_dn, ta_dn, ta_key, ca_key, CA_POLICY, now
        )

        ca_crl = self._step(
            algorithm, 6, "CRL de la CA",
            self.revocation.generate_crl, ca_dn, ca_key, config.CA_REVOKED_SERIAL, now=now
        )

        ee_csr = self._step(
            algorithm, 7, "CSR de l'EE",
            self.ra.create_csr, ee_dn, ee_key
        )

        ee_certificate = self._step(
            algorithm, 8, "certificat EE",
            self.issuer.issue_certificate, ee_dn, ca_dn, ca_key, ee_key, EE_POLICY, now
        )

        logger.info("Hiérarchie %s (%s) construite", algorithm.name, algorithm.identifier)

        return HierarchyArtifacts(
            algorithm=algorithm,
            ta_key_pair=ta_key,
            ca_key_pair=ca_key,
            ee_key_pair=ee_key,
            ta_certificate=ta_certificate,
            ta_crl=ta_crl,
            ca_csr=ca_csr,
            ca_certificate=ca_certificate,
            ca_crl=ca_crl,
            ee_csr=ee_csr,
            ee_certificate=ee_certificate
        )

    def _generate_key_pairs(self, algorithm: Algorithm) -> Tuple[KeyPair, KeyPair, KeyPair]:
        """Trois paires de clés indépendantes: TA, CA, EE"""
        return (
            self.key_gen.generate_key_pair(algorithm),
            self.key_gen.generate_key_pair(algorithm),
            self.key_gen.generate_key_pair(algorithm)
        )

    def _step(self, algorithm: Algorithm, number: int, label: str, func, *args, **kwargs):
        """
        Exécute une étape; une erreur est relancée (même classe) avec
        l'algorithme et le numéro d'étape
        """
        logger.debug("%s: étape %d/%d: %s", algorithm.name, number, TOTAL_STEPS, label)
        try:
            return func(*args, **kwargs)
        except FixtureGenerationError as e:
            raise e.__class__(
                f"{algorithm.name} ({algorithm.identifier}), "
                f"étape {number}/{TOTAL_STEPS} ({label}): {e}"
            ) from e

    # ============================================
    # 🚀 GÉNÉRATION DU CATALOGUE
    # ============================================

    def generate(self, algorithm: Algorithm) -> HierarchyArtifacts:
        """Construit puis écrit la hiérarchie d'un algorithme"""
        artifacts = self.build_hierarchy(algorithm)
        self._write(artifacts)
        return artifacts

    def generate_all(
            self,
            algorithms: Optional[Iterable[Union[Algorithm, str]]] = None,
            max_workers: int = 1
    ) -> List[HierarchyArtifacts]:
        """
        Génère les hiérarchies de tout le catalogue (ou d'une sélection)

        La première erreur interrompt la génération; les artefacts déjà
        écrits pour les algorithmes précédents restent sur disque.

        Args:
            algorithms: Algorithmes (ou noms/OID) à générer; None = tout le catalogue
            max_workers: Nombre de threads (1 = séquentiel)

        Returns:
            list: Artefacts, dans l'ordre du catalogue
        """
        selected = self._select(algorithms)
        results = []

        with tqdm(
                total=len(selected),
                desc="Hiérarchies",
                unit="alg",
                disable=not self.show_progress,
                bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt}"
        ) as pbar:
            if max_workers <= 1:
                for algorithm in selected:
                    pbar.set_postfix_str(algorithm.name)
                    results.append(self.generate(algorithm))
                    pbar.update(1)
            else:
                executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="pqfixtures")
                try:
                    futures = [executor.submit(self.build_hierarchy, algorithm) for algorithm in selected]
                    # Écriture dans l'ordre du catalogue
                    for future in futures:
                        artifacts = future.result()
                        pbar.set_postfix_str(artifacts.algorithm.name)
                        self._write(artifacts)
                        results.append(artifacts)
                        pbar.update(1)
                except BaseException:
                    executor.shutdown(wait=True, cancel_futures=True)
                    raise
                executor.shutdown(wait=True)

        return results

    def _select(self, algorithms: Optional[Iterable[Union[Algorithm, str]]]) -> Tuple[Algorithm, ...]:
        if algorithms is None:
            return catalog.ALGORITHMS
        names = [a.name if isinstance(a, Algorithm) else a for a in algorithms]
        return catalog.select_algorithms(names)

    def _write(self, artifacts: HierarchyArtifacts) -> None:
        if self.writer is not None:
            self.writer.write(artifacts)


__all__ = ['HierarchyAssembler', 'TOTAL_STEPS']

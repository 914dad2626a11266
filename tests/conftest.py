"""Fixtures pytest communes"""

from datetime import datetime, timezone

import pytest
from pyasn1_modules import rfc2986, rfc5280

from pqfixtures import algorithms
from pqfixtures.encoding import der_decode
from pqfixtures.hierarchy import HierarchyAssembler
from pqfixtures.providers import default_registry
from pqfixtures.serial import SerialNumberGenerator
from pqfixtures.signature_manager import SignatureManager


# ─────────────────────────────────────────
# Horloge figée
# ─────────────────────────────────────────
@pytest.fixture(scope="session")
def fixed_now() -> datetime:
    return datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


# ─────────────────────────────────────────
# Hiérarchie dilithium2 (construite une seule fois, dilithium-py pur Python)
# ─────────────────────────────────────────
@pytest.fixture(scope="session")
def assembler() -> HierarchyAssembler:
    return HierarchyAssembler(serials=SerialNumberGenerator(), show_progress=False)


@pytest.fixture(scope="session")
def dilithium2_artifacts(assembler, fixed_now):
    return assembler.build_hierarchy(algorithms.DILITHIUM2, now=fixed_now)


# ─────────────────────────────────────────
# Hiérarchie de chaque algorithme du catalogue
# (ignorée si aucun fournisseur n'est disponible)
# ─────────────────────────────────────────
@pytest.fixture(scope="session", params=algorithms.ALGORITHMS, ids=lambda a: a.name)
def catalog_artifacts(request, assembler, fixed_now):
    algorithm = request.param
    if not default_registry.is_available(algorithm):
        pytest.skip(f"aucun fournisseur disponible pour {algorithm.name}")
    return assembler.build_hierarchy(algorithm, now=fixed_now)


@pytest.fixture(scope="session")
def signer() -> SignatureManager:
    return SignatureManager()


# ─────────────────────────────────────────
# Extraction des clés publiques (pyasn1)
# ─────────────────────────────────────────
@pytest.fixture(scope="session")
def certificate_public_key():
    def extract(der: bytes) -> bytes:
        certificate = der_decode(der, rfc5280.Certificate())
        return certificate['tbsCertificate']['subjectPublicKeyInfo']['subjectPublicKey'].asOctets()
    return extract


@pytest.fixture(scope="session")
def csr_public_key():
    def extract(der: bytes) -> bytes:
        request = der_decode(der, rfc2986.CertificationRequest())
        return request['certificationRequestInfo']['subjectPKInfo']['subjectPublicKey'].asOctets()
    return extract

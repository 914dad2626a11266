import sys

import pytest
from cryptography import x509

from pqfixtures import algorithms
from pqfixtures.exceptions import UnsupportedAlgorithmError
from pqfixtures.hierarchy import HierarchyAssembler
from pqfixtures.providers import OqsProvider, ProviderRegistry


def _enabled_provider(mechanism: str) -> OqsProvider:
    oqs = pytest.importorskip("oqs")
    if mechanism not in oqs.get_enabled_sig_mechanisms():
        pytest.skip(f"{mechanism} non activé dans liboqs")
    return OqsProvider(mechanism)


# ==== Falcon via liboqs ====

@pytest.mark.parametrize("algorithm, mechanism", [
    (algorithms.FALCON_512, "Falcon-512"),
    (algorithms.FALCON_1024, "Falcon-1024"),
])
def test_falcon_sign_and_verify(algorithm, mechanism):
    provider = _enabled_provider(mechanism)
    public_key, secret_key = provider.generate_key_pair()

    signature = provider.sign(secret_key, b"message")

    assert provider.is_available()
    assert provider.verify(public_key, b"message", signature)
    assert not provider.verify(public_key, b"autre message", signature)


@pytest.mark.parametrize("algorithm, mechanism", [
    (algorithms.FALCON_512, "Falcon-512"),
    (algorithms.FALCON_1024, "Falcon-1024"),
])
def test_falcon_hierarchy(algorithm, mechanism, fixed_now):
    provider = _enabled_provider(mechanism)
    registry = ProviderRegistry()
    registry.register(algorithm, provider)
    assembler = HierarchyAssembler(registry=registry, show_progress=False)

    artifacts = assembler.build_hierarchy(algorithm, now=fixed_now)

    ta, ca, ee = (x509.load_der_x509_certificate(der) for der in artifacts.certificates())
    assert ee.issuer == ca.subject
    assert ca.issuer == ta.subject
    assert ta.signature_algorithm_oid.dotted_string == algorithm.identifier
    assert provider.verify(artifacts.ca_key_pair.public_key, ee.tbs_certificate_bytes, ee.signature)


# ==== Module oqs absent ====

@pytest.fixture
def oqs_missing(monkeypatch):
    monkeypatch.setattr(OqsProvider, "_oqs", None)
    monkeypatch.setattr(OqsProvider, "_import_failed", False)
    # Une entrée None dans sys.modules fait échouer l'import avec ImportError
    monkeypatch.setitem(sys.modules, "oqs", None)


def test_provider_unavailable_without_oqs(oqs_missing):
    provider = OqsProvider("Falcon-512")

    assert provider.is_available() is False
    with pytest.raises(UnsupportedAlgorithmError, match="liboqs-python"):
        provider.generate_key_pair()


def test_registry_rejects_algorithm_without_oqs(oqs_missing):
    registry = ProviderRegistry()
    registry.register(algorithms.FALCON_512, OqsProvider("Falcon-512"))

    assert not registry.is_available(algorithms.FALCON_512)
    with pytest.raises(UnsupportedAlgorithmError, match="liboqs:Falcon-512"):
        registry.get(algorithms.FALCON_512)

import os
import stat

import pytest
from cryptography import x509

from pqfixtures.encoding import pem_decode
from pqfixtures.exceptions import ArtifactWriteError
from pqfixtures.keygen import KeyGenerator
from pqfixtures.writer import ArtifactWriter

EXPECTED_FILES = {
    "ta": {"ta.pem", "ta_priv.pem", "ta_pub.pem", "ta.der", "ta_priv.der", "ta_pub.der"},
    "ca": {"ca.csr", "ca.pem", "ca_priv.pem", "ca_pub.pem", "ca.der", "ca_priv.der", "ca_pub.der"},
    "ee": {"cert.csr", "cert.pem", "cert_priv.pem", "cert_pub.pem", "cert.der", "cert_priv.der", "cert_pub.der"},
    "crl": {"crl_ta.crl", "crl_ca.crl"},
}


@pytest.fixture
def written(tmp_path, dilithium2_artifacts):
    paths = ArtifactWriter(tmp_path).write(dilithium2_artifacts)
    return tmp_path / dilithium2_artifacts.algorithm.identifier, paths


# ==== Arborescence ====

def test_layout(written):
    algorithm_dir, paths = written

    assert algorithm_dir.name == "1.3.6.1.4.1.2.267.7.4.4"
    assert {p.name for p in algorithm_dir.iterdir()} == set(EXPECTED_FILES)
    for directory, names in EXPECTED_FILES.items():
        assert {p.name for p in (algorithm_dir / directory).iterdir()} == names
    assert len(paths) == 22


def test_contents(written, dilithium2_artifacts):
    algorithm_dir, _ = written

    assert (algorithm_dir / "ta" / "ta.der").read_bytes() == dilithium2_artifacts.ta_certificate
    assert (algorithm_dir / "ca" / "ca.csr").read_bytes() == dilithium2_artifacts.ca_csr
    assert (algorithm_dir / "ee" / "cert.csr").read_bytes() == dilithium2_artifacts.ee_csr
    assert (algorithm_dir / "crl" / "crl_ta.crl").read_bytes() == dilithium2_artifacts.ta_crl
    assert (algorithm_dir / "crl" / "crl_ca.crl").read_bytes() == dilithium2_artifacts.ca_crl

    pem = (algorithm_dir / "ee" / "cert.pem").read_bytes()
    certificate = x509.load_pem_x509_certificate(pem)
    assert certificate.subject.rfc4514_string() == "CN=BC dilithium2 Test EE"


def test_key_files(written, dilithium2_artifacts):
    algorithm_dir, _ = written
    ca_key = dilithium2_artifacts.ca_key_pair

    label, der = pem_decode((algorithm_dir / "ca" / "ca_priv.pem").read_bytes())
    assert label == "PRIVATE KEY"
    assert der == (algorithm_dir / "ca" / "ca_priv.der").read_bytes()

    oid, secret_key, public_key = KeyGenerator.decode_private_key(der)
    assert oid == ca_key.algorithm.identifier
    assert secret_key == ca_key.secret_key
    assert public_key == ca_key.public_key

    label, der = pem_decode((algorithm_dir / "ca" / "ca_pub.pem").read_bytes())
    assert label == "PUBLIC KEY"
    assert KeyGenerator.decode_public_key(der) == (ca_key.algorithm.identifier, ca_key.public_key)


@pytest.mark.skipif(os.name == "nt", reason="permissions Unix")
def test_permissions(written):
    _, paths = written

    for path in paths:
        mode = stat.S_IMODE(path.stat().st_mode)
        if "_priv" in path.name:
            assert mode == 0o600, path
        else:
            assert mode == 0o644, path


# ==== Erreurs ====

def test_write_error(tmp_path, dilithium2_artifacts):
    blocker = tmp_path / "occupé"
    blocker.write_bytes(b"")

    with pytest.raises(ArtifactWriteError):
        ArtifactWriter(blocker).write(dilithium2_artifacts)

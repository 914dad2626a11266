from cryptography import x509
from pyasn1_modules import rfc2986

from pqfixtures import algorithms
from pqfixtures.encoding import der_decode, der_encode


# ==== CSR de l'EE ====

def test_ee_csr(dilithium2_artifacts, signer, csr_public_key):
    csr = x509.load_der_x509_csr(dilithium2_artifacts.ee_csr)
    ee_key = dilithium2_artifacts.ee_key_pair

    assert csr.subject.rfc4514_string() == "CN=BC dilithium2 Test EE"
    assert csr.signature_algorithm_oid.dotted_string == algorithms.DILITHIUM2.identifier
    assert csr_public_key(dilithium2_artifacts.ee_csr) == ee_key.public_key
    assert signer.verify(algorithms.DILITHIUM2, ee_key.public_key, csr.tbs_certrequest_bytes, csr.signature)


# ==== CSR de la CA (clé de l'EE) ====

def test_ca_csr_uses_ee_key(dilithium2_artifacts, signer, csr_public_key):
    csr = x509.load_der_x509_csr(dilithium2_artifacts.ca_csr)
    ee_key = dilithium2_artifacts.ee_key_pair

    assert csr.subject.rfc4514_string() == "CN=BC dilithium2 Test CA"
    assert csr_public_key(dilithium2_artifacts.ca_csr) == ee_key.public_key
    assert csr_public_key(dilithium2_artifacts.ca_csr) != dilithium2_artifacts.ca_key_pair.public_key
    assert signer.verify(algorithms.DILITHIUM2, ee_key.public_key, csr.tbs_certrequest_bytes, csr.signature)


def test_csr_structure(dilithium2_artifacts):
    request = der_decode(dilithium2_artifacts.ee_csr, rfc2986.CertificationRequest())
    assert der_encode(request) == dilithium2_artifacts.ee_csr

    info = request['certificationRequestInfo']

    assert int(info['version']) == 0
    assert len(info['attributes']) == 0

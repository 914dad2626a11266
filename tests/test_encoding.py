from datetime import datetime, timezone

import pytest
from cryptography import x509
from cryptography.x509.oid import NameOID
from pyasn1.codec.der import encoder
from pyasn1_modules import rfc5280

from pqfixtures import asn1
from pqfixtures.encoding import (
    PEM_CERTIFICATE, PEM_CRL, der_decode, is_pem, pem_decode, pem_encode
)
from pqfixtures.exceptions import EncodingError
from pqfixtures.models import DistinguishedName


# ==== PEM ====

def test_pem_lines_are_64_columns():
    pem = pem_encode(bytes(range(256)), PEM_CERTIFICATE)
    lines = pem.decode("ascii").splitlines()

    assert lines[0] == "-----BEGIN CERTIFICATE-----"
    assert lines[-1] == "-----END CERTIFICATE-----"
    assert all(len(line) <= 64 for line in lines[1:-1])
    assert len(lines[1]) == 64
    assert pem.endswith(b"\n")


def test_pem_decode_returns_label_and_der():
    der = b"\x30\x03\x02\x01\x05"
    label, decoded = pem_decode(pem_encode(der, PEM_CRL))

    assert label == "X509 CRL"
    assert decoded == der
    assert is_pem(pem_encode(der, PEM_CRL))
    assert not is_pem(der)


def test_pem_decode_errors():
    with pytest.raises(EncodingError):
        pem_decode(b"pas de pem")
    with pytest.raises(EncodingError):
        pem_decode(b"-----BEGIN CERTIFICATE-----\n%%%%\n-----END CERTIFICATE-----\n")


# ==== DER ====

def test_der_decode_rejects_trailing_bytes():
    name_der = x509.Name.from_rfc4514_string("CN=test").public_bytes()
    with pytest.raises(EncodingError, match="en trop"):
        der_decode(name_der + b"\x00", rfc5280.Name())


def test_der_decode_rejects_garbage():
    with pytest.raises(EncodingError):
        der_decode(b"\xff\xff", rfc5280.Name())


# ==== Helpers ASN.1 ====

def test_build_name_matches_cryptography():
    dn = DistinguishedName("dilithium2", "TA")
    name = asn1.build_name(dn)

    assert encoder.encode(name) == x509.Name.from_rfc4514_string("CN=BC dilithium2 Test TA").public_bytes()
    common_name = dn.to_x509().get_attributes_for_oid(NameOID.COMMON_NAME)[0].value
    assert common_name == "BC dilithium2 Test TA"


def test_set_time_switches_to_generalized_time_after_2049():
    before = rfc5280.Time()
    asn1.set_time(before, datetime(2049, 12, 31, 23, 59, 59, tzinfo=timezone.utc))
    assert before.getName() == "utcTime"
    assert str(before['utcTime']) == "491231235959Z"

    after = rfc5280.Time()
    asn1.set_time(after, datetime(2050, 1, 1, tzinfo=timezone.utc))
    assert after.getName() == "generalTime"
    assert str(after['generalTime']) == "20500101000000Z"


def test_build_extension_uses_cryptography_encoding():
    extension = asn1.build_extension(x509.BasicConstraints(ca=True, path_length=0), critical=True)

    assert str(extension['extnID']) == "2.5.29.19"
    assert bool(extension['critical'])
    assert bytes(extension['extnValue']) == b"\x30\x06\x01\x01\xff\x02\x01\x00"

import pytest

from pqfixtures import algorithms
from pqfixtures.cli import build_parser, main


@pytest.fixture(scope="module")
def generated(tmp_path_factory):
    out = tmp_path_factory.mktemp("artifacts")
    code = main(["generate", "--out", str(out), "--algorithm", "dilithium2", "--quiet"])
    return code, out


def test_generate_selected_algorithm(generated):
    code, out = generated

    assert code == 0
    assert [p.name for p in out.iterdir()] == [algorithms.DILITHIUM2.identifier]
    assert (out / algorithms.DILITHIUM2.identifier / "crl" / "crl_ca.crl").exists()


def test_generate_unknown_algorithm(tmp_path, capsys):
    code = main(["generate", "--out", str(tmp_path), "--algorithm", "rsa", "--quiet"])

    assert code == 1
    assert "rsa" in capsys.readouterr().out
    assert list(tmp_path.iterdir()) == []


def test_show_certificate(generated, capsys):
    _, out = generated
    certificate = out / algorithms.DILITHIUM2.identifier / "ta" / "ta.pem"

    assert main(["show", str(certificate)]) == 0
    assert "BC dilithium2 Test TA" in capsys.readouterr().out


@pytest.mark.parametrize("relative, expected", [
    ("crl/crl_ca.crl", "BC dilithium2 Test CA"),
    ("ee/cert.csr", "BC dilithium2 Test EE"),
    ("ta/ta_priv.pem", "dilithium2"),
    ("ca/ca_pub.der", "dilithium2"),
])
def test_show_other_artifacts(generated, capsys, relative, expected):
    _, out = generated
    path = out / algorithms.DILITHIUM2.identifier / relative

    assert main(["show", str(path)]) == 0
    assert expected in capsys.readouterr().out


def test_show_invalid_file(tmp_path):
    bogus = tmp_path / "bogus.der"
    bogus.write_bytes(b"pas un certificat")

    assert main(["show", str(bogus)]) == 1
    assert main(["show", str(tmp_path / "absent.der")]) == 1


def test_parser_defaults():
    args = build_parser().parse_args(["generate"])

    assert str(args.out) == "artifacts"
    assert args.algorithms is None
    assert args.workers == 1
    assert not args.quiet


def test_command_is_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])

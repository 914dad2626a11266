"""
Interface en ligne de commande du générateur de fixtures

    pqfixtures generate [--out DIR] [--algorithm NAME]... [--workers N] [--quiet]
    pqfixtures list
    pqfixtures show FILE
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from cryptography import x509

from . import __version__, algorithms, config, utils
from .encoding import (
    PEM_CERTIFICATE, PEM_CRL, PEM_CSR, PEM_PRIVATE_KEY, PEM_PUBLIC_KEY,
    is_pem, pem_decode
)
from .exceptions import EncodingError, FixtureGenerationError
from .hierarchy import HierarchyAssembler
from .keygen import keygen
from .models import KeyPair
from .providers import default_registry
from .writer import ArtifactWriter

PEM_KINDS = {
    PEM_CERTIFICATE: "certificate",
    PEM_CRL: "crl",
    PEM_CSR: "csr",
    PEM_PRIVATE_KEY: "private_key",
    PEM_PUBLIC_KEY: "public_key",
}

SUFFIX_KINDS = {
    ".crl": "crl",
    ".csr": "csr",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pqfixtures",
        description="Générer des hiérarchies PKI de test (TA / CA / EE) pour des algorithmes post-quantiques."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--log-level", default=config.LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Niveau de log")

    subparsers = parser.add_subparsers(dest="command", required=True)

    generate = subparsers.add_parser("generate", help="Générer les artefacts du catalogue")
    generate.add_argument("--out", type=Path, default=config.ARTIFACTS_DIR,
                          help="Répertoire de sortie (défaut: artifacts)")
    generate.add_argument("--algorithm", action="append", dest="algorithms", metavar="NAME",
                          help="Restreindre à un algorithme du catalogue (répétable)")
    generate.add_argument("--workers", type=int, default=1,
                          help="Nombre de threads de génération (défaut: 1)")
    generate.add_argument("--quiet", action="store_true",
                          help="Pas de barre de progression ni de résumé")

    subparsers.add_parser("list", help="Lister le catalogue et la disponibilité des fournisseurs")

    show = subparsers.add_parser("show", help="Afficher un artefact généré (certificat, CRL, CSR ou clé; PEM ou DER)")
    show.add_argument("file", type=Path, help="Fichier à afficher")

    return parser


# ============================================
# 🚀 COMMANDES
# ============================================

def cmd_generate(args: argparse.Namespace) -> int:
    selected = algorithms.select_algorithms(args.algorithms)

    if not args.quiet:
        utils.print_header(f"{config.CLI_SYMBOLS['cert']} Génération des fixtures PKI post-quantiques")
        utils.print_info(f"Sortie: {args.out} ({len(selected)} algorithme(s))")

    assembler = HierarchyAssembler(
        writer=ArtifactWriter(args.out),
        show_progress=not args.quiet
    )
    results = assembler.generate_all(selected, max_workers=args.workers)

    if not args.quiet:
        table = utils.create_table("Hiérarchies générées", ["Algorithme", "OID", "Répertoire"])
        for artifacts in results:
            table.add_row(
                artifacts.algorithm.name,
                artifacts.algorithm.identifier,
                str(config.get_algorithm_dir(args.out, artifacts.algorithm.identifier))
            )
        utils.console.print(table)
        utils.print_success(f"{len(results)} hiérarchie(s) générée(s)")

    return 0


def cmd_list(args: argparse.Namespace) -> int:
    table = utils.create_table("Catalogue des algorithmes", ["Nom", "OID", "Fournisseur"])
    for algorithm in algorithms.ALGORITHMS:
        provider = default_registry.find(algorithm)
        status = f"[green]{provider.name}[/green]" if provider else "[red]indisponible[/red]"
        table.add_row(algorithm.name, algorithm.identifier, status)
    utils.console.print(table)
    return 0


def detect_artifact(path: Path, data: bytes) -> Tuple[str, bytes]:
    """
    Détermine le type d'un artefact (libellé PEM, sinon nom du fichier)

    Returns:
        tuple: (type, octets_DER)
    """
    if is_pem(data):
        label, der = pem_decode(data)
        if label not in PEM_KINDS:
            raise EncodingError(f"Type PEM non supporté: {label}")
        return PEM_KINDS[label], der

    if path.suffix in SUFFIX_KINDS:
        return SUFFIX_KINDS[path.suffix], data
    if path.stem.endswith("_priv"):
        return "private_key", data
    if path.stem.endswith("_pub"):
        return "public_key", data
    return "certificate", data


def cmd_show(args: argparse.Namespace) -> int:
    try:
        with open(args.file, 'rb') as f:
            data = f.read()
    except OSError as e:
        utils.print_error(f"Lecture impossible: {e}")
        return 1

    kind, der = detect_artifact(args.file, data)

    try:
        if kind == "certificate":
            utils.display_cert_info(x509.load_der_x509_certificate(der))
        elif kind == "crl":
            utils.display_crl_info(x509.load_der_x509_crl(der))
        elif kind == "csr":
            utils.display_csr_info(x509.load_der_x509_csr(der))
        else:
            keygen.display_key_info(_load_key_pair(kind, der))
    except ValueError as e:
        utils.print_error(f"Artefact invalide: {args.file} ({e})")
        return 1

    return 0


def _load_key_pair(kind: str, der: bytes) -> KeyPair:
    if kind == "private_key":
        oid, secret_key, public_key = keygen.decode_private_key(der)
    else:
        oid, public_key = keygen.decode_public_key(der)
        secret_key = b""
    return KeyPair(algorithms.get_algorithm(oid), public_key or b"", secret_key)


COMMANDS = {
    "generate": cmd_generate,
    "list": cmd_list,
    "show": cmd_show,
}


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    utils.setup_logging(args.log_level)

    try:
        return COMMANDS[args.command](args)
    except FixtureGenerationError as e:
        utils.print_error(str(e))
        return 1
    except KeyboardInterrupt:
        utils.print_warning("Génération interrompue")
        return 130


if __name__ == "__main__":
    sys.exit(main())

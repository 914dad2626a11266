"""
Fonctions utilitaires pour le générateur de fixtures
"""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from . import config

# Console Rich pour l'affichage
console = Console()


# ============================================
# 🔐 FONCTIONS CRYPTOGRAPHIQUES
# ============================================

def calculate_fingerprint(cert: x509.Certificate) -> str:
    """Empreinte SHA-256 d'un certificat, octets séparés par « : » (ex: "A1:B2:...")"""
    return cert.fingerprint(hashes.SHA256()).hex(":").upper()


# ============================================
# 📁 GESTION DES FICHIERS
# ============================================

def ensure_directory(path: Path) -> None:
    """
    Crée un répertoire et ses parents s'ils n'existent pas

    Args:
        path: Chemin du répertoire à créer
    """
    path.mkdir(parents=True, exist_ok=True)


def set_file_permissions(filepath: Path, permissions: int) -> None:
    """
    Définit les permissions d'un fichier (Unix uniquement)
    Sur Windows, cette fonction ne fait rien

    Args:
        filepath: Chemin du fichier
        permissions: Permissions en octal (ex: 0o600 pour rw-------)
    """
    if os.name != 'nt':
        os.chmod(filepath, permissions)


# ============================================
# 📅 GESTION DES DATES
# ============================================

def now_utc() -> datetime:
    """
    Retourne la date/heure actuelle en UTC, tronquée à la seconde
    (précision des champs UTCTime / GeneralizedTime)
    """
    return datetime.now(timezone.utc).replace(microsecond=0)


# ============================================
# 📊 LOGS
# ============================================

def setup_logging(level: str = config.LOG_LEVEL) -> None:
    """
    Configure le logging du package avec un handler Rich

    Args:
        level: Niveau de log ("DEBUG", "INFO", "WARNING"...)
    """
    handler = RichHandler(console=console, show_path=False)
    handler.setFormatter(logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATE_FORMAT))

    package_logger = logging.getLogger("pqfixtures")
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False


# ============================================
# 🎨 AFFICHAGE CLI AVEC RICH
# ============================================

def print_success(message: str) -> None:
    """Affiche un message de succès avec symbole et couleur verte"""
    console.print(f"[green]{config.CLI_SYMBOLS['success']} {message}[/green]")


def print_error(message: str) -> None:
    """Affiche un message d'erreur avec symbole et couleur rouge"""
    console.print(f"[red]{config.CLI_SYMBOLS['error']} {message}[/red]")


def print_warning(message: str) -> None:
    """Affiche un avertissement avec symbole et couleur jaune"""
    console.print(f"[yellow]{config.CLI_SYMBOLS['warning']} {message}[/yellow]")


def print_info(message: str) -> None:
    """Affiche une information avec symbole et couleur cyan"""
    console.print(f"[cyan]{config.CLI_SYMBOLS['info']} {message}[/cyan]")


def print_header(title: str) -> None:
    """
    Affiche un en-tête stylisé avec bordure

    Args:
        title: Titre à afficher
    """
    console.print()
    console.print(Panel.fit(
        f"[bold magenta]{title}[/bold magenta]",
        border_style="magenta",
        box=box.DOUBLE
    ))
    console.print()


def create_table(title: str, columns: list) -> Table:
    """
    Crée une table Rich stylisée prête à être remplie

    Args:
        title: Titre de la table
        columns: Liste des noms de colonnes

    Returns:
        Table: Table Rich
    """
    table = Table(
        title=title,
        title_style="bold cyan",
        border_style="blue",
        box=box.ROUNDED,
        show_header=True,
        header_style="bold magenta"
    )

    for col in columns:
        table.add_column(col)

    return table


def display_cert_info(cert: x509.Certificate) -> None:
    """
    Affiche les informations d'un certificat X.509 de manière formatée

    La clé publique post-quantique n'est pas interprétée: seuls les champs
    du TBSCertificate et l'OID de signature sont affichés.
    """
    table = create_table(f"{config.CLI_SYMBOLS['cert']} Informations du certificat", ["Champ", "Valeur"])

    table.add_row("Sujet", f"[cyan]{cert.subject.rfc4514_string()}[/cyan]")
    table.add_row("Émetteur", f"[yellow]{cert.issuer.rfc4514_string()}[/yellow]")
    table.add_row("N° Série", f"[green]{cert.serial_number:X}[/green]")

    not_before = cert.not_valid_before_utc.strftime("%Y-%m-%d %H:%M:%S UTC")
    not_after = cert.not_valid_after_utc.strftime("%Y-%m-%d %H:%M:%S UTC")
    table.add_row("Valide de", not_before)
    table.add_row("Valide jusqu'à", not_after)

    table.add_row("Algorithme de signature", cert.signature_algorithm_oid.dotted_string)

    for extension in cert.extensions:
        critical = " (critique)" if extension.critical else ""
        table.add_row(f"{extension.value.__class__.__name__}{critical}", str(extension.value))

    table.add_row("Empreinte SHA-256", f"[dim]{calculate_fingerprint(cert)}[/dim]")

    console.print(table)


def display_crl_info(crl: x509.CertificateRevocationList) -> None:
    """Affiche l'émetteur, la date et les entrées révoquées d'une CRL"""
    table = create_table(f"{config.CLI_SYMBOLS['crl']} Informations de la CRL", ["Champ", "Valeur"])

    table.add_row("Émetteur", f"[yellow]{crl.issuer.rfc4514_string()}[/yellow]")
    table.add_row("Mise à jour", crl.last_update_utc.strftime("%Y-%m-%d %H:%M:%S UTC"))
    table.add_row("Prochaine mise à jour", "N/A" if crl.next_update_utc is None
                  else crl.next_update_utc.strftime("%Y-%m-%d %H:%M:%S UTC"))
    table.add_row("Algorithme de signature", crl.signature_algorithm_oid.dotted_string)

    for revoked in crl:
        try:
            reason = revoked.extensions.get_extension_for_class(x509.CRLReason).value.reason.value
        except x509.ExtensionNotFound:
            reason = "N/A"
        table.add_row(f"Révoqué [green]{revoked.serial_number:X}[/green]", reason)

    console.print(table)


def display_csr_info(csr: x509.CertificateSigningRequest) -> None:
    """Affiche le sujet et l'algorithme de signature d'une CSR"""
    table = create_table(f"{config.CLI_SYMBOLS['csr']} Informations de la CSR", ["Champ", "Valeur"])

    table.add_row("Sujet", f"[cyan]{csr.subject.rfc4514_string()}[/cyan]")
    table.add_row("Algorithme de signature", csr.signature_algorithm_oid.dotted_string)
    table.add_row("Attributs", str(len(list(csr.attributes))))

    console.print(table)


# ============================================
# 🎨 EXPORTS
# ============================================

__all__ = [
    # Crypto
    'calculate_fingerprint',

    # Fichiers
    'ensure_directory', 'set_file_permissions',

    # Dates
    'now_utc',

    # Logs
    'setup_logging',

    # Affichage CLI
    'print_success', 'print_error', 'print_warning', 'print_info', 'print_header',
    'create_table', 'display_cert_info', 'display_crl_info', 'display_csr_info',

    # Console Rich
    'console'
]

"""
Artifact Writer
Écrit les artefacts d'une hiérarchie sur disque (DER et PEM)

Arborescence par algorithme (répertoire nommé par l'OID):
    ta/   ta.pem  ta_priv.pem  ta_pub.pem  ta.der  ta_priv.der  ta_pub.der
    ca/   ca.csr  ca.pem  ca_priv.pem  ...
    ee/   cert.csr  cert.pem  cert_priv.pem  ...
    crl/  crl_ta.crl  crl_ca.crl
"""

import logging
from pathlib import Path
from typing import List, Optional

from . import config, utils
from .encoding import PEM_CERTIFICATE, pem_encode
from .exceptions import ArtifactWriteError
from .keygen import KeyGenerator
from .models import HierarchyArtifacts, KeyPair

logger = logging.getLogger(__name__)


class ArtifactWriter:
    """
    Écrivain des artefacts dans l'arborescence de sortie
    """

    def __init__(self, base_dir: Path = config.ARTIFACTS_DIR, key_gen: Optional[KeyGenerator] = None):
        self.base_dir = Path(base_dir)
        self.key_gen = key_gen or KeyGenerator()

    def write(self, artifacts: HierarchyArtifacts) -> List[Path]:
        """
        Écrit les clés, certificats, CSR et CRL d'un algorithme

        Args:
            artifacts: Artefacts de la hiérarchie

        Returns:
            list: Chemins des fichiers écrits

        Raises:
            ArtifactWriteError: Si un répertoire ou un fichier ne peut être créé
        """
        identifier = artifacts.algorithm.identifier
        ta_dir = config.get_role_dir(self.base_dir, identifier, config.TA_DIR_NAME)
        ca_dir = config.get_role_dir(self.base_dir, identifier, config.CA_DIR_NAME)
        ee_dir = config.get_role_dir(self.base_dir, identifier, config.EE_DIR_NAME)
        crl_dir = config.get_role_dir(self.base_dir, identifier, config.CRL_DIR_NAME)

        written = []
        written += self._write_role(ta_dir, "ta", artifacts.ta_certificate, artifacts.ta_key_pair)
        written += self._write_role(ca_dir, "ca", artifacts.ca_certificate, artifacts.ca_key_pair)
        written += self._write_role(ee_dir, "cert", artifacts.ee_certificate, artifacts.ee_key_pair)

        written.append(self._write_file(ca_dir / "ca.csr", artifacts.ca_csr))
        written.append(self._write_file(ee_dir / "cert.csr", artifacts.ee_csr))
        written.append(self._write_file(crl_dir / "crl_ta.crl", artifacts.ta_crl))
        written.append(self._write_file(crl_dir / "crl_ca.crl", artifacts.ca_crl))

        logger.info("%d fichiers écrits pour %s", len(written), artifacts.algorithm.name)
        return written

    def _write_role(self, directory: Path, prefix: str, certificate: bytes, key_pair: KeyPair) -> List[Path]:
        """Écrit le certificat et les deux clés d'un rôle, en PEM puis en DER"""
        public_der = self.key_gen.public_key_der(key_pair)
        private_der = self.key_gen.private_key_der(key_pair)

        return [
            self._write_file(directory / f"{prefix}.pem", pem_encode(certificate, PEM_CERTIFICATE)),
            self._write_file(directory / f"{prefix}_priv.pem", self.key_gen.private_key_pem(key_pair), private=True),
            self._write_file(directory / f"{prefix}_pub.pem", self.key_gen.public_key_pem(key_pair)),
            self._write_file(directory / f"{prefix}.der", certificate),
            self._write_file(directory / f"{prefix}_priv.der", private_der, private=True),
            self._write_file(directory / f"{prefix}_pub.der", public_der),
        ]

    def _write_file(self, path: Path, data: bytes, private: bool = False) -> Path:
        permissions = config.PRIVATE_KEY_PERMISSIONS if private else config.CERT_PERMISSIONS
        try:
            utils.ensure_directory(path.parent)
            with open(path, 'wb') as f:
                f.write(data)
            utils.set_file_permissions(path, permissions)
        except OSError as e:
            raise ArtifactWriteError(f"Écriture impossible: {path} ({e})") from e

        logger.debug("Fichier écrit: %s (%d octets)", path, len(data))
        return path


__all__ = ['ArtifactWriter']

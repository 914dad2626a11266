"""
Générateur de numéros de série

SHA-1(compteur sur 4 octets || horodatage ms sur 8 octets), premier octet
forcé à 01xxxxxx: l'entier obtenu est positif et tient sur 20 octets.
"""

import hashlib
import struct
import threading
import time
from typing import Callable, Optional

from . import config


def current_millis() -> int:
    return time.time_ns() // 1_000_000


def derive_serial_number(counter: int, millis: int) -> int:
    """
    Dérive un numéro de série à partir d'un compteur et d'un horodatage

    Args:
        counter: Valeur du compteur (4 octets, big-endian)
        millis: Horodatage en millisecondes (8 octets, big-endian)

    Returns:
        int: Numéro de série positif dont les deux bits de poids fort valent 01
    """
    digest = bytearray(hashlib.sha1(struct.pack(">Iq", counter & 0xFFFFFFFF, millis)).digest())
    digest[0] = (digest[0] & config.SERIAL_CLEAR_MASK) | config.SERIAL_SET_MASK
    return int.from_bytes(digest, "big", signed=True)


class SerialNumberGenerator:
    """
    Compteur partagé par toute la génération
    Incrémenté à chaque appel, jamais réinitialisé; protégé par un verrou
    pour la génération parallèle.
    """

    def __init__(self, start: int = config.SERIAL_COUNTER_START,
                 clock: Optional[Callable[[], int]] = None):
        self._counter = start
        self._clock = clock or current_millis
        self._lock = threading.Lock()

    @property
    def counter(self) -> int:
        """Valeur qui sera utilisée au prochain appel"""
        return self._counter

    def next_serial(self) -> int:
        with self._lock:
            counter = self._counter
            self._counter += 1
        return derive_serial_number(counter, self._clock())


__all__ = [
    'current_millis',
    'derive_serial_number',
    'SerialNumberGenerator'
]

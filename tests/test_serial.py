import threading

from pqfixtures.serial import SerialNumberGenerator, derive_serial_number


# ==== Dérivation ====

def test_serial_is_positive_with_top_bits_01():
    for counter in range(1, 50):
        serial = derive_serial_number(counter, 1_700_000_000_000)
        assert serial > 0
        # 20 octets, bits de poids fort 01: 2^158 <= serial < 2^159
        assert serial.bit_length() == 159


def test_derivation_is_deterministic():
    assert derive_serial_number(7, 123456789) == derive_serial_number(7, 123456789)
    assert derive_serial_number(7, 123456789) != derive_serial_number(8, 123456789)
    assert derive_serial_number(7, 123456789) != derive_serial_number(7, 123456790)


def test_serial_fits_in_twenty_octets():
    serial = derive_serial_number(1, 0)
    assert len(serial.to_bytes(20, "big", signed=True)) == 20


# ==== Compteur ====

def test_counter_starts_at_one_and_increments():
    serials = SerialNumberGenerator(clock=lambda: 42)
    assert serials.counter == 1

    first = serials.next_serial()
    second = serials.next_serial()

    assert serials.counter == 3
    assert first == derive_serial_number(1, 42)
    assert second == derive_serial_number(2, 42)
    assert first != second


def test_counter_is_shared_between_threads():
    serials = SerialNumberGenerator(clock=lambda: 0)
    results = []
    lock = threading.Lock()

    def worker():
        for _ in range(100):
            value = serials.next_serial()
            with lock:
                results.append(value)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert serials.counter == 401
    assert len(set(results)) == 400

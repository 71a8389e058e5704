import numpy as np

from cdma.errors import InvalidSizeError

# Нулевая корреляция декодируется как 0, а не как "не удалось"
ZERO_CORRELATION_BIT = 0


def correlate(signal, code) -> np.ndarray:
    """
    Скалярное произведение каждого окна сигнала длины len(code) с кодом.
    Остаток сигнала после последнего полного окна отбрасывается.
    """
    signal = np.asarray(signal, dtype=np.int64).ravel()
    code = np.asarray(code, dtype=np.int64).ravel()

    chip_len = len(code)
    if chip_len == 0:
        raise InvalidSizeError("Код не может быть пустым")

    blocks = len(signal) // chip_len
    windows = signal[:blocks * chip_len].reshape(blocks, chip_len)
    return windows @ code


def decode(signal, code) -> np.ndarray:
    """Декодирование суммарного сигнала: положительная корреляция — 1"""
    correlation = correlate(signal, code)

    bits = np.where(correlation > 0, 1, 0).astype(np.uint8)
    bits[correlation == 0] = ZERO_CORRELATION_BIT
    return bits

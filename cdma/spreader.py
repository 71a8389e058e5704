import numpy as np


def _check_bits(bits: np.ndarray) -> None:
    if bits.size and not np.isin(bits, (0, 1)).all():
        bad = bits[~np.isin(bits, (0, 1))][0]
        raise ValueError(f"Бит должен быть 0 или 1, получено {bad!r}")


def spread_bit(bit: int, code: np.ndarray) -> np.ndarray:
    """Бит 1 передаётся самим кодом, бит 0 — его инверсией"""
    _check_bits(np.asarray([bit]))
    symbol = 1 if bit == 1 else -1
    return symbol * np.asarray(code, dtype=np.int64)


def spread_bits(bits, code: np.ndarray) -> np.ndarray:
    """Кодирование битов с использованием кода Уолша"""
    bits = np.asarray(bits).ravel()
    code = np.asarray(code, dtype=np.int64).ravel()
    _check_bits(bits)

    chips = np.empty(len(bits) * len(code), dtype=np.int64)
    symbols = np.where(bits == 1, 1, -1)
    chips.reshape(len(bits), len(code))[:] = symbols[:, None] * code[None, :]
    return chips

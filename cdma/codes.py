from typing import Iterator, Optional

import numpy as np
from loguru import logger

from cdma.errors import InvalidSizeError


class CodeSet:
    """
    Набор кодов Уолша длины N (строки матрицы в порядке Адамара).

    Хранится одним плоским буфером count*N (row-major), только для чтения.
    Строка i: buffer[i*N:(i+1)*N].
    """

    def __init__(self, buffer: np.ndarray, code_length: int, count: Optional[int] = None):
        count = code_length if count is None else count
        if buffer.shape != (count * code_length,):
            raise InvalidSizeError(
                f"Буфер размера {buffer.size} не соответствует {count}x{code_length}"
            )
        self._buffer = np.array(buffer, dtype=np.int8)
        self._buffer.flags.writeable = False
        self._code_length = code_length
        self._count = count

    @property
    def code_length(self) -> int:
        return self._code_length

    @property
    def buffer(self) -> np.ndarray:
        return self._buffer

    @property
    def matrix(self) -> np.ndarray:
        return self._buffer.reshape(self._count, self._code_length)

    def __len__(self) -> int:
        return self._count

    def __getitem__(self, index: int) -> np.ndarray:
        if not -self._count <= index < self._count:
            raise IndexError(f"Строка {index} вне набора из {self._count} кодов")
        index %= self._count
        n = self._code_length
        return self._buffer[index * n:(index + 1) * n]

    def __iter__(self) -> Iterator[np.ndarray]:
        for i in range(self._count):
            yield self[i]

    def rows(self, count: int) -> "CodeSet":
        """Первые count строк; подмножество остаётся взаимно ортогональным"""
        if not 0 <= count <= self._count:
            raise IndexError(f"Нельзя взять {count} строк из {self._count}")
        return CodeSet(self._buffer[:count * self._code_length], self._code_length, count)

    def __repr__(self) -> str:
        return f"CodeSet(code_length={self._code_length}, count={self._count})"


def _check_size(n) -> int:
    if isinstance(n, (bool, np.bool_)) or not isinstance(n, (int, np.integer)):
        raise InvalidSizeError(f"Длина кода должна быть целым числом, получено {n!r}")
    n = int(n)
    if n <= 0 or (n & (n - 1)) != 0:
        raise InvalidSizeError(f"n должно быть степенью двойки и > 0, получено {n}")
    return n


def generate_walsh_codes(n: int) -> CodeSet:
    """
    Генерация матрицы Уолша без рекурсии.

    Элемент (i, j) равен +1, если число единичных бит в i & j чётно,
    и -1, если нечётно.
    """
    n = _check_size(n)

    idx = np.arange(n, dtype=np.int64)
    x = np.bitwise_and.outer(idx, idx)

    parity = np.zeros_like(x)
    while x.any():
        parity ^= x & 1
        x >>= 1

    matrix = np.where(parity == 0, 1, -1).astype(np.int8)

    logger.debug(f"[CODES] Сгенерирована матрица Уолша порядка {n}")
    return CodeSet(matrix.ravel(), n)


def is_orthogonal(codes) -> bool:
    """Проверка: разные строки дают 0, строка сама с собой — N"""
    matrix = codes.matrix if isinstance(codes, CodeSet) else codes
    matrix = np.asarray(matrix, dtype=np.int64)
    if matrix.ndim != 2:
        return False
    count, n = matrix.shape
    gram = matrix @ matrix.T
    return bool(np.array_equal(gram, n * np.eye(count, dtype=np.int64)))

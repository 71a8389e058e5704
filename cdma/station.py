from dataclasses import dataclass

import numpy as np

from cdma.bits import text_to_bits
from cdma.spreader import spread_bits


def _frozen(array: np.ndarray, dtype) -> np.ndarray:
    out = np.array(array, dtype=dtype)
    out.flags.writeable = False
    return out


@dataclass(frozen=True, eq=False)
class Station:
    """
    Базовая станция
    - Хранит слово и свой код Уолша
    - Хранит битовый поток слова и расширенный сигнал (чипы)
    """

    station_id: str
    word: str
    code: np.ndarray
    bits: np.ndarray
    chips: np.ndarray

    @classmethod
    def create(cls, station_id: str, word: str, code: np.ndarray) -> "Station":
        code = _frozen(code, np.int8)
        bits = _frozen(text_to_bits(word), np.uint8)
        chips = _frozen(spread_bits(bits, code), np.int64)
        return cls(station_id=station_id, word=word, code=code, bits=bits, chips=chips)

    def __repr__(self) -> str:
        return (
            f"Station({self.station_id!r}, word={self.word!r}, "
            f"code={self.code.tolist()}, chips={len(self.chips)})"
        )

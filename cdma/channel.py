import threading
from typing import Optional

import numpy as np
from loguru import logger

from cdma.decoder import decode
from cdma.errors import LengthMismatchError


class Channel:
    """
    Канал CDMA
    - Суммирует сигналы всех станций в общий эфир
    - Отдаёт копию суммарного сигнала для декодирования
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._signal: Optional[np.ndarray] = None
        self._station_count = 0

    @property
    def length(self) -> Optional[int]:
        with self._lock:
            return None if self._signal is None else len(self._signal)

    @property
    def station_count(self) -> int:
        with self._lock:
            return self._station_count

    def add(self, chips) -> None:
        """Наложение сигнала станции на эфир; при ошибке канал не меняется"""
        chips = np.asarray(chips).ravel()
        if chips.size and not np.issubdtype(chips.dtype, np.integer):
            raise TypeError(f"Чипы должны быть целыми числами, получено {chips.dtype}")
        chips = chips.astype(np.int64)

        with self._lock:
            if self._signal is None:
                self._signal = chips.copy()
            else:
                if len(chips) != len(self._signal):
                    raise LengthMismatchError(len(self._signal), len(chips))
                self._signal += chips
            self._station_count += 1

    def add_station(self, station) -> None:
        self.add(station.chips)
        logger.info(
            f"[CHANNEL] Станция {station.station_id} в эфире, "
            f"длина сигнала: {len(station.chips)}"
        )

    def snapshot(self) -> np.ndarray:
        with self._lock:
            if self._signal is None:
                signal = np.zeros(0, dtype=np.int64)
            else:
                signal = self._signal.copy()
        signal.flags.writeable = False
        return signal

    def decode(self, code) -> np.ndarray:
        """Корреляция считается вне блокировки, по собственной копии"""
        return decode(self.snapshot(), code)

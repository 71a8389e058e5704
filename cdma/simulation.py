import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

import numpy as np
from loguru import logger

from cdma.bits import bits_to_text
from cdma.channel import Channel
from cdma.codes import CodeSet, generate_walsh_codes, is_orthogonal
from cdma.config import SimulationConfig
from cdma.station import Station


class DecodeStatus(str, Enum):
    OK = "ok"
    MISMATCH = "mismatch"


@dataclass(frozen=True, eq=False)
class DecodeResult:
    station_id: str
    expected: str
    decoded: str
    bits: np.ndarray
    status: DecodeStatus

    @property
    def ok(self) -> bool:
        return self.status is DecodeStatus.OK


def _run_threads(targets: List[Callable[[], None]], name: str) -> None:
    """Запуск задач в потоках; первая ошибка пробрасывается вызывающему"""
    errors: List[Optional[BaseException]] = [None] * len(targets)

    def _wrap(i: int, target: Callable[[], None]):
        def run():
            try:
                target()
            except Exception as e:
                errors[i] = e
        return run

    threads = [
        threading.Thread(target=_wrap(i, t), name=f"{name}-{i}")
        for i, t in enumerate(targets)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    for error in errors:
        if error is not None:
            raise error


class Transmitter:
    """
    Передатчик (Базовая станция)
    - Отправляет расширенный сигнал станции в канал
    """

    def __init__(self, station: Station, channel: Channel):
        self.station = station
        self.channel = channel
        self.tx_count = 0

    def transmit(self) -> None:
        self.channel.add_station(self.station)
        self.tx_count += 1
        logger.debug(f"[TX {self.station.station_id}] Отправлен сигнал #{self.tx_count}")


class Receiver:
    """
    Приемник
    - Берёт копию суммарного сигнала из канала
    - Декодирует своим кодом Уолша и сверяет слово
    """

    def __init__(self, station: Station, channel: Channel):
        self.receiver_id = f"RX_{station.station_id}"
        self.station = station
        self.channel = channel
        self.received_count = 0
        self.ok_count = 0

    def receive(self) -> DecodeResult:
        bits = self.channel.decode(self.station.code)
        decoded = bits_to_text(bits)

        status = DecodeStatus.OK if decoded == self.station.word else DecodeStatus.MISMATCH
        self.received_count += 1
        if status is DecodeStatus.OK:
            self.ok_count += 1
        else:
            logger.warning(
                f"[{self.receiver_id}] '{decoded}' вместо '{self.station.word}'"
            )

        return DecodeResult(
            station_id=self.station.station_id,
            expected=self.station.word,
            decoded=decoded,
            bits=bits,
            status=status,
        )


class CDMASimulation:
    """
    Контроллер CDMA системы
    - Генерирует коды Уолша
    - Создаёт станции и суммирует их сигналы в канале
    - Проводит циклы декодирования
    """

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()
        self.channel = Channel()
        self.codes: Optional[CodeSet] = None
        self.stations: List[Station] = []
        self.transmitters: List[Transmitter] = []
        self.receivers: List[Receiver] = []
        self.cycle = 0

    def setup(self) -> "CDMASimulation":
        if self.codes is not None:
            raise RuntimeError("Симуляция уже запущена")

        # До создания станций: неверная длина кода прерывает запуск
        codes = generate_walsh_codes(self.config.code_length)

        rows = self.config.code_rows
        if rows is None:
            rows = list(range(len(self.config.stations)))

        stations = [
            Station.create(station_id, word, codes[row])
            for (station_id, word), row in zip(self.config.stations.items(), rows)
        ]

        assigned = np.stack([s.code for s in stations])
        if not is_orthogonal(assigned):
            logger.warning(f"[SIM] Коды станций не ортогональны: строки {rows}")

        for station, row in zip(stations, rows):
            logger.info(
                f"[SIM] Станция {station.station_id}: '{station.word}', "
                f"код #{row} {station.code.tolist()}"
            )

        # Состояние симуляции меняется только после успешной передачи всех станций
        channel = Channel()
        transmitters = [Transmitter(s, channel) for s in stations]

        if self.config.concurrent:
            _run_threads([tx.transmit for tx in transmitters], "tx")
        else:
            for tx in transmitters:
                tx.transmit()

        self.channel = channel
        self.codes = codes
        self.stations = stations
        self.transmitters = transmitters
        self.receivers = [Receiver(s, channel) for s in stations]

        logger.info(
            f"[SIM] В эфире {self.channel.station_count} станций, "
            f"длина суммарного сигнала: {self.channel.length}"
        )
        return self

    def decode_cycle(self) -> List[DecodeResult]:
        if self.codes is None:
            raise RuntimeError("Сначала вызовите setup()")

        results: List[Optional[DecodeResult]] = [None] * len(self.receivers)

        def _receive(i: int, receiver: Receiver):
            def run():
                results[i] = receiver.receive()
            return run

        targets = [_receive(i, rx) for i, rx in enumerate(self.receivers)]
        if self.config.concurrent:
            _run_threads(targets, "rx")
        else:
            for target in targets:
                target()

        self.cycle += 1
        logger.debug(
            f"[SIM] Цикл {self.cycle}: "
            f"{sum(r.ok for r in results)}/{len(results)} станций декодированы"
        )
        return results

    def statistics(self) -> Dict[str, Dict[str, int]]:
        return {
            rx.receiver_id: {"received": rx.received_count, "ok": rx.ok_count}
            for rx in self.receivers
        }

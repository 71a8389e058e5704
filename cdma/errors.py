class CDMAError(RuntimeError):
    """Базовая ошибка CDMA системы"""


class InvalidSizeError(CDMAError, ValueError):
    """
    Длина кода не является положительной степенью двойки.
    Фатально: матрица Уолша не строится вообще.
    """


class LengthMismatchError(CDMAError, ValueError):
    """
    Длина сигнала станции не совпадает с длиной сигнала в канале.
    Канал при этом не изменяется.
    """

    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Длина сигнала {actual} не совпадает с длиной канала {expected}"
        )
        self.expected = expected
        self.actual = actual

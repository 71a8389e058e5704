import os
from typing import Dict, List, Optional

import yaml
from pydantic import BaseModel, Field, model_validator

DEFAULT_STATIONS = {
    "A": "GOD",
    "B": "CAT",
    "C": "HAM",
    "D": "SUN",
}


def _is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


class LogConfig(BaseModel):
    level: str = "INFO"
    dir: Optional[str] = None
    rotation: str = "1 day"
    retention: str = "30 days"


class SimulationConfig(BaseModel):
    """
    Параметры симуляции

    code_length — длина кода Уолша (степень двойки проверяет генератор)
    stations    — id станции -> слово
    code_rows   — строки матрицы для станций; по умолчанию 0..K-1
    """

    code_length: int = 8
    stations: Dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_STATIONS))
    code_rows: Optional[List[int]] = None
    concurrent: bool = True
    interval: float = Field(default=0.8, ge=0)
    log: LogConfig = Field(default_factory=LogConfig)

    @model_validator(mode="after")
    def _check_stations(self) -> "SimulationConfig":
        if not self.stations:
            raise ValueError("Нужна хотя бы одна станция")

        # Неверную длину кода отклоняет генератор (InvalidSizeError)
        if not _is_power_of_two(self.code_length):
            return self

        if self.code_rows is None:
            if len(self.stations) > self.code_length:
                raise ValueError(
                    f"Станций {len(self.stations)}, а кодов длины "
                    f"{self.code_length} всего {self.code_length}"
                )
            return self

        if len(self.code_rows) != len(self.stations):
            raise ValueError(
                f"code_rows: {len(self.code_rows)} строк на {len(self.stations)} станций"
            )
        for row in self.code_rows:
            if not 0 <= row < self.code_length:
                raise ValueError(f"code_rows: строка {row} вне [0, {self.code_length})")
        return self

    @classmethod
    def load(cls, path: str) -> "SimulationConfig":
        """Загрузка YAML конфигурации"""
        if not os.path.exists(path):
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        return cls(**raw)

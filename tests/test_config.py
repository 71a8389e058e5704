import pytest
from pydantic import ValidationError

from cdma.config import DEFAULT_STATIONS, SimulationConfig
from cdma.errors import InvalidSizeError
from cdma.simulation import CDMASimulation


def test_defaults():
    config = SimulationConfig()

    assert config.code_length == 8
    assert config.stations == DEFAULT_STATIONS
    assert config.code_rows is None
    assert config.log.level == "INFO"


def test_too_many_stations():
    with pytest.raises(ValidationError):
        SimulationConfig(code_length=2, stations={"A": "X", "B": "Y", "C": "Z"})


def test_no_stations():
    with pytest.raises(ValidationError):
        SimulationConfig(stations={})


@pytest.mark.parametrize("rows", [[0], [0, 8], [-1, 0]])
def test_bad_code_rows(rows):
    with pytest.raises(ValidationError):
        SimulationConfig(stations={"A": "GOD", "B": "CAT"}, code_rows=rows)


def test_negative_interval():
    with pytest.raises(ValidationError):
        SimulationConfig(interval=-1)


def test_non_power_of_two_is_left_to_generator():
    config = SimulationConfig(code_length=6, stations={"A": "GOD"})
    assert config.code_length == 6


def test_load_yaml(tmp_path):
    path = tmp_path / "cdma.yml"
    path.write_text(
        "code_length: 4\n"
        "stations:\n"
        "  X: HI\n"
        "  W: OK\n"
        "concurrent: false\n"
        "log:\n"
        "  level: DEBUG\n",
        encoding="utf-8",
    )

    config = SimulationConfig.load(str(path))

    assert config.code_length == 4
    assert config.stations == {"X": "HI", "W": "OK"}
    assert config.concurrent is False
    assert config.log.level == "DEBUG"


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        SimulationConfig.load(str(tmp_path / "missing.yml"))


def test_station_count_not_checked_for_invalid_code_length():
    # 3 не степень двойки: ошибку даёт генератор, а не проверка числа станций
    config = SimulationConfig(code_length=3)
    assert len(config.stations) == 4

    with pytest.raises(InvalidSizeError):
        CDMASimulation(config).setup()

import time
from typing import List, Optional

import numpy as np
import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from cdma import __version__
from cdma.codes import generate_walsh_codes
from cdma.config import SimulationConfig
from cdma.errors import CDMAError
from cdma.logger import setup_logging
from cdma.simulation import CDMASimulation, DecodeResult

app = typer.Typer(help="CDMA с кодами Уолша: станции вещают в общий эфир")
console = Console()

STATION_COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def render_signal(signal: np.ndarray, group: int) -> Text:
    """+ положительный чип, − отрицательный, · ноль"""
    text = Text()
    for i, v in enumerate(signal):
        if v > 0:
            text.append("+", style="bright_white")
        elif v < 0:
            text.append("−", style="bright_black")
        else:
            text.append("·", style="magenta")
        if group and (i + 1) % group == 0 and i + 1 < len(signal):
            text.append(" ")
    return text


def render_results(results: List[DecodeResult]) -> Text:
    text = Text()
    for i, r in enumerate(results):
        mark = "✔" if r.ok else "✘"
        text.append(
            f"  📡 Станция {r.station_id} → {mark} \"{r.decoded}\"\n",
            style=STATION_COLORS[i % len(STATION_COLORS)],
        )
    return text


def _load_config(path: Optional[str], code_length: Optional[int]) -> SimulationConfig:
    config = SimulationConfig.load(path) if path else SimulationConfig()
    if code_length is not None:
        config = SimulationConfig(**{**config.model_dump(), "code_length": code_length})
    return config


@app.command()
def version():
    console.print(f"v{__version__}")


@app.command()
def codes(code_length: int = typer.Option(8, "--code-length", "-n")):
    """Печать матрицы Уолша"""
    try:
        walsh = generate_walsh_codes(code_length)
    except CDMAError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    table = Table(title=f"Коды Уолша длины {code_length}")
    table.add_column("#", justify="right")
    table.add_column("код")
    for i, code in enumerate(walsh):
        table.add_row(str(i), " ".join(f"{int(c):+d}" for c in code))
    console.print(table)


@app.command()
def run(
    config_path: Optional[str] = typer.Option(None, "--config", "-c"),
    cycles: int = typer.Option(0, "--cycles", help="0 — до Ctrl+C"),
    interval: Optional[float] = typer.Option(None, "--interval"),
    code_length: Optional[int] = typer.Option(None, "--code-length", "-n"),
    clear: bool = typer.Option(True, "--clear/--no-clear"),
):
    """Запуск станций и циклов декодирования"""
    try:
        config = _load_config(config_path, code_length)
        setup_logging(config.log)
        sim = CDMASimulation(config).setup()
    except (CDMAError, ValidationError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]Ошибка запуска: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    pause = config.interval if interval is None else interval
    group = config.code_length

    try:
        while cycles == 0 or sim.cycle < cycles:
            results = sim.decode_cycle()
            if clear:
                console.clear()
            console.print(f"[bold cyan]=== CDMA эфир | кадр {sim.cycle} ===[/bold cyan]")
            console.print(Text("Суммарный сигнал (чипы): ") + render_signal(sim.channel.snapshot(), group))
            console.print("[bold]Приёмники декодируют:[/bold]")
            console.print(render_results(results))
            if cycles == 0 or sim.cycle < cycles:
                time.sleep(pause)
    except KeyboardInterrupt:
        console.print("\nПрограмма прервана пользователем")

    for rx_id, stats in sim.statistics().items():
        console.print(f"  {rx_id}: принято {stats['received']}, верно {stats['ok']}")


if __name__ == "__main__":
    app()

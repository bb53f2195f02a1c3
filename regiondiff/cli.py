"""
CLI интерфейс для regiondiff
"""
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import track

from .core.io import safe_imwrite
from .core.pipeline import compare_image_files
from .core.types import ComparisonConfig, ComparisonOutcome, ComparisonState

app = typer.Typer(help="regiondiff - поиск областей различий между изображениями")
console = Console()

EXIT_MATCH = 0
EXIT_MISMATCH = 1
EXIT_ERROR = 2

STATE_MESSAGES = {
    ComparisonState.FORMAT_NOT_SUPPORTED: "формат не поддерживается (только PNG)",
    ComparisonState.COLOR_TYPE_NOT_SUPPORTED: "цветовая модель не поддерживается (нужен RGBA8)",
    ComparisonState.SIZE_MISMATCH: "размеры изображений не совпадают",
    ComparisonState.DECODE_FAILURE: "не удалось декодировать изображение",
}


def setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Настройка логирования для CLI"""
    logging.basicConfig(
        filename=str(log_file) if log_file else None,
        filemode='a',
        format='%(asctime)s %(levelname)s: %(message)s',
        level=logging.DEBUG if verbose else logging.WARNING,
        force=True,
    )


def _build_config(jump_threshold: int, allowed_percent: float, min_area: int) -> ComparisonConfig:
    try:
        return ComparisonConfig(
            jump_threshold=jump_threshold,
            allowed_difference_percent=allowed_percent,
            minimum_region_area=min_area,
        )
    except ValueError as e:
        console.print(f"[red]Ошибка параметров: {e}[/red]")
        raise typer.Exit(EXIT_ERROR)


def _report(outcome: ComparisonOutcome, name: str) -> None:
    if outcome.is_match:
        console.print(f"[green]{name}: изображения совпадают[/green]")
    elif outcome.is_mismatch:
        console.print(
            f"[yellow]{name}: изображения различаются[/yellow] - "
            f"пикселей {outcome.different_pixels:,} ({outcome.different_percent:.2f}%), "
            f"областей {len(outcome.rectangles)}"
        )
    else:
        console.print(f"[red]{name}: {STATE_MESSAGES[outcome.state]}[/red]")


@app.command()
def compare(
    expected: Path = typer.Argument(..., help="Эталонное изображение (PNG)"),
    actual: Path = typer.Argument(..., help="Проверяемое изображение (PNG)"),
    output: Path = typer.Option("result.png", "--output", "-o", help="Путь для сохранения результата"),
    jump_threshold: int = typer.Option(5, "--jump-threshold", "-j", help="Максимальный разрыв между пикселями региона"),
    allowed_percent: float = typer.Option(0.0, "--allowed-percent", "-p", help="Допустимый процент различий"),
    min_area: int = typer.Option(1, "--min-area", "-m", help="Минимальная площадь региона"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Подробный лог"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Писать лог в файл"),
):
    """
    Сравнивает два изображения и сохраняет копию actual с рамками различий.
    """
    setup_logging(verbose, log_file)
    config = _build_config(jump_threshold, allowed_percent, min_area)

    outcome = compare_image_files(expected, actual, config)
    _report(outcome, actual.name)

    if outcome.is_error:
        raise typer.Exit(EXIT_ERROR)
    if outcome.is_match:
        raise typer.Exit(EXIT_MATCH)

    if not safe_imwrite(output, outcome.image):
        console.print(f"[red]Ошибка при сохранении результата в {output}[/red]")
        raise typer.Exit(EXIT_ERROR)
    console.print(f"Результат сохранён в {output}")
    raise typer.Exit(EXIT_MISMATCH)


@app.command()
def batch(
    dir_expected: Path = typer.Argument(..., help="Директория с эталонными изображениями"),
    dir_actual: Path = typer.Argument(..., help="Директория с проверяемыми изображениями"),
    output_dir: Path = typer.Argument(..., help="Директория для результатов"),
    pattern: str = typer.Option("*.png", "--pattern", help="Паттерн файлов"),
    jump_threshold: int = typer.Option(5, "--jump-threshold", "-j", help="Максимальный разрыв между пикселями региона"),
    allowed_percent: float = typer.Option(0.0, "--allowed-percent", "-p", help="Допустимый процент различий"),
    min_area: int = typer.Option(1, "--min-area", "-m", help="Минимальная площадь региона"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Подробный лог"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Писать лог в файл"),
):
    """
    Пакетное сравнение одноимённых изображений из двух директорий.
    """
    setup_logging(verbose, log_file)
    config = _build_config(jump_threshold, allowed_percent, min_area)

    if not dir_expected.is_dir() or not dir_actual.is_dir():
        console.print("[red]Ошибка: один из путей не является директорией[/red]")
        raise typer.Exit(EXIT_ERROR)

    files_expected = sorted(dir_expected.glob(pattern))
    files_actual = {f.name: f for f in dir_actual.glob(pattern)}
    console.print(f"Найдено {len(files_expected)} файлов в {dir_expected}")

    counts = {"matched": 0, "mismatched": 0, "failed": 0, "skipped": 0}
    for file_expected in track(files_expected, description="Сравнение...", console=console):
        file_actual = files_actual.get(file_expected.name)
        if file_actual is None:
            console.print(f"[yellow]Пропуск {file_expected.name}: нет пары в {dir_actual}[/yellow]")
            counts["skipped"] += 1
            continue

        outcome = compare_image_files(file_expected, file_actual, config)
        _report(outcome, file_expected.name)
        if outcome.is_match:
            counts["matched"] += 1
        elif outcome.is_mismatch:
            if safe_imwrite(output_dir / file_expected.name, outcome.image):
                counts["mismatched"] += 1
            else:
                console.print(f"[red]Ошибка при сохранении {file_expected.name}[/red]")
                counts["failed"] += 1
        else:
            counts["failed"] += 1

    console.print(
        f"\nСовпадает: {counts['matched']}, различается: {counts['mismatched']}, "
        f"ошибок: {counts['failed']}, пропущено: {counts['skipped']}"
    )
    if counts["failed"]:
        raise typer.Exit(EXIT_ERROR)
    if counts["mismatched"]:
        raise typer.Exit(EXIT_MISMATCH)


def main():
    """Точка входа CLI"""
    app()


if __name__ == "__main__":
    main()

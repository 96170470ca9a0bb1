"""CLI entry point for benchmark result validation."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import numpy as np
from PIL import Image
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from luxmark_validation.image.reference import IMAGE_SUFFIXES
from luxmark_validation.models.config import BenchmarkMode, ValidatorConfig
from luxmark_validation.models.frame import FrameBuffer
from luxmark_validation.scene.collector import collect_scene_files
from luxmark_validation.scene.hash_validator import compute_scene_digest
from luxmark_validation.session.coordinator import ValidationSession

console = Console()


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _load_config(config: str) -> ValidatorConfig:
    if not Path(config).exists():
        return ValidatorConfig()
    return ValidatorConfig.load(config)


def _read_frame(path: Path, width: int | None, height: int | None) -> FrameBuffer:
    if path.suffix.lower() in IMAGE_SUFFIXES:
        with Image.open(path) as img:
            return FrameBuffer.from_array(np.asarray(img.convert("RGB"), dtype=np.uint8))
    if width is None or height is None:
        raise click.UsageError("--width and --height are required for raw frame buffers")
    return FrameBuffer.from_bytes(path.read_bytes(), width, height)


def _status_text(status) -> str:
    if status is None:
        return "[yellow]pending[/yellow]"
    color = "green" if status.ok else "red"
    return f"[{color}]{status.label}[/{color}]"


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Benchmark result validation: scene integrity and image fidelity"""
    setup_logging(verbose)


@cli.command()
@click.option("--config", "-c", default="validation-config.json", help="Config file path")
def init(config: str) -> None:
    """Create a default configuration file."""
    config_path = Path(config)
    if config_path.exists():
        if not click.confirm(f"{config_path} already exists. Overwrite?"):
            return

    cfg = ValidatorConfig()
    cfg.save(config_path)
    console.print(f"[green]Created {config_path}[/green]")
    console.print("\nAdd the expected scene digests before validating, e.g.:")
    console.print("  [blue]luxmark-validate digest scenes/luxball/render-hdr.cfg[/blue]")


@cli.command()
@click.argument("scene")
@click.option("--config", "-c", default="validation-config.json", help="Config file path")
def digest(scene: str, config: str) -> None:
    """Compute the content digest of a scene's asset files."""
    cfg = _load_config(config)
    scene_dir = cfg.scene_dir(scene)
    try:
        files = collect_scene_files(scene_dir, cfg.scene_extensions, cfg.excluded_dirs)
        value = compute_scene_digest(files, cfg.hash_algorithm, cfg.hash_chunk_size)
    except OSError as e:
        console.print(f"[red]Cannot read scene files: {e}[/red]")
        sys.exit(1)
    console.print(f"{len(files)} files in [blue]{scene_dir}[/blue]")
    console.print(f"{cfg.hash_algorithm}: [bold]{value}[/bold]")


@cli.command()
@click.argument("scene")
@click.option(
    "--mode", "-m",
    type=click.Choice([m.value for m in BenchmarkMode], case_sensitive=False),
    default=BenchmarkMode.BENCHMARK_OCL_GPU.value,
    help="Benchmark mode the frame was rendered with",
)
@click.option("--frame", "-f", "frame_path", required=True, type=click.Path(exists=True, dir_okay=False),
              help="Rendered frame: raw RGB bytes or an image file")
@click.option("--width", type=int, help="Frame width (raw frames only)")
@click.option("--height", type=int, help="Frame height (raw frames only)")
@click.option("--sample-secs", type=float, default=0.0, help="Benchmark result in samples/sec, display only")
@click.option("--device", "devices", multiple=True, help="Device description, display only")
@click.option("--config", "-c", default="validation-config.json", help="Config file path")
def check(
    scene: str,
    mode: str,
    frame_path: str,
    width: int | None,
    height: int | None,
    sample_secs: float,
    devices: tuple[str, ...],
    config: str,
) -> None:
    """Validate a benchmark result: scene files and rendered image."""
    cfg = _load_config(config)
    try:
        frame = _read_frame(Path(frame_path), width, height)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    session = ValidationSession(scene, BenchmarkMode(mode.upper()), frame, config=cfg)
    session.close()
    summary = session.summary()

    table = Table(title="Validation Summary")
    table.add_column("Item", style="bold")
    table.add_column("Value")
    table.add_row("Mode", mode.upper())
    table.add_row("Scene", scene)
    table.add_row("Result (K samples/sec)", str(int(sample_secs / 1000.0)))
    for device in devices:
        table.add_row("Device", device)
    table.add_row("Scene validation", _status_text(summary.scene))
    table.add_row("Image validation", _status_text(summary.image))
    console.print(table)

    if not summary.all_ok:
        sys.exit(1)


if __name__ == "__main__":
    cli()

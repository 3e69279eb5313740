from typing import Dict, List, Optional
import typer
import yaml
from pydantic import ValidationError
from .config import load_config, RecorderConfig
from .logging import setup_logging
from .reporters.console import ConsoleReporter
from .reporters.recorder import warning
from .runners.replay import ReplayError, ReplayRunner, load_document

app = typer.Typer(add_completion=False, help="Test Recorder - human-readable rendering of test run events")

def _parse_tag_colors(pairs: List[str]) -> Dict[str, str]:
    colors: Dict[str, str] = {}
    for pair in pairs:
        tag, sep, color = pair.partition("=")
        if not sep or not tag or not color:
            raise typer.BadParameter(f"expected TAG=COLOR, got {pair!r}", param_hint="--tag-color")
        # First occurrence wins, like every other tag color source.
        colors.setdefault(tag, color)
    return colors

@app.command()
def replay(
    events: str = typer.Argument(..., help="YAML document of tests and events to replay"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to recorder config YAML"),
    ansi: Optional[bool] = typer.Option(None, "--ansi/--no-ansi", help="Force ANSI escape codes on or off"),
    ansi_256: Optional[bool] = typer.Option(None, "--256-colors/--16-colors", help="Force 256-color or 16-color tag dots"),
    sf_symbols: bool = typer.Option(False, "--sf-symbols", help="Use SF Symbols glyphs (macOS)"),
    tag_color: List[str] = typer.Option([], "--tag-color", help="TAG=COLOR, may be repeated; beats config"),
    log_level: str = typer.Option("WARNING", "--log-level", help="Diagnostics level (stderr)"),
):
    log = setup_logging(log_level.upper())
    try:
        cfg: RecorderConfig = load_config(config) if config else RecorderConfig()
        overrides = {}
        if ansi is not None: overrides["ansi"] = ansi
        if ansi_256 is not None: overrides["ansi_256"] = ansi_256
        if sf_symbols: overrides["sf_symbols"] = True
        cfg = cfg.model_copy(update=overrides)
        reporter = ConsoleReporter(cfg, extra_tag_colors=_parse_tag_colors(tag_color))
        document = load_document(events)
        result = ReplayRunner(reporter.recorder).run(document)
    except (OSError, yaml.YAMLError, ValidationError, ReplayError, ValueError) as e:
        log.error("Replay failed: %s", e)
        raise typer.Exit(code=2)
    log.debug("%d events, %d lines", result.events, result.written)
    raise typer.Exit(code=1 if result.failed else 0)

@app.command()
def warn(
    message: str = typer.Argument(..., help="Advisory message to print"),
    ansi: bool = typer.Option(False, "--ansi/--no-ansi", help="Color the warning glyph"),
):
    cfg = RecorderConfig(ansi=ansi)
    typer.echo(warning(message, cfg.to_options()))

def main():
    app()

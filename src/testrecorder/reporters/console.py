from typing import Dict, Optional, TextIO, Tuple
import sys
from rich.console import Console
from ..config import RecorderConfig, RecorderOptions
from .recorder import Recorder

def detect_color_support(stream: TextIO) -> Tuple[bool, bool]:
    """(use_ansi, use_256_colors) for ``stream``, honoring NO_COLOR/TERM via rich."""
    console = Console(file=stream)
    if not console.is_terminal or console.color_system is None:
        return False, False
    return True, console.color_system in ("256", "truecolor")

class ConsoleReporter:
    """Recorder whose output goes to a text stream (stdout by default)."""
    def __init__(self, config: Optional[RecorderConfig] = None, stream: Optional[TextIO] = None,
                 extra_tag_colors: Optional[Dict[str, str]] = None,
                 options: Optional[RecorderOptions] = None):
        self.stream = stream or sys.stdout
        if options is None:
            use_ansi, use_256 = detect_color_support(self.stream)
            options = (config or RecorderConfig()).to_options(
                use_ansi=use_ansi, use_256_colors=use_256, extra_tag_colors=extra_tag_colors)
        self.recorder = Recorder(options, self.emit)

    def emit(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

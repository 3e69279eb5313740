# Lightweight package init: avoid eager imports of the CLI stack (typer, rich).
__all__ = ["Recorder", "RecorderOptions", "warning"]

def __getattr__(name):
    if name == "Recorder":
        from .reporters.recorder import Recorder as _Recorder
        return _Recorder
    if name == "warning":
        from .reporters.recorder import warning as _warning
        return _warning
    if name == "RecorderOptions":
        from .config import RecorderOptions as _RecorderOptions
        return _RecorderOptions
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

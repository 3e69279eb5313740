from dataclasses import dataclass, field
from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Mapping, Optional, Tuple
import sys
import yaml, pathlib

from .model import Tag, TagColor

@dataclass(frozen=True)
class RecorderOptions:
    """Presentation options for a recorder."""
    use_ansi_escape_codes: bool = False
    # Ignored unless use_ansi_escape_codes is set.
    use_256_color_ansi_escape_codes: bool = False
    # Honored only on macOS.
    use_sf_symbols: bool = False
    # One mapping per configuration source; earlier sources win on collision.
    tag_colors: Tuple[Mapping[Tag, TagColor], ...] = ()
    platform: str = field(default_factory=lambda: sys.platform)

TagColorSource = Dict[str, str]

class RecorderConfig(BaseModel):
    ansi: Optional[bool] = Field(None, description="Force ANSI escape codes on/off; auto-detect when unset")
    ansi_256: Optional[bool] = Field(None, description="Force 256-color escape codes on/off")
    sf_symbols: bool = Field(False, description="Use SF Symbols glyphs (macOS only)")
    tag_colors: List[TagColorSource] = Field(default_factory=list,
                                              description="Tag to color mappings, first mapping wins")

    @field_validator("tag_colors", mode="before")
    @classmethod
    def _single_mapping(cls, value):
        if isinstance(value, dict):
            return [value]
        return value

    @field_validator("tag_colors")
    @classmethod
    def _parseable_colors(cls, sources: List[TagColorSource]) -> List[TagColorSource]:
        for source in sources:
            for color in source.values():
                TagColor.parse(color)
        return sources

    def to_options(self, use_ansi: bool = False, use_256_colors: bool = False,
                   extra_tag_colors: Optional[TagColorSource] = None,
                   platform: Optional[str] = None) -> RecorderOptions:
        """Build options; ``use_ansi``/``use_256_colors`` apply only where the config leaves them unset.

        ``extra_tag_colors`` is placed ahead of the configured mappings.
        """
        sources = ([extra_tag_colors] if extra_tag_colors else []) + list(self.tag_colors)
        return RecorderOptions(
            use_ansi_escape_codes=use_ansi if self.ansi is None else self.ansi,
            use_256_color_ansi_escape_codes=use_256_colors if self.ansi_256 is None else self.ansi_256,
            use_sf_symbols=self.sf_symbols,
            tag_colors=tuple(parse_tag_colors(s) for s in sources),
            platform=platform or sys.platform,
        )

def parse_tag_colors(source: Mapping[str, str]) -> Dict[Tag, TagColor]:
    return {Tag(name): TagColor.parse(color) for name, color in source.items()}

def load_config(path: str) -> RecorderConfig:
    data = yaml.safe_load(pathlib.Path(path).read_text()) or {}
    return RecorderConfig.model_validate(data)

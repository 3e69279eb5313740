"""Glyphs, ANSI colors and tag color dots used by the recorder."""
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional

from ..model import PREDEFINED_COLORS, Tag, TagColor

ANSI_PREFIX = "\x1b["
ANSI_RESET = f"{ANSI_PREFIX}0m"

DIM_GRAY = f"{ANSI_PREFIX}90m"
BRIGHT_RED = f"{ANSI_PREFIX}91m"
BRIGHT_GREEN = f"{ANSI_PREFIX}92m"
BRIGHT_YELLOW = f"{ANSI_PREFIX}93m"

# U+25CF BLACK CIRCLE
COLOR_DOT = "●"


class Symbol(Enum):
    DEFAULT = "default"
    SKIP = "skip"
    PASS = "pass"
    PASS_WITH_KNOWN_ISSUES = "pass_with_known_issues"
    FAIL = "fail"
    DIFFERENCE = "difference"
    WARNING = "warning"

    @classmethod
    def passing(cls, has_known_issues: bool = False) -> "Symbol":
        return cls.PASS_WITH_KNOWN_ISSUES if has_known_issues else cls.PASS


# ---------- glyph tables ----------
UNICODE_GLYPHS: Dict[Symbol, str] = {
    Symbol.DEFAULT: "◇",                 # WHITE DIAMOND
    Symbol.SKIP: "✘",                    # HEAVY BALLOT X
    Symbol.PASS: "✔",                    # HEAVY CHECK MARK
    Symbol.PASS_WITH_KNOWN_ISSUES: "✘",
    Symbol.FAIL: "✘",
    Symbol.DIFFERENCE: "±",              # PLUS-MINUS SIGN
    Symbol.WARNING: "\u26a0\ufe0e",         # WARNING SIGN + VARIATION SELECTOR-15
}

# Consolas has limited Unicode coverage.
WINDOWS_GLYPHS: Dict[Symbol, str] = {
    Symbol.DEFAULT: "◊",                 # LOZENGE
    Symbol.SKIP: "×",                    # MULTIPLICATION SIGN
    Symbol.PASS: "√",                    # SQUARE ROOT
    Symbol.PASS_WITH_KNOWN_ISSUES: "×",
    Symbol.FAIL: "×",
    Symbol.DIFFERENCE: "±",
    Symbol.WARNING: "!",
}

# SF Symbols private-use code points, macOS only.
SF_SYMBOLS_GLYPHS: Dict[Symbol, str] = {
    Symbol.DEFAULT: "\U001007c8",             # diamond
    Symbol.SKIP: "\U0010065f",                # arrow.triangle.turn.up.right.diamond.fill
    Symbol.PASS: "\U0010105b",                # checkmark.diamond.fill
    Symbol.PASS_WITH_KNOWN_ISSUES: "\U00100884",
    Symbol.FAIL: "\U00100884",                # xmark.diamond.fill
    Symbol.DIFFERENCE: "\U0010017a",          # plus.forwardslash.minus
    Symbol.WARNING: "\U001001ff",             # exclamationmark.triangle.fill
}

COMMENT_ARROW = "↳"                      # DOWNWARDS ARROW WITH TIP RIGHTWARDS
SF_SYMBOLS_COMMENT_ARROW = "\U00100135"       # arrow.turn.down.right

SYMBOL_COLORS: Dict[Symbol, str] = {
    Symbol.DEFAULT: DIM_GRAY,
    Symbol.SKIP: DIM_GRAY,
    Symbol.DIFFERENCE: DIM_GRAY,
    Symbol.PASS_WITH_KNOWN_ISSUES: DIM_GRAY,
    Symbol.PASS: BRIGHT_GREEN,
    Symbol.FAIL: BRIGHT_RED,
    Symbol.WARNING: BRIGHT_YELLOW,
}


def uses_sf_symbols(options) -> bool:
    return options.use_sf_symbols and options.platform == "darwin"


def glyph_table(options) -> Dict[Symbol, str]:
    if uses_sf_symbols(options):
        return SF_SYMBOLS_GLYPHS
    if options.platform.startswith("win"):
        return WINDOWS_GLYPHS
    return UNICODE_GLYPHS


def symbol_text(symbol: Symbol, options) -> str:
    """Glyph for ``symbol``, colored when ANSI escape codes are enabled."""
    glyph = glyph_table(options)[symbol]
    if uses_sf_symbols(options) and options.use_ansi_escape_codes:
        # Private-use glyphs render wide in most terminals.
        glyph += " "
    if options.use_ansi_escape_codes:
        return f"{SYMBOL_COLORS[symbol]}{glyph}{ANSI_RESET}"
    return glyph


def comment_arrow(options) -> str:
    if uses_sf_symbols(options):
        return SF_SYMBOLS_COMMENT_ARROW + (" " if options.use_ansi_escape_codes else "")
    return COMMENT_ARROW


# ---------- tag colors ----------
PREDEFINED_TAG_COLORS: Dict[Tag, TagColor] = {
    Tag(name, source_code=f".{name}"): color for name, color in PREDEFINED_COLORS.items()
}

_SIXTEEN_COLOR_CODES: Dict[TagColor, str] = {
    PREDEFINED_COLORS["red"]: "91",
    PREDEFINED_COLORS["orange"]: "33",
    PREDEFINED_COLORS["yellow"]: "93",
    PREDEFINED_COLORS["green"]: "92",
    PREDEFINED_COLORS["blue"]: "94",
    PREDEFINED_COLORS["purple"]: "95",
}


def merge_tag_colors(sources: Iterable[Mapping[Tag, TagColor]]) -> Dict[Tag, TagColor]:
    """Predefined colors first, then each source in order; existing keys are never replaced."""
    merged = dict(PREDEFINED_TAG_COLORS)
    for source in sources:
        for tag, color in source.items():
            merged.setdefault(tag, color)
    return merged


def ansi_escape_code(color: TagColor, options) -> Optional[str]:
    if not options.use_ansi_escape_codes:
        return None
    if options.use_256_color_ansi_escape_codes:
        r = color.red * 5 // 255
        g = color.green * 5 // 255
        b = color.blue * 5 // 255
        return f"{ANSI_PREFIX}38;5;{16 + 36 * r + 6 * g + b}m"
    code = _SIXTEEN_COLOR_CODES.get(color)
    if code is None:
        return None
    return f"{ANSI_PREFIX}{code}m"


def resolve_tag_color(tag: Tag, tag_colors: Mapping[Tag, TagColor]) -> Optional[TagColor]:
    color = tag_colors.get(tag)
    if color is None and tag.source_code is not None:
        color = tag_colors.get(Tag(tag.source_code))
    return color


def color_dots(tags: Iterable[Tag], tag_colors: Mapping[Tag, TagColor], options) -> str:
    """One colored dot per distinct tag color followed by a single reset, or ``""``."""
    if not options.use_ansi_escape_codes:
        return ""
    colors = {c for c in (resolve_tag_color(t, tag_colors) for t in tags) if c is not None}
    dots = []
    for color in sorted(colors):
        code = ansi_escape_code(color, options)
        if code is not None:
            dots.append(f"{code}{COLOR_DOT}")
    if not dots:
        return ""
    return "".join(dots) + ANSI_RESET

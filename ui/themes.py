# ui/themes.py

THEMES = {
    "dark": {
        "emoji": "🌑",
        "name": "Dark",
        "intensity_glyphs": ["·", "░", "▒", "▓", "█"],
        "empty_glyph": " ",
        "check": "✅",
        "uncheck": "⬜️",
    },
    "light": {
        "emoji": "☀️",
        "name": "Light",
        "intensity_glyphs": ["□", "▫", "▪", "◼", "■"],
        "empty_glyph": " ",
        "check": "☑",
        "uncheck": "☐",
    },
}


def get_theme(theme_name: str):
    return THEMES.get(theme_name, THEMES["dark"])


def intensity_glyph(theme: dict, level: int) -> str:
    glyphs = theme["intensity_glyphs"]
    return glyphs[max(0, min(level, len(glyphs) - 1))]

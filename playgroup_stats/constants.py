"""
Engine-wide constants for the playgroup statistics engine.

Keeps the fixed vocabulary of the domain (color symbols, default thresholds, labels)
in one place so aggregators do not carry magic values.
"""


class ColorConstants:
    """Constants related to commander color identity."""
    
    # Canonical WUBRG order used for normalized identity strings
    COLOR_ORDER = "WUBRG"
    
    # Colorless commanders normalize to the empty string
    COLORLESS = ""


class StatisticsDefaults:
    """Recognized defaults for caller-supplied thresholds."""
    
    MIN_GAMES_FOR_BEST_COMMANDER = 5
    MIN_GAMES_FOR_WIN_RATE_RANKING = 5
    TOP_COMMANDER_LIMIT = 10
    TREND_WINDOW_SIZE = 10


class DisplayConstants:
    """Labels used when a participant has no stored name."""
    
    GUEST_LABEL = "Guest"

"""Color identity normalization for commander reference data."""

from typing import Iterable, Optional, Union

from playgroup_stats.constants import ColorConstants
from playgroup_stats.utils.exceptions import InvalidSnapshotError

# Characters tolerated between symbols ("W,U", "{W}{U}", "W U")
_SEPARATORS = set(",{}/ ")


def normalize_color_identity(
    color_identity: Optional[Union[str, Iterable[str]]],
    commander_id: str = "?"
) -> str:
    """
    Normalize a color identity to a canonical WUBRG-ordered string.
    
    Args:
        color_identity: Identity as stored ("UW", "{W}{U}") or an iterable of
            symbols; None, "" and "C" mean colorless
        commander_id: Commander id used in the error message
        
    Returns:
        Canonical string such as "WUB"; "" for colorless
        
    Raises:
        InvalidSnapshotError: If a symbol outside the five colors is present
    """
    if color_identity is None:
        return ColorConstants.COLORLESS
    
    if isinstance(color_identity, str):
        symbols = [ch for ch in color_identity.upper() if ch not in _SEPARATORS]
    else:
        symbols = [str(symbol).strip().upper() for symbol in color_identity]
    
    if symbols == ["C"]:
        return ColorConstants.COLORLESS
    
    present = set()
    for symbol in symbols:
        if symbol not in ColorConstants.COLOR_ORDER or len(symbol) != 1:
            raise InvalidSnapshotError(
                f"commander {commander_id}",
                f"unknown color symbol {symbol!r} in color identity"
            )
        present.add(symbol)
    
    return "".join(ch for ch in ColorConstants.COLOR_ORDER if ch in present)

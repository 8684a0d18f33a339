from dataclasses import dataclass

@dataclass(slots=True)
class Jewel:
    """Per-cell jewel color name.

    RGB values live in ``jewels.constants.JEWEL_COLORS``; the board only ever
    compares names.
    """
    color: str

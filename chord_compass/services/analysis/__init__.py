# Reverse analysis: fretted notes -> voicing type and chord suggestions
from .voicing_analyzer import (
    ChordMatch,
    analyze_voicing,
    detect_chord,
    detect_voicing_type,
    match_chord_qualities,
)

__all__ = [
    "ChordMatch",
    "analyze_voicing",
    "detect_chord",
    "detect_voicing_type",
    "match_chord_qualities",
]

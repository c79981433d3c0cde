from .fretboard import (
    MUTED,
    STANDARD_TUNING,
    FretPosition,
    Fretted,
    InvalidTuningError,
    Muted,
    Tuning,
    get_tuning,
    notes_from_string_state,
)
from .voicing import ChordVoicing
from .solver import solve_chord_shapes
from .triads import solve_triad_voicings
from .ranking import get_best_voicings, score_voicing
from .tuning import adapt_voicing_to_tuning, is_standard_tuning
from .open_chords import DEFAULT_CATALOG, OPEN_POSITION_CHORDS, VoicingCatalog
from .voicing_service import get_voicings_for_chord, is_in_catalog

__all__ = [
    "MUTED",
    "STANDARD_TUNING",
    "FretPosition",
    "Fretted",
    "InvalidTuningError",
    "Muted",
    "Tuning",
    "get_tuning",
    "notes_from_string_state",
    "ChordVoicing",
    "solve_chord_shapes",
    "solve_triad_voicings",
    "get_best_voicings",
    "score_voicing",
    "adapt_voicing_to_tuning",
    "is_standard_tuning",
    "DEFAULT_CATALOG",
    "OPEN_POSITION_CHORDS",
    "VoicingCatalog",
    "get_voicings_for_chord",
    "is_in_catalog",
]

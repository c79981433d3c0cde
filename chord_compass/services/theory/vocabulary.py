"""Closed chord-quality and scale tables.

Qualities and scales are looked up by value only. Anything outside these
tables is reported as unresolvable (None) rather than guessed.
"""

from __future__ import annotations

from typing import Literal

from .pitch import pc_to_name, pitch_class

Mode = Literal["major", "minor"]

CHORD_QUALITIES: tuple[str, ...] = (
    "Major",
    "Minor",
    "Dominant 7",
    "Major 7",
    "Minor 7",
    "Diminished",
    "Augmented",
    "Sus2",
    "Sus4",
    "Power (5)",
)

# semitones from the root, chord-tone order (R, 3rd, 5th, 7th)
QUALITY_INTERVALS: dict[str, tuple[int, ...]] = {
    "Major": (0, 4, 7),
    "Minor": (0, 3, 7),
    "Dominant 7": (0, 4, 7, 10),
    "Major 7": (0, 4, 7, 11),
    "Minor 7": (0, 3, 7, 10),
    "Diminished": (0, 3, 6),
    "Augmented": (0, 4, 8),
    "Sus2": (0, 2, 7),
    "Sus4": (0, 5, 7),
    "Power (5)": (0, 7),
}

QUALITY_SYMBOLS: dict[str, str] = {
    "Major": "",
    "Minor": "m",
    "Dominant 7": "7",
    "Major 7": "maj7",
    "Minor 7": "m7",
    "Diminished": "dim",
    "Augmented": "aug",
    "Sus2": "sus2",
    "Sus4": "sus4",
    "Power (5)": "5",
}

# lower = simpler
QUALITY_COMPLEXITY: dict[str, int] = {
    "Major": 1,
    "Minor": 2,
    "Dominant 7": 3,
    "Major 7": 4,
    "Minor 7": 5,
    "Diminished": 6,
    "Augmented": 7,
    "Sus2": 8,
    "Sus4": 9,
    "Power (5)": 10,
}
DEFAULT_COMPLEXITY = 10

_QUALITY_MAP: dict[str, str] = {
    "": "Major",
    "m": "Minor",
    "7": "Dominant 7",
    "maj7": "Major 7",
    "m7": "Minor 7",
    "dim": "Diminished",
    "aug": "Augmented",
    "sus2": "Sus2",
    "sus4": "Sus4",
    "5": "Power (5)",
    # long-form aliases
    "major": "Major",
    "maj": "Major",
    "minor": "Minor",
    "min": "Minor",
    "dominant7": "Dominant 7",
    "dom7": "Dominant 7",
    "major7": "Major 7",
    "minor7": "Minor 7",
    "min7": "Minor 7",
    "diminished": "Diminished",
    "augmented": "Augmented",
    "sus": "Sus4",
    "power": "Power (5)",
    "power5": "Power (5)",
}

SHELL_PATTERNS: dict[str, tuple[int, ...]] = {
    "shell-major": (0, 4, 11),     # R-3-7
    "shell-minor": (0, 3, 10),     # R-b3-b7
    "shell-dominant": (0, 4, 10),  # R-3-b7
}

TRIAD_PATTERNS: dict[str, tuple[int, ...]] = {
    "major": (0, 4, 7),
    "minor": (0, 3, 7),
    "dim": (0, 3, 6),
    "aug": (0, 4, 8),
}

INTERVAL_LABELS: dict[int, str] = {
    0: "R",
    1: "b2",
    2: "2",
    3: "b3",
    4: "3",
    5: "4",
    6: "b5",
    7: "5",
    8: "#5",
    9: "6",
    10: "b7",
    11: "7",
}

SCALE_INTERVALS: dict[str, tuple[int, ...]] = {
    "major": (0, 2, 4, 5, 7, 9, 11),
    "minor": (0, 2, 3, 5, 7, 8, 10),
}


def normalize_quality(raw: str | None) -> str | None:
    """
    Map a quality name or symbol ('Minor 7', 'm7', 'min7') to its canonical
    name. Unknown qualities return None.
    """
    if raw is None:
        return None
    if raw in QUALITY_INTERVALS:
        return raw
    key = str(raw).strip().lower().replace("(", "").replace(")", "").replace(" ", "")
    return _QUALITY_MAP.get(key)


def chord_intervals(quality: str | None) -> tuple[int, ...] | None:
    name = normalize_quality(quality)
    if name is None:
        return None
    return QUALITY_INTERVALS[name]


def resolve_chord(root: str | int | None, quality: str | None) -> list[int] | None:
    """
    Target pitch classes for (root, quality) in chord-tone order, or None when
    either part is not in the vocabulary.
    """
    root_pc = pitch_class(root)
    intervals = chord_intervals(quality)
    if root_pc is None or intervals is None:
        return None
    return [(root_pc + iv) % 12 for iv in intervals]


def quality_complexity(quality: str) -> int:
    return QUALITY_COMPLEXITY.get(quality, DEFAULT_COMPLEXITY)


def chord_symbol(quality: str) -> str:
    name = normalize_quality(quality)
    return QUALITY_SYMBOLS.get(name, "") if name else ""


def chord_display_name(root: str, quality: str) -> str:
    if normalize_quality(quality) is None:
        return f"{root} {quality}"
    return f"{root}{chord_symbol(quality)}"


def interval_label(semitones: int) -> str:
    return INTERVAL_LABELS[int(semitones) % 12]


def normalize_intervals(intervals) -> list[int]:
    return sorted({int(i) % 12 for i in intervals})


def scale_pitch_classes(root: str | int, mode: Mode) -> list[int] | None:
    root_pc = pitch_class(root)
    steps = SCALE_INTERVALS.get(mode)
    if root_pc is None or steps is None:
        return None
    return [(root_pc + s) % 12 for s in steps]


def scale_note_names(root: str | int, mode: Mode) -> list[str]:
    pcs = scale_pitch_classes(root, mode) or []
    return [pc_to_name(pc) for pc in pcs]

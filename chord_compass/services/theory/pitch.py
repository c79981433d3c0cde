from __future__ import annotations

import re

NOTE_NAMES_SHARP = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]
NOTE_NAMES_FLAT = ["C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B"]

_LETTER_PC = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}
_ACCIDENTAL = {"": 0, "#": 1, "b": -1}
_NOTE_RE = re.compile(r"^([A-Ga-g])([#b]?)(-?\d+)?$")


def _split_note(name: str) -> tuple[str, str, int | None] | None:
    match = _NOTE_RE.match(str(name or "").strip().replace("♯", "#").replace("♭", "b"))
    if not match:
        return None
    octave = match.group(3)
    return match.group(1).upper(), match.group(2), int(octave) if octave is not None else None


def parse_note(name: str) -> int:
    """
    Parse a note with octave ('E2', 'Eb3', 'F#4') into a MIDI number (C4 = 60).
    """
    parts = _split_note(name)
    if parts is None or parts[2] is None:
        raise ValueError(f"Invalid note: {name!r}")
    letter, accidental, octave = parts
    return 12 * (int(octave) + 1) + _LETTER_PC[letter] + _ACCIDENTAL[accidental]


def pitch_class(name: str | int | None) -> int | None:
    """
    Pitch class 0..11 for a note name (octave optional) or an int.
    Returns None when the name cannot be parsed.
    """
    if name is None:
        return None
    if isinstance(name, int):
        return int(name) % 12
    parts = _split_note(name)
    if parts is None:
        return None
    letter, accidental, _octave = parts
    return (_LETTER_PC[letter] + _ACCIDENTAL[accidental]) % 12


def pc_to_name(pc: int, use_flats: bool = False) -> str:
    names = NOTE_NAMES_FLAT if use_flats else NOTE_NAMES_SHARP
    return names[int(pc) % 12]


def midi_to_note_name(midi: int) -> str:
    midi = int(midi)
    return f"{pc_to_name(midi % 12)}{midi // 12 - 1}"


def are_enharmonic(a: str | int, b: str | int) -> bool:
    pa = pitch_class(a)
    pb = pitch_class(b)
    return pa is not None and pa == pb


def interval_between(from_pc: int, to_pc: int) -> int:
    return (int(to_pc) - int(from_pc)) % 12

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence, Union

from chord_compass.services.theory.pitch import midi_to_note_name, parse_note, pc_to_name


class InvalidTuningError(ValueError):
    """A tuning entry does not parse as a pitch."""


# Standard tuning (low string -> high string): E2 A2 D3 G3 B3 E4
STANDARD_TUNING_NOTES = ("E2", "A2", "D3", "G3", "B3", "E4")

TUNINGS: dict[str, tuple[str, ...]] = {
    "standard": STANDARD_TUNING_NOTES,
    "half_step_down": ("Eb2", "Ab2", "Db3", "Gb3", "Bb3", "Eb4"),
    "d_standard": ("D2", "G2", "C3", "F3", "A3", "D4"),
    "c_standard": ("C2", "F2", "Bb2", "Eb3", "G3", "C4"),
    "b_standard": ("B1", "E2", "A2", "D3", "Gb3", "B3"),
    "drop_d": ("D2", "A2", "D3", "G3", "B3", "E4"),
    "drop_c": ("C2", "G2", "C3", "F3", "A3", "D4"),
    "drop_b": ("B1", "Gb2", "B2", "E3", "Ab3", "Db4"),
    "drop_a": ("A1", "E2", "A2", "D3", "Gb3", "B3"),
    "double_drop_d": ("D2", "A2", "D3", "G3", "B3", "D4"),
    "open_d": ("D2", "A2", "D3", "F#3", "A3", "D4"),
    "open_e": ("E2", "B2", "E3", "G#3", "B3", "E4"),
    "open_g": ("D2", "G2", "D3", "G3", "B3", "D4"),
    "open_a": ("E2", "A2", "E3", "A3", "C#4", "E4"),
    "open_c": ("C2", "G2", "C3", "G3", "C4", "E4"),
    "dadgad": ("D2", "A2", "D3", "G3", "A3", "D4"),
    "dadgbd": ("D2", "A2", "D3", "G3", "B3", "D4"),
    "cgcgce": ("C2", "G2", "C3", "G3", "C4", "E4"),
    "nashville": ("E3", "A3", "D4", "G4", "B3", "E4"),
    "all_fourths": ("E2", "A2", "D3", "G3", "C4", "F4"),
}


@dataclass(frozen=True)
class Muted:
    def __repr__(self) -> str:
        return "MUTED"


@dataclass(frozen=True)
class Fretted:
    fret: int


FretPosition = Union[Muted, Fretted]
MUTED = Muted()


@dataclass(frozen=True)
class Tuning:
    """Open-string notes, lowest string first. Parsed once at construction."""

    notes: tuple[str, ...]
    open_midi: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        notes = tuple(str(n) for n in self.notes)
        if not notes:
            raise InvalidTuningError("Tuning must have at least one string")
        midis: list[int] = []
        for note in notes:
            try:
                midis.append(parse_note(note))
            except ValueError as exc:
                raise InvalidTuningError(f"Invalid tuning note: {note!r}") from exc
        object.__setattr__(self, "notes", notes)
        object.__setattr__(self, "open_midi", tuple(midis))

    def __len__(self) -> int:
        return len(self.notes)

    @property
    def string_count(self) -> int:
        return len(self.notes)

    def midi_at(self, string_index: int, fret: int) -> int:
        return int(self.open_midi[int(string_index)]) + int(fret)

    def pitch_class_at(self, string_index: int, fret: int) -> int:
        return self.midi_at(string_index, fret) % 12

    def note_at(self, string_index: int, fret: int) -> str:
        return midi_to_note_name(self.midi_at(string_index, fret))


STANDARD_TUNING = Tuning(STANDARD_TUNING_NOTES)

TuningLike = Union[Tuning, Sequence[str], None]


def as_tuning(tuning: TuningLike) -> Tuning:
    if tuning is None:
        return STANDARD_TUNING
    if isinstance(tuning, Tuning):
        return tuning
    if isinstance(tuning, str):
        return get_tuning(tuning)
    return Tuning(tuple(tuning))


def get_tuning(name: str | None) -> Tuning:
    if not name:
        return STANDARD_TUNING
    key = str(name).strip().lower().replace("-", "_").replace(" ", "_")
    notes = TUNINGS.get(key)
    if notes is None:
        return STANDARD_TUNING
    return Tuning(notes)


def get_tuning_name(tuning: TuningLike) -> str:
    notes = as_tuning(tuning).notes
    for name, preset in TUNINGS.items():
        if preset == notes:
            return name
    return "custom"


def midi_at(string_index: int, fret: int, tuning: TuningLike = None) -> int:
    return as_tuning(tuning).midi_at(string_index, fret)


def pitch_class_at(string_index: int, fret: int, tuning: TuningLike = None) -> str:
    """Canonical (sharp) pitch-class name at a string/fret."""
    return pc_to_name(as_tuning(tuning).pitch_class_at(string_index, fret))


def as_fret_position(value: FretPosition | int | None) -> FretPosition:
    if value is None or isinstance(value, Muted):
        return MUTED
    if isinstance(value, Fretted):
        return value
    fret = int(value)
    if fret < 0:
        return MUTED
    return Fretted(fret)


def fret_value(pos: FretPosition) -> int | None:
    return pos.fret if isinstance(pos, Fretted) else None


def as_fret_positions(values: Iterable[FretPosition | int | None]) -> tuple[FretPosition, ...]:
    return tuple(as_fret_position(v) for v in values)


def parse_fret_string(frets: str) -> tuple[FretPosition, ...]:
    """
    Parse a shape like 'x32010'. Two-digit frets are wrapped: '8(10)(10)988'.
    """
    out: list[FretPosition] = []
    i = 0
    text = str(frets).strip()
    while i < len(text):
        ch = text[i]
        if ch in ("x", "X"):
            out.append(MUTED)
            i += 1
        elif ch == "(":
            end = text.index(")", i)
            out.append(Fretted(int(text[i + 1:end])))
            i = end + 1
        elif ch.isdigit():
            out.append(Fretted(int(ch)))
            i += 1
        else:
            raise ValueError(f"Invalid fret string: {frets!r}")
    return tuple(out)


def notes_from_string_state(
    state: Sequence[FretPosition | int | None],
    tuning: TuningLike = None,
) -> tuple[list[str], str | None]:
    """
    Return (unique pitch classes in string order, bass pitch class).
    String 0 is the lowest string.
    """
    t = as_tuning(tuning)
    notes: list[str] = []
    bass: str | None = None
    for i, value in enumerate(state):
        if i >= len(t):
            break
        fret = fret_value(as_fret_position(value))
        if fret is None:
            continue
        name = pitch_class_at(i, fret, t)
        if bass is None:
            bass = name
        if name not in notes:
            notes.append(name)
    return notes, bass

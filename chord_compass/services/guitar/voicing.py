from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from chord_compass.services.guitar.fretboard import (
    FretPosition,
    Fretted,
    Muted,
    Tuning,
    as_fret_positions,
    fret_value,
)
from chord_compass.services.theory.pitch import pc_to_name, pitch_class


@dataclass(frozen=True)
class ChordVoicing:
    frets: tuple[FretPosition, ...]  # string 0 (lowest) -> highest
    lowest_fret: int
    highest_fret: int
    note_names: tuple[str, ...]
    bass_note: str | None = None
    is_inversion: bool | None = None

    @property
    def fret_values(self) -> tuple[int | None, ...]:
        return tuple(fret_value(p) for p in self.frets)

    @property
    def played_count(self) -> int:
        return sum(1 for p in self.frets if isinstance(p, Fretted))

    @property
    def signature(self) -> str:
        return "-".join("x" if f is None else str(f) for f in self.fret_values)

    def to_dict(self) -> dict[str, object]:
        return {
            "frets": list(self.fret_values),
            "lowest_fret": int(self.lowest_fret),
            "highest_fret": int(self.highest_fret),
            "note_names": list(self.note_names),
            "bass_note": self.bass_note,
            "is_inversion": self.is_inversion,
        }


def played_frets(frets: Sequence[FretPosition]) -> list[int]:
    return [p.fret for p in frets if isinstance(p, Fretted)]


def hand_span(frets: Sequence[FretPosition]) -> int:
    """Distance between the lowest and highest fretted (non-open) positions."""
    fretted = [f for f in played_frets(frets) if f > 0]
    if not fretted:
        return 0
    return int(max(fretted) - min(fretted))


def _played_range(frets: Sequence[FretPosition]) -> tuple[int, int] | None:
    played = [i for i, p in enumerate(frets) if isinstance(p, Fretted)]
    if not played:
        return None
    return played[0], played[-1]


def has_playable_shape(frets: Sequence[FretPosition]) -> bool:
    """
    False when nothing is played or when two or more adjacent strings are
    muted between the first and last played string.
    """
    bounds = _played_range(frets)
    if bounds is None:
        return False
    first, last = bounds
    consecutive = 0
    for pos in frets[first:last + 1]:
        if isinstance(pos, Muted):
            consecutive += 1
            if consecutive > 1:
                return False
        else:
            consecutive = 0
    return True


def has_muted_gap(frets: Sequence[FretPosition]) -> bool:
    bounds = _played_range(frets)
    if bounds is None:
        return False
    first, last = bounds
    return any(isinstance(p, Muted) for p in frets[first:last + 1])


def bass_pitch_class(frets: Sequence[FretPosition], tuning: Tuning) -> int | None:
    for i, pos in enumerate(frets):
        if isinstance(pos, Fretted):
            return tuning.pitch_class_at(i, pos.fret)
    return None


def build_voicing(
    frets: Sequence[FretPosition | int | None],
    tuning: Tuning,
    root: str | int | None = None,
    *,
    is_inversion: bool | None = None,
) -> ChordVoicing:
    """
    Derive the voicing metadata for a fret tuple. When a root is given the
    inversion flag is computed from the bass note; otherwise `is_inversion`
    is carried through as passed.
    """
    positions = as_fret_positions(frets)
    played = played_frets(positions)
    note_names = tuple(
        tuning.note_at(i, p.fret) for i, p in enumerate(positions) if isinstance(p, Fretted)
    )
    bass_pc = bass_pitch_class(positions, tuning)
    bass_note = pc_to_name(bass_pc) if bass_pc is not None else None

    root_pc = pitch_class(root)
    if root_pc is not None and bass_pc is not None:
        is_inversion = bass_pc != root_pc

    return ChordVoicing(
        frets=positions,
        lowest_fret=int(min(played)) if played else 0,
        highest_fret=int(max(played)) if played else 0,
        note_names=note_names,
        bass_note=bass_note,
        is_inversion=is_inversion,
    )

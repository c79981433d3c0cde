from __future__ import annotations

from typing import Iterable

from chord_compass.core.config import setting_int
from chord_compass.services.guitar.fretboard import (
    MUTED,
    STANDARD_TUNING,
    FretPosition,
    Fretted,
    TuningLike,
    as_tuning,
)
from chord_compass.services.guitar.voicing import ChordVoicing, build_voicing


def is_standard_tuning(tuning: TuningLike) -> bool:
    return as_tuning(tuning).notes == STANDARD_TUNING.notes


def adapt_voicing_to_tuning(
    voicing: ChordVoicing,
    tuning: TuningLike,
    source_tuning: TuningLike = None,
    *,
    max_fret: int | None = None,
) -> ChordVoicing | None:
    """
    Move a voicing written for `source_tuning` (standard by default) onto
    `tuning`, keeping every sounding pitch. Returns None when a shifted fret
    leaves [0, max_fret].
    """
    target = as_tuning(tuning)
    source = as_tuning(source_tuning)
    if len(target) != len(source) or len(voicing.frets) != len(target):
        raise ValueError(
            f"String count mismatch: voicing has {len(voicing.frets)} strings, "
            f"source {len(source)}, target {len(target)}"
        )
    if max_fret is None:
        max_fret = setting_int("MAX_FRET", 24)

    adapted: list[FretPosition] = []
    for i, pos in enumerate(voicing.frets):
        if not isinstance(pos, Fretted):
            adapted.append(MUTED)
            continue
        shifted = pos.fret + (source.open_midi[i] - target.open_midi[i])
        if shifted < 0 or shifted > int(max_fret):
            return None
        adapted.append(Fretted(int(shifted)))

    return build_voicing(adapted, target, is_inversion=voicing.is_inversion)


def adapt_voicings(
    voicings: Iterable[ChordVoicing],
    tuning: TuningLike,
    source_tuning: TuningLike = None,
) -> list[ChordVoicing]:
    out: list[ChordVoicing] = []
    for v in voicings:
        adapted = adapt_voicing_to_tuning(v, tuning, source_tuning)
        if adapted is not None:
            out.append(adapted)
    return out

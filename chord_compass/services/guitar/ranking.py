from __future__ import annotations

from typing import Sequence

import numpy as np

from chord_compass.core.config import setting_int
from chord_compass.services.guitar.fretboard import TuningLike
from chord_compass.services.guitar.solver import solve_chord_shapes
from chord_compass.services.guitar.voicing import ChordVoicing, has_muted_gap
from chord_compass.services.theory.pitch import pitch_class

OPEN_POSITION_MAX_FRET = 4
OPEN_POSITION_BONUS = 100
OPEN_STRING_BONUS = 15
LOWEST_FRET_PENALTY = 8
ROOT_IN_BASS_BONUS = 25
FULL_STRING_BONUS = 20
THREE_STRING_BONUS = 10
SPAN_PENALTY = 3
CONTIGUOUS_BONUS = 10


def score_voicing(voicing: ChordVoicing, root: str | int) -> int:
    """Additive playability score; higher is more practical."""
    score = 0
    if voicing.highest_fret <= OPEN_POSITION_MAX_FRET:
        score += OPEN_POSITION_BONUS

    score += OPEN_STRING_BONUS * sum(1 for f in voicing.fret_values if f == 0)
    score -= LOWEST_FRET_PENALTY * int(voicing.lowest_fret)

    root_pc = pitch_class(root)
    bass_pc = pitch_class(voicing.bass_note)
    if root_pc is not None and bass_pc == root_pc:
        score += ROOT_IN_BASS_BONUS

    played = voicing.played_count
    if 4 <= played <= 6:
        score += FULL_STRING_BONUS
    elif played == 3:
        score += THREE_STRING_BONUS

    score -= SPAN_PENALTY * (int(voicing.highest_fret) - int(voicing.lowest_fret))

    if not has_muted_gap(voicing.frets):
        score += CONTIGUOUS_BONUS
    return int(score)


def rank_voicings(
    voicings: Sequence[ChordVoicing],
    root: str | int,
    limit: int,
) -> list[ChordVoicing]:
    """
    Keep the `limit` best-scoring voicings and return them by lowest fret.
    Ties fall back to the input order in both steps.
    """
    if not voicings or limit <= 0:
        return []
    scores = np.asarray([score_voicing(v, root) for v in voicings], dtype=np.int64)
    top = np.argsort(-scores, kind="stable")[: int(limit)]
    picked = sorted((int(i) for i in top), key=lambda i: (voicings[i].lowest_fret, i))
    return [voicings[i] for i in picked]


def get_best_voicings(
    root: str,
    quality: str,
    limit: int | None = None,
    tuning: TuningLike = None,
) -> list[ChordVoicing]:
    if limit is None:
        limit = setting_int("BEST_VOICINGS_LIMIT", 12)
    voicings = solve_chord_shapes(root, quality, tuning)
    return rank_voicings(voicings, root, int(limit))

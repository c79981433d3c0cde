from __future__ import annotations

import itertools
import logging
from typing import Iterator, Sequence

from chord_compass.core.config import setting_int
from chord_compass.core.diagnostics import diagnostics
from chord_compass.services.guitar.fretboard import (
    MUTED,
    FretPosition,
    Fretted,
    Tuning,
    TuningLike,
    as_tuning,
)
from chord_compass.services.guitar.voicing import (
    ChordVoicing,
    build_voicing,
    hand_span,
    has_playable_shape,
)
from chord_compass.services.theory.vocabulary import resolve_chord

_LOG = logging.getLogger(__name__)


class FretCombinations:
    """
    Cross-product of per-string options, first string varying slowest.
    Iterating again starts a fresh pass.
    """

    def __init__(self, options_per_string: Sequence[Sequence[FretPosition]]) -> None:
        self._options = tuple(tuple(opts) for opts in options_per_string)

    def __iter__(self) -> Iterator[tuple[FretPosition, ...]]:
        return itertools.product(*self._options)

    def __len__(self) -> int:
        total = 1
        for opts in self._options:
            total *= len(opts)
        return total


def chord_tone_frets(
    string_index: int,
    targets: set[int],
    min_fret: int,
    max_fret: int,
    tuning: Tuning,
) -> list[int]:
    return [
        fret
        for fret in range(int(min_fret), int(max_fret) + 1)
        if tuning.pitch_class_at(string_index, fret) in targets
    ]


def _window_options(
    window_start: int,
    window_end: int,
    targets: set[int],
    tuning: Tuning,
) -> list[list[FretPosition]]:
    options: list[list[FretPosition]] = []
    for s in range(len(tuning)):
        frets = chord_tone_frets(s, targets, window_start, window_end, tuning)
        if window_start > 0 and tuning.pitch_class_at(s, 0) in targets:
            frets = [0] + frets
        options.append([MUTED] + [Fretted(f) for f in frets])
    return options


def _is_valid_shape(
    frets: tuple[FretPosition, ...],
    root_pc: int,
    min_required: int,
    max_hand_span: int,
    tuning: Tuning,
) -> bool:
    present: set[int] = set()
    played = 0
    for s, pos in enumerate(frets):
        if isinstance(pos, Fretted):
            played += 1
            present.add(tuning.pitch_class_at(s, pos.fret))
    if played < min_required:
        return False
    if root_pc not in present:
        return False
    if len(present) < min_required:
        return False
    if hand_span(frets) > max_hand_span:
        return False
    return has_playable_shape(frets)


def solve_chord_shapes(
    root: str,
    quality: str,
    tuning: TuningLike = None,
    *,
    fret_count: int | None = None,
    max_hand_span: int | None = None,
) -> list[ChordVoicing]:
    """
    Find every playable voicing of root+quality by sliding a hand-span window
    along the neck.

    Voicings are unique by fret signature and sorted by lowest fret; equal
    lowest frets keep discovery order (window, then per-string option order).
    """
    t = as_tuning(tuning)
    targets = resolve_chord(root, quality)
    if not targets:
        diagnostics.emit(
            "chord.unresolved",
            f"Could not find chord: {root} {quality}",
            root=root,
            quality=quality,
        )
        return []

    fret_count = setting_int("FRET_COUNT", 12) if fret_count is None else int(fret_count)
    span = setting_int("MAX_HAND_SPAN", 4) if max_hand_span is None else int(max_hand_span)

    root_pc = targets[0]
    target_set = set(targets)
    # triads need root + one other tone; larger chords need three distinct tones
    min_required = 3 if len(targets) >= 4 else 2

    voicings: list[ChordVoicing] = []
    seen: set[tuple[int | None, ...]] = set()
    for window_start in range(0, fret_count - span + 2):
        window_end = window_start + span
        options = _window_options(window_start, window_end, target_set, t)
        for frets in FretCombinations(options):
            if not _is_valid_shape(frets, root_pc, min_required, span, t):
                continue
            key = tuple(p.fret if isinstance(p, Fretted) else None for p in frets)
            if key in seen:
                continue
            seen.add(key)
            voicings.append(build_voicing(frets, t, root_pc))

    voicings.sort(key=lambda v: v.lowest_fret)
    _LOG.debug("Solved %d voicings for %s %s", len(voicings), root, quality)
    return voicings

from __future__ import annotations

import itertools
import logging

from chord_compass.core.config import setting_int
from chord_compass.core.diagnostics import diagnostics
from chord_compass.services.guitar.fretboard import MUTED, FretPosition, Fretted, TuningLike, as_tuning
from chord_compass.services.guitar.voicing import ChordVoicing, build_voicing, hand_span
from chord_compass.services.theory.vocabulary import resolve_chord

_LOG = logging.getLogger(__name__)

# Chord-tone index (0 = root, 1 = third, 2 = fifth) for the low, middle and
# high string of a group.
INVERSIONS: dict[str, tuple[int, int, int]] = {
    "root": (0, 1, 2),
    "first": (1, 2, 0),
    "second": (2, 0, 1),
}


def string_groups(string_count: int) -> list[tuple[int, int, int]]:
    """Adjacent three-string groups, bass side first."""
    return [(i, i + 1, i + 2) for i in range(max(0, int(string_count) - 2))]


def _sounding_string(v: ChordVoicing) -> int:
    for i, pos in enumerate(v.frets):
        if isinstance(pos, Fretted):
            return i
    return len(v.frets)


def solve_triad_voicings(
    root: str,
    quality: str,
    tuning: TuningLike = None,
    *,
    fret_count: int | None = None,
    max_hand_span: int | None = None,
) -> list[ChordVoicing]:
    """
    Closed three-note triad shapes on adjacent string groups, in root
    position and both inversions.

    Each string of a group gets exactly one assigned chord tone. Results are
    ordered by the lowest sounding string, then by lowest fret.
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
    if len(targets) < 3:
        diagnostics.emit(
            "triad.unsupported",
            f"{root} {quality} has fewer than three chord tones",
            root=root,
            quality=quality,
        )
        return []

    fret_count = setting_int("FRET_COUNT", 12) if fret_count is None else int(fret_count)
    span = setting_int("MAX_HAND_SPAN", 4) if max_hand_span is None else int(max_hand_span)
    triad = targets[:3]
    root_pc = triad[0]

    voicings: list[ChordVoicing] = []
    seen: set[str] = set()
    for group in string_groups(len(t)):
        for order in INVERSIONS.values():
            assigned = [triad[idx] for idx in order]
            for base_fret in range(0, fret_count + 1):
                candidates: list[list[int]] = []
                for string_index, target_pc in zip(group, assigned):
                    candidates.append([
                        fret
                        for fret in range(base_fret, base_fret + span + 1)
                        if t.pitch_class_at(string_index, fret) == target_pc
                    ])
                for combo in itertools.product(*candidates):
                    frets: list[FretPosition] = [MUTED] * len(t)
                    for string_index, fret in zip(group, combo):
                        frets[string_index] = Fretted(int(fret))
                    if hand_span(frets) > span:
                        continue
                    voicing = build_voicing(frets, t, root_pc)
                    if voicing.signature in seen:
                        continue
                    seen.add(voicing.signature)
                    voicings.append(voicing)

    voicings.sort(key=lambda v: (_sounding_string(v), v.lowest_fret))
    _LOG.debug("Solved %d triad voicings for %s %s", len(voicings), root, quality)
    return voicings

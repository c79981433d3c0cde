from __future__ import annotations

from typing import Iterable, Optional

import numpy as np

from chord_compass.core.config import setting_int
from chord_compass.schemas import KeyMatch, KeyMode
from chord_compass.services.theory.pitch import NOTE_NAMES_SHARP, pitch_class
from chord_compass.services.theory.vocabulary import SCALE_INTERVALS

BASE_SCORE = 50
BASS_TONIC_BONUS = 50
CHORD_ROOT_BONUS = 30
NOTE_BONUS = 2

MODES: tuple[KeyMode, ...] = ("major", "minor")


def _key_name_and_fifths(pc: int, mode: KeyMode) -> tuple[str, int]:
    pc = int(pc) % 12

    # Only include musically sensible key signatures within [-7, 7].
    if mode == "major":
        variants: dict[int, list[tuple[str, int]]] = {
            0: [("C", 0)],
            1: [("Db", -5), ("C#", 7)],
            2: [("D", 2)],
            3: [("Eb", -3)],
            4: [("E", 4)],
            5: [("F", -1)],
            6: [("Gb", -6), ("F#", 6)],
            7: [("G", 1)],
            8: [("Ab", -4)],
            9: [("A", 3)],
            10: [("Bb", -2)],
            11: [("B", 5)],
        }
    else:
        variants = {
            9: [("A", 0)],
            4: [("E", 1)],
            11: [("B", 2)],
            6: [("F#", 3)],
            1: [("C#", 4)],
            8: [("G#", 5)],
            3: [("Eb", -6), ("D#", 6)],
            10: [("Bb", -5), ("A#", 7)],
            2: [("D", -1)],
            7: [("G", -2)],
            0: [("C", -3)],
            5: [("F", -4)],
        }

    opts = variants.get(pc, [(NOTE_NAMES_SHARP[pc], 0)])
    # Prefer fewer accidentals; if tie, prefer flats (more common enharmonics).
    tonic, fifths = sorted(opts, key=lambda it: (abs(it[1]), 0 if it[1] < 0 else 1))[0]
    return tonic, int(fifths)


def scale_mask(root_pc: int, mode: KeyMode) -> np.ndarray:
    """Boolean 12-slot membership mask for a diatonic scale."""
    base = np.zeros(12, dtype=bool)
    base[list(SCALE_INTERVALS[mode])] = True
    return np.roll(base, int(root_pc) % 12)


def _pitch_classes(notes: Iterable[str | int]) -> list[int]:
    pcs: list[int] = []
    for note in notes:
        pc = pitch_class(note)
        if pc is not None and pc not in pcs:
            pcs.append(pc)
    return pcs


def detect_keys(
    notes: Iterable[str | int],
    bass_note: Optional[str | int] = None,
    chord_root: Optional[str | int] = None,
    limit: Optional[int] = None,
) -> list[KeyMatch]:
    """
    Rank major/minor keys that contain every played note. Tonics are spelled
    the way their key signature writes them (Db major, not C# major).

    The bass note matching the tonic is the strongest hint; a detected chord
    root counts only when the bass did not already match.
    """
    pcs = _pitch_classes(notes)
    if not pcs:
        return []
    if limit is None:
        limit = setting_int("KEY_MATCH_LIMIT", 8)

    bass_pc = pitch_class(bass_note)
    chord_root_pc = pitch_class(chord_root)

    matches: list[KeyMatch] = []
    for root_pc in range(len(NOTE_NAMES_SHARP)):
        for mode in MODES:
            mask = scale_mask(root_pc, mode)
            if not bool(mask[pcs].all()):
                continue

            root, fifths = _key_name_and_fifths(root_pc, mode)
            score = BASE_SCORE
            reason = "All notes diatonic"
            bass_matched = bass_pc is not None and bass_pc == root_pc
            if bass_matched:
                score += BASS_TONIC_BONUS
                reason = f"{root} is the bass note"
            elif chord_root_pc is not None and chord_root_pc == root_pc:
                score += CHORD_ROOT_BONUS
                reason = f"{root} is the chord root"

            score += NOTE_BONUS * len(pcs)

            matches.append(
                KeyMatch(
                    root=root,
                    mode=mode,
                    display=f"{root} {'Major' if mode == 'major' else 'Minor'}",
                    score=int(score),
                    reason=reason,
                    fifths=int(fifths),
                    use_flats=fifths < 0,
                )
            )

    matches.sort(key=lambda m: m.score, reverse=True)
    return matches[: int(limit)]

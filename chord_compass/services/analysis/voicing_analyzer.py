from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Sequence

from chord_compass.schemas import ChordSuggestion, DetectedChord, VoicingAnalysis, VoicingType
from chord_compass.services.guitar.fretboard import (
    FretPosition,
    TuningLike,
    as_fret_position,
    as_tuning,
    fret_value,
)
from chord_compass.services.theory.pitch import NOTE_NAMES_SHARP, interval_between, pc_to_name
from chord_compass.services.theory.vocabulary import (
    CHORD_QUALITIES,
    QUALITY_INTERVALS,
    SHELL_PATTERNS,
    TRIAD_PATTERNS,
    chord_display_name,
    interval_label,
    normalize_intervals,
    quality_complexity,
)

_LOG = logging.getLogger(__name__)

BASE_CONFIDENCE = 50
BASS_ROOT_BONUS = 30
PRESENT_INTERVAL_BONUS = 10
COMPLEXITY_PENALTY = 2
INEXACT_PENALTY = 10
FULL_READING_PENALTY = 5
ABSENT_ROOT_PENALTY = 20
MIN_ABSENT_ROOT_INTERVALS = 2


@dataclass(frozen=True)
class ChordMatch:
    quality: str
    missing: tuple[str, ...]
    present: tuple[str, ...]
    is_exact: bool


def _matches_pattern(normalized: list[int], pattern: Iterable[int]) -> bool:
    return normalized == sorted(set(pattern))


def detect_voicing_type(intervals: Iterable[int]) -> VoicingType:
    """
    Classify intervals (semitones from a root) as a shell, triad, full or
    partial voicing. Order and octave do not matter.
    """
    normalized = normalize_intervals(intervals)
    count = len(normalized)
    if count < 2:
        return "unknown"

    if count == 3:
        for shell_type, pattern in SHELL_PATTERNS.items():
            if _matches_pattern(normalized, pattern):
                return shell_type  # type: ignore[return-value]
        for pattern in TRIAD_PATTERNS.values():
            if _matches_pattern(normalized, pattern):
                return "triad"

    if count >= 4:
        return "full"
    return "partial"


def match_chord_qualities(root_pc: int, pitch_classes: Sequence[int]) -> list[ChordMatch]:
    """
    Every quality whose interval set contains all played intervals from
    `root_pc`. Extensions may be missing; extra notes may not.
    """
    played = normalize_intervals(interval_between(root_pc, pc) for pc in pitch_classes)
    matches: list[ChordMatch] = []
    for quality in CHORD_QUALITIES:
        expected = normalize_intervals(QUALITY_INTERVALS[quality])
        if not all(iv in expected for iv in played):
            continue
        missing = tuple(interval_label(iv) for iv in expected if iv not in played)
        present = tuple(interval_label(iv) for iv in played)
        matches.append(ChordMatch(quality=quality, missing=missing, present=present, is_exact=not missing))
    return matches


def calculate_confidence(
    root_pc: int,
    bass_pc: int | None,
    quality: str,
    present_count: int,
) -> int:
    """Base confidence for a reading, clamped to [0, 100]."""
    score = BASE_CONFIDENCE
    if bass_pc is not None and int(root_pc) == int(bass_pc):
        score += BASS_ROOT_BONUS
    score += PRESENT_INTERVAL_BONUS * int(present_count)
    score -= COMPLEXITY_PENALTY * quality_complexity(quality)
    return max(0, min(100, score))


def _penalized(confidence: int, penalty: int) -> int:
    return max(0, int(confidence) - int(penalty))


def _suggestion(
    root_pc: int,
    quality: str,
    confidence: int,
    voicing_type: VoicingType,
    missing: Sequence[str],
    present: Sequence[str],
) -> ChordSuggestion:
    root = pc_to_name(root_pc)
    return ChordSuggestion(
        root=root,
        quality=quality,
        display_name=chord_display_name(root, quality),
        confidence=confidence,
        voicing_type=voicing_type,
        missing_intervals=list(missing),
        present_intervals=list(present),
    )


def rank_suggestions(suggestions: list[ChordSuggestion], bass_note: str | None) -> list[ChordSuggestion]:
    """Bass-rooted first, then root name, then simpler qualities."""
    return sorted(
        suggestions,
        key=lambda s: (
            0 if bass_note is not None and s.root == bass_note else 1,
            s.root,
            quality_complexity(s.quality),
        ),
    )


def generate_suggestions(pitch_classes: Sequence[int], bass_pc: int | None) -> list[ChordSuggestion]:
    suggestions: list[ChordSuggestion] = []
    played = list(dict.fromkeys(int(pc) % 12 for pc in pitch_classes))

    for root_pc in played:
        intervals = [interval_between(root_pc, pc) for pc in played]
        detected = detect_voicing_type(intervals)
        for match in match_chord_qualities(root_pc, played):
            base = calculate_confidence(root_pc, bass_pc, match.quality, len(match.present))
            if match.is_exact:
                suggestions.append(_suggestion(
                    root_pc,
                    match.quality,
                    base,
                    detected,
                    match.missing,
                    match.present,
                ))
                # a complete triad or shell can also be read as a fuller chord
                if detected == "triad" or detected.startswith("shell-"):
                    suggestions.append(_suggestion(
                        root_pc,
                        match.quality,
                        _penalized(base, FULL_READING_PENALTY),
                        "full",
                        match.missing,
                        match.present,
                    ))
            else:
                suggestions.append(_suggestion(
                    root_pc,
                    match.quality,
                    _penalized(base, INEXACT_PENALTY),
                    "partial",
                    match.missing,
                    match.present,
                ))

    # roots that are not sounding at all, e.g. G-B read as Em
    for root_pc in range(len(NOTE_NAMES_SHARP)):
        if root_pc in played:
            continue
        for match in match_chord_qualities(root_pc, played):
            if len(match.present) < MIN_ABSENT_ROOT_INTERVALS:
                continue
            missing = ("R",) + tuple(m for m in match.missing if m != "R")
            suggestions.append(_suggestion(
                root_pc,
                match.quality,
                _penalized(
                    calculate_confidence(root_pc, bass_pc, match.quality, len(match.present)),
                    ABSENT_ROOT_PENALTY,
                ),
                "partial",
                missing,
                match.present,
            ))

    bass_note = pc_to_name(bass_pc) if bass_pc is not None else None
    return rank_suggestions(suggestions, bass_note)


def _played_positions(
    state: Sequence[FretPosition | int | None],
    tuning: TuningLike,
) -> list[tuple[int, int]]:
    """(string index, pitch class) for every sounding string, low to high."""
    t = as_tuning(tuning)
    out: list[tuple[int, int]] = []
    for i, value in enumerate(state):
        if i >= len(t):
            break
        fret = fret_value(as_fret_position(value))
        if fret is not None:
            out.append((i, t.pitch_class_at(i, fret)))
    return out


def analyze_voicing(
    state: Sequence[FretPosition | int | None],
    tuning: TuningLike = None,
) -> VoicingAnalysis:
    """
    Read the notes on the fretboard and rank every chord they could belong to.

    The full ranked list is returned; truncating it for display is up to the
    caller.
    """
    played = _played_positions(state, tuning)
    pitch_classes = list(dict.fromkeys(pc for _s, pc in played))
    names = [pc_to_name(pc) for pc in pitch_classes]

    if len(played) < 2:
        return VoicingAnalysis(
            pitch_classes=names,
            bass_note=names[0] if names else None,
            voicing_type=None,
            suggestions=[],
        )

    bass_pc = played[0][1]
    suggestions = generate_suggestions(pitch_classes, bass_pc)

    if suggestions:
        voicing_type = suggestions[0].voicing_type
    else:
        voicing_type = detect_voicing_type(interval_between(bass_pc, pc) for pc in pitch_classes)

    _LOG.debug("Analyzed %s: %d suggestions", "-".join(names), len(suggestions))
    return VoicingAnalysis(
        pitch_classes=names,
        bass_note=pc_to_name(bass_pc),
        voicing_type=voicing_type,
        suggestions=suggestions,
    )


def detect_chord(
    state: Sequence[FretPosition | int | None],
    tuning: TuningLike = None,
) -> DetectedChord | None:
    """Name the chord on the fretboard from exact interval-set matches."""
    played = _played_positions(state, tuning)
    if len(played) < 2:
        return None

    pitch_classes = list(dict.fromkeys(pc for _s, pc in played))
    names = [pc_to_name(pc) for pc in pitch_classes]
    bass_pc = played[0][1]
    bass_note = pc_to_name(bass_pc)

    found: list[tuple[int, str]] = []
    for root_pc in pitch_classes:
        for match in match_chord_qualities(root_pc, pitch_classes):
            if match.is_exact:
                found.append((root_pc, match.quality))

    if not found:
        return DetectedChord(
            name="-".join(names),
            alternatives=[],
            bass_note=bass_note,
            is_slash_chord=False,
            pitch_classes=names,
        )

    labels = [chord_display_name(pc_to_name(pc), q) for pc, q in found]
    root_pc = found[0][0]
    is_slash = root_pc != bass_pc
    name = f"{labels[0]}/{bass_note}" if is_slash else labels[0]
    return DetectedChord(
        name=name,
        alternatives=labels[1:4],
        bass_note=bass_note,
        is_slash_chord=is_slash,
        pitch_classes=names,
    )

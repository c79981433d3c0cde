from __future__ import annotations

import logging
from typing import Literal

from chord_compass.core.config import setting_int
from chord_compass.core.diagnostics import diagnostics
from chord_compass.services.guitar.fretboard import Fretted, TuningLike, as_tuning
from chord_compass.services.guitar.open_chords import DEFAULT_CATALOG, VoicingCatalog
from chord_compass.services.guitar.ranking import get_best_voicings
from chord_compass.services.guitar.solver import solve_chord_shapes
from chord_compass.services.guitar.triads import solve_triad_voicings
from chord_compass.services.guitar.tuning import adapt_voicings, is_standard_tuning
from chord_compass.services.guitar.voicing import ChordVoicing
from chord_compass.services.theory.pitch import interval_between, pitch_class
from chord_compass.services.theory.vocabulary import SHELL_PATTERNS, normalize_quality

_LOG = logging.getLogger(__name__)

VoicingFilter = Literal["all", "triads", "shells", "full"]


def _default_limit() -> int:
    return setting_int("BEST_VOICINGS_LIMIT", 12)


def is_shell_voicing(voicing: ChordVoicing, root: str | int, tuning: TuningLike = None) -> bool:
    """Three strings sounding root, third and seventh only."""
    root_pc = pitch_class(root)
    if root_pc is None or voicing.played_count != 3:
        return False
    t = as_tuning(tuning)
    intervals = {
        interval_between(root_pc, t.pitch_class_at(i, p.fret))
        for i, p in enumerate(voicing.frets)
        if isinstance(p, Fretted)
    }
    return any(intervals == set(pattern) for pattern in SHELL_PATTERNS.values())


def get_voicings_for_chord(
    root: str,
    quality: str,
    limit: int | None = None,
    voicing_filter: VoicingFilter = "all",
    tuning: TuningLike = None,
    catalog: VoicingCatalog | None = None,
) -> list[ChordVoicing]:
    """
    Voicings for display: curated catalog shapes first (adapted to the
    tuning), the solver when the catalog has none that fit.
    """
    t = as_tuning(tuning)
    limit = _default_limit() if limit is None else int(limit)
    catalog = DEFAULT_CATALOG if catalog is None else catalog

    if voicing_filter == "triads":
        return solve_triad_voicings(root, quality, t)[:limit]

    if voicing_filter == "shells":
        shells = [v for v in solve_chord_shapes(root, quality, t) if is_shell_voicing(v, root, t)]
        return shells[:limit]

    if normalize_quality(quality) is None:
        diagnostics.emit(
            "catalog.unknown_quality",
            f'Unknown quality "{quality}", falling back to solver',
            root=root,
            quality=quality,
        )
        return get_best_voicings(root, quality, limit, t)

    curated = catalog.find(root, quality)
    if not curated:
        return get_best_voicings(root, quality, limit, t)

    if is_standard_tuning(t):
        voicings = curated
    else:
        voicings = adapt_voicings(curated, t)
        if not voicings:
            diagnostics.emit(
                "catalog.fallback",
                f"No curated {root} {quality} shape fits tuning {' '.join(t.notes)}",
                root=root,
                quality=quality,
                tuning=list(t.notes),
            )
            return get_best_voicings(root, quality, limit, t)

    voicings = sorted(voicings, key=lambda v: v.lowest_fret)
    _LOG.debug("Using %d curated voicings for %s %s", len(voicings), root, quality)
    return voicings[:limit]


def is_in_catalog(root: str, quality: str, catalog: VoicingCatalog | None = None) -> bool:
    catalog = DEFAULT_CATALOG if catalog is None else catalog
    return (root, quality) in catalog

from __future__ import annotations

from typing import Mapping

from chord_compass.services.guitar.fretboard import STANDARD_TUNING, parse_fret_string
from chord_compass.services.guitar.voicing import ChordVoicing, build_voicing
from chord_compass.services.theory.pitch import pitch_class
from chord_compass.services.theory.vocabulary import normalize_quality

# Hand-authored shapes for standard tuning, strings 6 -> 1. 'x' means muted,
# two-digit frets are wrapped in parentheses.
OPEN_POSITION_CHORDS: dict[tuple[str, str], tuple[str, ...]] = {
    ("C", "Major"): ("x32010", "x35553", "8(10)(10)988"),
    ("D", "Major"): ("xx0232", "x57775", "(10)(12)(12)(11)(10)(10)"),
    ("E", "Major"): ("022100", "x79997"),
    ("F", "Major"): ("133211", "xx3211", "x8(10)(10)(10)8"),
    ("G", "Major"): ("320003", "320033", "355433"),
    ("A", "Major"): ("x02220", "577655"),
    ("B", "Major"): ("x24442",),
    ("C", "Minor"): ("x35543",),
    ("D", "Minor"): ("xx0231", "x57765"),
    ("E", "Minor"): ("022000", "x79987"),
    ("A", "Minor"): ("x02210", "577555"),
    ("B", "Minor"): ("x24432",),
    ("C", "Dominant 7"): ("x32310",),
    ("D", "Dominant 7"): ("xx0212",),
    ("E", "Dominant 7"): ("020100",),
    ("G", "Dominant 7"): ("320001",),
    ("A", "Dominant 7"): ("x02020",),
    ("B", "Dominant 7"): ("x21202",),
    ("C", "Major 7"): ("x32000",),
    ("D", "Major 7"): ("xx0222",),
    ("E", "Major 7"): ("021100",),
    ("F", "Major 7"): ("xx3210",),
    ("G", "Major 7"): ("320002",),
    ("A", "Major 7"): ("x02120",),
    ("C", "Minor 7"): ("x35343",),
    ("D", "Minor 7"): ("xx0211",),
    ("E", "Minor 7"): ("020000",),
    ("A", "Minor 7"): ("x02010",),
    ("B", "Minor 7"): ("x20202",),
}


class VoicingCatalog:
    """
    Curated voicings keyed by (root pitch class, quality), written for
    standard tuning. Roots match enharmonically.
    """

    def __init__(self, shapes: Mapping[tuple[str, str], tuple[str, ...]]) -> None:
        self._shapes: dict[tuple[int, str], tuple[str, ...]] = {}
        for (root, quality), frets in shapes.items():
            pc = pitch_class(root)
            name = normalize_quality(quality)
            if pc is None or name is None:
                raise ValueError(f"Invalid catalog entry: {root} {quality}")
            self._shapes[(pc, name)] = tuple(frets)

    def _key(self, root: str | int, quality: str) -> tuple[int, str] | None:
        pc = pitch_class(root)
        name = normalize_quality(quality)
        if pc is None or name is None:
            return None
        return pc, name

    def __contains__(self, item: tuple[str, str]) -> bool:
        key = self._key(*item)
        return key is not None and bool(self._shapes.get(key))

    def fret_strings(self, root: str | int, quality: str) -> tuple[str, ...]:
        key = self._key(root, quality)
        if key is None:
            return ()
        return self._shapes.get(key, ())

    def find(self, root: str | int, quality: str) -> list[ChordVoicing]:
        """Curated voicings in standard tuning, or [] when there are none."""
        return [
            build_voicing(parse_fret_string(frets), STANDARD_TUNING, root)
            for frets in self.fret_strings(root, quality)
        ]


DEFAULT_CATALOG = VoicingCatalog(OPEN_POSITION_CHORDS)

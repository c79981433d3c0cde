import unittest

from chord_compass.core.diagnostics import diagnostics
from chord_compass.services.guitar.fretboard import STANDARD_TUNING, Tuning, get_tuning, parse_fret_string
from chord_compass.services.guitar.open_chords import VoicingCatalog
from chord_compass.services.guitar.ranking import get_best_voicings
from chord_compass.services.guitar.tuning import adapt_voicing_to_tuning, adapt_voicings
from chord_compass.services.guitar.voicing import build_voicing
from chord_compass.services.guitar.voicing_service import (
    get_voicings_for_chord,
    is_in_catalog,
    is_shell_voicing,
)

SEMITONE_UP = Tuning(("F2", "A#2", "D#3", "G#3", "C4", "F4"))


class TuningAdapterTests(unittest.TestCase):
    def test_a_major_into_c_standard(self) -> None:
        a_major = build_voicing(parse_fret_string("x02220"), STANDARD_TUNING, "A")
        adapted = adapt_voicing_to_tuning(a_major, get_tuning("c_standard"))

        self.assertIsNotNone(adapted)
        self.assertEqual(adapted.signature, "x-4-6-6-6-4")
        self.assertEqual(adapted.note_names, a_major.note_names)
        self.assertEqual(adapted.bass_note, "A")
        self.assertFalse(adapted.is_inversion)

    def test_round_trip_through_drop_d(self) -> None:
        g_major = build_voicing(parse_fret_string("320003"), STANDARD_TUNING, "G")
        drop_d = get_tuning("drop_d")

        there = adapt_voicing_to_tuning(g_major, drop_d)
        back = adapt_voicing_to_tuning(there, STANDARD_TUNING, source_tuning=drop_d)

        self.assertEqual(there.signature, "5-2-0-0-0-3")
        self.assertEqual(back.signature, g_major.signature)

    def test_negative_fret_rejects(self) -> None:
        open_e = build_voicing(parse_fret_string("022100"), STANDARD_TUNING, "E")
        self.assertIsNone(adapt_voicing_to_tuning(open_e, SEMITONE_UP))

    def test_above_max_fret_rejects(self) -> None:
        high = build_voicing(parse_fret_string("x(12)(14)(14)(14)(12)"), STANDARD_TUNING, "A")
        self.assertIsNone(adapt_voicing_to_tuning(high, get_tuning("c_standard"), max_fret=15))

    def test_string_count_mismatch(self) -> None:
        v = build_voicing(parse_fret_string("x02220"), STANDARD_TUNING, "A")
        with self.assertRaises(ValueError):
            adapt_voicing_to_tuning(v, Tuning(("E1", "A1", "D2", "G2")))

    def test_adapt_voicings_drops_rejects(self) -> None:
        shapes = [
            build_voicing(parse_fret_string("022100"), STANDARD_TUNING, "E"),
            build_voicing(parse_fret_string("x79997"), STANDARD_TUNING, "E"),
        ]
        adapted = adapt_voicings(shapes, SEMITONE_UP)
        self.assertEqual([v.signature for v in adapted], ["x-6-8-8-8-6"])


class VoicingServiceTests(unittest.TestCase):
    def test_catalog_shapes_in_standard(self) -> None:
        voicings = get_voicings_for_chord("A", "Major")
        self.assertEqual([v.signature for v in voicings], ["x-0-2-2-2-0", "5-7-7-6-5-5"])

    def test_catalog_matches_enharmonic_roots_and_aliases(self) -> None:
        self.assertTrue(is_in_catalog("A", "Major"))
        self.assertTrue(is_in_catalog("C", "Minor 7"))
        self.assertTrue(is_in_catalog("C", "m7"))
        self.assertFalse(is_in_catalog("X", "Invalid"))
        self.assertFalse(is_in_catalog("F#", "Sus2"))

    def test_catalog_adapted_to_tuning(self) -> None:
        voicings = get_voicings_for_chord("A", "Major", tuning=get_tuning("c_standard"))
        self.assertEqual(voicings[0].signature, "x-4-6-6-6-4")
        self.assertLessEqual(len(voicings), 2)

    def test_missing_catalog_entry_uses_ranker(self) -> None:
        voicings = get_voicings_for_chord("F#", "Sus2", limit=4)
        self.assertEqual(voicings, get_best_voicings("F#", "Sus2", 4))

    def test_fallback_when_no_curated_shape_fits(self) -> None:
        catalog = VoicingCatalog({("C", "Major"): ("x32010",)})
        events = []
        unsubscribe = diagnostics.subscribe(events.append)
        try:
            with self.assertLogs("chord_compass.core.diagnostics", level="WARNING"):
                voicings = get_voicings_for_chord("C", "Major", tuning=SEMITONE_UP, catalog=catalog)
        finally:
            unsubscribe()

        self.assertEqual([e.code for e in events], ["catalog.fallback"])
        self.assertTrue(voicings)
        self.assertEqual(voicings, get_best_voicings("C", "Major", 12, SEMITONE_UP))

    def test_unknown_quality_reports_and_returns_empty(self) -> None:
        events = []
        unsubscribe = diagnostics.subscribe(events.append)
        try:
            with self.assertLogs("chord_compass.core.diagnostics", level="WARNING"):
                self.assertEqual(get_voicings_for_chord("C", "Invalid"), [])
        finally:
            unsubscribe()

        self.assertEqual([e.code for e in events], ["catalog.unknown_quality", "chord.unresolved"])

    def test_limit(self) -> None:
        self.assertEqual(len(get_voicings_for_chord("C", "Major", limit=1)), 1)

    def test_triads_filter(self) -> None:
        voicings = get_voicings_for_chord("C", "Major", limit=50, voicing_filter="triads")
        self.assertTrue(voicings)
        self.assertTrue(all(v.played_count == 3 for v in voicings))

    def test_shells_filter(self) -> None:
        voicings = get_voicings_for_chord("C", "Major 7", limit=500, voicing_filter="shells")
        self.assertIn("x-3-2-4-x-x", [v.signature for v in voicings])
        self.assertTrue(all(is_shell_voicing(v, "C") for v in voicings))

        self.assertEqual(get_voicings_for_chord("C", "Major", voicing_filter="shells"), [])


if __name__ == "__main__":
    unittest.main()

import unittest

from chord_compass.services.theory.key import detect_keys, scale_mask
from chord_compass.services.theory.vocabulary import chord_display_name, chord_symbol, scale_note_names


class ScaleTests(unittest.TestCase):
    def test_scale_mask(self) -> None:
        mask = scale_mask(7, "major")
        self.assertEqual([i for i in range(12) if mask[i]], [0, 2, 4, 6, 7, 9, 11])

    def test_scale_note_names(self) -> None:
        self.assertEqual(scale_note_names("A", "minor"), ["A", "B", "C", "D", "E", "F", "G"])


class VocabularyTests(unittest.TestCase):
    def test_display_names_use_symbols(self) -> None:
        self.assertEqual(chord_display_name("C", "Major"), "C")
        self.assertEqual(chord_display_name("C", "Minor 7"), "Cm7")
        self.assertEqual(chord_display_name("F#", "m7"), "F#m7")
        self.assertEqual(chord_display_name("C", "Weird"), "C Weird")

    def test_chord_symbol(self) -> None:
        self.assertEqual(chord_symbol("Power (5)"), "5")
        self.assertEqual(chord_symbol("maj7"), "maj7")
        self.assertEqual(chord_symbol("nonsense"), "")


class KeyDetectionTests(unittest.TestCase):
    def test_bass_note_wins(self) -> None:
        keys = detect_keys(["C", "E", "G"], bass_note="C")
        top = keys[0]
        self.assertEqual(top.display, "C Major")
        self.assertEqual(top.score, 106)
        self.assertEqual(top.reason, "C is the bass note")

    def test_chord_root_bonus(self) -> None:
        keys = detect_keys(["A", "C", "E"], chord_root="A")
        self.assertEqual(keys[0].display, "A Minor")
        self.assertEqual(keys[0].score, 86)
        self.assertEqual(keys[0].reason, "A is the chord root")

        c_major = [k for k in keys if k.display == "C Major"][0]
        self.assertEqual(c_major.score, 56)
        self.assertEqual(c_major.reason, "All notes diatonic")

    def test_chord_root_bonus_not_stacked_on_bass(self) -> None:
        keys = detect_keys(["A", "C", "E"], bass_note="A", chord_root="A")
        self.assertEqual(keys[0].score, 106)
        self.assertEqual(keys[0].reason, "A is the bass note")

    def test_sorted_and_limited(self) -> None:
        keys = detect_keys(["C"])
        self.assertEqual(len(keys), 8)
        scores = [k.score for k in keys]
        self.assertEqual(scores, sorted(scores, reverse=True))
        self.assertEqual(len(detect_keys(["C"], limit=3)), 3)

    def test_no_diatonic_key(self) -> None:
        self.assertEqual(detect_keys(["C", "C#", "D"]), [])
        self.assertEqual(detect_keys([]), [])

    def test_tonic_spelled_by_key_signature(self) -> None:
        keys = detect_keys(["Db", "F", "Ab"], bass_note="Db")
        top = keys[0]
        self.assertEqual(top.root, "Db")
        self.assertEqual(top.display, "Db Major")
        self.assertEqual(top.reason, "Db is the bass note")
        self.assertEqual(top.mode, "major")
        self.assertEqual(top.fifths, -5)
        self.assertTrue(top.use_flats)


if __name__ == "__main__":
    unittest.main()

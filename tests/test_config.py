import unittest
from unittest import mock

from chord_compass.core.config import setting_int, settings
from chord_compass.services.guitar.solver import solve_chord_shapes
from chord_compass.services.guitar.voicing import hand_span


class SettingIntTests(unittest.TestCase):
    def test_configured_value(self) -> None:
        self.assertEqual(setting_int("FRET_COUNT", 99), settings.FRET_COUNT)

    def test_default_only_when_absent(self) -> None:
        self.assertEqual(setting_int("NOT_A_SETTING", 7), 7)

    def test_zero_is_kept(self) -> None:
        with mock.patch.object(settings, "MAX_HAND_SPAN", 0):
            self.assertEqual(setting_int("MAX_HAND_SPAN", 4), 0)

    def test_solver_honours_zero_span(self) -> None:
        with mock.patch.object(settings, "MAX_HAND_SPAN", 0):
            voicings = solve_chord_shapes("C", "Major")

        self.assertTrue(voicings)
        self.assertTrue(all(hand_span(v.frets) == 0 for v in voicings))
        self.assertEqual(voicings, solve_chord_shapes("C", "Major", max_hand_span=0))


if __name__ == "__main__":
    unittest.main()

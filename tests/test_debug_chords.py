import io
import json
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from chord_compass.scripts.debug_chords import main


def _run(*argv):
    out = io.StringIO()
    err = io.StringIO()
    with mock.patch("sys.argv", ["chord-compass-debug", *argv]):
        with redirect_stdout(out), redirect_stderr(err):
            code = main()
    return code, out.getvalue(), err.getvalue()


class DebugChordsCliTests(unittest.TestCase):
    def test_shapes(self) -> None:
        code, out, _err = _run("shapes", "A", "Major", "--tuning", "c_standard")
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["tuning"][0], "C2")
        self.assertEqual(payload["voicings"][0]["frets"], [None, 4, 6, 6, 6, 4])

    def test_analyze(self) -> None:
        code, out, _err = _run("analyze", "x32010")
        self.assertEqual(code, 0)
        payload = json.loads(out)
        self.assertEqual(payload["chord"]["name"], "C")
        self.assertLessEqual(len(payload["suggestions"]), 8)
        self.assertEqual(payload["keys"][0]["display"], "C Major")

    def test_keys(self) -> None:
        code, out, _err = _run("keys", "A", "C", "E", "--root", "A")
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out)["keys"][0]["display"], "A Minor")

    def test_bad_tuning_is_reported(self) -> None:
        code, out, err = _run("shapes", "C", "Major", "--tuning", "E2,H2,D3,G3,B3,E4")
        self.assertEqual(code, 2)
        self.assertEqual(out, "")
        self.assertIn("error:", err)


if __name__ == "__main__":
    unittest.main()

import unittest

from chord_compass.core.diagnostics import DiagnosticChannel


class DiagnosticChannelTests(unittest.TestCase):
    def test_subscribe_and_unsubscribe(self) -> None:
        channel = DiagnosticChannel()
        events = []
        unsubscribe = channel.subscribe(events.append)

        with self.assertLogs("chord_compass.core.diagnostics", level="WARNING") as logs:
            event = channel.emit("chord.unresolved", "Could not find chord: X Y", root="X")
        self.assertEqual(events, [event])
        self.assertEqual(event.context, {"root": "X"})
        self.assertIn("chord.unresolved", logs.output[0])

        unsubscribe()
        with self.assertLogs("chord_compass.core.diagnostics", level="WARNING"):
            channel.emit("chord.unresolved", "again")
        self.assertEqual(len(events), 1)

    def test_failing_listener_does_not_propagate(self) -> None:
        channel = DiagnosticChannel()
        seen = []

        def broken(_event):
            raise RuntimeError("boom")

        channel.subscribe(broken)
        channel.subscribe(seen.append)

        with self.assertLogs("chord_compass.core.diagnostics", level="WARNING") as logs:
            channel.emit("triad.unsupported", "E Power (5) has fewer than three chord tones")

        self.assertEqual(len(seen), 1)
        self.assertTrue(any("ERROR" in line for line in logs.output))

    def test_clear(self) -> None:
        channel = DiagnosticChannel()
        events = []
        channel.subscribe(events.append)
        channel.clear()
        with self.assertLogs("chord_compass.core.diagnostics", level="WARNING"):
            channel.emit("catalog.fallback", "nothing fits")
        self.assertEqual(events, [])


if __name__ == "__main__":
    unittest.main()

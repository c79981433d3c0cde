from __future__ import annotations

import argparse
import json
import logging
import sys

from chord_compass.core.config import settings
from chord_compass.services.analysis.voicing_analyzer import analyze_voicing, detect_chord
from chord_compass.services.guitar.fretboard import as_tuning, get_tuning, parse_fret_string
from chord_compass.services.guitar.voicing_service import get_voicings_for_chord
from chord_compass.services.theory.key import detect_keys


def _tuning_arg(value: str | None):
    if not value:
        return get_tuning(settings.GUITAR_TUNING)
    if "," in value:
        return as_tuning([n.strip() for n in value.split(",") if n.strip()])
    return get_tuning(value)


def _cmd_shapes(args: argparse.Namespace) -> dict:
    tuning = _tuning_arg(args.tuning)
    voicings = get_voicings_for_chord(
        args.root,
        args.quality,
        limit=args.limit,
        voicing_filter=args.filter,
        tuning=tuning,
    )
    return {
        "root": args.root,
        "quality": args.quality,
        "tuning": list(tuning.notes),
        "voicings": [v.to_dict() for v in voicings],
    }


def _cmd_analyze(args: argparse.Namespace) -> dict:
    tuning = _tuning_arg(args.tuning)
    state = parse_fret_string(args.frets)
    analysis = analyze_voicing(state, tuning)
    payload = analysis.model_dump()
    payload["suggestions"] = payload["suggestions"][: settings.SUGGESTION_DISPLAY_LIMIT]
    detected = detect_chord(state, tuning)
    payload["chord"] = detected.model_dump() if detected else None
    top_root = analysis.suggestions[0].root if analysis.suggestions else None
    payload["keys"] = [
        k.model_dump() for k in detect_keys(analysis.pitch_classes, analysis.bass_note, top_root)
    ]
    return payload


def _cmd_keys(args: argparse.Namespace) -> dict:
    keys = detect_keys(args.notes, bass_note=args.bass, chord_root=args.root)
    return {"notes": list(args.notes), "keys": [k.model_dump() for k in keys]}


def main() -> int:
    parser = argparse.ArgumentParser(
        prog=f"{settings.APP_NAME}-debug",
        description="Inspect chord voicings and fretboard analysis.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    shapes = sub.add_parser("shapes", help="List voicings for a chord")
    shapes.add_argument("root", help="Root note, e.g. C, F#, Bb")
    shapes.add_argument("quality", help="Chord quality, e.g. Major, 'Minor 7', m7")
    shapes.add_argument("--tuning", help="Preset name (drop_d) or notes (D2,A2,D3,G3,B3,E4)")
    shapes.add_argument("--limit", type=int, default=settings.BEST_VOICINGS_LIMIT)
    shapes.add_argument("--filter", choices=["all", "triads", "shells", "full"], default="all")
    shapes.set_defaults(func=_cmd_shapes)

    analyze = sub.add_parser("analyze", help="Analyze a fretted shape")
    analyze.add_argument("frets", help="Shape string, low string first, e.g. x32010")
    analyze.add_argument("--tuning", help="Preset name or notes")
    analyze.set_defaults(func=_cmd_analyze)

    keys = sub.add_parser("keys", help="Rank keys for a set of notes")
    keys.add_argument("notes", nargs="+", help="Pitch classes, e.g. C E G")
    keys.add_argument("--bass", help="Bass note")
    keys.add_argument("--root", help="Detected chord root")
    keys.set_defaults(func=_cmd_keys)

    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = args.func(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(json.dumps(result, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

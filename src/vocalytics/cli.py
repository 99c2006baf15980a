from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .lexicon import DEFAULT_LEXICON, load_lexicon
from .pipeline import analyze_payload, configure_logging


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Heuristic call transcript analysis (segments + Vocalytics scorecard).")
    p.add_argument("--input", "-i", required=True, help="Transcript file: plain text, or JSON (string or object).")
    p.add_argument("--words", "-w", required=False, help="Optional JSON file with a list of timed words.")
    p.add_argument("--output", "-o", required=False, help="Path to write output JSON. Default: stdout.")
    p.add_argument("--lexicon", required=False, help="Optional YAML file overriding word lists.")
    p.add_argument("--log-level", default="INFO", help="Logging level (DEBUG/INFO/WARN/ERROR).")
    args = p.parse_args(argv)

    configure_logging(args.log_level)

    lexicon = load_lexicon(args.lexicon) if args.lexicon else DEFAULT_LEXICON

    in_path = Path(args.input)
    raw = in_path.read_text(encoding="utf-8")

    payload = json.loads(raw) if in_path.suffix.lower() == ".json" else raw
    words = json.loads(Path(args.words).read_text(encoding="utf-8")) if args.words else None
    result = analyze_payload(payload, lexicon, words)

    out_text = json.dumps(result, ensure_ascii=False, indent=2)

    if args.output:
        Path(args.output).write_text(out_text, encoding="utf-8")
    else:
        sys.stdout.write(out_text + "\n")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

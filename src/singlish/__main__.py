from __future__ import annotations
import argparse, json, sys
from .engine import Engine


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Singlish -> Sinhala transliteration CLI (Engine-backed)")
    p.add_argument("--q", default=None, help="Single text to convert once")
    p.add_argument("--repl", action="store_true", help="Interactive loop after init")
    p.add_argument("--live", action="store_true",
                   help="In --repl, feed each line into one Session (incremental) instead of translating statelessly")
    p.add_argument("--data-dir", default=None, help="Directory holding the rule table and dictionaries")
    p.add_argument("--correct-typos", action="store_true", help="Enable the best-effort one-edit typo layer")
    p.add_argument("--json", action="store_true", help="Emit tokens, renderings and diagnostics as JSON")
    p.add_argument("--verbose", action="store_true")

    args = p.parse_args(argv)
    if args.q is None and not args.repl:
        p.error("nothing to do: pass --q TEXT and/or --repl")

    eng = Engine()
    try:
        eng.build(args.data_dir, correct_typos=args.correct_typos or None, verbose=args.verbose)
        session = eng.new_session() if args.live else None

        def run_query(text: str) -> None:
            if session is not None:
                session.update(text)
                result = session.result
            else:
                result = eng.transliterate(text)
            if args.json:
                print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
                return
            print(result.text)
            for d in result.diagnostics:
                print(f"  [{d.kind}] {d.fragment!r} at {d.position}", file=sys.stderr)

        if args.q is not None:
            run_query(args.q)

        if args.repl:
            print("Type Singlish text (empty line to exit).")
            while True:
                try:
                    line = input("> ")
                except (EOFError, KeyboardInterrupt):
                    break
                if not line.strip():
                    break
                run_query(line)

        return 0
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())

"""Print the scoreboard for a match export and optionally write the CSV."""
import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from scoreboard.decoding import decode_bytes
from scoreboard.env import load_env
from scoreboard.exporter import to_csv
from scoreboard.normalizer import ParseError, normalize
from scoreboard.render import render_scoreboard
from scoreboard.settings import Settings


def main() -> int:
    load_env()
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level, format='%(asctime)s - %(levelname)s - %(message)s')

    parser = argparse.ArgumentParser(description="Render a match export as a scoreboard.")
    parser.add_argument("--input", required=True, help="Path to the match JSON export.")
    parser.add_argument(
        "--csv",
        nargs="?",
        const=settings.csv_filename,
        default=None,
        help=f"Write the CSV export (defaults to {settings.csv_filename} when no path is given).",
    )
    parser.add_argument("--quiet", action="store_true", help="Skip printing the scoreboard.")
    args = parser.parse_args()

    input_path = Path(args.input)
    try:
        text = decode_bytes(input_path.read_bytes())
    except OSError as e:
        print(f"Error: cannot read {input_path}: {e}")
        return 1
    except ValueError as e:
        print(f"Error: cannot decode {input_path}: {e}")
        return 1

    try:
        report = normalize(text)
    except ParseError:
        print("Error: Invalid JSON file.")
        return 1

    if not args.quiet:
        print(render_scoreboard(report), end="")

    if args.csv:
        out_path = Path(args.csv)
        out_path.write_text(to_csv(report), encoding="utf-8")
        print(f"✅ Saved CSV to: {out_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())

#!/usr/bin/env python3
"""Decode SPLICE pattern files and print them in text form."""

from __future__ import annotations

import argparse
import glob
from pathlib import Path
import sys
from typing import Iterable, List

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from splice import DecodeError, decode_file  # noqa: E402


def collect_paths(patterns: Iterable[str]) -> List[Path]:
    paths: List[Path] = []
    for pattern in patterns:
        matches = sorted(Path(p) for p in glob.glob(pattern, recursive=True))
        if matches:
            paths.extend(matches)
        else:
            # Keep literal paths so a missing file is reported, not skipped.
            paths.append(Path(pattern))
    seen: set[Path] = set()
    unique_paths: List[Path] = []
    for path in paths:
        resolved = path.resolve()
        if resolved not in seen:
            seen.add(resolved)
            unique_paths.append(path)
    return unique_paths


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Print the version, tempo and step grid of SPLICE pattern files."
    )
    parser.add_argument(
        "paths",
        nargs="+",
        help="File paths or glob patterns (quotes recommended for wildcards).",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help='Reject files whose magic tag is not "SPLICE".',
    )
    args = parser.parse_args(argv)

    targets = collect_paths(args.paths)
    show_names = len(targets) > 1

    failed = 0
    for idx, path in enumerate(targets):
        try:
            pattern = decode_file(path, strict=args.strict)
        except (DecodeError, OSError) as err:
            print(f"ERR {path}: {err}", file=sys.stderr)
            failed += 1
            continue
        if show_names:
            if idx:
                print()
            print(f"== {path}")
        sys.stdout.write(pattern.to_text())

    return 1 if failed else 0


if __name__ == "__main__":
    raise SystemExit(main())

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from typing import List, Optional

from zipjson import __version__
from zipjson.api import build_to_file, extract_from_file, list_from_file
from zipjson.errors import OverwriteError, ZipJsonError
from zipjson.format import format_bytes, format_date, format_path, format_percentage, pluralize
from zipjson.models import ProgressCallback, ProgressInfo


def _progress_printer(label: str, interval: float = 0.1) -> ProgressCallback:
    """Single-line progress display, redrawn at most every ``interval`` seconds."""
    last = [0.0]

    def _show(info: ProgressInfo) -> None:
        now = time.monotonic()
        if info.percentage < 100 and now - last[0] <= interval:
            return
        last[0] = now
        sys.stdout.write(f"\r{label} {format_percentage(info.percentage)} {format_path(info.current_path)}")
        sys.stdout.flush()

    return _show


def _parse_ignore(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [p.strip() for p in value.split(",") if p.strip()]


def cmd_zip(
    output: str,
    patterns: List[str],
    *,
    base_dir: str = ".",
    ignore: Optional[List[str]] = None,
    progress: bool = True,
    quiet: bool = False,
) -> bool:
    """Create a JSON archive from files matching ``patterns``.

    Args:
        output: Container path to write.
        patterns: Glob patterns relative to ``base_dir``; defaults to ``**/*``.
        base_dir: Directory patterns are matched against and paths are stored relative to.
        ignore: Extra ignore patterns, applied after the built-in defaults.
        progress: Show a progress line while reading files.
        quiet: Suppress all output except errors.
    """
    patterns = list(patterns) or ["**/*"]
    show = progress and not quiet
    archive = build_to_file(
        patterns,
        output,
        base_dir=base_dir,
        ignore=ignore or [],
        on_progress=_progress_printer("Zipping:") if show else None,
    )
    if show:
        print()
    if not quiet:
        n = archive.entry_count
        print(f"Created {output}")
        print(f"  {n} {pluralize(n, 'file')}, {format_bytes(archive.total_size)}")
    return True


def cmd_unzip(
    archive: str,
    *,
    outdir: str = ".",
    overwrite: bool = False,
    preserve_permissions: bool = True,
    progress: bool = True,
    quiet: bool = False,
) -> bool:
    """Extract a JSON archive into ``outdir``."""
    show = progress and not quiet
    written = extract_from_file(
        archive,
        output_dir=outdir,
        overwrite=overwrite,
        preserve_permissions=preserve_permissions,
        on_progress=_progress_printer("Extracting:") if show else None,
    )
    if show:
        print()
    if not quiet:
        print(f"Extracted {len(written)} {pluralize(len(written), 'file')}")
        if os.path.abspath(outdir) != os.getcwd():
            print(f"  to {outdir}")
    return True


def cmd_list(archive: str, *, detailed: bool = False, sort_by: str = "name", quiet: bool = False) -> bool:
    """List archive entries without decoding file data."""
    entries = list_from_file(archive)
    if quiet:
        return True
    if sort_by == "size":
        ordered = sorted(entries, key=lambda e: e.size, reverse=True)
    elif sort_by == "date":
        ordered = sorted(entries, key=lambda e: e.modified_at, reverse=True)
    else:
        ordered = sorted(entries, key=lambda e: e.path)

    print(f"Contents of {archive}:")
    print()
    if detailed:
        width = max([len(e.path) for e in ordered] + [20])
        print(f"{'Path':<{width}} {'Size':>10} {'Modified':>20} {'Type':>8}")
        print("-" * (width + 42))
        for e in ordered:
            kind = "dir" if e.is_directory else "file"
            size = "" if e.is_directory else format_bytes(e.size)
            print(f"{e.path:<{width}} {size:>10} {format_date(e.modified_at)[:16]:>20} {kind:>8}")
    else:
        for e in ordered:
            print(f"{'dir ' if e.is_directory else 'file'}\t{e.path}")
    print()
    files = [e for e in entries if not e.is_directory]
    n_dirs = len(entries) - len(files)
    total = sum(e.size for e in files)
    print(
        f"{len(files)} {pluralize(len(files), 'file')}, "
        f"{n_dirs} {pluralize(n_dirs, 'directory', 'directories')}, {format_bytes(total)} total"
    )
    return True


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(
        prog="zipjson",
        description="Bundle files and folders into a single JSON archive",
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("-q", "--quiet", action="store_true", help="Suppress all output except errors")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_zip = sub.add_parser("zip", help="Create a JSON archive from files and folders")
    ap_zip.add_argument("output", help="Output JSON file path")
    ap_zip.add_argument("patterns", nargs="*", help="File patterns to include (glob patterns supported)")
    ap_zip.add_argument("-b", "--base-dir", default=".", help="Base directory for relative paths")
    ap_zip.add_argument("-i", "--ignore", help="Comma-separated patterns to ignore")
    ap_zip.add_argument("--no-progress", dest="progress", action="store_false", help="Disable progress indicator")

    ap_unzip = sub.add_parser("unzip", help="Extract files from a JSON archive")
    ap_unzip.add_argument("input", help="Input JSON archive file")
    ap_unzip.add_argument("-o", "--output-dir", default=".", help="Output directory")
    ap_unzip.add_argument("--overwrite", action="store_true", help="Overwrite existing files")
    ap_unzip.add_argument(
        "--no-preserve-permissions",
        dest="preserve_permissions",
        action="store_false",
        help="Do not restore stored file permissions",
    )
    ap_unzip.add_argument("--no-progress", dest="progress", action="store_false", help="Disable progress indicator")

    ap_list = sub.add_parser("list", help="List contents of a JSON archive")
    ap_list.add_argument("input", help="Input JSON archive file")
    ap_list.add_argument("-d", "--detailed", action="store_true", help="Show detailed information")
    ap_list.add_argument("-s", "--sort-by", choices=["name", "size", "date"], default="name", help="Sort order")

    args = ap.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        if args.cmd == "zip":
            cmd_zip(
                args.output,
                args.patterns,
                base_dir=args.base_dir,
                ignore=_parse_ignore(args.ignore),
                progress=args.progress,
                quiet=args.quiet,
            )
        elif args.cmd == "unzip":
            cmd_unzip(
                args.input,
                outdir=args.output_dir,
                overwrite=args.overwrite,
                preserve_permissions=args.preserve_permissions,
                progress=args.progress,
                quiet=args.quiet,
            )
        elif args.cmd == "list":
            cmd_list(args.input, detailed=args.detailed, sort_by=args.sort_by, quiet=args.quiet)
        else:
            raise RuntimeError("Unknown command")
    except OverwriteError as e:
        print(f"Error: {e}\nUse --overwrite flag to replace existing files.", file=sys.stderr)
        sys.exit(1)
    except (ZipJsonError, OSError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

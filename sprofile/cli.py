"""
Command-line interface for the student profiles app.

Notes
-----
The CLI is intentionally thin. It parses arguments, loads the app state and
delegates to the engine. Output labels follow the persisted UI language.

Exit codes
----------
- 0: success (including out-of-range deletes, which are a no-op)
- 1: the in-memory change was made but the backend write failed
- 2: validation or domain error
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from profile_engine.app_state import AppState, open_app_state
from profile_engine.data_models import ThemeMode
from profile_engine.errors import ProfileAppError
from profile_engine.labels import (
    avatar_letter,
    font_scale_percent,
    history_lines,
    labels_for,
    language_name,
    preview,
    summary_text,
)
from profile_engine.profile_form import build_profile_record
from profile_engine.write_results import WriteOutcome, WriteResult


def build_parser() -> argparse.ArgumentParser:
    """
    Build and return the top-level argument parser.

    Returns
    -------
    argparse.ArgumentParser
        Configured parser.
    """
    parser = argparse.ArgumentParser(
        prog="sprofile",
        description="Student profile records and app preferences",
    )
    parser.add_argument(
        "--data-root",
        default=None,
        help="Override the data root (primarily for testing). If omitted, defaults are used.",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    list_p = sub.add_parser("list", help="List saved profiles, newest first")
    list_p.add_argument(
        "--preview",
        action="store_true",
        help="Show only the first three profiles in short form.",
    )

    add_p = sub.add_parser("add", help="Add a profile at the front of the list")
    add_p.add_argument("--name", required=True, help="Full name (required, must not be blank)")
    add_p.add_argument("--major", default="", help="Major / study program")
    add_p.add_argument("--year", default="", help="Enrollment year")
    add_p.add_argument("--email", default="", help="Email address")
    add_p.add_argument("--phone", default="", help="Phone number")

    delete_p = sub.add_parser("delete", help="Delete the profile at a list position")
    delete_p.add_argument("index", type=int, help="Zero-based position as shown by 'list'")

    sub.add_parser("reset", help="Delete all saved profiles (preferences are kept)")

    prefs_p = sub.add_parser("prefs", help="Show or change app preferences")
    prefs_sub = prefs_p.add_subparsers(dest="prefs_command", required=True)
    prefs_sub.add_parser("show", help="Print the current preferences")
    set_p = prefs_sub.add_parser("set", help="Change one or more preferences")
    set_p.add_argument(
        "--theme",
        choices=[m.value for m in ThemeMode],
        default=None,
        help="Theme mode",
    )
    set_p.add_argument(
        "--font-scale",
        type=float,
        default=None,
        help="Font scale factor (slider range 0.8-1.4; other values are stored as given)",
    )
    set_p.add_argument("--language", default=None, help="UI language code, e.g. ID or EN")

    return parser


def _print_results(state: AppState, results: list[WriteResult]) -> int:
    t = labels_for(state.preferences.language)
    rc = 0
    for result in results:
        if result.outcome is WriteOutcome.FAILED:
            print(f"ERROR: {t.write_failed} ({result.key})")
            rc = 1
    return rc


def _cmd_list(state: AppState, args: argparse.Namespace) -> int:
    t = labels_for(state.preferences.language)
    profiles = state.profiles
    if not profiles:
        print(t.no_profiles)
        return 0

    if args.preview:
        print(t.saved_preview)
        for name, detail in preview(profiles):
            print(f"- {name} ({detail})")
        return 0

    for index, record in enumerate(profiles):
        name, study, contact = history_lines(record)
        print(f"{index}: [{avatar_letter(record)}] {name}")
        print(f"   {study}")
        print(f"   {contact}")
    return 0


def _cmd_add(state: AppState, args: argparse.Namespace) -> int:
    record = build_profile_record(args.name, args.major, args.year, args.email, args.phone)
    result = state.add_profile(record)
    rc = _print_results(state, [result])
    if rc:
        return rc

    language = state.preferences.language
    t = labels_for(language)
    print(t.profile_saved)
    print(f"{t.last_output}:")
    print(summary_text(record, language))
    return 0


def _cmd_delete(state: AppState, args: argparse.Namespace) -> int:
    result = state.delete_profile_at(args.index)
    if result.outcome is WriteOutcome.SKIPPED:
        print(labels_for(state.preferences.language).no_profile_at.format(index=args.index))
        return 0
    return _print_results(state, [result])


def _cmd_reset(state: AppState) -> int:
    result = state.reset_all_data()
    rc = _print_results(state, [result])
    if result.ok:
        print(labels_for(state.preferences.language).all_data_cleared)
    return rc


def _cmd_prefs_show(state: AppState) -> int:
    prefs = state.preferences
    t = labels_for(prefs.language)
    print(f"{t.app_title}")
    print(f"{t.theme}: {t.theme_name(prefs.theme_mode)} ({prefs.theme_mode.value})")
    print(t.font_size.format(percent=font_scale_percent(prefs.font_scale)))
    print(f"{t.language}: {language_name(prefs.language)} ({prefs.language})")
    return 0


def _cmd_prefs_set(state: AppState, args: argparse.Namespace) -> int:
    if args.theme is None and args.font_scale is None and args.language is None:
        print("ERROR: nothing to set (use --theme, --font-scale or --language).")
        return 2

    # Each preference is its own write.
    results: list[WriteResult] = []
    if args.theme is not None:
        results.append(state.set_theme_mode(ThemeMode(args.theme)))
    if args.font_scale is not None:
        results.append(state.set_font_scale(args.font_scale))
    if args.language is not None:
        results.append(state.set_language(args.language))

    rc = _print_results(state, results)
    _cmd_prefs_show(state)
    return rc


def main(argv: list[str] | None = None) -> int:
    """
    CLI entry point.

    Parameters
    ----------
    argv:
        Optional argument vector. If None, argparse uses sys.argv.

    Returns
    -------
    int
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(name)s - %(levelname)s - %(message)s",
    )

    data_root = Path(args.data_root) if args.data_root else None
    state = open_app_state(data_root=data_root)

    try:
        state.load()
        if args.command == "list":
            return _cmd_list(state, args)
        if args.command == "add":
            return _cmd_add(state, args)
        if args.command == "delete":
            return _cmd_delete(state, args)
        if args.command == "reset":
            return _cmd_reset(state)
        if args.command == "prefs":
            if args.prefs_command == "show":
                return _cmd_prefs_show(state)
            return _cmd_prefs_set(state, args)
    except ProfileAppError as exc:
        print(f"ERROR: {exc}")
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

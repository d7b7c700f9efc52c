"""Interactive terminal entry point for searching transcripts and picking clips."""

import re
import sys
from typing import Optional

from txt2clip.config import Config
from txt2clip.library import list_transcripts, load_transcripts
from txt2clip.models import HiddenRun
from txt2clip.search import search_results
from txt2clip.session import TranscriptSession
from txt2clip.timecode import parse_time_input
from txt2clip.writers.json_writer import write_clip_json
from txt2clip.writers.srt_writer import write_clip_srt
from txt2clip.writers.txt_writer import format_hidden_run, format_items

HELP = """Type text to search all transcripts (an empty search clears the filter).
Commands:
  /list                   list transcripts under the current search
  /matches                list matching lines with their timestamps
  /show N                 show transcript N
  /more N K               reveal hidden run K of transcript N
  /all N                  show all of transcript N
  /start N TIME           set the clip start (seconds, MM:SS or HH:MM:SS.mmm)
  /end N TIME             set the clip end
  /clip N LINE            use the block at LINE of transcript N as the clip
  /clear                  clear the clip
  /export                 write the clip to the output directory
  /help                   show this help
  /quit                   exit"""


def _safe_filename(name: str) -> str:
    return re.sub(r'[<>:"/\\|?*]', '_', name).strip() or "clip"


def resolve_transcript(session: TranscriptSession, arg: str) -> Optional[str]:
    """Map a list number (or a transcript id) to a transcript id."""
    names = session.visible_transcripts()
    if arg.isdigit():
        index = int(arg) - 1
        if 0 <= index < len(names):
            return names[index]
        return None
    return arg if arg in session.texts else None


def print_list(session: TranscriptSession) -> None:
    names = session.visible_transcripts()
    if session.query and not names:
        print(f"No matches found for \"{session.query}\".")
        return
    for number, name in enumerate(names, start=1):
        window = session.window(name)
        suffix = f"  ({len(window.lines)} matching lines)" if window is not None and window.lines else ""
        owner = "  [clip]" if session.clip.owner == name else ""
        print(f"{number:>3}. {name}{suffix}{owner}")


def print_matches(session: TranscriptSession) -> None:
    """Print every matching line under the current search, grep style."""
    if not session.query:
        print("ℹ️ No search is active. Type some text to search first.")
        return
    results = search_results(session.texts, session.query)
    if not results:
        print(f"No matches found for \"{session.query}\".")
        return
    for result in results:
        print(result.transcript)
        for match in result.matches:
            timestamp = f"  [{match.timestamp}]" if match.timestamp else ""
            print(f"  {match.line_number:>5}: {match.line_text.strip()}{timestamp}")


def print_transcript(session: TranscriptSession, name: str) -> None:
    items = session.view(name)
    if items is None:
        print(f"No matches found for \"{session.query}\" in this transcript.")
        return

    print("=" * 60)
    print(name)
    print("=" * 60)
    run_number = 0
    for item in items:
        if isinstance(item, HiddenRun):
            run_number += 1
            print(f"{format_hidden_run(item)}  [/more {run_number}]")
        else:
            print(format_items([item], clip=session.clip, transcript=name)[0])
    print("=" * 60)


def hidden_runs(session: TranscriptSession, name: str) -> list[HiddenRun]:
    return [item for item in session.view(name) or [] if isinstance(item, HiddenRun)]


def print_clip(session: TranscriptSession) -> None:
    clip = session.clip
    print(f"Clip: {clip.state.value}  start={clip.start or '-'}  end={clip.end or '-'}  "
          f"transcript={clip.owner or '-'}")


def export_clip(session: TranscriptSession) -> None:
    if not session.clip.is_complete:
        print("⚠ The clip needs both a start and an end before it can be exported.")
        return

    start, end, owner = session.clip.as_triple()
    stem = _safe_filename(f"{owner} {start.format().replace(':', '.')}-{end.format().replace(':', '.')}")
    blocks = session.blocks(owner)
    try:
        Config.OUT_DIR.mkdir(parents=True, exist_ok=True)
        write_clip_json(session.clip, blocks, Config.OUT_DIR / f"{stem}.json")
        write_clip_srt(session.clip, blocks, Config.OUT_DIR / f"{stem}.srt")
    except OSError as e:
        raise RuntimeError(f"Could not write clip to {Config.OUT_DIR}: {e}") from e
    print(f"✓ Clip saved to: {Config.OUT_DIR / stem}.json / .srt")


def handle_command(session: TranscriptSession, command: str, args: list[str]) -> bool:
    """Run one slash command. Returns False when the user wants to quit."""
    if command in ("quit", "exit", "q"):
        return False
    if command == "help":
        print(HELP)
        return True
    if command == "list":
        print_list(session)
        return True
    if command == "matches":
        print_matches(session)
        return True
    if command == "clear":
        session.clear_clip()
        print("✓ Clip cleared")
        return True
    if command == "export":
        export_clip(session)
        return True

    if not args:
        print(f"⚠ /{command} needs a transcript number. Type /help for usage.")
        return True
    name = resolve_transcript(session, args[0])
    if name is None:
        print(f"⚠ Unknown transcript: {args[0]}")
        return True

    if command == "show":
        print_transcript(session, name)
    elif command == "all":
        if session.expand_all(name) is None:
            print("ℹ️ No search is active, the whole transcript is already shown.")
        print_transcript(session, name)
    elif command == "more":
        runs = hidden_runs(session, name)
        if len(args) < 2 or not args[1].isdigit() or not 1 <= int(args[1]) <= len(runs):
            print(f"⚠ Pick a hidden run between 1 and {len(runs)}.")
            return True
        session.expand_run(name, runs[int(args[1]) - 1])
        print_transcript(session, name)
    elif command in ("start", "end"):
        if len(args) < 2:
            print(f"⚠ /{command} needs a time.")
            return True
        try:
            time = parse_time_input(args[1])
        except ValueError as e:
            print(f"⚠ {e}")
            return True
        setter = session.set_start if command == "start" else session.set_end
        if not setter(name, time):
            print(f"⚠ Clip {command} {time} would not leave a valid range.")
        print_clip(session)
    elif command == "clip":
        if len(args) < 2 or not args[1].isdigit():
            print("⚠ /clip needs a line number.")
            return True
        line = int(args[1])
        block = next((b for b in session.blocks(name) if line in b.line_numbers), None)
        if block is None or not session.clip_block(name, block):
            print(f"⚠ Line {line} is not part of a timed block.")
            return True
        print_clip(session)
    else:
        print(f"⚠ Unknown command: /{command}. Type /help for usage.")
    return True


def main():
    """Interactive main function."""
    print("=" * 60)
    print("Transcript Search & Clip")
    print("=" * 60)
    print()

    # Validate configuration
    try:
        Config.validate()
    except ValueError as e:
        print(f"✗ Configuration Error: {str(e)}", file=sys.stderr)
        print("\nPlease create a .env file with WATCH_DIRECTORIES.")
        input("\nPress Enter to exit...")
        sys.exit(1)

    records = list_transcripts()
    session = TranscriptSession(load_transcripts(records))
    print(f"✓ Loaded {len(session.texts)} transcripts")
    print()
    print(HELP)

    while True:
        print()
        print("-" * 60)
        try:
            entry = input("> ").strip()
        except EOFError:
            break

        if entry.startswith("/"):
            parts = entry[1:].split()
            if not parts:
                print(HELP)
                continue
            command, *args = parts
            try:
                if not handle_command(session, command.lower(), args):
                    break
            except RuntimeError as e:
                print(f"✗ Error: {str(e)}")
            continue

        results = session.search(entry)
        if results is None:
            print("✓ Search cleared")
        else:
            print(f"✓ {len(results)} transcripts match \"{entry}\"")
        print_list(session)

    print()
    print("Thank you for using Transcript Search & Clip!")


if __name__ == "__main__":
    main()

"""
Daily Affirmation: command-line driver
--------------------------------------

Each invocation is one app launch: today's state is resolved from the store,
then the requested intent is applied and the resulting card is printed.
"""

import argparse
import sys
from typing import List, Optional

from daily_affirmation import create_engine
from daily_affirmation.config import Config, localized
from daily_affirmation.models import CardFace, Language, ReplyPresent, StateSnapshot, ViewState
from daily_affirmation.services import AffirmationEngine
from daily_affirmation.utils import format_time_of_day, setup_logger

PROMPTS = {
    ViewState.INITIAL: "Take a deep breath and draw today's card (affirm.py draw).",
    ViewState.DRAWN: "Send it to the universe when you are ready (affirm.py send).",
    ViewState.RECEIVED: "Sent. Save it with 'affirm.py save'.",
}


def print_snapshot(snapshot: StateSnapshot) -> None:
    """Print the card the way the main screen would show it."""
    print(f"[{snapshot.state.value}] {PROMPTS[snapshot.state]}")
    if snapshot.quote is None:
        return

    if snapshot.state is ViewState.RECEIVED:
        key = "reply_received" if snapshot.face is CardFace.REPLY else "card_received"
        print(f"-- {localized(key, snapshot.language)} --")
    print(snapshot.front_text())
    if isinstance(snapshot.reply, ReplyPresent):
        print("(a reply is on the other side: affirm.py flip)")
    if snapshot.saved:
        print("♥ saved")


def print_collection(engine: AffirmationEngine) -> None:
    language = engine.language
    for card in engine.collection.list():
        print(f"{card.date:%Y-%m-%d}  {card.quote.text(language)}")
        if isinstance(card.universe_reply, ReplyPresent):
            print(f"            ↳ {card.universe_reply.value.text(language)}")
    print(engine.collection.capacity_reminder(language))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="affirm", description="Draw a daily affirmation card.")
    parser.add_argument("--store", help="Path to the state file (default: %(default)s)", default=Config.STORE_FILE)
    parser.add_argument("--log-level", default=Config.LOG_LEVEL)

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("status", help="Show today's card")
    sub.add_parser("draw", help="Draw today's card")
    sub.add_parser("send", help="Send today's card to the universe")
    sub.add_parser("flip", help="Show the other side of a card with a reply")
    sub.add_parser("save", help="Save today's card to the collection")
    sub.add_parser("collection", help="List saved cards, newest first")

    export = sub.add_parser("export", help="Export the collection to CSV")
    export.add_argument("path")

    lang = sub.add_parser("language", help="Set the display language")
    lang.add_argument("language", choices=[m.name.lower() for m in Language] + [m.value for m in Language])

    reminder = sub.add_parser("reminder", help="Show or set the daily reminder time")
    reminder.add_argument("time", nargs="?", help="HH:MM")

    sub.add_parser("reset", help="Erase all data")
    return parser


def main(argv: Optional[List[str]] = None) -> bool:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logger(level=args.log_level)

    engine = create_engine(store_path=args.store)
    snapshot = engine.resolve_state()
    command = args.command or "status"

    if command == "draw":
        if snapshot.state is not ViewState.INITIAL:
            print("Today's card is already drawn.")
        snapshot = engine.draw()
    elif command == "send":
        if snapshot.state is not ViewState.DRAWN:
            print("Nothing to send right now.")
            print_snapshot(snapshot)
            return False
        snapshot = engine.send()
    elif command == "flip":
        snapshot = engine.flip()
    elif command == "save":
        if snapshot.state is not ViewState.RECEIVED:
            print("Send today's card before saving it.")
            return False
        if engine.save():
            print("Saved to your collection.")
        else:
            print("Already in your collection.")
        snapshot = engine.snapshot()
    elif command == "collection":
        print_collection(engine)
        return True
    elif command == "export":
        if not engine.collection.export_csv(args.path):
            print(f"[ERROR] Could not write {args.path}")
            return False
        print(f"Exported {engine.collection.count()} cards to {args.path}")
        return True
    elif command == "language":
        snapshot = engine.set_language(args.language)
    elif command == "reminder":
        if args.time:
            engine.set_reminder_time(args.time)
        print(f"Daily reminder at {format_time_of_day(engine.reminder_time())}")
        return True
    elif command == "reset":
        snapshot = engine.reset()
        print("All data erased.")

    print_snapshot(snapshot)
    return True


def cli() -> None:
    try:
        success = main()
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n[!] Aborted by user.")
        sys.exit(1)


if __name__ == "__main__":
    cli()

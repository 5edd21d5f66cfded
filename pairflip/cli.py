"""
Pairflip CLI - Command-line interface for the engine.

Usage:
    pairflip play [--seed N]        Play in the terminal
    pairflip serve [--port 8000]    Run the HTTP/WebSocket API
"""

import argparse
import asyncio
import logging
import sys

from .config import get_config, LOG_FORMAT, LOG_DATEFMT
from .engine_core.state import GameState
from .games.memory.cards import GRID_COLUMNS


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Pairflip - Memory Match engine",
        prog="pairflip",
    )
    parser.add_argument("--log-level", default=None, help="Log level (default from PAIRFLIP_LOG_LEVEL)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    play_parser = subparsers.add_parser("play", help="Play a game in the terminal")
    play_parser.add_argument("--seed", type=int, default=None, help="RNG seed for the deal")
    play_parser.add_argument("--match-delay", type=float, default=None, help="Seconds before a pair is kept")
    play_parser.add_argument("--mismatch-delay", type=float, default=None, help="Seconds before a miss flips back")

    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    args = parser.parse_args(argv)

    level = (args.log_level or get_config().log_level).upper()
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    if args.command == "play":
        cmd_play(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def render_board(state: GameState) -> str:
    """Render the grid: face-down cards show their position, face-up their symbol."""
    cells = []
    for position, card in enumerate(state.cards):
        if card.is_matched:
            cells.append(f"({card.symbol:>4})")
        elif card.is_flipped:
            cells.append(f"[{card.symbol:>4}]")
        else:
            cells.append(f"  {position:>2}  ")
    rows = [
        " ".join(cells[i:i + GRID_COLUMNS])
        for i in range(0, len(cells), GRID_COLUMNS)
    ]
    return "\n".join(rows)


def cmd_play(args):
    """Interactive terminal game."""
    try:
        asyncio.run(_play(args))
    except (KeyboardInterrupt, EOFError):
        print("\nBye.")


async def _play(args):
    from .session import TurnController

    controller = TurnController(
        random_seed=args.seed,
        match_delay=args.match_delay,
        mismatch_delay=args.mismatch_delay,
    )
    loop = asyncio.get_running_loop()

    print("Find all the matching pairs!")
    print("Enter a position to flip, 'r' for a new game, 'q' to quit.\n")

    while True:
        state = controller.state
        print(render_board(state))
        print(f"Moves: {state.move_count}\n")

        if state.is_won:
            print(f"You found all pairs in {state.move_count} moves!")
            answer = (await loop.run_in_executor(None, input, "Play again? [y/N] ")).strip().lower()
            if answer != "y":
                return
            controller.reset()
            continue

        text = (await loop.run_in_executor(None, input, "> ")).strip().lower()
        if text == "q":
            return
        if text == "r":
            controller.reset()
            continue

        try:
            position = int(text)
        except ValueError:
            print("Could not parse. Try again.")
            continue
        if not 0 <= position < len(state.cards):
            print("No card there. Try again.")
            continue

        card = state.cards[position]
        if not controller.select_card(card.card_id):
            print("That card is already face up.")
            continue

        if controller.pending:
            print(render_board(controller.state))
            before = controller.state.move_count
            await controller.wait_until_idle()
            after = controller.state
            if after.move_count > before:
                outcome = "Match!" if after.matched_pairs > state.matched_pairs else "No match."
                print(outcome + "\n")


def cmd_serve(args):
    """Run the API under uvicorn."""
    import uvicorn

    uvicorn.run("pairflip.api.app:app", host=args.host, port=args.port)


if __name__ == "__main__":
    main()

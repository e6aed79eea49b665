from __future__ import annotations

import argparse
from typing import Optional

from config import get_config, load_config_from_file, setup_logging
from foxhens import GameSession, Side, board_to_str, parse_move_str
from foxhens.session import ONE_PLAYER, TWO_PLAYERS


def parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Play Fox and Hens in the terminal")
    ap.add_argument("--mode", choices=["ai-vs-ai", "human-vs-ai", "two-players"], default="ai-vs-ai",
                    help="Who plays which side")
    ap.add_argument("--side", choices=["chicken", "fox"], default=None,
                    help="Side played by the human in human-vs-ai mode")
    ap.add_argument("--depth", type=int, default=None, help="Search depth in plies")
    ap.add_argument("--max-turns", type=int, default=200, help="Stop after this many actions")
    ap.add_argument("--config", default=None, help="JSON configuration file")
    return ap.parse_args(argv)


def _read_human_move(session: GameSession) -> bool:
    """Prompt until an action changes the board. Returns False on quit."""
    while True:
        text = input(f"{session.board.side_to_move.value} to move (x-y x-y, q to quit): ").strip()
        if text.lower() in ("q", "quit"):
            return False
        move = parse_move_str(text)
        if move is None:
            print("Could not read that move.")
            continue
        if session.select(move.frm) is None:
            if session.board.is_over:
                return True
            print("Pick one of your own pieces.")
            continue
        result = session.click(move.to)
        if result.message:
            print(result.message)
        if result.changed_state:
            return True
        print("That move is not possible.")


def main(argv: Optional[list] = None) -> None:
    args = parse_args(argv)
    config = load_config_from_file(args.config) if args.config else get_config()
    setup_logging(config.logging.log_level)

    depth = args.depth or config.engine.default_depth
    mode = TWO_PLAYERS if args.mode == "two-players" else ONE_PLAYER
    human = Side(args.side or config.session.human_plays_as)
    session = GameSession(mode=mode, human_side=human, depth=depth)

    print(board_to_str(session.board))
    for _ in range(args.max_turns):
        if session.board.is_over:
            break
        if args.mode == "ai-vs-ai":
            result = session.play_ai_turn(session.board.side_to_move)
            if result is None:
                break
        elif session.is_ai_turn():
            result = session.play_ai_turn()
            if result is None:
                break
        elif not _read_human_move(session):
            return
        print()
        print(board_to_str(session.board))

    outcome = session.board.win_reason()
    print(outcome.reason if outcome else "No result.")


if __name__ == "__main__":
    main()

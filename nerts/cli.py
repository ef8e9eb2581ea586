"""
Nerts CLI - Command-line interface for the engine.

Usage:
    nerts simulate --players 3 --seed 7    Play an all-bot game
    nerts deal alice bob --seed 7          Print the opening snapshot as JSON
"""

import argparse
import logging
import sys

from .config import EngineSettings

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    settings = EngineSettings.from_env()

    parser = argparse.ArgumentParser(
        description="Nerts - multiplayer patience engine",
        prog="nerts",
    )
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Play an all-bot game")
    simulate_parser.add_argument("--players", type=int, default=2, help="Number of bot players")
    simulate_parser.add_argument("--seed", type=int, default=None, help="Deal and skip seed")
    simulate_parser.add_argument("--skill", type=float, default=settings.bot_skill, help="Chance a bot acts per tick")
    simulate_parser.add_argument("--max-ticks", type=int, default=settings.max_ticks, help="Safety cap on ticks")

    # Deal command
    deal_parser = subparsers.add_parser("deal", help="Deal a game and print its snapshot")
    deal_parser.add_argument("player_ids", nargs="+", help="Player ids, in seat order")
    deal_parser.add_argument("--seed", type=int, default=None, help="Deal seed")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    if args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "deal":
        cmd_deal(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_simulate(args):
    """Play an all-bot game to the end (or the tick cap)."""
    from .session import GameLoop, SessionManager

    if args.players < 1:
        print("Error: --players must be at least 1")
        sys.exit(1)

    player_ids = [f"bot{i + 1}" for i in range(args.players)]
    manager = SessionManager()
    session = manager.create_session(player_ids, bot_ids=player_ids, random_seed=args.seed)

    try:
        loop = GameLoop(session, skill=args.skill, seed=args.seed)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    logger.info("Simulating %d bots (skill %.2f)", args.players, args.skill)
    result = loop.run(args.max_ticks)

    print(f"Game: {session.session_id}")
    print(f"Ticks: {result.ticks}  Actions: {result.actions_applied}")
    if result.finished:
        print(f"Winner: {result.winner_id}")
    else:
        print("No winner (tick cap reached)")
    print("\nScores:")
    for player_id, score in result.scores.items():
        remaining = len(session.game_state.get_player(player_id).nerts_pile)
        print(f"  - {player_id}: {score} (Nerts pile {remaining})")

    manager.end_session(session.session_id)


def cmd_deal(args):
    """Deal a game and print the snapshot."""
    from .api.schemas import GameSnapshot
    from .engine_core.setup import init_game

    try:
        state = init_game(args.player_ids, random_seed=args.seed)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(GameSnapshot.from_state(state).model_dump_json(indent=2))


if __name__ == "__main__":
    main()

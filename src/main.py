import argparse
import logging
import sys
from typing import List, Optional

from config import LOG_LEVELS, Settings
from optimization import compare_with_greedy
from player_input import InvalidPlayerCount, collect_players
from settlement import MahjongSettlement
from utils import print_settlement_report, print_validation_result

logger = logging.getLogger(__name__)

EXAMPLE_BALANCES = {
    "Tanaka": 50000,
    "Sato": -30000,
    "Suzuki": 20000,
    "Takahashi": -40000,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="mahjong-settle",
        description="Work out who pays whom after a game so everybody ends at zero.",
    )
    mode = p.add_mutually_exclusive_group()
    mode.add_argument(
        "-e", "--example", action="store_true", help="run with the built-in sample players"
    )
    mode.add_argument(
        "-i", "--interactive", action="store_true", help="enter players and results by hand"
    )
    p.add_argument(
        "--optimal",
        action="store_true",
        help="also report the fewest transfers any plan could use",
    )
    p.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        help="override SETTLEMENT_LOG_LEVEL",
    )
    return p


def example(settlement: MahjongSettlement) -> MahjongSettlement:
    for name, amount in EXAMPLE_BALANCES.items():
        settlement.add_player(name, amount)
    return settlement


def report(settlement: MahjongSettlement, optimal: bool = False) -> None:
    transfers = print_settlement_report(settlement)
    print_validation_result(settlement.validate_settlement())

    if optimal:
        try:
            result = compare_with_greedy(settlement)
        except (ValueError, RuntimeError) as exc:
            print(f"\nOptimal comparison skipped: {exc}")
            return
        print(
            f"\nGreedy plan: {len(transfers)} payment(s), "
            f"fewest possible: {result.optimal}"
        )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        parser.error(str(exc))
    settings.configure_logging(args.log_level)

    settlement = MahjongSettlement(
        tolerance=settings.tolerance, zero_epsilon=settings.zero_epsilon
    )

    if args.interactive:
        print("Mahjong Settlement")
        print("==================")
        try:
            collect_players(settlement)
        except InvalidPlayerCount as exc:
            print(exc)
            return 1
        except KeyboardInterrupt:
            print()
            return 130
        except EOFError:
            print("\nInput ended before all players were entered")
            return 1
    else:
        if not args.example:
            parser.print_usage()
            print("\nRunning the example...\n")
        example(settlement)

    logger.debug("settling %d player(s)", len(settlement))
    report(settlement, optimal=args.optimal)
    return 0


if __name__ == "__main__":
    sys.exit(main())

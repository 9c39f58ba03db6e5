from typing import Callable

from settlement import MahjongSettlement
from utils import parse_amount

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

MIN_PLAYERS = 2


class InvalidPlayerCount(ValueError):
    pass


def read_player_count(input_fn: InputFn = input) -> int:
    raw = input_fn("Number of players: ")
    try:
        count = int(raw.strip())
    except ValueError:
        raise InvalidPlayerCount(
            f"Please enter a valid number of players ({MIN_PLAYERS} or more)"
        ) from None
    if count < MIN_PLAYERS:
        raise InvalidPlayerCount(
            f"Please enter a valid number of players ({MIN_PLAYERS} or more)"
        )
    return count


def collect_players(
    settlement: MahjongSettlement,
    input_fn: InputFn = input,
    output_fn: OutputFn = print,
) -> MahjongSettlement:
    """Prompt for the player count, then each player's name and result.

    A non-numeric amount asks for the same player again (name included).
    Amounts may contain comma thousands separators.
    """
    count = read_player_count(input_fn)

    index = 0
    while index < count:
        name = input_fn(f"Name of player {index + 1}: ")
        raw_amount = input_fn(
            f"Result for {name} (negative for a loss, commas allowed): "
        )
        try:
            amount = parse_amount(raw_amount)
        except ValueError:
            output_fn("Please enter a valid number")
            continue
        settlement.add_balance(name, amount)
        index += 1

    return settlement

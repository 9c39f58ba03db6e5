import logging
from dataclasses import dataclass
from typing import Dict, List

Person = str

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 0.01
DEFAULT_ZERO_EPSILON = 1e-9


@dataclass(frozen=True)
class Transfer:
    payer: Person
    payee: Person
    amount: float


class MahjongSettlement:
    """Holds each player's net result and works out who pays whom.

    Positive amount = net winner (is owed money), negative = net loser.
    """

    def __init__(
        self,
        tolerance: float = DEFAULT_TOLERANCE,
        zero_epsilon: float = DEFAULT_ZERO_EPSILON,
    ) -> None:
        if tolerance < 0 or zero_epsilon < 0:
            raise ValueError("tolerance and zero_epsilon must not be negative")
        self.tolerance = tolerance
        self.zero_epsilon = zero_epsilon
        self._players: Dict[Person, float] = {}

    def add_balance(self, name: Person, amount: float) -> None:
        # last write wins
        self._players[name] = amount

    add_player = add_balance

    @property
    def balances(self) -> Dict[Person, float]:
        return dict(self._players)

    def __len__(self) -> int:
        return len(self._players)

    def _is_zero(self, amount: float) -> bool:
        return abs(amount) <= self.zero_epsilon

    def compute_settlement(self) -> List[Transfer]:
        """Greedy two-pointer settlement: the biggest loser pays the biggest winner.

        Works on copies of the stored amounts, so calling it repeatedly gives
        the same plan and leaves the balances untouched.
        """
        # 負けている人から勝っている人へ (stable sort keeps input order on ties)
        working = sorted(
            ([name, amount] for name, amount in self._players.items()),
            key=lambda entry: entry[1],
        )

        transfers: List[Transfer] = []
        low = 0
        high = len(working) - 1

        while low < high:
            debtor = working[low]
            creditor = working[high]

            if debtor[1] >= -self.zero_epsilon:
                break  # nobody left who owes
            if creditor[1] <= self.zero_epsilon:
                break  # nobody left to be paid

            payment = min(-debtor[1], creditor[1])
            if payment > 0:
                transfers.append(Transfer(debtor[0], creditor[0], payment))
                logger.debug("%s pays %s %s", debtor[0], creditor[0], payment)

            debtor[1] += payment
            creditor[1] -= payment

            if self._is_zero(debtor[1]):
                debtor[1] = 0.0
                low += 1
            if self._is_zero(creditor[1]):
                creditor[1] = 0.0
                high -= 1

        return transfers

    def validate_settlement(self) -> bool:
        """True when the stored balances sum to zero within ``tolerance``."""
        total = sum(self._players.values())
        ok = abs(total) < self.tolerance
        logger.info("balance sum %s (%s)", total, "ok" if ok else "unbalanced")
        return ok

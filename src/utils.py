import math
from typing import Dict, Iterable, List, Optional

from settlement import MahjongSettlement, Person, Transfer


def format_amount(num: float) -> str:
    """Comma-grouped amount, up to 3 decimals, trailing zeros dropped (50000 -> "50,000")."""
    text = f"{num:,.3f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def format_signed(num: float) -> str:
    formatted = format_amount(num)
    return f"+{formatted}" if num > 0 and formatted != "0" else formatted


def parse_amount(text: str) -> float:
    """Parse user input such as "-30,000" into a float.

    Raises ValueError for anything that is not a finite number.
    """
    clean = text.replace(",", "").strip()
    value = float(clean)
    if not math.isfinite(value):
        raise ValueError(f"Amount must be a finite number: {text!r}")
    return value


def pretty_print_plan(transfers: Iterable[Transfer]) -> str:
    lines = []
    for index, t in enumerate(transfers, start=1):
        lines.append(f"{index}. {t.payer} → {t.payee}: {format_amount(t.amount)}")
    return "\n".join(lines)


def replay_transfers(
    transfers: Iterable[Transfer], balances: Dict[Person, float]
) -> Dict[Person, float]:
    """Apply every transfer to the original balances and return what is left per person."""
    residual = dict(balances)
    for t in transfers:
        residual[t.payer] = residual.get(t.payer, 0.0) + t.amount
        residual[t.payee] = residual.get(t.payee, 0.0) - t.amount
    return residual


def check_settlement(
    transfers: List[Transfer], balances: Dict[Person, float], eps: float = 1e-9
) -> bool:
    """Strict validation of a settlement plan against the original balances.

    Unlike ``MahjongSettlement.validate_settlement`` this replays the plan and
    requires every participant to end at zero.

    Args:
        transfers: Plan produced by ``compute_settlement`` (or any other solver)
        balances: Original signed balances
        eps: Allowed residual per participant
    """
    # 1. Every transfer must move a positive amount between two known people
    for t in transfers:
        if not t.amount > 0:
            raise AssertionError(
                f"Non-positive transfer found: {t.payer}->{t.payee}: {t.amount}"
            )
        if t.payer == t.payee:
            raise AssertionError(f"Self transfer found: {t.payer}")
        for person in (t.payer, t.payee):
            if person not in balances:
                raise AssertionError(f"Unknown participant in plan: {person}")

    # 2. Conservation: everybody nets out to zero
    for person, left in replay_transfers(transfers, balances).items():
        if abs(left) > eps:
            raise AssertionError(
                f"Balance not settled at {person}: residual={left:.6f}, "
                f"expected=0 (original {balances[person]:.6f})"
            )

    return True


def print_settlement_report(
    settlement: MahjongSettlement,
    transfers: Optional[List[Transfer]] = None,
    title: str = "Settlement Result",
) -> List[Transfer]:
    """Print current standings and the numbered payment plan. Returns the plan."""
    print(f"=== {title} ===")
    print("\n## Current standings:")
    for name, amount in settlement.balances.items():
        print(f"- {name}: {format_signed(amount)}")

    if transfers is None:
        transfers = settlement.compute_settlement()

    if not transfers:
        print("\n## Settled")
        print("No payments required.")
        return transfers

    print("\n## Settlement Plan:")
    print(pretty_print_plan(transfers))

    print("\n## Settled")
    print(f"Settled in {len(transfers)} payment(s)")
    return transfers


def print_validation_result(ok: bool) -> None:
    if ok:
        print("\n✅ Balances sum to zero; the settlement is consistent")
    else:
        print("\n❌ Balances do not sum to zero; the settlement is inconsistent")

from dataclasses import dataclass
from typing import Dict, List, Tuple

import pulp

from settlement import MahjongSettlement, Person, Transfer

Arc = Tuple[Person, Person]


@dataclass
class Comparison:
    greedy: int  # transfers used by the greedy plan
    optimal: int  # fewest transfers any plan can use

    @property
    def extra(self) -> int:
        return self.greedy - self.optimal


def solve_min_transfers(
    balances: Dict[Person, float], eps: float = 1e-9, tol: float = 1e-6
) -> Tuple[int, List[Transfer]]:
    """Find a settlement with the fewest possible transfers (0/1 usage flag per debtor->creditor arc).

    This is exponential in the worst case and only meant for the small groups
    of one game session, to show how close the greedy plan gets.
    """
    if abs(sum(balances.values())) > tol:
        raise ValueError("Infeasible: sum(balances) must be 0")

    debtors = [p for p, b in balances.items() if b < -eps]
    creditors = [p for p, b in balances.items() if b > eps]
    if not debtors or not creditors:
        return 0, []

    prob = pulp.LpProblem("min_num_transfers", pulp.LpMinimize)

    # Variables: x>=0 (amount), y∈{0,1} (arc used); names by index, player names may be non-ASCII
    arcs: List[Arc] = [(d, c) for d in debtors for c in creditors]
    x = {
        (d, c): pulp.LpVariable(f"x__{i}__{j}", lowBound=0)
        for i, d in enumerate(debtors)
        for j, c in enumerate(creditors)
    }
    y = {
        (d, c): pulp.LpVariable(f"y__{i}__{j}", cat=pulp.LpBinary)
        for i, d in enumerate(debtors)
        for j, c in enumerate(creditors)
    }

    # Objective: minimize number of used arcs
    prob += pulp.lpSum(y[a] for a in arcs)

    # Each debtor pays what they lost, each creditor receives what they won
    # (±tol on both sides, input may be off by rounding)
    for i, d in enumerate(debtors):
        outflow = pulp.lpSum(x[d, c] for c in creditors)
        prob += (outflow >= -balances[d] - tol), f"debt_lo_{i}"
        prob += (outflow <= -balances[d] + tol), f"debt_hi_{i}"

    for j, c in enumerate(creditors):
        inflow = pulp.lpSum(x[d, c] for d in debtors)
        prob += (inflow >= balances[c] - tol), f"credit_lo_{j}"
        prob += (inflow <= balances[c] + tol), f"credit_hi_{j}"

    # Linking constraint: x <= M*y, with M the most the arc could ever carry
    for d, c in arcs:
        prob += x[d, c] <= (min(-balances[d], balances[c]) + tol) * y[d, c]

    status = prob.solve(pulp.PULP_CBC_CMD(msg=False))
    if pulp.LpStatus[status] != "Optimal":
        raise RuntimeError(f"Min transfers not optimal: {pulp.LpStatus[status]}")

    used = [a for a in arcs if int(round(pulp.value(y[a]))) == 1]
    transfers = [
        Transfer(d, c, pulp.value(x[d, c]))
        for d, c in used
        if pulp.value(x[d, c]) > tol
    ]
    return len(transfers), transfers


def compare_with_greedy(settlement: MahjongSettlement) -> Comparison:
    greedy = settlement.compute_settlement()
    optimal, _ = solve_min_transfers(
        settlement.balances,
        eps=settlement.zero_epsilon,
        tol=settlement.tolerance,
    )
    return Comparison(greedy=len(greedy), optimal=optimal)

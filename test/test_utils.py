import pytest
import sys
import os

# このスクリプトの一つ上のディレクトリをパスに追加
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "../src/")))
from settlement import MahjongSettlement, Transfer
from utils import (
    check_settlement,
    format_amount,
    format_signed,
    parse_amount,
    pretty_print_plan,
    print_settlement_report,
    print_validation_result,
    replay_transfers,
)


class TestFormatting:
    def test_thousands_separator(self):
        """Integers are grouped by thousands without decimals"""
        assert format_amount(50000) == "50,000"
        assert format_amount(-1234567) == "-1,234,567"
        assert format_amount(0) == "0"

    def test_fraction_digits(self):
        """Up to three decimals, trailing zeros removed"""
        assert format_amount(1234.5) == "1,234.5"
        assert format_amount(0.125) == "0.125"
        assert format_amount(10.0) == "10"

    def test_negative_zero(self):
        """Values that round to zero print as plain zero"""
        assert format_amount(-0.0001) == "0"

    def test_signed(self):
        """Winners get a plus sign, losers keep their minus"""
        assert format_signed(50000) == "+50,000"
        assert format_signed(-30000) == "-30,000"
        assert format_signed(0) == "0"


class TestParseAmount:
    def test_plain_and_commas(self):
        """Commas are stripped before parsing"""
        assert parse_amount("50000") == 50000.0
        assert parse_amount("-30,000") == -30000.0
        assert parse_amount(" 1,234.5 ") == 1234.5

    @pytest.mark.parametrize("text", ["", "abc", "12x", "nan", "inf", "-inf"])
    def test_rejects_non_numbers(self, text):
        """Anything that is not a finite number is rejected"""
        with pytest.raises(ValueError):
            parse_amount(text)


class TestCheckSettlement:
    def test_valid_plan_passes(self):
        """A plan that zeroes everybody passes"""
        balances = {"A": 100.0, "B": -100.0}
        assert check_settlement([Transfer("B", "A", 100.0)], balances) is True

    def test_empty_plan_for_even_players(self):
        """No payments needed when everybody is at zero"""
        assert check_settlement([], {"A": 0.0, "B": 0.0}) is True

    def test_unsettled_balance_detected(self):
        """Leftover balances are reported"""
        balances = {"A": 100.0, "B": -100.0}
        with pytest.raises(AssertionError, match="Balance not settled"):
            check_settlement([Transfer("B", "A", 50.0)], balances)

    def test_non_positive_transfer_detected(self):
        """Zero or negative payments are rejected"""
        balances = {"A": 100.0, "B": -100.0}
        plan = [Transfer("B", "A", 110.0), Transfer("A", "B", -10.0)]
        with pytest.raises(AssertionError, match="Non-positive transfer"):
            check_settlement(plan, balances)

    def test_self_transfer_detected(self):
        """Paying oneself is rejected"""
        with pytest.raises(AssertionError, match="Self transfer"):
            check_settlement([Transfer("A", "A", 1.0)], {"A": 0.0})

    def test_unknown_participant_detected(self):
        """Plans may only mention known players"""
        with pytest.raises(AssertionError, match="Unknown participant"):
            check_settlement([Transfer("B", "Z", 1.0)], {"B": -1.0})

    def test_replay_residuals(self):
        """Replay returns what each player still has open"""
        balances = {"A": 50.0, "B": -30.0, "C": -20.0}
        residual = replay_transfers([Transfer("B", "A", 30.0)], balances)
        assert residual == {"A": 20.0, "B": 0.0, "C": -20.0}


class TestReport:
    def test_pretty_print_plan(self):
        """Payments are numbered from 1"""
        output = pretty_print_plan([Transfer("D", "A", 40000), Transfer("B", "C", 1234.5)])
        assert output == "1. D → A: 40,000\n2. B → C: 1,234.5"

    def test_pretty_print_empty(self):
        """An empty plan prints nothing"""
        assert pretty_print_plan([]) == ""

    def test_settlement_report_output(self, capsys):
        """Report shows standings, plan and summary"""
        settlement = MahjongSettlement()
        for name, amount in {"A": 50000, "B": -30000, "C": 20000, "D": -40000}.items():
            settlement.add_balance(name, amount)

        transfers = print_settlement_report(settlement, title="Test Report")

        output = capsys.readouterr().out
        assert "=== Test Report ===" in output
        assert "- A: +50,000" in output
        assert "- B: -30,000" in output
        assert "1. D → A: 40,000" in output
        assert "3. B → C: 20,000" in output
        assert "Settled in 3 payment(s)" in output
        assert len(transfers) == 3

    def test_settlement_report_nothing_to_pay(self, capsys):
        """Even players get the no-payment message"""
        settlement = MahjongSettlement()
        settlement.add_balance("A", 0)
        settlement.add_balance("B", 0)

        assert print_settlement_report(settlement) == []
        assert "No payments required." in capsys.readouterr().out

    def test_validation_result(self, capsys):
        """Pass and fail lines differ"""
        print_validation_result(True)
        print_validation_result(False)
        output = capsys.readouterr().out
        assert "✅" in output
        assert "❌" in output


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

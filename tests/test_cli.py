"""Tests for the command line interface."""

from smsledger.cli.main import cli
from smsledger.domain.detector import TransactionDetector

SCENARIO_A = "Rs.500.00 debited from A/c XX1234 on 26-01-26 to VPA swiggy@upi"


def invoke(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def test_help_does_not_need_database(cli_runner):
    """Test that --help works without touching a database."""
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "parse" in result.output
    assert "pending" in result.output


class TestParseCommands:
    """Tests for parse and detect."""

    def test_parse_transaction(self, cli_runner, temp_db):
        result = invoke(
            cli_runner, temp_db, "parse", SCENARIO_A, "--account", "acc-hdfc:HDFC Savings:50100001234"
        )

        assert result.exit_code == 0
        assert "Amount:      -500.00" in result.output
        assert "Category:    Food & Dining" in result.output
        assert "Account:     acc-hdfc" in result.output
        assert "Confidence:  100" in result.output
        # Parsing never queues anything
        assert TransactionDetector(temp_db).pending.count() == 0

    def test_parse_non_transaction(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "parse", "Your OTP is 482913")

        assert result.exit_code == 0
        assert "No transaction detected" in result.output

    def test_parse_rejects_bad_account_option(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "parse", SCENARIO_A, "--account", "acc-only")

        assert result.exit_code == 2
        assert "ID:NAME" in result.output

    def test_detect_queues_once(self, cli_runner, temp_db):
        first = invoke(cli_runner, temp_db, "detect", SCENARIO_A, "--source", "sms")
        second = invoke(cli_runner, temp_db, "detect", SCENARIO_A, "--source", "clipboard")

        assert first.exit_code == 0
        assert "Queued pending transaction" in first.output
        assert second.exit_code == 0
        assert "Skipped" in second.output

        entries = TransactionDetector(temp_db).pending.list_pending()
        assert len(entries) == 1
        assert entries[0].source == "sms"

    def test_detect_rejects_unknown_source(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "detect", SCENARIO_A, "--source", "email")

        assert result.exit_code == 2


class TestRuleCommands:
    """Tests for rule management."""

    def test_list_empty(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "rule", "list")

        assert result.exit_code == 0
        assert "No custom rules found." in result.output

    def test_add_list_delete(self, cli_runner, temp_db):
        added = invoke(
            cli_runner, temp_db, "rule", "add", "netflix",
            "--category", "Entertainment", "--bank", "HDFC",
        )
        assert added.exit_code == 0
        assert "Created rule 1 for pattern 'netflix'" in added.output

        listed = invoke(cli_runner, temp_db, "rule", "list")
        assert "netflix -> expense, Entertainment" in listed.output
        assert "bank HDFC" in listed.output

        deleted = invoke(cli_runner, temp_db, "rule", "delete", "1")
        assert deleted.exit_code == 0
        assert temp_db.list_rules() == []

    def test_add_invalid_regex(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "rule", "add", "([", "--regex")

        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_rule_changes_parse_result(self, cli_runner, temp_db):
        invoke(
            cli_runner, temp_db, "rule", "add", "netflix",
            "--category", "Entertainment", "--description", "Netflix Subscription",
        )

        result = invoke(cli_runner, temp_db, "parse", "Your Netflix subscription has been renewed")

        assert result.exit_code == 0
        assert "Description: Netflix Subscription" in result.output
        assert "Amount:      0" in result.output


class TestBankCommands:
    """Tests for bank identification and mapping."""

    def test_identify_by_sender(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "bank", "identify", "Rs 500 spent", "--sender", "VM-ICICIB")

        assert result.exit_code == 0
        assert result.output.strip() == "ICICI"

    def test_identify_nothing(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "bank", "identify", "hello there")

        assert "No bank identified" in result.output

    def test_map_and_list(self, cli_runner, temp_db):
        empty = invoke(cli_runner, temp_db, "bank", "mappings")
        assert "No bank mappings found." in empty.output

        mapped = invoke(cli_runner, temp_db, "bank", "map", "HDFC", "acc-1")
        assert mapped.exit_code == 0
        assert temp_db.get_bank_account_mappings() == {"hdfc": "acc-1"}

        listed = invoke(cli_runner, temp_db, "bank", "mappings")
        assert "hdfc" in listed.output
        assert "acc-1" in listed.output

    def test_map_rejects_blank_bank(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "bank", "map", " ", "acc-1")

        assert result.exit_code == 1
        assert "Error:" in result.output


class TestCategoryCommands:
    """Tests for category prediction and learning."""

    def test_predict(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "category", "predict", "Swiggy order", "--amount", "250")

        assert result.exit_code == 0
        assert "Food & Dining (confidence 0.9)" in result.output

    def test_learn_and_model(self, cli_runner, temp_db):
        empty = invoke(cli_runner, temp_db, "category", "model")
        assert "Nothing learned yet." in empty.output

        learned = invoke(cli_runner, temp_db, "category", "learn", "corner shop", "Groceries")
        assert learned.exit_code == 0

        predicted = invoke(cli_runner, temp_db, "category", "predict", "Corner Shop")
        assert "Groceries (confidence 0.8)" in predicted.output

        model = invoke(cli_runner, temp_db, "category", "model")
        assert "corner shop -> Groceries" in model.output
        assert "Groceries: 1" in model.output


class TestPendingCommands:
    """Tests for reviewing pending transactions."""

    def test_list_empty(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "pending", "list")

        assert result.exit_code == 0
        assert "No pending transactions." in result.output

    def test_confirm_flow(self, cli_runner, temp_db):
        invoke(cli_runner, temp_db, "detect", SCENARIO_A)

        listed = invoke(cli_runner, temp_db, "pending", "list")
        assert "swiggy@upi" in listed.output

        confirmed = invoke(cli_runner, temp_db, "pending", "confirm", "1")
        assert confirmed.exit_code == 0
        assert "Pending transaction 1 confirmed" in confirmed.output

        assert "No pending transactions." in invoke(cli_runner, temp_db, "pending", "list").output
        assert "[confirmed]" in invoke(cli_runner, temp_db, "pending", "list", "--all").output

    def test_dismiss_unknown(self, cli_runner, temp_db):
        result = invoke(cli_runner, temp_db, "pending", "dismiss", "42")

        assert result.exit_code == 1
        assert "Pending transaction 42 not found" in result.output

    def test_remove_and_clear(self, cli_runner, temp_db):
        invoke(cli_runner, temp_db, "detect", SCENARIO_A)
        invoke(cli_runner, temp_db, "detect", "Paid Rs 75 to Uber for your ride")

        removed = invoke(cli_runner, temp_db, "pending", "remove", "1")
        assert removed.exit_code == 0

        cleared = invoke(cli_runner, temp_db, "pending", "clear", "--yes")
        assert cleared.exit_code == 0
        assert temp_db.list_pending_transactions() == []

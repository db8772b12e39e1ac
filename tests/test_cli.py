"""End-to-end tests for the zenith CLI against temporary XDG directories."""

from pathlib import Path
from typing import Any

import pytest
from typer.testing import CliRunner

from zenith.cli import app
from zenith.commands import insight as insight_commands
from zenith.config import get_config_path
from zenith.domain.models import CategoryId, Money
from zenith.store.queries import get_category_budgets, get_goals, get_monthly_overrides, get_recurring, get_transactions
from zenith.store.schema import get_db_path

runner = CliRunner()


@pytest.fixture
def xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    return tmp_path


@pytest.fixture
def initialized(xdg: Path) -> Path:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output
    return get_db_path()


class TestInit:
    """Tests for zenith init."""

    def test_creates_database_and_config(self, xdg: Path) -> None:
        """Should create both files."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (xdg / "data" / "zenith" / "zenith.db").exists()
        assert (xdg / "config" / "zenith" / "config.toml").exists()

    def test_refuses_to_overwrite(self, initialized: Path) -> None:
        """Should fail without --force."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_force_resets_database(self, initialized: Path) -> None:
        """Should start from an empty database with --force."""
        runner.invoke(app, ["add", "Cafe", "4.50"])

        result = runner.invoke(app, ["init", "--force"])

        assert result.exit_code == 0
        assert get_transactions(initialized) == []


class TestRequiresDatabase:
    """Commands need an initialized database."""

    def test_list_without_init(self, xdg: Path) -> None:
        """Should point the user at zenith init."""
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 1
        assert "zenith init" in result.output


class TestCapture:
    """Tests for scan, voice and add."""

    def test_voice_save(self, initialized: Path) -> None:
        """Should save the parsed phrase as an expense."""
        result = runner.invoke(app, ["voice", "I spent 15 dollars at Starbucks", "--save", "--date", "2025-01-10"])

        assert result.exit_code == 0, result.output
        [txn] = get_transactions(initialized)
        assert txn.merchant == "Starbucks"
        assert txn.amount == Money(-1500)
        assert txn.date == "2025-01-10"

    def test_voice_not_understood(self, initialized: Path) -> None:
        """Should exit with the retry hint."""
        result = runner.invoke(app, ["voice", "bought some coffee", "--save"])

        assert result.exit_code == 1
        assert "Could not understand amount" in result.output

    def test_scan_file_declined(self, initialized: Path, tmp_path: Path) -> None:
        """Should show the guess and store nothing when declined."""
        receipt = tmp_path / "receipt.txt"
        receipt.write_text("STARBUCKS\nLatte 5.25\nTotal 5.70\n")

        result = runner.invoke(app, ["scan", str(receipt)], input="n\n")

        assert result.exit_code == 0, result.output
        assert "Starbucks" in result.output
        assert "Discarded" in result.output
        assert get_transactions(initialized) == []

    def test_scan_stdin_save(self, initialized: Path) -> None:
        """Should read receipt text from stdin."""
        result = runner.invoke(app, ["scan", "-", "--save"], input="JOE'S DINER\nTOTAL: $12.34\n")

        assert result.exit_code == 0, result.output
        [txn] = get_transactions(initialized)
        assert txn.merchant == "Joe's Diner"
        assert txn.amount == Money(-1234)

    def test_scan_without_amount(self, initialized: Path) -> None:
        """Should exit when no amount is found."""
        result = runner.invoke(app, ["scan", "-", "--save"], input="no numbers here\n")

        assert result.exit_code == 1
        assert "Could not find amount on receipt" in result.output

    def test_scan_missing_file(self, initialized: Path, tmp_path: Path) -> None:
        """Should exit when the file does not exist."""
        result = runner.invoke(app, ["scan", str(tmp_path / "missing.txt")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_add_income(self, initialized: Path) -> None:
        """Should store income with a positive amount."""
        result = runner.invoke(app, ["add", "Employer", "2500", "--income", "--category", "salary"])

        assert result.exit_code == 0, result.output
        [txn] = get_transactions(initialized)
        assert txn.amount == Money(250000)
        assert txn.category.value == "Salary"

    def test_add_unknown_category(self, initialized: Path) -> None:
        """Should reject unknown categories."""
        result = runner.invoke(app, ["add", "Cafe", "4.50", "--category", "Groceries"])

        assert result.exit_code == 1
        assert "Unknown category" in result.output

    def test_list_and_delete(self, initialized: Path) -> None:
        """Should list stored transactions and delete them by id."""
        runner.invoke(app, ["add", "Cafe", "4.50"])
        [txn] = get_transactions(initialized)

        listed = runner.invoke(app, ["list"])
        deleted = runner.invoke(app, ["delete", str(txn.id)])
        missing = runner.invoke(app, ["delete", str(txn.id)])

        assert "Cafe" in listed.output
        assert deleted.exit_code == 0
        assert missing.exit_code == 1
        assert get_transactions(initialized) == []


class TestPlan:
    """Tests for zenith plan."""

    def test_shows_planner(self, initialized: Path) -> None:
        """Should show totals and free cash flow."""
        runner.invoke(app, ["add", "Cafe", "100", "--category", "Food & Drink", "--date", "2025-01-10"])

        result = runner.invoke(app, ["plan", "--month", "2025-01"])

        assert result.exit_code == 0, result.output
        assert "January 2025 Planner" in result.output
        assert "Free Cash Flow" in result.output
        assert "$5,000.00" in result.output

    def test_set_budget(self, initialized: Path) -> None:
        """Should update the standing limit."""
        result = runner.invoke(app, ["plan", "--set-budget", "transport", "--amount", "123.45"])

        assert result.exit_code == 0, result.output
        transport = next(b for b in get_category_budgets(initialized) if b.category == "Transport")
        assert transport.limit == Money(12345)

    def test_override_budget(self, initialized: Path) -> None:
        """Should store a one-month override."""
        result = runner.invoke(
            app, ["plan", "--month", "2025-03", "--set-budget", "1", "--amount", "50", "--override"]
        )

        assert result.exit_code == 0, result.output
        [override] = get_monthly_overrides(db_path=initialized)
        assert override.category == CategoryId("Food & Drink")
        assert override.month == "2025-03"
        assert override.limit == Money(5000)

    def test_set_budget_needs_amount(self, initialized: Path) -> None:
        """Should exit without --amount."""
        result = runner.invoke(app, ["plan", "--set-budget", "Transport"])

        assert result.exit_code == 1

    def test_invalid_month(self, initialized: Path) -> None:
        """Should reject malformed months."""
        result = runner.invoke(app, ["plan", "--month", "2025-13"])

        assert result.exit_code == 1
        assert "Invalid month" in result.output

    def test_add_category(self, initialized: Path) -> None:
        """Should add a custom category whose limit counts toward the total budget."""
        result = runner.invoke(app, ["plan", "--add-category", "Pets", "--amount", "75"])
        plan_result = runner.invoke(app, ["plan", "--month", "2025-01"])

        assert result.exit_code == 0, result.output
        pets = get_category_budgets(initialized)[-1]
        assert pets.name == "Pets"
        assert pets.limit == Money(7500)
        assert pets.order_index == 999
        assert "Pets" in plan_result.output
        assert "Total Budget:   $3,125.00" in plan_result.output

    def test_add_category_duplicate(self, initialized: Path) -> None:
        """Should refuse a name that is already taken."""
        result = runner.invoke(app, ["plan", "--add-category", "transport", "--amount", "10"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_add_category_needs_amount(self, initialized: Path) -> None:
        """Should exit without --amount."""
        result = runner.invoke(app, ["plan", "--add-category", "Pets"])

        assert result.exit_code == 1
        assert len(get_category_budgets(initialized)) == 10


class TestReportAndExport:
    """Tests for zenith report and zenith export."""

    def test_report(self, initialized: Path) -> None:
        """Should print the breakdown for the month."""
        runner.invoke(app, ["add", "Employer", "1000", "--income", "--date", "2025-01-01"])
        runner.invoke(app, ["add", "Cafe", "250", "--category", "Food & Drink", "--date", "2025-01-05"])

        result = runner.invoke(app, ["report", "--month", "2025-01"])

        assert result.exit_code == 0, result.output
        assert "Food & Drink" in result.output
        assert "Savings Rate:   75%" in result.output

    def test_report_empty(self, initialized: Path) -> None:
        """Should say when there is nothing to report."""
        result = runner.invoke(app, ["report", "--month", "2025-01"])

        assert result.exit_code == 0
        assert "No transactions" in result.output

    def test_export(self, initialized: Path, tmp_path: Path) -> None:
        """Should write a CSV file."""
        runner.invoke(app, ["add", "Cafe", "4.50", "--date", "2025-01-05"])
        output = tmp_path / "export.csv"

        result = runner.invoke(app, ["export", str(output)])

        assert result.exit_code == 0, result.output
        assert output.read_text().splitlines() == [
            "Date,Merchant,Amount,Type,Category",
            "2025-01-05,Cafe,-4.50,Expense,Other",
        ]


class TestRecurring:
    """Tests for zenith recurring."""

    def test_add_and_process(self, initialized: Path) -> None:
        """Should generate the due transaction once."""
        added = runner.invoke(
            app, ["recurring", "--add", "Netflix", "--amount", "15.99", "--category", "entertainment", "--start", "2020-01-01"]
        )
        first = runner.invoke(app, ["recurring", "--process"])

        assert added.exit_code == 0, added.output
        assert first.exit_code == 0, first.output
        [txn] = get_transactions(initialized)
        assert txn.amount == Money(-1599)
        assert txn.date == "2020-01-01"
        assert get_recurring(initialized)[0].next_due == "2020-02-01"

    def test_pause(self, initialized: Path) -> None:
        """Should pause a rule so it is not processed."""
        runner.invoke(app, ["recurring", "--add", "Gym", "--amount", "30", "--start", "2020-01-01"])
        rule_id = get_recurring(initialized)[0].id

        paused = runner.invoke(app, ["recurring", "--pause", str(rule_id)])
        processed = runner.invoke(app, ["recurring", "--process"])

        assert paused.exit_code == 0
        assert "Nothing due" in processed.output
        assert get_transactions(initialized) == []

    def test_unknown_frequency(self, initialized: Path) -> None:
        """Should reject unknown frequencies."""
        result = runner.invoke(app, ["recurring", "--add", "Gym", "--amount", "30", "--frequency", "hourly"])

        assert result.exit_code == 1
        assert "Unknown frequency" in result.output


class TestInsight:
    """Tests for zenith insight."""

    def test_local_advice(self, initialized: Path) -> None:
        """Should print local advice without spending."""
        result = runner.invoke(app, ["insight", "--month", "2025-01"])

        assert result.exit_code == 0, result.output
        assert "No spending tracked yet" in result.output

    def test_remote_without_key(self, initialized: Path) -> None:
        """Should exit when no API key is configured."""
        result = runner.invoke(app, ["insight", "--remote"])

        assert result.exit_code == 1
        assert "No API key" in result.output

    def test_remote(self, initialized: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should print the service's answer."""
        calls: list[dict[str, Any]] = []

        def fake_fetch(api_key: str, transactions: list, model: str) -> str:
            calls.append({"api_key": api_key, "model": model})
            return "AI Insight: Spend less on coffee."

        monkeypatch.setenv("GROQ_API_KEY", "secret")
        monkeypatch.setattr(insight_commands, "fetch_financial_insight", fake_fetch)

        result = runner.invoke(app, ["insight", "--remote"])

        assert result.exit_code == 0, result.output
        assert "Spend less on coffee" in result.output
        assert calls == [{"api_key": "secret", "model": "llama3-8b-8192"}]


class TestConfig:
    """Tests for zenith config."""

    def test_set_and_show(self, initialized: Path) -> None:
        """Should store numbers as numbers and show them back."""
        set_result = runner.invoke(app, ["config", "default_income", "6000"])
        show_result = runner.invoke(app, ["config", "default_income"])

        assert set_result.exit_code == 0, set_result.output
        assert "default_income = 6000.0" in show_result.output

    def test_income_feeds_planner(self, initialized: Path) -> None:
        """Should use the configured default income in the planner."""
        runner.invoke(app, ["config", "default_income", "1234.5"])

        result = runner.invoke(app, ["plan", "--month", "2025-01"])

        assert "$1,234.50" in result.output

    def test_unknown_key(self, initialized: Path) -> None:
        """Should reject unknown settings."""
        result = runner.invoke(app, ["config", "nope"])

        assert result.exit_code == 1

    def test_rejects_infinite_income(self, initialized: Path) -> None:
        """Should refuse a non-finite default income and keep the old one."""
        result = runner.invoke(app, ["config", "default_income", "inf"])
        show_result = runner.invoke(app, ["config", "default_income"])

        assert result.exit_code == 1
        assert "finite" in result.output
        assert "default_income = 5000.0" in show_result.output


class TestNonFiniteAmounts:
    """Tests for NaN and infinite amounts typed on the command line."""

    @pytest.mark.parametrize(
        "args",
        [
            ["add", "Cafe", "nan"],
            ["add", "Cafe", "inf"],
            ["plan", "--set-income", "inf"],
            ["plan", "--set-budget", "Transport", "--amount", "nan"],
            ["plan", "--add-category", "Pets", "--amount", "inf"],
            ["recurring", "--add", "Gym", "--amount", "inf"],
            ["goals", "--add", "Car", "--target", "nan"],
        ],
    )
    def test_rejected(self, initialized: Path, args: list[str]) -> None:
        """Should print an error and exit 1 without a traceback."""
        result = runner.invoke(app, args)

        assert result.exit_code == 1
        assert "finite" in result.output
        assert isinstance(result.exception, SystemExit)
        assert get_transactions(initialized) == []

    def test_non_finite_default_income_in_file(self, initialized: Path) -> None:
        """Should treat a non-finite default_income in config.toml as no income."""
        get_config_path().write_text('default_income = inf\ncurrency_symbol = "$"\n')

        result = runner.invoke(app, ["plan", "--month", "2025-01"])

        assert result.exit_code == 0, result.output
        assert "Income:         $0.00" in result.output
        assert "$5,000.00" not in result.output

    def test_nan_default_income_in_file(self, initialized: Path) -> None:
        """Should treat a NaN default_income in config.toml as no income."""
        get_config_path().write_text("default_income = nan\n")

        result = runner.invoke(app, ["insight", "--month", "2025-01"])

        assert result.exit_code == 0, result.output


class TestMalformedConfig:
    """Tests for a config.toml that cannot be parsed."""

    @pytest.mark.parametrize(
        "args",
        [
            ["list"],
            ["plan"],
            ["report"],
            ["recurring"],
            ["insight"],
            ["goals"],
            ["add", "Cafe", "4.50"],
            ["voice", "I spent 15 dollars at Starbucks", "--no-save"],
            ["config", "default_income"],
        ],
    )
    def test_reports_invalid_file(self, initialized: Path, args: list[str]) -> None:
        """Should print a red message and exit 1 instead of raising."""
        get_config_path().write_text("default_income = [\n")

        result = runner.invoke(app, args)

        assert result.exit_code == 1
        assert "Invalid config file" in result.output
        assert isinstance(result.exception, SystemExit)


class TestGoals:
    """Tests for zenith goals."""

    def test_add_and_list(self, initialized: Path) -> None:
        """Should store a goal and list it with its progress."""
        result = runner.invoke(
            app, ["goals", "--add", "Car", "--target", "3000", "--current", "750", "--monthly", "250"]
        )
        list_result = runner.invoke(app, ["goals"])

        assert result.exit_code == 0, result.output
        [goal] = get_goals(initialized)
        assert goal.title == "Car"
        assert goal.current == Money(75000)
        assert goal.target == Money(300000)
        assert goal.monthly_contribution == Money(25000)
        assert list_result.exit_code == 0, list_result.output
        assert "25%" in list_result.output

    def test_add_needs_target(self, initialized: Path) -> None:
        """Should exit without --target."""
        result = runner.invoke(app, ["goals", "--add", "Car"])

        assert result.exit_code == 1
        assert get_goals(initialized) == []

    def test_negative_target(self, initialized: Path) -> None:
        """Should refuse negative amounts."""
        result = runner.invoke(app, ["goals", "--add", "Car", "--target", "-5"])

        assert result.exit_code == 1
        assert get_goals(initialized) == []

    def test_update_with_deposit(self, initialized: Path) -> None:
        """Should change the given fields and add a deposit to the balance."""
        runner.invoke(app, ["goals", "--add", "Car", "--target", "3000", "--current", "750"])
        [goal] = get_goals(initialized)

        result = runner.invoke(app, ["goals", "--update", str(goal.id), "--deposit", "250", "--monthly", "100"])

        assert result.exit_code == 0, result.output
        [updated] = get_goals(initialized)
        assert updated.current == Money(100000)
        assert updated.target == Money(300000)
        assert updated.monthly_contribution == Money(10000)

    def test_update_unknown(self, initialized: Path) -> None:
        """Should report a missing goal."""
        result = runner.invoke(app, ["goals", "--update", "42", "--current", "1"])

        assert result.exit_code == 1
        assert "No goal #42" in result.output

    def test_delete(self, initialized: Path) -> None:
        """Should delete a goal once."""
        runner.invoke(app, ["goals", "--add", "Car", "--target", "3000"])
        [goal] = get_goals(initialized)

        first = runner.invoke(app, ["goals", "--delete", str(goal.id)])
        second = runner.invoke(app, ["goals", "--delete", str(goal.id)])

        assert first.exit_code == 0, first.output
        assert second.exit_code == 1
        assert get_goals(initialized) == []

    def test_empty(self, initialized: Path) -> None:
        """Should say there are no goals yet."""
        result = runner.invoke(app, ["goals"])

        assert result.exit_code == 0
        assert "No savings goals yet" in result.output

"""Tests for the spendbook command line."""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from spendbook.cli import app
from spendbook.config import get_config_path
from spendbook.store.entries import EXPENSES_KEY, load_expenses, load_income
from spendbook.store.queries import write_record
from spendbook.store.schema import get_db_path

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    return tmp_path


def invoke(*args: str):
    return runner.invoke(app, list(args))


class TestInit:
    """Tests for init."""

    def test_creates_database_and_config(self) -> None:
        """Should create both files."""
        result = invoke("init")

        assert result.exit_code == 0
        assert get_db_path().exists()
        assert get_config_path().exists()

    def test_refuses_to_overwrite(self) -> None:
        """Should require --force once files exist."""
        invoke("init")

        result = invoke("init")

        assert result.exit_code == 1
        assert "--force" in result.output

    def test_force_starts_over(self) -> None:
        """Should wipe existing entries with --force."""
        invoke("add", "10", "Food", "Cash")

        result = invoke("init", "--force")

        assert result.exit_code == 0
        assert load_expenses(get_db_path()) == []


class TestExpenseCommands:
    """Tests for the expense commands."""

    def test_add_and_list(self) -> None:
        """Should add an expense and show it in the list."""
        result = invoke("add", "12.50", "Food", "Cash", "--date", "2024-01-05", "-m", "Lunch")

        assert result.exit_code == 0
        assert "Expense added" in result.output
        (entry,) = load_expenses(get_db_path())
        assert entry.amount == 12.5
        assert entry.date == "2024-01-05"
        assert entry.description == "Lunch"

        listed = invoke("list")
        assert listed.exit_code == 0
        assert "Lunch" in listed.output
        assert "$12.50" in listed.output

    def test_add_day_first_date(self) -> None:
        """Should store day-first dates as YYYY-MM-DD."""
        invoke("add", "5", "Travel", "Debit Card", "--date", "31/01/2024")

        (entry,) = load_expenses(get_db_path())
        assert entry.date == "2024-01-31"

    def test_add_invalid_amount(self) -> None:
        """Should reject non-positive amounts and store nothing."""
        result = invoke("add", "0", "Food", "Cash")

        assert result.exit_code == 1
        assert "Enter a valid amount greater than 0." in result.output
        assert load_expenses(get_db_path()) == []

    def test_add_unknown_category(self) -> None:
        """Should reject categories that aren't configured."""
        result = invoke("add", "5", "Yachts", "Cash")

        assert result.exit_code == 1
        assert load_expenses(get_db_path()) == []

    def test_edit_by_prefix(self) -> None:
        """Should update only the given fields."""
        invoke("add", "10", "Food", "Cash", "--date", "2024-01-05")
        (entry,) = load_expenses(get_db_path())

        result = invoke("edit", entry.id[:8], "--amount", "15")

        assert result.exit_code == 0
        (updated,) = load_expenses(get_db_path())
        assert updated.id == entry.id
        assert updated.amount == 15
        assert updated.category == "Food"
        assert updated.date == "2024-01-05"

    def test_edit_unknown_id(self) -> None:
        """Should fail for an id that doesn't exist."""
        result = invoke("edit", "nope", "--amount", "15")
        assert result.exit_code == 1

    def test_delete(self) -> None:
        """Should delete by id prefix."""
        invoke("add", "10", "Food", "Cash")
        (entry,) = load_expenses(get_db_path())

        result = invoke("delete", entry.id[:8])

        assert result.exit_code == 0
        assert load_expenses(get_db_path()) == []

    def test_delete_unknown_id_is_not_an_error(self) -> None:
        """Should leave entries alone and exit cleanly."""
        invoke("add", "10", "Food", "Cash")

        result = invoke("delete", "does-not-exist")

        assert result.exit_code == 0
        assert "No expense matching" in result.output
        assert len(load_expenses(get_db_path())) == 1

    def test_clear_with_yes(self) -> None:
        """Should remove every expense without prompting."""
        invoke("add", "10", "Food", "Cash")
        invoke("add", "20", "Rent", "Bank Transfer")

        result = invoke("clear", "--yes")

        assert result.exit_code == 0
        assert load_expenses(get_db_path()) == []

    def test_clear_declined(self) -> None:
        """Should keep expenses when the prompt is declined."""
        invoke("add", "10", "Food", "Cash")

        result = runner.invoke(app, ["clear"], input="n\n")

        assert result.exit_code == 0
        assert len(load_expenses(get_db_path())) == 1

    def test_list_filters(self) -> None:
        """Should only list matching expenses."""
        invoke("add", "10", "Food", "Cash", "-m", "Coffee")
        invoke("add", "30", "Travel", "Credit Card", "-m", "Taxi")

        result = invoke("list", "--category", "Travel")

        assert result.exit_code == 0
        assert "Taxi" in result.output
        assert "Coffee" not in result.output

    def test_list_empty(self) -> None:
        """Should say when nothing matches."""
        result = invoke("list")
        assert result.exit_code == 0
        assert "No expenses found" in result.output

    def test_daily(self) -> None:
        """Should total one day."""
        invoke("add", "10", "Food", "Cash", "--date", "2024-04-10")
        invoke("add", "5", "Travel", "Cash", "--date", "2024-04-10")
        invoke("add", "99", "Rent", "Cash", "--date", "2024-04-11")

        result = invoke("daily", "--date", "2024-04-10")

        assert result.exit_code == 0
        assert "$15.00" in result.output

    def test_breakdown(self) -> None:
        """Should list category totals."""
        invoke("add", "10", "Food", "Cash")
        invoke("add", "30", "Travel", "Cash")

        result = invoke("breakdown", "--no-histogram")

        assert result.exit_code == 0
        assert "Food: $10.00" in result.output
        assert "Travel: $30.00" in result.output


class TestIncomeCommands:
    """Tests for the income sub-commands."""

    def test_add_and_list(self) -> None:
        """Should add income and list it."""
        result = invoke("income", "add", "500", "Salary", "--date", "2024-01-31")

        assert result.exit_code == 0
        (entry,) = load_income(get_db_path())
        assert entry.amount == 500

        listed = invoke("income", "list")
        assert listed.exit_code == 0
        assert "$500.00" in listed.output

    def test_add_missing_source(self) -> None:
        """Should reject an empty source."""
        result = invoke("income", "add", "500", "")

        assert result.exit_code == 1
        assert "Pick a source." in result.output

    def test_edit_and_delete(self) -> None:
        """Should edit then delete by id prefix."""
        invoke("income", "add", "500", "Salary")
        (entry,) = load_income(get_db_path())

        assert invoke("income", "edit", entry.id[:8], "--amount", "600").exit_code == 0
        assert load_income(get_db_path())[0].amount == 600

        assert invoke("income", "delete", entry.id[:8]).exit_code == 0
        assert load_income(get_db_path()) == []

    def test_clear(self) -> None:
        """Should remove all income with --yes."""
        invoke("income", "add", "500", "Salary")

        result = invoke("income", "clear", "--yes")

        assert result.exit_code == 0
        assert load_income(get_db_path()) == []


class TestReportCommands:
    """Tests for report and export."""

    @pytest.fixture
    def january(self) -> None:
        invoke("add", "100", "Food", "Cash", "--date", "2024-01-05", "-m", "Groceries")
        invoke("add", "200", "Shopping", "Credit Card", "--date", "2024-01-10")
        invoke("income", "add", "500", "Salary", "--date", "2024-01-31")

    def test_report_month(self, january: None) -> None:
        """Should show totals with credit card spend left out of savings."""
        result = invoke("report", "--month", "2024-01")

        assert result.exit_code == 0
        assert "January 2024" in result.output
        assert "$300.00" in result.output
        assert "$400.00" in result.output

    def test_report_without_entries(self) -> None:
        """Should say there's nothing to report."""
        result = invoke("report")
        assert result.exit_code == 0
        assert "No entries yet" in result.output

    def test_report_invalid_month(self) -> None:
        """Should reject a malformed month."""
        result = invoke("report", "--month", "2024-13")
        assert result.exit_code == 1

    def test_export_markdown_to_file(self, january: None, tmp_path: Path) -> None:
        """Should write the Markdown report."""
        output = tmp_path / "out" / "january.md"

        result = invoke("export", "2024-01", "--output", str(output))

        assert result.exit_code == 0
        document = output.read_text()
        assert document.startswith("# Monthly report: January 2024")
        assert "- Savings: $400.00" in document
        assert "Groceries" in document

    def test_export_csv_to_stdout(self, january: None) -> None:
        """Should print the month's entries as CSV."""
        result = invoke("export", "2024-01", "--format", "csv")

        assert result.exit_code == 0
        lines = result.output.strip().splitlines()
        assert lines[0] == "kind,date,category,payment_mode,source,amount,note,id"
        assert len(lines) == 4
        assert lines[1].startswith("expense,2024-01-05,Food,Cash,,100.0,Groceries,")

    def test_export_unknown_format(self) -> None:
        """Should reject formats other than md and csv."""
        result = invoke("export", "2024-01", "--format", "pdf")
        assert result.exit_code == 1

    def test_report_skips_stored_records_with_unreadable_dates(self) -> None:
        """Should report the readable records and ignore the rest."""
        records = [
            {"id": "e1", "date": "yesterday", "category": "Food", "paymentMode": "Cash", "amount": 5},
            {"id": "e2", "date": "2024-1-5", "category": "Food", "paymentMode": "Cash", "amount": 7},
        ]
        write_record(EXPENSES_KEY, json.dumps(records), get_db_path())

        result = invoke("report")

        assert result.exit_code == 0
        assert result.exception is None
        assert "$7.00" in result.output


class TestBackup:
    """Tests for backup."""

    def test_requires_database(self) -> None:
        """Should fail before init."""
        result = invoke("backup")
        assert result.exit_code == 1

    def test_copies_database_and_config(self, tmp_path: Path) -> None:
        """Should copy both files into the backup directory."""
        invoke("init")
        backup_dir = tmp_path / "backups"

        result = invoke("backup", "--output", str(backup_dir))

        assert result.exit_code == 0
        names = sorted(p.name for p in backup_dir.iterdir())
        assert len(names) == 2
        assert names[0].startswith("config_")
        assert names[1].startswith("spendbook_")

"""Tests for spendbook.domain.filters pure functions."""

from spendbook.domain.entries import ExpenseEntry
from spendbook.domain.filters import FilterSpec, SortKey, apply_filter, filter_entries, sort_entries
from spendbook.domain.models import CategoryName, EntryId, Money, PaymentMode


def make_expense(
    entry_id: str,
    date: str,
    amount: float,
    category: str = "Food",
    payment_mode: str = "Cash",
    description: str = "",
) -> ExpenseEntry:
    return ExpenseEntry(
        id=EntryId(entry_id),
        date=date,
        category=CategoryName(category),
        payment_mode=PaymentMode(payment_mode),
        amount=Money(amount),
        description=description,
    )


EXPENSES = [
    make_expense("a", "2024-01-31", 20, "Food", "Cash", "Groceries at market"),
    make_expense("b", "2024-02-15", 75, "Travel", "Credit Card", "Train to Leeds"),
    make_expense("c", "2024-02-01", 10, "Food", "Debit Card", "Coffee"),
    make_expense("d", "2024-03-01", 40, "Bills", "Bank Transfer", ""),
]


def ids(entries: list[ExpenseEntry]) -> list[str]:
    return [e.id for e in entries]


class TestFilterEntries:
    """Tests for filter_entries."""

    def test_empty_spec_keeps_everything_in_order(self) -> None:
        """Should treat empty fields as no constraint."""
        assert ids(filter_entries(EXPENSES, FilterSpec())) == ["a", "b", "c", "d"]

    def test_category_exact_match(self) -> None:
        """Should keep only the chosen category."""
        assert ids(filter_entries(EXPENSES, FilterSpec(category="Food"))) == ["a", "c"]

    def test_category_is_case_sensitive(self) -> None:
        """Should not match a category with different case."""
        assert filter_entries(EXPENSES, FilterSpec(category="food")) == []

    def test_payment_mode_exact_match(self) -> None:
        """Should keep only the chosen payment mode."""
        assert ids(filter_entries(EXPENSES, FilterSpec(payment_mode="Credit Card"))) == ["b"]

    def test_date_bounds_are_inclusive(self) -> None:
        """Should exclude 2024-01-31 and include February dates for a February range."""
        spec = FilterSpec(from_date="2024-02-01", to_date="2024-02-29")

        result = ids(filter_entries(EXPENSES, spec))

        assert "a" not in result
        assert result == ["b", "c"]

    def test_from_date_only(self) -> None:
        """Should apply a lower bound on its own."""
        assert ids(filter_entries(EXPENSES, FilterSpec(from_date="2024-02-15"))) == ["b", "d"]

    def test_query_matches_description_case_insensitive(self) -> None:
        """Should search descriptions ignoring case and surrounding spaces."""
        assert ids(filter_entries(EXPENSES, FilterSpec(query="  TRAIN "))) == ["b"]

    def test_query_matches_category_and_payment_mode(self) -> None:
        """Should search category and payment mode text too."""
        assert ids(filter_entries(EXPENSES, FilterSpec(query="bills"))) == ["d"]
        assert ids(filter_entries(EXPENSES, FilterSpec(query="debit"))) == ["c"]

    def test_query_can_span_fields(self) -> None:
        """Should match across the space-joined fields."""
        assert ids(filter_entries(EXPENSES, FilterSpec(query="coffee food"))) == ["c"]

    def test_all_criteria_must_hold(self) -> None:
        """Should require every enabled criterion."""
        spec = FilterSpec(category="Food", payment_mode="Cash", query="coffee")
        assert filter_entries(EXPENSES, spec) == []

    def test_filtering_is_idempotent(self) -> None:
        """Should give the same result when applied twice."""
        spec = FilterSpec(category="Food", from_date="2024-01-01", query="o")

        once = filter_entries(EXPENSES, spec)
        twice = filter_entries(once, spec)

        assert once == twice

    def test_does_not_mutate_input(self) -> None:
        """Should return a new list."""
        entries = list(EXPENSES)
        filter_entries(entries, FilterSpec(category="Bills"))
        assert entries == EXPENSES


class TestSortEntries:
    """Tests for sort_entries."""

    def test_date_desc_is_default(self) -> None:
        """Should sort newest first by default."""
        assert ids(sort_entries(EXPENSES)) == ["d", "b", "c", "a"]

    def test_date_asc(self) -> None:
        """Should sort oldest first."""
        assert ids(sort_entries(EXPENSES, SortKey.DATE_ASC)) == ["a", "c", "b", "d"]

    def test_date_orders_reverse_each_other_for_distinct_dates(self) -> None:
        """Should give opposite orders for distinct dates."""
        ascending = sort_entries(EXPENSES, "dateAsc")
        descending = sort_entries(EXPENSES, "dateDesc")
        assert ascending == list(reversed(descending))

    def test_amount_desc(self) -> None:
        """Should sort by amount, largest first."""
        assert ids(sort_entries(EXPENSES, SortKey.AMOUNT_DESC)) == ["b", "d", "a", "c"]

    def test_amount_asc(self) -> None:
        """Should sort by amount, smallest first."""
        assert ids(sort_entries(EXPENSES, "amountAsc")) == ["c", "a", "d", "b"]

    def test_sort_is_stable_on_ties(self) -> None:
        """Should keep input order for equal keys in both directions."""
        tied = [
            make_expense("x", "2024-05-01", 10),
            make_expense("y", "2024-05-01", 10),
            make_expense("z", "2024-05-01", 10),
        ]

        assert ids(sort_entries(tied, SortKey.DATE_DESC)) == ["x", "y", "z"]
        assert ids(sort_entries(tied, SortKey.DATE_ASC)) == ["x", "y", "z"]
        assert ids(sort_entries(tied, SortKey.AMOUNT_DESC)) == ["x", "y", "z"]

    def test_unknown_key_sorts_newest_first(self) -> None:
        """Should fall back to dateDesc for unknown keys."""
        assert ids(sort_entries(EXPENSES, "bogus")) == ["d", "b", "c", "a"]

    def test_does_not_mutate_input(self) -> None:
        """Should leave the input order untouched."""
        entries = list(EXPENSES)
        sort_entries(entries, SortKey.AMOUNT_ASC)
        assert entries == EXPENSES


class TestApplyFilter:
    """Tests for apply_filter."""

    def test_filters_then_sorts(self) -> None:
        """Should filter and then sort by the filter's sort key."""
        spec = FilterSpec(category="Food", sort_by=SortKey.AMOUNT_DESC)
        assert ids(apply_filter(EXPENSES, spec)) == ["a", "c"]


class TestSortKeyParse:
    """Tests for SortKey.parse."""

    def test_parses_known_values(self) -> None:
        """Should map wire values to keys."""
        assert SortKey.parse("amountAsc") is SortKey.AMOUNT_ASC

    def test_defaults_for_none(self) -> None:
        """Should default to dateDesc."""
        assert SortKey.parse(None) is SortKey.DATE_DESC

from decimal import Decimal

from hostel_ledger.schemas.report import OccupancyEntry, SourceKind
from hostel_ledger.services.report.aggregator import ReportAggregator


def entry(name, expected, paid, kind=SourceKind.CURRENT):
    return OccupancyEntry(
        source_kind=kind,
        occupant_name=name,
        actual_amount=Decimal(expected),
        amount_paid=Decimal(paid),
    )


def test_pending_is_never_negative():
    overpaid = entry("Over", 1000, 1500)
    assert overpaid.pending == Decimal("0")
    assert entry("Under", 1000, 400).pending == Decimal("600")


def test_totals_cover_every_entry():
    entries = [
        entry("Settled", 5000, 5000, SourceKind.HISTORY),
        entry("Owes", 3000, 1000),
        entry("Over", 1000, 1500),
    ]
    totals = ReportAggregator().aggregate(entries).totals

    assert totals.expected == Decimal("9000")
    assert totals.received == Decimal("7500")
    assert totals.pending == Decimal("2000")
    assert totals.count_all == 3
    assert totals.count_pending == 1


def test_pending_list_is_positive_subset_sorted():
    entries = [
        entry("small", 1000, 900),
        entry("settled", 500, 500),
        entry("big-low-paid", 5000, 0),
        entry("big-high-paid", 7000, 2000),
        entry("medium", 2000, 1000),
    ]
    result = ReportAggregator().aggregate(entries)

    names = [e.occupant_name for e in result.pending_entries]
    # big-* tie on pending 5000; more paid first
    assert names == ["big-high-paid", "big-low-paid", "medium", "small"]
    assert all(e.pending > 0 for e in result.pending_entries)
    assert len(result.all_entries) == 5


def test_empty_input():
    result = ReportAggregator().aggregate([])
    assert result.all_entries == []
    assert result.pending_entries == []
    assert result.totals.expected == Decimal("0")
    assert result.totals.count_all == 0

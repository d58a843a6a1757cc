import pytest

from logic.dispo.ledger import JobLedger
from logic.dispo.models import DispositionMode

from conftest import make_job


def numbers(ledger):
    return ledger.job_numbers()


def test_set_all_replaces_content_in_order(ledger):
    ledger.append(make_job("OLD"))
    r1, r2 = make_job("1"), make_job("2")
    ledger.set_all([r1, r2])
    assert list(ledger) == [r1, r2]


def test_set_all_keeps_duplicates():
    ledger = JobLedger()
    ledger.set_all([make_job("A"), make_job("A")])
    assert numbers(ledger) == ["A", "A"]


def test_append_and_append_all_preserve_order(ledger):
    ledger.append(make_job("A"))
    ledger.append_all([make_job("B"), make_job("C")])
    assert numbers(ledger) == ["A", "B", "C"]


def test_append_all_does_not_deduplicate(ledger):
    ledger.append(make_job("A"))
    ledger.append_all([make_job("A")])
    assert numbers(ledger) == ["A", "A"]


def test_remove_one_matches_by_job_number(ledger):
    ledger.set_all([make_job("A"), make_job("B")])
    ledger.remove_one(make_job("A", hawb_number="otro"))
    assert numbers(ledger) == ["B"]


def test_remove_one_missing_is_noop(ledger):
    ledger.set_all([make_job("A")])
    ledger.remove_one(make_job("Z"))
    assert numbers(ledger) == ["A"]


def test_remove_many_removes_exactly_given_numbers(ledger):
    ledger.set_all([make_job(n) for n in ("E", "A", "D", "B", "C")])
    ledger.remove_many([make_job("B"), make_job("E"), make_job("X")])
    assert numbers(ledger) == ["A", "D", "C"]


def test_remove_at(ledger):
    ledger.set_all([make_job("A"), make_job("B"), make_job("C")])
    removed = ledger.remove_at(1)
    assert removed.job_number == "B"
    assert numbers(ledger) == ["A", "C"]


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_remove_at_out_of_range(ledger, index):
    ledger.set_all([make_job("A"), make_job("B"), make_job("C")])
    with pytest.raises(IndexError):
        ledger.remove_at(index)
    assert numbers(ledger) == ["A", "B", "C"]


def test_clear(ledger):
    ledger.set_all([make_job("A")])
    ledger.clear()
    assert len(ledger) == 0


def test_by_mode(ledger):
    ledger.set_all([
        make_job("P1", DispositionMode.PICKUP),
        make_job("D1", DispositionMode.DELIVERY),
        make_job("P2", DispositionMode.PICKUP),
    ])
    assert [r.job_number for r in ledger.by_mode(DispositionMode.PICKUP)] == ["P1", "P2"]


def test_listeners_see_complete_state(ledger):
    seen = []
    ledger.subscribe(lambda l: seen.append(l.job_numbers()))
    ledger.append_all([make_job("A"), make_job("B")])
    ledger.remove_many([make_job("A"), make_job("B")])
    assert seen == [["A", "B"], []]


def test_noop_removals_do_not_notify(ledger):
    ledger.set_all([make_job("A")])
    calls = []
    ledger.subscribe(lambda l: calls.append(1))
    ledger.remove_one(make_job("Z"))
    ledger.remove_many([make_job("Z")])
    assert calls == []


def test_unsubscribe(ledger):
    calls = []
    listener = lambda l: calls.append(1)  # noqa: E731
    ledger.subscribe(listener)
    ledger.unsubscribe(listener)
    ledger.clear()
    assert calls == []


def test_remove_one_drops_every_duplicate(ledger):
    ledger.set_all([make_job("A"), make_job("A"), make_job("B")])
    ledger.append_all([make_job("A")])
    ledger.remove_one(make_job("A"))
    assert numbers(ledger) == ["B"]

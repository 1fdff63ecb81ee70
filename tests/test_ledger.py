"""Unit tests for CountLedger."""

from threat_registry.core.ledger import CountLedger


def test_get_absent_identity():
    """Test reading an unknown identity returns zero without inserting it."""
    ledger = CountLedger()

    assert ledger.get('R') == 0
    assert 'R' not in ledger
    assert len(ledger) == 0


def test_increment_inserts_at_zero():
    """Test the first increment creates the entry at one."""
    ledger = CountLedger()

    assert ledger.increment('R') == 1
    assert ledger.increment('R') == 2
    assert ledger.get('R') == 2
    assert 'R' in ledger


def test_to_dict_sorted_snapshot():
    """Test snapshots are sorted and detached from the ledger."""
    ledger = CountLedger()
    ledger.increment('zed')
    ledger.increment('alice')
    ledger.increment('alice')

    snapshot = ledger.to_dict()
    snapshot['alice'] = 50

    assert list(ledger.to_dict()) == ['alice', 'zed']
    assert ledger.get('alice') == 2
    assert ledger.total() == 3

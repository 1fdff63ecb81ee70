"""Unit tests for Threat model."""

import dataclasses

import pytest

from threat_registry.core.models import REPORT_STAKE, Threat, ThreatStatus


def test_threat_creation_defaults():
    """Test a new Threat is pending with the fixed stake."""
    threat = Threat(id=1, reporter='R', target='T', description='SQLi', severity=3)

    assert threat.status is ThreatStatus.PENDING
    assert threat.stake == REPORT_STAKE == 100


def test_threat_is_immutable():
    """Test Threat records cannot be mutated in place."""
    threat = Threat(id=1, reporter='R', target='T', description='SQLi', severity=3)

    with pytest.raises(dataclasses.FrozenInstanceError):
        threat.status = ThreatStatus.VALIDATED


def test_threat_to_dict():
    """Test converting Threat to dict uses plain status strings."""
    threat = Threat(id=4, reporter='R', target='T', description='XSS', severity=2,
                    status=ThreatStatus.REJECTED)

    assert threat.to_dict() == {
        'id': 4,
        'reporter': 'R',
        'target': 'T',
        'description': 'XSS',
        'severity': 2,
        'status': 'rejected',
        'stake': 100,
    }


def test_threat_from_dict():
    """Test rebuilding a Threat from its dict form."""
    threat = Threat(id=2, reporter='R', target='T', description='RCE', severity=5,
                    status=ThreatStatus.VALIDATED)

    assert Threat.from_dict(threat.to_dict()) == threat


def test_threat_from_dict_default_stake():
    """Test a missing stake falls back to the fixed stake."""
    threat = Threat.from_dict({'id': 1, 'reporter': 'R', 'target': 'T',
                               'description': 'd', 'severity': 1, 'status': 'pending'})

    assert threat.stake == REPORT_STAKE


def test_threat_from_dict_missing_field():
    """Test a missing required field raises KeyError."""
    with pytest.raises(KeyError):
        Threat.from_dict({'id': 1, 'reporter': 'R', 'target': 'T', 'status': 'pending'})


@pytest.mark.parametrize("bad_id", [0, -1, '1', True, None])
def test_threat_from_dict_bad_id(bad_id):
    """Test ids must be positive integers."""
    with pytest.raises(ValueError):
        Threat.from_dict({'id': bad_id, 'reporter': 'R', 'target': 'T',
                          'description': 'd', 'severity': 1, 'status': 'pending'})


def test_threat_from_dict_unknown_status():
    """Test unknown statuses are rejected."""
    with pytest.raises(ValueError):
        Threat.from_dict({'id': 1, 'reporter': 'R', 'target': 'T',
                          'description': 'd', 'severity': 1, 'status': 'disputed'})


def test_status_values():
    """Test the status enum is closed over the three lifecycle states."""
    assert [s.value for s in ThreatStatus] == ['pending', 'validated', 'rejected']
    assert not ThreatStatus.PENDING.is_final
    assert ThreatStatus.VALIDATED.is_final
    assert ThreatStatus.REJECTED.is_final


@pytest.mark.parametrize("field_name,bad_value", [
    ('reporter', ["R"]),
    ('reporter', ''),
    ('target', 42),
    ('description', None),
    ('description', ''),
])
def test_threat_from_dict_bad_text_field(field_name, bad_value):
    """Test text fields must be non-empty strings."""
    data = {'id': 1, 'reporter': 'R', 'target': 'T',
            'description': 'd', 'severity': 1, 'status': 'pending'}
    data[field_name] = bad_value

    with pytest.raises(ValueError):
        Threat.from_dict(data)


def test_threat_from_dict_null_severity():
    """Test a null severity is rejected."""
    with pytest.raises(ValueError):
        Threat.from_dict({'id': 1, 'reporter': 'R', 'target': 'T',
                          'description': 'd', 'severity': None, 'status': 'pending'})

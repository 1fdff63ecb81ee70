"""Data models for reported threats"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


# Stake locked by every report, in registry units
REPORT_STAKE = 100


class ThreatStatus(str, Enum):
    """Lifecycle status of a reported threat"""
    PENDING = "pending"
    VALIDATED = "validated"
    REJECTED = "rejected"

    @property
    def is_final(self) -> bool:
        return self is not ThreatStatus.PENDING


@dataclass(frozen=True)
class Threat:
    """A reported security threat"""

    id: int                     # Sequential id, starts at 1
    reporter: str               # Identity that submitted the report
    target: str                 # Identity the threat concerns
    description: str
    severity: int               # Unbounded, as submitted
    status: ThreatStatus = ThreatStatus.PENDING
    stake: int = REPORT_STAKE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'id': self.id,
            'reporter': self.reporter,
            'target': self.target,
            'description': self.description,
            'severity': self.severity,
            'status': self.status.value,
            'stake': self.stake,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Threat':
        """
        Build a Threat from a dict produced by to_dict()

        Args:
            data: Threat dict, e.g. an entry of a saved report

        Returns:
            Threat object

        Raises:
            KeyError: if a required field is missing
            ValueError: if the status is unknown, the id is not a positive integer,
                a text field is not a non-empty string or severity is null
        """
        threat_id = data['id']
        if isinstance(threat_id, bool) or not isinstance(threat_id, int) or threat_id < 1:
            raise ValueError(f"Threat id must be a positive integer, got {threat_id!r}")

        for name in ('reporter', 'target', 'description'):
            value = data[name]
            if not isinstance(value, str) or not value:
                raise ValueError(f"Threat {name} must be a non-empty string, got {value!r}")

        if data['severity'] is None:
            raise ValueError("Threat severity is required")

        return cls(
            id=threat_id,
            reporter=data['reporter'],
            target=data['target'],
            description=data['description'],
            severity=data['severity'],
            status=ThreatStatus(data['status']),
            stake=data.get('stake', REPORT_STAKE),
        )

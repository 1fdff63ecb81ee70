"""Threat registry: reporting, adjudication and role management"""

import os
from dataclasses import replace
from typing import Dict, List, Optional, Set, Union

import click

from .errors import (
    Result,
    authorization_error,
    conflict_error,
    not_found_error,
    validation_error,
)
from .ledger import CountLedger
from .models import REPORT_STAKE, Threat, ThreatStatus


ADMIN_ENV_VAR = 'THREAT_REGISTRY_ADMIN'
VERBOSE_ENV_VAR = 'THREAT_REGISTRY_VERBOSE'

TRUTHY_VALUES = {'1', 'true', 'yes'}


class ThreatRegistry:
    """
    Owns all registry state and exposes the operations that mutate it

    State:
    - threats keyed by sequential id (starting at 1, never reused)
    - reputation ledger (validated reports per reporter)
    - slash ledger (rejected reports per reporter)
    - validator set
    - a single admin identity

    Every operation checks all failure conditions before mutating anything,
    so a failed call leaves the registry untouched.
    """

    def __init__(self, admin: Optional[str] = None, verbose: Optional[bool] = None):
        """
        Initialize registry

        Args:
            admin: Bootstrap admin identity. Defaults to $THREAT_REGISTRY_ADMIN.
            verbose: Echo every operation to stderr. Defaults to $THREAT_REGISTRY_VERBOSE.

        Raises:
            ValueError: if no admin identity is supplied or configured
        """
        if admin is None:
            admin = os.environ.get(ADMIN_ENV_VAR)
        if admin is None:
            raise ValueError(f"No admin identity supplied and {ADMIN_ENV_VAR} is not set")

        if verbose is None:
            verbose = os.environ.get(VERBOSE_ENV_VAR, '').strip().lower() in TRUTHY_VALUES

        self._admin = admin
        self.verbose = verbose
        self._threats: Dict[int, Threat] = {}
        self._reputation = CountLedger()
        self._slashed = CountLedger()
        self._validators: Set[str] = set()
        self._next_threat_id = 1

    # -- event output -------------------------------------------------------

    def _log_success(self, message: str):
        if self.verbose:
            click.echo(click.style(f"✓ {message}", fg='green'), err=True)

    def _fail(self, operation: str, error) -> Result:
        if self.verbose:
            click.echo(click.style(
                f"⚠️  {operation} refused [{int(error.code)}]: {error.message}",
                fg='yellow'), err=True)
        return Result.failure(error)

    # -- threat lifecycle ---------------------------------------------------

    def report_threat(self, reporter: str, target: str, description: str, severity: int) -> Result:
        """
        Report a new threat

        Args:
            reporter: Identity submitting the report
            target: Identity the threat concerns
            description: Free-text description of the issue
            severity: Severity as submitted (no range is enforced)

        Returns:
            Result with the new threat id, or a 400 error if any field is missing
        """
        for field_name, field_value in (('reporter', reporter),
                                        ('target', target),
                                        ('description', description)):
            if not field_value:
                return self._fail('report_threat', validation_error(f"{field_name} is required"))
        if severity is None:
            return self._fail('report_threat', validation_error("severity is required"))

        threat_id = self._next_threat_id
        self._next_threat_id += 1
        self._threats[threat_id] = Threat(
            id=threat_id,
            reporter=reporter,
            target=target,
            description=description,
            severity=severity,
            status=ThreatStatus.PENDING,
            stake=REPORT_STAKE,
        )

        self._log_success(f"Threat #{threat_id} reported by {reporter} against {target}")
        return Result.success(threat_id)

    def get_threat(self, threat_id: int) -> Result:
        """Look up a threat by id (404 if unknown)"""
        threat = self._threats.get(threat_id)
        if threat is None:
            return Result.failure(not_found_error(f"threat #{threat_id} does not exist"))
        return Result.success(threat)

    def validate_threat(self, validator: str, threat_id: int, verdict: bool) -> Result:
        """
        Adjudicate a pending threat

        A true verdict marks the threat validated and credits the reporter's
        reputation; a false verdict marks it rejected and slashes the reporter.

        Returns:
            Result(True), or 403 (not a validator), 404 (unknown threat),
            409 (already adjudicated), checked in that order
        """
        if validator not in self._validators:
            return self._fail('validate_threat', authorization_error(f"{validator} is not a validator"))

        threat = self._threats.get(threat_id)
        if threat is None:
            return self._fail('validate_threat', not_found_error(f"threat #{threat_id} does not exist"))

        if threat.status.is_final:
            return self._fail('validate_threat', conflict_error(
                f"threat #{threat_id} is already {threat.status.value}"))

        if verdict:
            self._threats[threat_id] = replace(threat, status=ThreatStatus.VALIDATED)
            reputation = self._reputation.increment(threat.reporter)
            self._log_success(f"Threat #{threat_id} validated by {validator}; "
                              f"{threat.reporter} reputation {reputation}")
        else:
            self._threats[threat_id] = replace(threat, status=ThreatStatus.REJECTED)
            slashes = self._slashed.increment(threat.reporter)
            self._log_success(f"Threat #{threat_id} rejected by {validator}; "
                              f"{threat.reporter} slashed {slashes} time(s)")

        return Result.success(True)

    # -- role management ----------------------------------------------------

    def add_validator(self, caller: str, validator: str) -> Result:
        """Grant validator rights (admin only, idempotent)"""
        if not self.is_admin(caller):
            return self._fail('add_validator', authorization_error(f"{caller} is not the admin"))

        self._validators.add(validator)
        self._log_success(f"Validator added: {validator}")
        return Result.success(True)

    def remove_validator(self, caller: str, validator: str) -> Result:
        """Revoke validator rights (admin only, absent validators are ignored)"""
        if not self.is_admin(caller):
            return self._fail('remove_validator', authorization_error(f"{caller} is not the admin"))

        self._validators.discard(validator)
        self._log_success(f"Validator removed: {validator}")
        return Result.success(True)

    def transfer_admin(self, caller: str, new_admin: str) -> Result:
        """Hand the admin role to another identity (admin only, no format checks)"""
        if not self.is_admin(caller):
            return self._fail('transfer_admin', authorization_error(f"{caller} is not the admin"))

        self._admin = new_admin
        self._log_success(f"Admin transferred from {caller} to {new_admin}")
        return Result.success(True)

    # -- read-only accessors ------------------------------------------------

    @property
    def admin(self) -> str:
        return self._admin

    def is_admin(self, identity: str) -> bool:
        return identity == self._admin

    def is_validator(self, identity: str) -> bool:
        return identity in self._validators

    def get_validators(self) -> List[str]:
        return sorted(self._validators)

    def get_reputation(self, identity: str) -> int:
        return self._reputation.get(identity)

    def get_slash_count(self, identity: str) -> int:
        return self._slashed.get(identity)

    def get_reputation_ledger(self) -> Dict[str, int]:
        return self._reputation.to_dict()

    def get_slash_ledger(self) -> Dict[str, int]:
        return self._slashed.to_dict()

    def get_threats(self, status: Optional[Union[ThreatStatus, str]] = None) -> List[Threat]:
        """
        Get all threats ordered by id

        Args:
            status: Optional status filter

        Returns:
            List of threat records
        """
        threats = [self._threats[threat_id] for threat_id in sorted(self._threats)]
        if status is not None:
            status = ThreatStatus(status)
            threats = [t for t in threats if t.status is status]
        return threats

    def get_threat_count(self) -> int:
        return len(self._threats)

    def get_status_counts(self) -> Dict[str, int]:
        """Number of threats per status (every status present, zero if none)"""
        counts = {status.value: 0 for status in ThreatStatus}
        for threat in self._threats.values():
            counts[threat.status.value] += 1
        return counts

"""
Registry Report Validation

Validates saved registry reports to ensure they conform to the expected format
and that the ledgers agree with the recorded threat outcomes.
"""

import json
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Set

import click
from semantic_version import SimpleSpec, Version

from .models import REPORT_STAKE, Threat, ThreatStatus


# Report format versions this validator understands
SUPPORTED_FORMAT_SPEC = SimpleSpec('>=1.0.0,<2.0.0')

REQUIRED_KEYS = {
    'format_version', 'admin', 'validators', 'total_threats',
    'summary', 'reputation', 'slashed', 'threats',
}


@dataclass
class ReportIssue:
    """A validation problem with context"""
    severity: str  # 'error', 'warning'
    message: str
    threat_id: Optional[int] = None
    field: Optional[str] = None


@dataclass
class ValidationResult:
    """Results of report validation"""
    file_path: Path
    is_valid: bool
    format_version: Optional[str] = None
    errors: List[ReportIssue] = field(default_factory=list)
    warnings: List[ReportIssue] = field(default_factory=list)
    stats: dict = field(default_factory=dict)

    def add_error(self, message: str, threat_id: Optional[int] = None, field: Optional[str] = None):
        self.errors.append(ReportIssue('error', message, threat_id=threat_id, field=field))
        self.is_valid = False

    def add_warning(self, message: str, threat_id: Optional[int] = None, field: Optional[str] = None):
        self.warnings.append(ReportIssue('warning', message, threat_id=threat_id, field=field))

    def has_errors(self) -> bool:
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0


class ReportValidator:
    """
    Validates registry report JSON files

    Checks:
    - File readability and JSON syntax
    - Required top-level keys
    - Format version compatibility
    - Threat entries (fields, status, unique positive ids, stake)
    - Reputation and slash ledgers against validated/rejected threats
    - Summary and total counts against the threat list
    """

    def validate_file(self, file_path: Path) -> ValidationResult:
        """
        Validate a report file

        Args:
            file_path: Path to JSON report

        Returns:
            ValidationResult with errors, warnings, and stats
        """
        result = ValidationResult(file_path=file_path, is_valid=True)

        if not file_path.exists():
            result.add_error(f"File not found: {file_path}")
            return result

        if not file_path.is_file():
            result.add_error(f"Not a file: {file_path}")
            return result

        try:
            content = file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            result.add_error(f"Cannot read file: {e}")
            return result

        if not content.strip():
            result.add_error("File is empty")
            return result

        try:
            report = json.loads(content)
        except json.JSONDecodeError as e:
            result.add_error(f"Invalid JSON: {e}")
            return result

        self.validate_report(report, result)
        return result

    def validate_report(self, report: Any, result: ValidationResult):
        """
        Validate an already-parsed report

        Args:
            report: Parsed JSON document
            result: ValidationResult to populate
        """
        if not isinstance(report, dict):
            result.add_error("Report root must be a JSON object")
            return

        missing = REQUIRED_KEYS - set(report)
        if missing:
            result.add_error(f"Missing required keys: {', '.join(sorted(missing))}")
            return

        if not self._check_format_version(report['format_version'], result):
            return

        threats = self._parse_threats(report['threats'], result)
        if threats is None:
            return

        self._check_counts(report, threats, result)
        self._check_ledger('reputation', report['reputation'], threats, ThreatStatus.VALIDATED, result)
        self._check_ledger('slashed', report['slashed'], threats, ThreatStatus.REJECTED, result)

        status_counts = Counter(t.status.value for t in threats)
        result.stats = {
            'total_threats': len(threats),
            'pending': status_counts.get('pending', 0),
            'validated': status_counts.get('validated', 0),
            'rejected': status_counts.get('rejected', 0),
            'reporters': len({t.reporter for t in threats}),
            'validators': len(report['validators']) if isinstance(report['validators'], list) else 0,
        }

    def _check_format_version(self, raw_version: Any, result: ValidationResult) -> bool:
        """Check the report's format version is one this validator understands"""
        result.format_version = str(raw_version)
        try:
            version = Version(str(raw_version))
        except ValueError:
            result.add_error(f"Invalid format version: '{raw_version}'", field='format_version')
            return False

        if not SUPPORTED_FORMAT_SPEC.match(version):
            result.add_error(
                f"Unsupported format version {version} (supported: {SUPPORTED_FORMAT_SPEC})",
                field='format_version')
            return False

        return True

    def _parse_threats(self, entries: Any, result: ValidationResult) -> Optional[List[Threat]]:
        """
        Parse threat entries, recording errors for malformed ones

        Returns:
            Parsed threats, or None if 'threats' is not a list
        """
        if not isinstance(entries, list):
            result.add_error("'threats' must be a list", field='threats')
            return None

        threats: List[Threat] = []
        seen_ids: Set[int] = set()

        for index, entry in enumerate(entries):
            if not isinstance(entry, dict):
                result.add_error(f"Threat entry {index} is not an object", field='threats')
                continue

            try:
                threat = Threat.from_dict(entry)
            except KeyError as e:
                result.add_error(f"Threat entry {index} is missing field {e}",
                                 threat_id=entry.get('id'), field=str(e).strip("'"))
                continue
            except ValueError as e:
                result.add_error(f"Threat entry {index}: {e}", threat_id=entry.get('id'))
                continue

            if threat.id in seen_ids:
                result.add_error(f"Duplicate threat id {threat.id}", threat_id=threat.id, field='id')
                continue
            seen_ids.add(threat.id)

            if threat.stake != REPORT_STAKE:
                result.add_warning(
                    f"Unexpected stake {threat.stake} (expected {REPORT_STAKE})",
                    threat_id=threat.id, field='stake')

            threats.append(threat)

        return threats

    def _check_counts(self, report: Dict[str, Any], threats: List[Threat], result: ValidationResult):
        """Check total_threats and summary against the threat list"""
        if report['total_threats'] != len(report['threats']):
            result.add_error(
                f"total_threats is {report['total_threats']} but {len(report['threats'])} threats are listed",
                field='total_threats')

        summary = report['summary']
        if not isinstance(summary, dict):
            result.add_error("'summary' must be an object", field='summary')
            return

        actual = Counter(t.status.value for t in threats)
        for status in ThreatStatus:
            declared = summary.get(status.value, 0)
            if declared != actual.get(status.value, 0):
                result.add_error(
                    f"Summary reports {declared} {status.value} threats, found {actual.get(status.value, 0)}",
                    field='summary')

    def _check_ledger(self, name: str, ledger: Any, threats: List[Threat],
                      status: ThreatStatus, result: ValidationResult):
        """Check a per-reporter ledger matches the count of threats with the given outcome"""
        if not isinstance(ledger, dict):
            result.add_error(f"'{name}' must be an object", field=name)
            return

        expected = Counter(t.reporter for t in threats if t.status is status)
        for reporter in sorted(set(expected) | set(ledger)):
            declared = ledger.get(reporter, 0)
            if declared != expected.get(reporter, 0):
                result.add_error(
                    f"{name} for {reporter} is {declared}, but {expected.get(reporter, 0)} "
                    f"threat(s) are {status.value}",
                    field=name)

    def print_result(self, result: ValidationResult, verbose: bool = False):
        """
        Print validation result to console

        Args:
            result: ValidationResult to print
            verbose: If True, show all warnings and details
        """
        click.echo(click.style("\n" + "=" * 80, fg='cyan', bold=True))
        click.echo(click.style("🔍 REGISTRY REPORT VALIDATION", fg='cyan', bold=True))
        click.echo(click.style("=" * 80, fg='cyan', bold=True))

        click.echo(f"\n{click.style('File:', bold=True)} {result.file_path}")
        if result.format_version:
            click.echo(f"{click.style('Format version:', bold=True)} {result.format_version}")

        if result.stats:
            stats = result.stats
            click.echo(f"\n{click.style('Statistics:', bold=True)}")
            click.echo(f"  Threats: {stats.get('total_threats', 0)}")
            click.echo(f"  Pending: {stats.get('pending', 0)}")
            click.echo(f"  Validated: {stats.get('validated', 0)}")
            click.echo(f"  Rejected: {stats.get('rejected', 0)}")
            click.echo(f"  Reporters: {stats.get('reporters', 0)}")
            click.echo(f"  Validators: {stats.get('validators', 0)}")

        if result.has_errors():
            click.echo(click.style(f"\n❌ ERRORS ({len(result.errors)}):", fg='red', bold=True))
            for error in result.errors:
                click.echo(click.style(f"  • {self._format_issue(error)}", fg='red'))

        if result.has_warnings() and (verbose or not result.has_errors()):
            click.echo(click.style(f"\n⚠️  WARNINGS ({len(result.warnings)}):", fg='yellow', bold=True))
            for warning in result.warnings:
                click.echo(click.style(f"  • {self._format_issue(warning)}", fg='yellow'))

        click.echo()
        if result.is_valid:
            click.echo(click.style("✓ VALIDATION PASSED", fg='green', bold=True))
            if result.has_warnings() and not verbose:
                click.echo(click.style(
                    f"  Note: {len(result.warnings)} warning(s) found. Use verbose mode to see details.",
                    fg='yellow', dim=True
                ))
        else:
            click.echo(click.style("✗ VALIDATION FAILED", fg='red', bold=True))

        click.echo(click.style("=" * 80, fg='cyan', bold=True))

    @staticmethod
    def _format_issue(issue: ReportIssue) -> str:
        location = f"Threat #{issue.threat_id}" if issue.threat_id is not None else "Report"
        field_info = f" [{issue.field}]" if issue.field else ""
        return f"{location}{field_info}: {issue.message}"


def validate_report_file(file_path: str, verbose: bool = False) -> bool:
    """
    Validate a saved registry report (convenience function)

    Args:
        file_path: Path to JSON report
        verbose: If True, show all warnings and details

    Returns:
        True if validation passed, False otherwise
    """
    validator = ReportValidator()
    result = validator.validate_file(Path(file_path))
    validator.print_result(result, verbose=verbose)
    return result.is_valid

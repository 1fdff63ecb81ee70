"""Report generation for threat registry state"""

import json
from typing import Any, Dict, List

import click

from .models import Threat, ThreatStatus
from .registry import ThreatRegistry


# Bumped on any incompatible change to the JSON layout
REPORT_FORMAT_VERSION = "1.0.0"

STATUS_COLORS = {
    ThreatStatus.PENDING: 'yellow',
    ThreatStatus.VALIDATED: 'green',
    ThreatStatus.REJECTED: 'red',
}


class ReportEngine:
    """
    Summarizes a registry for console and JSON output

    Supports:
    - Console output with colored formatting, grouped by status
    - JSON export readable by ReportValidator
    """

    def __init__(self, registry: ThreatRegistry):
        self.registry = registry

    def build_report(self) -> Dict[str, Any]:
        """
        Build the JSON-serializable report

        Returns:
            Report dictionary
        """
        threats = self.registry.get_threats()
        return {
            'format_version': REPORT_FORMAT_VERSION,
            'admin': self.registry.admin,
            'validators': self.registry.get_validators(),
            'total_threats': len(threats),
            'summary': self.registry.get_status_counts(),
            'reputation': self.registry.get_reputation_ledger(),
            'slashed': self.registry.get_slash_ledger(),
            'threats': [threat.to_dict() for threat in threats],
        }

    def print_report(self):
        """Print formatted console report"""
        click.echo("\n" + click.style("=" * 80, fg='white', bold=True))
        click.echo(click.style("THREAT REGISTRY REPORT", fg='white', bold=True))
        click.echo(click.style("=" * 80, fg='white', bold=True))

        click.echo(f"{click.style('Admin:', bold=True)} {self.registry.admin}")
        validators = self.registry.get_validators()
        if validators:
            click.echo(f"{click.style('Validators:', bold=True)} {', '.join(validators)}")
        else:
            click.echo(click.style("⚠️  No validators registered", fg='yellow'))

        if not self.registry.get_threat_count():
            click.echo(click.style("\n✓ No threats reported.\n", fg='green', bold=True))
            return

        for status in ThreatStatus:
            threats = self.registry.get_threats(status)
            if threats:
                self._print_status_group(status, threats)

        self._print_ledgers()

    def _print_status_group(self, status: ThreatStatus, threats: List[Threat]):
        """Print all threats sharing a status"""
        color = STATUS_COLORS[status]
        click.echo("\n" + click.style("─" * 80, fg=color))
        click.echo(click.style(f"{status.value.upper()} ({len(threats)}):", fg=color, bold=True))
        click.echo(click.style("─" * 80, fg=color))
        for threat in threats:
            click.echo(f"\n  Threat #{threat.id}: " +
                       click.style(threat.description, fg=color, bold=True))
            click.echo(f"  Reporter: {threat.reporter}")
            click.echo(f"  Target: {threat.target}")
            click.echo(f"  Severity: {threat.severity}")
            click.echo(f"  Stake: {threat.stake}")

    def _print_ledgers(self):
        """Print reputation and slash counts"""
        click.echo("\n" + click.style("=" * 80, fg='white', bold=True))
        counts = self.registry.get_status_counts()
        click.echo(click.style("📊 Summary:", fg='cyan', bold=True))
        click.echo("   • Pending: " + click.style(str(counts['pending']), fg='yellow', bold=True))
        click.echo("   • Validated: " + click.style(str(counts['validated']), fg='green', bold=True))
        click.echo("   • Rejected: " + click.style(str(counts['rejected']), fg='red', bold=True))

        reputation = self.registry.get_reputation_ledger()
        if reputation:
            click.echo("\n   " + click.style("Reputation:", fg='cyan', bold=True))
            for identity, count in reputation.items():
                click.echo(f"   • {identity}: " + click.style(str(count), fg='green', bold=True))

        slashed = self.registry.get_slash_ledger()
        if slashed:
            click.echo("\n   " + click.style("Slashed:", fg='cyan', bold=True))
            for identity, count in slashed.items():
                click.echo(f"   • {identity}: " + click.style(str(count), fg='red', bold=True))

        click.echo()

    def save_report(self, output_file: str) -> bool:
        """
        Save registry state to a JSON file

        Args:
            output_file: Path to output file

        Returns:
            True if saved successfully, False otherwise
        """
        try:
            with open(output_file, 'w', encoding='utf-8') as f:
                json.dump(self.build_report(), f, indent=2)
            return True

        except OSError as e:
            click.echo(click.style(f"✗ Error saving report: {e}", fg='red', bold=True), err=True)
            return False

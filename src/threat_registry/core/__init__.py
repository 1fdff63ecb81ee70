"""Core components for threat reporting and adjudication"""

from .errors import ErrorCode, RegistryError, RegistryOperationError, Result
from .ledger import CountLedger
from .models import REPORT_STAKE, Threat, ThreatStatus
from .registry import ThreatRegistry
from .report_engine import ReportEngine
from .report_validator import ReportValidator, validate_report_file

__all__ = [
    'ErrorCode',
    'RegistryError',
    'RegistryOperationError',
    'Result',
    'CountLedger',
    'REPORT_STAKE',
    'Threat',
    'ThreatStatus',
    'ThreatRegistry',
    'ReportEngine',
    'ReportValidator',
    'validate_report_file',
]

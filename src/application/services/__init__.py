"""Application services - Use case orchestration.

This module contains application services that orchestrate domain
operations and coordinate with infrastructure adapters.

Available services:
- BusinessCalendar: Business-day arithmetic over a holiday catalog
- DeadlineCalculator: Stage deadlines, remaining days and alert levels
- ExtensionRequestService: Extension request and approval workflow
- DeadlineAlertScheduler: Threshold alerts ahead of a deadline
- DeadlineRecomputationService: Derives every stage deadline of a case
- DeadlineReportService: Read-only per-case deadline overview
- DeadlineEngine: Result-returning facade over all of the above
"""

from src.application.services.business_calendar import BusinessCalendar
from src.application.services.deadline_alert_scheduler import (
    ALERT_THRESHOLDS,
    AlertThreshold,
    DeadlineAlertScheduler,
)
from src.application.services.deadline_calculator import DeadlineCalculator
from src.application.services.deadline_engine import CatalogVersions, DeadlineEngine
from src.application.services.deadline_recomputation_service import (
    DeadlineRecomputationService,
    RecomputationResult,
    resolve_start_date,
)
from src.application.services.deadline_report_service import DeadlineReportService
from src.application.services.extension_request_service import (
    MIN_JUSTIFICATION_LENGTH,
    ExtensionRequestService,
)

__all__: list[str] = [
    "ALERT_THRESHOLDS",
    "AlertThreshold",
    "BusinessCalendar",
    "CatalogVersions",
    "DeadlineAlertScheduler",
    "DeadlineCalculator",
    "DeadlineEngine",
    "DeadlineRecomputationService",
    "DeadlineReportService",
    "ExtensionRequestService",
    "MIN_JUSTIFICATION_LENGTH",
    "RecomputationResult",
    "resolve_start_date",
]

"""Domain models for the Karin-law deadline engine.

Contains value objects and domain models that represent
core business concepts. These models are immutable and
contain no infrastructure dependencies.
"""

from src.domain.models.case_timeline import CaseTimeline, ExtensionAudit
from src.domain.models.deadline import AlertLevel, Deadline, DeadlineView
from src.domain.models.deadline_alert import DeadlineAlert
from src.domain.models.deadline_report import DeadlineReport
from src.domain.models.extension_request import Actor, ExtensionRequest, ExtensionStatus
from src.domain.models.holiday_calendar import (
    HolidayCatalog,
    NationalHoliday,
    RegionalHoliday,
)
from src.domain.models.karin_stage import (
    DEFAULT_STAGE_CATALOG,
    DEFAULT_STAGE_CATALOG_VERSION,
    BusinessDayRegime,
    DurationUnit,
    KarinStage,
    StageCatalog,
    StageDefinition,
)
from src.domain.models.operation_result import STORE_FAILURE, OperationResult

__all__: list[str] = [
    "Actor",
    "AlertLevel",
    "BusinessDayRegime",
    "CaseTimeline",
    "DEFAULT_STAGE_CATALOG",
    "DEFAULT_STAGE_CATALOG_VERSION",
    "Deadline",
    "DeadlineAlert",
    "DeadlineReport",
    "DeadlineView",
    "DurationUnit",
    "ExtensionAudit",
    "ExtensionRequest",
    "ExtensionStatus",
    "HolidayCatalog",
    "KarinStage",
    "NationalHoliday",
    "OperationResult",
    "RegionalHoliday",
    "STORE_FAILURE",
    "StageCatalog",
    "StageDefinition",
]

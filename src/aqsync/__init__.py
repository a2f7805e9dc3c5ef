"""aqsync - Async state orchestration for an air-quality dashboard."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("aqsync")
except PackageNotFoundError:
    __version__ = "0+local"
from aqsync.client import AqClient
from aqsync.config import AqConfig
from aqsync.exceptions import (
    AqConfigError,
    AqError,
    AqPayloadError,
    AqSelectionError,
    AqSimulationError,
    AqTransportError,
)
from aqsync.models import (
    Confidence,
    MetricsHistoryEntry,
    Pm25Range,
    Policy,
    PolicyDetail,
    PolicyPriority,
    Readings,
    ReductionRange,
    Sector,
    SectorStatus,
    Severity,
    SimulationResult,
)
from aqsync.orchestrator import SyncOrchestrator
from aqsync.scheduler import PollingScheduler
from aqsync.scroll import RenderCommitHook, ScrollPositionGuard, Viewport
from aqsync.state.events import RequestRefresh, RequestSimulation, SelectSector
from aqsync.state.simulation import SimulationPhase
from aqsync.state.store import DashboardSnapshot

__all__ = [
    "__version__",
    "AqClient",
    "AqConfig",
    "AqConfigError",
    "AqError",
    "AqPayloadError",
    "AqSelectionError",
    "AqSimulationError",
    "AqTransportError",
    "Confidence",
    "DashboardSnapshot",
    "MetricsHistoryEntry",
    "Pm25Range",
    "Policy",
    "PolicyDetail",
    "PolicyPriority",
    "PollingScheduler",
    "Readings",
    "ReductionRange",
    "RenderCommitHook",
    "RequestRefresh",
    "RequestSimulation",
    "ScrollPositionGuard",
    "Sector",
    "SectorStatus",
    "SelectSector",
    "Severity",
    "SimulationPhase",
    "SimulationResult",
    "SyncOrchestrator",
    "Viewport",
]

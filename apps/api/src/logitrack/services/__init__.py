from logitrack.services.coordinates import CoordinateService
from logitrack.services.lifecycle import JobLifecycleManager
from logitrack.services.queries import JobQuery, JobSummary

__all__ = ["CoordinateService", "JobLifecycleManager", "JobQuery", "JobSummary"]

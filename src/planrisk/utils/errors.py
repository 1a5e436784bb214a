"""Custom exception classes for planrisk."""


class PlanRiskError(Exception):
    """Base exception for all planrisk errors."""
    pass


class PlanLoadError(PlanRiskError):
    """Raised when plan input is malformed: not JSON, not a plan, or missing resource_changes."""
    pass


class AnalysisError(PlanRiskError):
    """Raised when risk analysis fails."""
    pass


class ConfigError(PlanRiskError):
    """Raised when rule table configuration is invalid or missing."""
    pass


class ReportError(PlanRiskError):
    """Raised when a report cannot be written or published."""
    pass

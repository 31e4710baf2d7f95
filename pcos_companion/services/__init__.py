"""Services module - session-level orchestration."""

from .companion import CompanionService, build_companion, format_analysis_summary

__all__ = ['CompanionService', 'build_companion', 'format_analysis_summary']

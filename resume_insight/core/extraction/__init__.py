"""
Resume extraction orchestration.
"""

from .orchestrator import ExtractionOrchestrator, get_orchestrator

__all__ = [
    "ExtractionOrchestrator",
    "get_orchestrator",
]

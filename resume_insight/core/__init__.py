"""
Core business logic for Resume Insight.

Modules:
- exceptions: extraction error taxonomy
- extraction: the extraction orchestrator and its run state machine
"""

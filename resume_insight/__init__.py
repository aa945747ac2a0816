"""
Resume Insight - resume extraction pipeline.

Turns uploaded resume documents into structured candidate profiles using a
keyword heuristic parser or an LLM parser, and reconciles the result into
the owner's user profile.
"""

__version__ = "0.1.0"
__app_name__ = "resume-insight"

"""
Database repositories for Resume Insight data access.
"""

# Base repository
from .base import BaseRepository

# Entity repositories
from .resume_repository import ResumeRepository, get_resume_repository
from .user_repository import UserRepository, get_user_repository

__all__ = [
    "BaseRepository",
    "ResumeRepository",
    "get_resume_repository",
    "UserRepository",
    "get_user_repository",
]

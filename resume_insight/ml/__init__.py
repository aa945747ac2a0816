"""
Machine Learning modules for Resume Insight.

Submodules:
- nlp: text extraction, section segmentation and profile parsers
"""

"""
studyslots - free study time between a student's classes.
"""

__version__ = "0.1.0"

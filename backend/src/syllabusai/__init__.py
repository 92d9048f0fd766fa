"""
SyllabusAI - Course document extraction core

Turns free-form course document text into structured topics, deadlines
and learning materials using interchangeable extraction strategies.
"""

__version__ = "0.1.0"

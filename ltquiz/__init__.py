"""
LtQuiz - a quiz question bank manager CLI.
"""

__version__ = "0.1.0"

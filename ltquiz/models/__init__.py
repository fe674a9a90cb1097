"""Data models for LtQuiz."""

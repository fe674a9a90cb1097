"""Storage layer for LtQuiz."""

"""Exception hierarchy for LtQuiz."""


class QuizError(Exception):
    """Base exception for app-specific failures."""


class DispatchError(QuizError):
    """
    A command failed while being dispatched.

    Carries a single formatted diagnostic built from the original
    exception and its cause chain.
    """

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ConfigError(ValueError, QuizError):
    """Configuration loading or validation errors."""


class StorageError(QuizError):
    """Database read/write failures."""


class BuilderConsumedError(RuntimeError):
    """A command builder was used after it had been consumed."""

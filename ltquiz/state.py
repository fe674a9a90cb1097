"""
Shared application state for LtQuiz.
One State is created at startup and handed to every command.
"""

import logging
import threading

logger = logging.getLogger(__name__)


class State:
    """
    Read-mostly handle to the configuration and the database.

    Query results are cached per tag filter. The cache is the only mutable
    part of the state and is guarded by the state's own lock.
    """

    def __init__(self, config, db):
        self.config = config
        self.db = db
        self._cache = {}
        self._lock = threading.Lock()

    def questions(self, has_tags=None, no_tags=None):
        """
        Get questions matching the tag filters, served from the cache when possible.

        Args:
            has_tags (list, optional): Tags of which at least one must be present
            no_tags (list, optional): Tags that must not be present

        Returns:
            list: Matching Question objects
        """
        key = (tuple(has_tags or ()), tuple(no_tags or ()))

        with self._lock:
            if key in self._cache:
                logger.debug("Question cache hit for %s", key)
                return list(self._cache[key])

            logger.debug("Question cache miss for %s", key)
            questions = self.db.find_questions(list(key[0]), list(key[1]))
            self._cache[key] = questions
            return list(questions)

    def invalidate(self):
        """Drop every cached query result."""
        with self._lock:
            self._cache.clear()

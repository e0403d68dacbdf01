"""
Tracks how many recent search requests returned nothing.
"""
import logging
from collections import deque
from typing import List

from .config import load_config, get_setting
from .preprocessing.document import Document
from .tfidf_search.tfidf_search import SearchServer

logger = logging.getLogger(__name__)


class RequestQueue:
    """
    Sliding window over the last ``window_size`` requests.

    Every request goes through ``SearchServer.find_top_documents``; the queue
    only remembers whether the result was empty.
    """

    def __init__(self, search_server: SearchServer, window_size: int = None, config=None):
        if window_size is None:
            config = config if config is not None else search_server.config or load_config()
            window_size = get_setting(config, "request_queue", "window_size")
        if window_size <= 0:
            raise ValueError(f"Window size must be positive, got {window_size}")

        self.search_server = search_server
        self.window_size = int(window_size)
        self.requests = deque(maxlen=self.window_size)  # (raw_query, is_empty)
        self.no_result_requests = 0

    def add_find_request(self, raw_query: str, predicate=None) -> List[Document]:
        """
        Run a search and record whether it found anything.

        Args:
            raw_query: Query text
            predicate: Same as for SearchServer.find_top_documents

        Returns:
            The search results, unchanged
        """
        results = self.search_server.find_top_documents(raw_query, predicate)

        if len(self.requests) == self.window_size:
            _, expired_empty = self.requests[0]
            if expired_empty:
                self.no_result_requests -= 1

        is_empty = not results
        self.requests.append((raw_query, is_empty))
        if is_empty:
            self.no_result_requests += 1
            logger.debug("No results for %r", raw_query)

        return results

    def get_no_result_requests(self) -> int:
        return self.no_result_requests

"""
TF-IDF search module ranking documents by the summed TF-IDF of query words.
"""
from .tfidf_search import InvertedIndex, SearchServer, status_predicate

"""
Line-oriented driver for the search server.

Input format (one item per line):

    stop words separated by spaces
    number of documents N
    N times:
        <id> <status> <rating count> <rating> <rating> ...
        <document text>
    queries, one per line, until end of input

For every query the top documents are printed, one per line.
"""
import argparse
import logging
import sys
from typing import List, TextIO

from SearchServer.config import load_config
from SearchServer.errors import SearchServerError
from SearchServer.preprocessing.document import Document, DocumentStatus
from SearchServer.request_queue import RequestQueue
from SearchServer.tfidf_search.tfidf_search import SearchServer

logger = logging.getLogger(__name__)


def read_line(stream: TextIO) -> str:
    """Read one line without its line terminator ('' at end of input)."""
    return stream.readline().rstrip("\r\n")


def read_line_with_number(stream: TextIO) -> int:
    return int(read_line(stream).strip())


def read_document_header(line: str):
    """
    Parse a document header line.

    Args:
        line: "<id> <status> <rating count> <ratings...>"

    Returns:
        Tuple of (document_id, status, ratings)
    """
    parts = line.split()
    if len(parts) < 3:
        raise ValueError(f"Malformed document header: {line!r}")

    document_id = int(parts[0])
    status = DocumentStatus.parse(parts[1])
    rating_count = int(parts[2])
    ratings = [int(value) for value in parts[3:3 + rating_count]]
    if len(ratings) != rating_count:
        raise ValueError(f"Expected {rating_count} ratings in header: {line!r}")

    return document_id, status, ratings


def load_search_server(stream: TextIO, config=None) -> SearchServer:
    """Build a search server from the stop word line and the document block."""
    search_server = SearchServer(read_line(stream), config=config)

    document_count = read_line_with_number(stream)
    for _ in range(document_count):
        document_id, status, ratings = read_document_header(read_line(stream))
        search_server.add_document(document_id, read_line(stream), status, ratings)

    logger.info("Indexed %d documents", search_server.get_document_count())
    return search_server


def print_document(document: Document, out: TextIO = sys.stdout):
    print(str(document), file=out)


def run_queries(request_queue: RequestQueue, stream: TextIO, out: TextIO = sys.stdout):
    for line in stream:
        raw_query = line.rstrip("\r\n")
        try:
            documents = request_queue.add_find_request(raw_query)
        except SearchServerError as e:
            print(f"Error: {e}", file=out)
            continue

        print(f"Query: {raw_query}", file=out)
        for document in documents:
            print_document(document, out)

    print(f"Requests without results: {request_queue.get_no_result_requests()}", file=out)


def run_demo(out: TextIO = sys.stdout) -> List[Document]:
    """Index a few sample documents and print searches with each kind of filter."""
    search_server = SearchServer("и в на", config=load_config())
    search_server.add_document(4, "белый кот и модный ошейник", DocumentStatus.ACTUAL, [8, -3])
    search_server.add_document(2, "пушистый кот пушистый хвост", DocumentStatus.ACTUAL, [7, 2, 7])
    search_server.add_document(3, "ухоженный пёс выразительные глаза", DocumentStatus.ACTUAL, [5, -12, 2, 1])
    search_server.add_document(1, "ухоженный скворец евгений", DocumentStatus.BANNED, [9])

    query = "пушистый ухоженный кот"
    shown = []

    print("ACTUAL by default:", file=out)
    for document in search_server.find_top_documents(query):
        print_document(document, out)
        shown.append(document)

    print("BANNED:", file=out)
    for document in search_server.find_top_documents(query, DocumentStatus.BANNED):
        print_document(document, out)
        shown.append(document)

    print("Even ids:", file=out)
    for document in search_server.find_top_documents(
        query, lambda document_id, status, rating: document_id % 2 == 0
    ):
        print_document(document, out)
        shown.append(document)

    return shown


def main(argv=None):
    parser = argparse.ArgumentParser(description="SearchServer line-oriented driver")
    parser.add_argument("--input", help="Read input from a file instead of stdin")
    parser.add_argument("--config", help="Path to a config.json file")
    parser.add_argument("--demo", action="store_true", help="Run the built-in sample")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.demo:
        run_demo()
        return 0

    config = load_config(args.config)
    try:
        stream = open(args.input, "r", encoding="utf-8") if args.input else sys.stdin
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        search_server = load_search_server(stream, config=config)
        run_queries(RequestQueue(search_server, config=config), stream)
    except (SearchServerError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        if stream is not sys.stdin:
            stream.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())

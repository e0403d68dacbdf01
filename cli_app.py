#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
SearchServer - CLI Interface
A command-line interface for searching an in-memory document collection
"""

import os
import sys
import json
import time
import argparse
import logging
from typing import List

# Add the project root directory to Python path
sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TimeElapsedColumn
from rich import box

# Import SearchServer modules
from SearchServer.config import load_config, get_setting
from SearchServer.errors import SearchServerError
from SearchServer.paginator import paginate
from SearchServer.preprocessing.document import Document, DocumentStatus
from SearchServer.request_queue import RequestQueue
from SearchServer.tfidf_search.tfidf_search import SearchServer

# Initialize rich console
console = Console()

logger = logging.getLogger("SearchServer.cli")


class SearchServerCLI:
    def __init__(self, config=None):
        """Initialize the CLI interface"""
        self.config = config or load_config()
        self.documents = []
        self.search_server = None
        self.request_queue = None
        self.page_size = get_setting(self.config, "paginator", "page_size")

    def print_header(self):
        """Display the application header"""
        console.print(Panel(
            "[bold blue]SearchServer[/bold blue] [yellow]TF-IDF Search[/yellow]",
            border_style="blue",
            subtitle="Keyword search with stop words and minus words",
            width=80
        ))

    def load_documents(self, documents_path: str) -> bool:
        """Load documents from a JSON file"""
        try:
            console.print(f"Loading documents from: [cyan]{documents_path}[/cyan]")
            with open(documents_path, 'r', encoding='utf-8') as f:
                self.documents = json.load(f)

            console.print(f"[green]Successfully loaded [bold]{len(self.documents)}[/bold] documents[/green]")
            return True

        except (OSError, json.JSONDecodeError) as e:
            console.print(f"[bold red]Error loading documents:[/bold red] {str(e)}")
            return False

    def init_search_server(self, stop_words: str = "") -> bool:
        """Build the index from the loaded documents"""
        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TimeElapsedColumn(),
                console=console
            ) as progress:
                task = progress.add_task("Indexing documents...", total=len(self.documents))

                self.search_server = SearchServer(stop_words, config=self.config)
                for doc_data in self.documents:
                    self.search_server.add_documents([doc_data])
                    progress.advance(task)

            self.request_queue = RequestQueue(self.search_server, config=self.config)
            logger.debug("Index holds %d distinct words", len(self.search_server.inverted_index))
            console.print(
                f"[green]Indexed [bold]{self.search_server.get_document_count()}[/bold] documents[/green]"
            )
            return True

        except (SearchServerError, ValueError, KeyError) as e:
            console.print(f"[bold red]Error building index:[/bold red] {str(e)}")
            self.search_server = None
            return False

    def search(self, query: str, status: DocumentStatus = None) -> List[Document]:
        """Run a query through the request queue"""
        if not self.request_queue:
            console.print("[bold red]Search server not initialized.[/bold red]")
            return []

        console.print(f"Executing search: '[cyan]{query}[/cyan]'")

        try:
            start_time = time.time()
            results = self.request_queue.add_find_request(query, status)
            execution_time = time.time() - start_time

            console.print(f"[green]Found {len(results)} documents in {execution_time:.6f} seconds[/green]")
            return results

        except SearchServerError as e:
            console.print(f"[bold red]Invalid query:[/bold red] {str(e)}")
            return []

    def match(self, query: str, document_id: int):
        """Show which query words match a document"""
        if not self.search_server:
            console.print("[bold red]Search server not initialized.[/bold red]")
            return

        try:
            words, status = self.search_server.match_document(query, document_id)
        except SearchServerError as e:
            console.print(f"[bold red]Cannot match document:[/bold red] {str(e)}")
            return

        matched = ", ".join(words) if words else "[dim]<no matching words>[/dim]"
        console.print(Panel(
            f"[bold cyan]Document:[/bold cyan] {document_id}\n"
            f"[bold cyan]Status:[/bold cyan] {status.name}\n"
            f"[bold cyan]Matched words:[/bold cyan] {matched}",
            title="[bold]Match[/bold]",
            border_style="green",
            expand=False
        ))

    def display_results(self, results: List[Document]):
        """Display search results page by page"""
        if not results:
            console.print("[yellow]No results found.[/yellow]")
            return

        pages = paginate(results, self.page_size)
        position = 1
        for page_number, page in enumerate(pages, 1):
            table = Table(
                box=box.HEAVY_EDGE,
                show_header=True,
                header_style="bold magenta",
                title=f"[bold]Page {page_number} of {len(pages)}[/bold]",
                title_style="yellow"
            )
            table.add_column("#", style="dim", width=4)
            table.add_column("Document", style="cyan bold")
            table.add_column("Relevance", style="yellow")
            table.add_column("Rating", style="green", justify="right")

            for document in page:
                table.add_row(
                    str(position),
                    str(document.id),
                    f"{document.relevance:.6f}",
                    str(document.rating),
                    style="on blue" if position == 1 else ""
                )
                position += 1

            console.print(table)

    def show_statistics(self):
        """Display index statistics"""
        if not self.search_server:
            console.print("[bold red]Search server not initialized.[/bold red]")
            return

        stop_words = " ".join(sorted(self.search_server.stop_words)) or "<none>"
        console.print(Panel(
            f"[bold cyan]Documents:[/bold cyan] {self.search_server.get_document_count()}\n"
            f"[bold cyan]Distinct words:[/bold cyan] {len(self.search_server.inverted_index)}\n"
            f"[bold cyan]Stop words:[/bold cyan] {stop_words}\n"
            f"[bold cyan]Requests without results:[/bold cyan] "
            f"{self.request_queue.get_no_result_requests()} "
            f"(last {self.request_queue.window_size} requests)",
            title="[bold]Statistics[/bold]",
            border_style="yellow",
            expand=False
        ))

    def interactive_mode(self):
        """Run the application in interactive mode"""
        while True:
            console.rule("[bold blue]SearchServer[/bold blue]")

            menu_table = Table(show_header=False, box=box.SIMPLE)
            menu_table.add_column("Option", style="dim")
            menu_table.add_column("Description", style="yellow")

            menu_table.add_row("1", "Search ACTUAL documents")
            menu_table.add_row("2", "Search by status")
            menu_table.add_row("3", "Match document")
            menu_table.add_row("4", "Show statistics")
            menu_table.add_row("5", "Quit")

            console.print("\n[bold cyan]Available Actions:[/bold cyan]")
            console.print(menu_table)

            choice = console.input("\n[bold cyan]Enter choice (1-5): [/bold cyan]")

            if choice == '5' or choice.lower() == 'quit':
                break

            if choice == '4':
                self.show_statistics()
                continue

            if choice not in ['1', '2', '3']:
                console.print("[bold red]Invalid choice. Please enter a number between 1 and 5.[/bold red]")
                continue

            query = console.input("\nEnter search query: ")

            if choice == '1':
                self.display_results(self.search(query))

            elif choice == '2':
                status_input = console.input(
                    f"Status ({', '.join(s.name for s in DocumentStatus)}): "
                )
                try:
                    status = DocumentStatus.parse(status_input)
                except ValueError as e:
                    console.print(f"[bold red]{e}[/bold red]")
                    continue
                self.display_results(self.search(query, status))

            else:
                document_id = console.input("Document id: ")
                if not document_id.strip().lstrip('-').isdigit():
                    console.print("[bold red]Document id must be a number.[/bold red]")
                    continue
                self.match(query, int(document_id))


def main():
    """Main entry point for the CLI application"""
    parser = argparse.ArgumentParser(
        description='SearchServer - TF-IDF keyword search with stop words and minus words'
    )
    parser.add_argument('--documents', required=True,
                        help='Path to documents JSON file ([{"id", "text", "status", "ratings"}])')
    parser.add_argument('--stop-words', default='',
                        help='Stop words separated by spaces')
    parser.add_argument('--config', help='Path to config.json')
    parser.add_argument('--query', help='Query string to search for')
    parser.add_argument('--status', choices=[s.name for s in DocumentStatus],
                        help='Only return documents with this status (default: ACTUAL)')
    parser.add_argument('--match', type=int, metavar='DOCUMENT_ID',
                        help='Show which query words match this document')
    parser.add_argument('--interactive', action='store_true',
                        help='Run in interactive mode')
    parser.add_argument('--debug', action='store_true',
                        help='Show debug log messages')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)]
    )

    cli = SearchServerCLI(config=load_config(args.config))
    cli.print_header()

    if not cli.load_documents(args.documents):
        sys.exit(1)

    if not cli.init_search_server(args.stop_words):
        sys.exit(1)

    if args.interactive or not args.query:
        cli.interactive_mode()
        return

    if args.match is not None:
        cli.match(args.query, args.match)
        return

    status = DocumentStatus.parse(args.status) if args.status else None
    cli.display_results(cli.search(args.query, status))


if __name__ == "__main__":
    main()

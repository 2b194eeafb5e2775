"""
TextSearchEngine - command-line interface.

Upload text files, index them into TF / TF-IDF matrices and rank them against
free-text queries with dot product or cosine similarity.
"""
import argparse
import json
import logging
import sys
import time
from typing import Dict, List, Optional, Tuple

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from .config import load_config, with_language
from .errors import SearchEngineError
from .session import DEFAULT_EXTENSIONS, SearchSession
from .tfidf_search.matrix import TermMatrix
from .tfidf_search.similarity import METRIC_COSINE, METRIC_DOT, METRICS

console = Console()
logger = logging.getLogger(__name__)

METRIC_LABELS = {
    METRIC_DOT: "Dot Product",
    METRIC_COSINE: "Cosine Similarity",
}


def format_number(num: float) -> str:
    return f"{num:.4f}"


class TextSearchCLI:
    def __init__(self, session: Optional[SearchSession] = None, config: Optional[dict] = None,
                 console: Console = console):
        """Initialize the CLI interface around a search session"""
        self.console = console
        self.config = config
        self.session = session if session is not None else SearchSession(config=config)
        self.results_by_metric: Dict[str, List[Tuple[str, float]]] = {}

    def print_header(self):
        """Display the application header"""
        self.console.print(Panel(
            "[bold blue]Text Search Engine[/bold blue]",
            border_style="blue",
            subtitle="Upload text files, index them, and search using TF-IDF",
            width=80
        ))

    def upload(self, paths: List[str], extensions=DEFAULT_EXTENSIONS) -> bool:
        """Upload files and directories into the session"""
        added, failed = self.session.load_files(paths, extensions=extensions)

        for path, error in failed:
            self.console.print(f"[yellow]Skipped [cyan]{escape(path)}[/cyan]: {escape(str(error))}[/yellow]")

        if added:
            self.console.print(f"[green]Uploaded [bold]{len(added)}[/bold] file(s)[/green]")
            self.show_uploaded()
        elif not failed:
            self.console.print("[yellow]No matching files found.[/yellow]")

        return bool(added)

    def show_uploaded(self):
        """List the uploaded documents"""
        documents = self.session.corpus.documents
        if not documents:
            self.console.print("[dim]No documents uploaded yet.[/dim]")
            return

        table = Table(title="[bold]Uploaded Files[/bold]", box=box.ROUNDED, header_style="bold magenta")
        table.add_column("#", style="dim")
        table.add_column("📑 Document", style="cyan")
        table.add_column("Size", style="green", justify="right")
        table.add_column("Preview", style="dim")

        for i, document in enumerate(documents, 1):
            table.add_row(str(i), escape(document.name), f"{len(document.content)} chars", escape(document.snippet(60)))

        self.console.print(table)

    def index_documents(self, workers: Optional[int] = None) -> bool:
        """Index all uploaded documents with a progress bar"""
        if not self.session.can_index:
            self.console.print("[bold red]No documents uploaded. Upload files first.[/bold red]")
            return False

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TextColumn("{task.percentage:>3.0f}%"),
            TimeElapsedColumn(),
            console=self.console
        ) as progress:
            task = progress.add_task("Indexing files...", total=100, completed=10)

            def report(percent, stage):
                progress.update(task, completed=percent, description=stage)

            result = self.session.index(progress=report, workers=workers)

        self.results_by_metric = {}
        self.console.print(
            f"[green]Indexed [bold]{result.document_count}[/bold] documents, "
            f"[bold]{len(result.vocabulary)}[/bold] terms in {result.build_time:.3f} seconds[/green]"
        )
        return True

    def display_matrix(self, matrix: Optional[TermMatrix], title: str, max_rows: Optional[int] = None):
        """Display a term-by-document matrix as a table"""
        if matrix is None:
            self.console.print("[bold red]Documents are not indexed yet.[/bold red]")
            return

        if matrix.is_empty:
            self.console.print(f"[yellow]{title}: no terms in the index.[/yellow]")
            return

        table = Table(
            box=box.HEAVY_EDGE,
            show_header=True,
            header_style="bold magenta",
            title=f"[bold]{title}[/bold]",
            title_style="yellow"
        )
        table.add_column("Term", style="cyan bold")
        for name in matrix.document_names:
            table.add_column(escape(name), justify="right")

        for i, (term, values) in enumerate(matrix.rows()):
            if max_rows is not None and i >= max_rows:
                break
            table.add_row(escape(term), *[
                format_number(value) if value > 0 else f"[dim]{format_number(value)}[/dim]"
                for value in values
            ])

        self.console.print(table)
        if max_rows is not None and len(matrix) > max_rows:
            self.console.print(f"[dim]Showing {max_rows} of {len(matrix)} terms.[/dim]")

    def search(self, query: str, metric: str = METRIC_DOT) -> List[Tuple[str, float]]:
        """Rank documents against a query"""
        self.console.print(f"Executing {METRIC_LABELS.get(metric, metric)} search: '[cyan]{escape(query)}[/cyan]'")

        start_time = time.time()
        results = self.session.search(query, metric)
        execution_time = time.time() - start_time

        if not self.session.last_query_vector:
            self.console.print("[yellow]The query has no searchable terms; every score is 0.[/yellow]")

        self.console.print(f"[green]Scored {len(results)} documents in {execution_time:.6f} seconds[/green]")
        self.results_by_metric[metric] = results
        return results

    def display_results(self, results: List[Tuple[str, float]], metric: str, top: Optional[int] = None):
        """Display search results in a formatted way"""
        if not results:
            self.console.print("[yellow]No results.[/yellow]")
            return

        shown = results if top is None else results[:top]
        timestamp = time.strftime("%H:%M:%S")
        table = Table(
            box=box.HEAVY_EDGE,
            show_header=True,
            header_style="bold magenta",
            title=f"[bold]{METRIC_LABELS.get(metric, metric)} ranking ({timestamp})[/bold]",
            title_style="yellow"
        )
        table.add_column("Rank", style="dim", width=6)
        table.add_column("📑 Document", style="cyan bold")
        table.add_column("🔢 Score", style="yellow", justify="right")

        for i, (name, score) in enumerate(shown):
            score_str = format_number(score)
            if score > 0.7:
                score_display = f"[bold green]{score_str}[/bold green]"
            elif score > 0.4:
                score_display = f"[yellow]{score_str}[/yellow]"
            else:
                score_display = f"[dim]{score_str}[/dim]"

            # Highlight the row for the top result
            row_style = "on blue" if i == 0 and score > 0 else ""
            table.add_row(str(i + 1), escape(name), score_display, style=row_style)

        self.console.print(table)
        if len(shown) < len(results):
            self.console.print(f"[dim]Showing {len(shown)} of {len(results)} documents.[/dim]")

    def export(self, path: str):
        """Write the matrices and the collected rankings to a JSON file"""
        result = self.session.index_result
        data = {
            "metadata": {
                "creation_date": time.strftime("%Y-%m-%d %H:%M:%S"),
                "query": self.session.last_query,
            },
            "index": result.to_dict() if result else None,
            "results": {
                metric: [[name, score] for name, score in results]
                for metric, results in self.results_by_metric.items()
            },
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        self.console.print(f"[green]Exported index to [cyan]{escape(path)}[/cyan][/green]")

    def interactive_mode(self, top: Optional[int] = None, workers: Optional[int] = None):
        """Run the application in interactive mode"""
        while True:
            self.console.rule("[bold blue]Text Search Engine[/bold blue]")

            options = [
                ("1", "Upload files", True),
                ("2", "Index files", self.session.can_index),
                ("3", "Show TF-IDF table", self.session.index_result is not None),
                ("4", "Show TF table", self.session.index_result is not None),
                ("5", "Search", self.session.can_search),
                ("6", "Quit", True),
            ]

            table = Table(show_header=False, box=box.ROUNDED)
            table.add_column("#", style="bold cyan")
            table.add_column("Action")
            for key, label, enabled in options:
                table.add_row(key, label if enabled else f"[dim]{label}[/dim]")
            self.console.print(table)

            choice = self.console.input("[bold cyan]Enter choice (1-6): [/bold cyan]").strip()
            enabled = {key for key, _, is_enabled in options if is_enabled}

            if choice == "6" or choice.lower() in ("q", "quit", "exit"):
                break

            if choice not in enabled:
                self.console.print("[yellow]Invalid or unavailable choice. Please try again.[/yellow]")
                continue

            try:
                if choice == "1":
                    raw = self.console.input("Files or directories (space separated): ").strip()
                    if raw:
                        self.upload(raw.split())
                elif choice == "2":
                    if self.index_documents(workers=workers):
                        self.display_matrix(self.session.tfidf_matrix, "Term Frequency - Inverse Document Frequency")
                elif choice == "3":
                    self.display_matrix(self.session.tfidf_matrix, "Term Frequency - Inverse Document Frequency")
                elif choice == "4":
                    self.display_matrix(self.session.tf_matrix, "Term Frequency")
                elif choice == "5":
                    query = self.console.input("Search query: ").strip()
                    if not query:
                        self.console.print("[yellow]Empty query. Please try again.[/yellow]")
                        continue
                    metric_choice = self.console.input("Metric - 1. Dot Product  2. Cosine Similarity (default: 1): ").strip()
                    metric = METRIC_COSINE if metric_choice == "2" else METRIC_DOT
                    self.display_results(self.search(query, metric), metric, top)
            except SearchEngineError as e:
                self.console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")


def setup_logging(verbosity: int = 0, console: Console = console):
    """Route library logging through rich"""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Text Search Engine - TF-IDF indexing with dot product and cosine ranking'
    )
    parser.add_argument('--files', nargs='+', default=[], metavar='PATH',
                        help='Text files or directories to upload')
    parser.add_argument('--ext', nargs='+', default=list(DEFAULT_EXTENSIONS),
                        help='File extensions accepted inside directories')
    parser.add_argument('--query', help='Query string to search for')
    parser.add_argument('--metric', choices=list(METRICS) + ['both'], default='both',
                        help='Similarity metric used for ranking')
    parser.add_argument('--top', type=int, default=None,
                        help='Number of ranked documents to display (all by default)')
    parser.add_argument('--show', choices=['tf', 'tfidf', 'both', 'none'], default='none',
                        help='Print the TF and/or TF-IDF matrix after indexing')
    parser.add_argument('--max-rows', type=int, default=None,
                        help='Maximum number of matrix rows to print')
    parser.add_argument('--language', choices=['fr', 'en'],
                        help='Stemming and stop-word language (overrides the configuration)')
    parser.add_argument('--config', help='Path to a configuration JSON file')
    parser.add_argument('--workers', type=int, default=None,
                        help='Threads used to tokenize documents')
    parser.add_argument('--export', metavar='PATH',
                        help='Write matrices and rankings to a JSON file')
    parser.add_argument('--interactive', action='store_true',
                        help='Run in interactive mode')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Increase log verbosity (-v info, -vv debug)')
    return parser


def main(argv=None, console: Console = console) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose, console)
    logger.debug("Arguments: %s", vars(args))

    try:
        config = load_config(args.config)
        if args.language:
            config = with_language(config, args.language)
        cli = TextSearchCLI(config=config, console=console)
    except SearchEngineError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        return 1

    cli.print_header()

    if args.files:
        cli.upload(args.files, extensions=args.ext)

    if args.interactive:
        cli.interactive_mode(top=args.top, workers=args.workers)
        return 0

    if not (args.query or args.show != 'none' or args.export):
        if not args.files:
            build_parser().print_usage()
        return 0

    try:
        if not cli.index_documents(workers=args.workers):
            return 1

        if args.show in ('tfidf', 'both'):
            cli.display_matrix(cli.session.tfidf_matrix, "Term Frequency - Inverse Document Frequency",
                               max_rows=args.max_rows)
        if args.show in ('tf', 'both'):
            cli.display_matrix(cli.session.tf_matrix, "Term Frequency", max_rows=args.max_rows)

        if args.query:
            metrics = METRICS if args.metric == 'both' else (args.metric,)
            for metric in metrics:
                cli.display_results(cli.search(args.query, metric), metric, args.top)

        if args.export:
            cli.export(args.export)
    except (SearchEngineError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Command-line interface for the word ladder solver."""

import argparse
import logging
import sys
import time
from typing import Callable, List, Optional, Tuple

from ..core.lexicon import Lexicon, normalize_word
from ..core.ladder import InvalidInputError, LadderSearch, SearchConfig, SearchResult
from ..core.metrics import MetricsAggregator, MetricsExporter, SearchMetrics
from ..core.word_graph import WordGraph

SOURCE_PROMPT = "Please enter the source word [return to quit]: "
DESTINATION_PROMPT = "Please enter the destination word [return to quit]: "
NOT_A_WORD = "Your response needs to be an English word, so please try again."


class CLIWordLadder:
    """Command-line interface for finding word ladders."""

    def __init__(self, lexicon: Lexicon, config: Optional[SearchConfig] = None):
        """Initialize CLI interface.

        Args:
            lexicon: Dictionary used for validation and search
            config: Optional search configuration
        """
        self.lexicon = lexicon
        self.config = config or SearchConfig()
        self.engine = LadderSearch(lexicon, self.config)
        self._graphs = {}

    def solve(
        self,
        start: str,
        end: str,
        verify: bool = False,
        device: str = "cpu",
        verbose: bool = False,
    ) -> SearchResult:
        """Find a ladder between two words.

        Args:
            start: Source word
            end: Destination word
            verify: Cross-check the ladder length against an independent BFS
            device: Device for the verification graph ('cpu' or 'cuda')
            verbose: Print search details

        Returns:
            SearchResult from the engine

        Raises:
            RuntimeError: If verification disagrees with the search
        """
        result = self.engine.run(start, end)

        if verbose:
            print(f"Search {normalize_word(start)} -> {normalize_word(end)}: {format_reason(result)}")
            print(f"  Expanded: {result.expanded}, visited: {result.visited}, "
                  f"duration: {result.duration_seconds:.3f}s")

        if verify and result.reason in ("found", "exhausted"):
            self._verify(result, normalize_word(start), normalize_word(end), device, verbose)

        return result

    def _verify(self, result: SearchResult, start: str, end: str, device: str, verbose: bool) -> None:
        """Compare the engine's answer with the tensor word graph distance."""
        graph = self._get_graph(len(start), device)
        distance = graph.distance(start, end)
        expected = distance + 1 if distance is not None else 0

        if expected != result.length:
            raise RuntimeError(
                f"Verification failed for {start} -> {end}: "
                f"search gave {result.length} words, graph distance implies {expected}"
            )
        if verbose:
            print(f"  Verified: shortest ladder has {expected} words")

    def _get_graph(self, length: int, device: str) -> WordGraph:
        key = (length, device)
        if key not in self._graphs:
            self._graphs[key] = WordGraph(self.lexicon, length, device=device)
        return self._graphs[key]

    def run_pairs(
        self,
        pairs: List[Tuple[str, str]],
        verify: bool = False,
        device: str = "cpu",
        verbose: bool = False,
    ) -> List[SearchMetrics]:
        """Solve a list of word pairs and collect metrics for each.

        Args:
            pairs: (start, end) word pairs
            verify: Cross-check each ladder against an independent BFS
            device: Device for verification graphs
            verbose: Print progress updates

        Returns:
            One SearchMetrics per pair, in input order. Pairs rejected in
            strict mode are recorded with reason 'invalid' and the error
            message under custom_metrics['error'].
        """
        metrics = []
        for run_id, (start, end) in enumerate(pairs):
            try:
                result = self.solve(start, end, verify=verify, device=device)
            except InvalidInputError as exc:
                result = SearchResult(reason="invalid")
                m = SearchMetrics.from_result(run_id, start, end, result)
                m.custom_metrics["error"] = str(exc)
                metrics.append(m)
                print(f"Skipping {start} -> {end}: {exc}")
                continue

            m = SearchMetrics.from_result(run_id, start, end, result)
            if verify and result.reason in ("found", "exhausted"):
                s, e = normalize_word(start), normalize_word(end)
                m.custom_metrics["graph_distance"] = self._get_graph(len(s), device).distance(s, e)
            metrics.append(m)
            if verbose:
                print(f"[{run_id + 1}/{len(pairs)}] {start} -> {end}: {format_ladder(result.ladder)}")
        return metrics

    def get_word(self, prompt: str, input_func: Callable[[str], str] = input) -> str:
        """Prompt until the response is empty or a dictionary word."""
        while True:
            try:
                response = normalize_word(input_func(prompt))
            except EOFError:
                return ""
            if not response or self.lexicon.contains(response):
                return response
            print(NOT_A_WORD)

    def play(self, input_func: Callable[[str], str] = input) -> None:
        """Run the interactive prompt loop until the user enters nothing."""
        print("Welcome to the CS106 word ladder application!")
        print()
        while True:
            start = self.get_word(SOURCE_PROMPT, input_func)
            if not start:
                break
            end = self.get_word(DESTINATION_PROMPT, input_func)
            if not end:
                break
            try:
                result = self.engine.run(start, end)
            except InvalidInputError as e:
                print(f"Error: {e}")
                continue
            print(format_ladder(result.ladder))
        print("Thanks for playing!")


def format_ladder(ladder: List[str]) -> str:
    """Format a ladder for display.

    Args:
        ladder: Words from start to end

    Returns:
        Words joined by arrows, or a notice when the ladder is empty
    """
    if not ladder:
        return "No ladder found"
    return " -> ".join(ladder)


def format_reason(result: SearchResult) -> str:
    """Format the search finish reason for display.

    Args:
        result: Finished search

    Returns:
        Formatted reason string
    """
    reason = result.reason
    if reason == "found":
        return f"Ladder found - {result.length} words"
    elif reason == "trivial":
        return "Start and end are the same word"
    elif reason == "exhausted":
        return f"No ladder exists - explored {result.visited} words"
    elif reason == "invalid":
        return "No ladder possible - words differ in length or are not in the dictionary"
    elif reason == "max_steps":
        return f"Step budget reached ({result.expanded} expansions)"
    elif reason == "time_limit":
        return f"Time limit reached ({result.duration_seconds:.2f}s)"
    else:
        return f"Unknown reason: {reason}"


def read_pairs(path: str) -> List[Tuple[str, str]]:
    """Read word pairs from a file with one 'start end' pair per line.

    Blank lines and lines starting with '#' are ignored.

    Raises:
        ValueError: If a line does not hold exactly two words
    """
    pairs = []
    with open(path, "r") as f:
        for line_no, line in enumerate(f, start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            parts = line.split()
            if len(parts) != 2:
                raise ValueError(f"{path}:{line_no}: expected 'start end', got {line!r}")
            pairs.append((parts[0], parts[1]))
    return pairs


def print_summary(summary: dict) -> None:
    """Print aggregate statistics for a batch of searches."""
    if not summary:
        return

    total = summary["total_runs"]
    found = summary["found_count"]
    print(f"\nSummary: {found}/{total} ladders found")

    for reason, count in sorted(summary["reasons"].items()):
        percentage = (count / total) * 100
        print(f"  {reason}: {count} ({percentage:.1f}%)")

    if summary["ladder_length_distribution"]:
        print("  Ladder lengths:")
        for length, count in summary["ladder_length_distribution"].items():
            print(f"    {length} words: {count}")
        stats = summary["ladder_length_stats"]
        print(f"  Mean length: {stats['mean']:.2f} (std {stats['std']:.2f})")

    print(f"  Mean nodes expanded: {summary['expanded_stats']['mean']:.1f}")
    print(f"  Total search time: {summary['duration_stats']['total']:.3f}s")


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Find shortest word ladders between English words",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Interactive mode, prompting for word pairs
  wordladder-cli

  # Solve a single pair
  wordladder-cli --start cold --end warm

  # Use a custom dictionary and verify the answer with an independent search
  wordladder-cli -d words.txt -s head -e tail --verify

  # Solve many pairs and export metrics
  wordladder-cli --pairs pairs.txt --export results.json

  # Give up after 5000 expansions
  wordladder-cli -s cat -e dog --max-steps 5000
        """,
    )

    parser.add_argument(
        "-d",
        "--dictionary",
        type=str,
        help="Newline-delimited word list (default: bundled dictionary)",
    )

    parser.add_argument("-s", "--start", type=str, help="Source word")

    parser.add_argument("-e", "--end", type=str, help="Destination word")

    parser.add_argument(
        "--pairs",
        type=str,
        help="File with one 'start end' pair per line to solve in batch",
    )

    # Search budget
    parser.add_argument(
        "--max-steps",
        type=int,
        help="Maximum number of words to expand before giving up",
    )

    parser.add_argument(
        "--time-limit",
        type=float,
        help="Maximum search time in seconds before giving up",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject words of different lengths or with non-letters as errors",
    )

    # Verification
    parser.add_argument(
        "--verify",
        action="store_true",
        help="Cross-check ladder lengths with an independent tensor BFS",
    )

    parser.add_argument(
        "--device",
        type=str,
        default="cpu",
        choices=["cpu", "cuda"],
        help="Device to run tensor computations on (default: cpu)",
    )

    parser.add_argument(
        "--export",
        type=str,
        help="Write batch metrics to this .json or .csv file",
    )

    parser.add_argument("-v", "--verbose", action="store_true", help="Print detailed output")

    return parser


def validate_args(args: argparse.Namespace) -> bool:
    """Validate command-line arguments.

    Args:
        args: Parsed arguments

    Returns:
        True if arguments are valid
    """
    errors = []

    if (args.start is None) != (args.end is None):
        errors.append("--start and --end must be given together")

    if args.pairs and args.start is not None:
        errors.append("--pairs cannot be combined with --start/--end")

    if args.max_steps is not None and args.max_steps <= 0:
        errors.append("Max steps must be positive")

    if args.time_limit is not None and args.time_limit <= 0:
        errors.append("Time limit must be positive")

    if args.export:
        if not args.pairs:
            errors.append("--export requires --pairs")
        elif not args.export.endswith((".json", ".csv")):
            errors.append("Export file must end in .json or .csv")

    if errors:
        print("Error: Invalid arguments:")
        for error in errors:
            print(f"  - {error}")
        return False

    return True


def main() -> int:
    """Main entry point for CLI interface.

    Returns:
        Exit code (0 for success, 1 for error or no ladder)
    """
    parser = create_parser()
    args = parser.parse_args()

    if not validate_args(args):
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    config = SearchConfig(max_steps=args.max_steps, time_limit=args.time_limit, strict=args.strict)

    try:
        lexicon = Lexicon.from_file(args.dictionary) if args.dictionary else Lexicon.default()
        if args.verbose:
            print(f"Loaded {len(lexicon)} words")

        cli = CLIWordLadder(lexicon, config)

        if args.pairs:
            pairs = read_pairs(args.pairs)
            start_time = time.time()
            metrics = cli.run_pairs(pairs, verify=args.verify, device=args.device, verbose=args.verbose)
            elapsed = time.time() - start_time

            if not args.verbose:
                for m in metrics:
                    print(f"{m.start} -> {m.end}: {format_ladder(m.ladder)}")

            aggregator = MetricsAggregator()
            for m in metrics:
                aggregator.add_run(m)
            print_summary(aggregator.get_summary_statistics())
            print(f"Overall runtime: {elapsed:.2f}s")

            if args.export:
                if args.export.endswith(".csv"):
                    MetricsExporter.to_csv(metrics, args.export)
                else:
                    MetricsExporter.to_json(metrics, args.export)
                print(f"Metrics exported to: {args.export}")

            return 0 if any(m.found for m in metrics) else 1

        elif args.start is not None:
            result = cli.solve(
                args.start, args.end, verify=args.verify, device=args.device, verbose=args.verbose
            )
            print(format_ladder(result.ladder))
            return 0 if result.found else 1

        else:
            cli.play()
            return 0

    except KeyboardInterrupt:
        print("\nSearch interrupted by user")
        return 1
    except Exception as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())

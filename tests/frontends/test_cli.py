"""Tests for the CLI frontend."""

import argparse
import json
from io import StringIO
from unittest.mock import Mock, patch

import pytest
from wordladder.core.lexicon import Lexicon
from wordladder.core.ladder import SearchConfig, SearchResult
from wordladder.frontends.cli import (
    CLIWordLadder,
    create_parser,
    format_ladder,
    format_reason,
    main,
    read_pairs,
    validate_args,
)

WORDS = ["cat", "cot", "cog", "dog", "dot", "emu"]


@pytest.fixture
def cli():
    return CLIWordLadder(Lexicon(WORDS))


@pytest.fixture
def dictionary_file(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("\n".join(WORDS) + "\n")
    return str(path)


def scripted_input(responses):
    """Build an input function that returns canned responses."""
    answers = iter(responses)
    return lambda prompt: next(answers)


class TestCLIWordLadder:
    """Test cases for the CLI word ladder."""

    def test_solve(self, cli):
        """Test solving a single pair."""
        result = cli.solve("cat", "dog")
        assert result.reason == "found"
        assert result.ladder == ["cat", "cot", "dot", "dog"]

    def test_solve_with_verify(self, cli):
        """Test solving with independent verification."""
        result = cli.solve("cat", "dog", verify=True)
        assert result.length == 4

    def test_solve_verify_exhausted(self, cli):
        """Test verification agrees when no ladder exists."""
        result = cli.solve("cat", "emu", verify=True)
        assert result.reason == "exhausted"

    def test_solve_verify_mismatch(self, cli):
        """Test verification raises when the search answer is wrong."""
        cli.engine = Mock()
        cli.engine.run.return_value = SearchResult(ladder=["cat", "cot", "cog", "dot", "dog"], reason="found")
        with pytest.raises(RuntimeError):
            cli.solve("cat", "dog", verify=True)

    @patch("sys.stdout", new_callable=StringIO)
    def test_solve_verbose(self, mock_stdout, cli):
        """Test verbose solve output."""
        cli.solve("cat", "dog", verify=True, verbose=True)
        output = mock_stdout.getvalue()
        assert "Ladder found - 4 words" in output
        assert "Expanded:" in output
        assert "Verified: shortest ladder has 4 words" in output

    def test_solve_uses_config(self):
        """Test the search configuration reaches the engine."""
        cli = CLIWordLadder(Lexicon(WORDS), SearchConfig(max_steps=1))
        assert cli.solve("cat", "dog").reason == "max_steps"

    def test_run_pairs(self, cli):
        """Test solving several pairs."""
        metrics = cli.run_pairs([("cat", "dog"), ("cat", "emu"), ("dog", "dog")])
        assert [m.run_id for m in metrics] == [0, 1, 2]
        assert [m.found for m in metrics] == [True, False, True]
        assert metrics[0].ladder_length == 4
        assert metrics[2].reason == "trivial"

    def test_run_pairs_records_graph_distance(self, cli):
        """Test verification distances are kept with the metrics."""
        metrics = cli.run_pairs([("cat", "dog"), ("cat", "emu"), ("cat", "cat")], verify=True)
        assert metrics[0].custom_metrics == {"graph_distance": 3}
        assert metrics[1].custom_metrics == {"graph_distance": None}
        assert metrics[2].custom_metrics == {}

    @patch("sys.stdout", new_callable=StringIO)
    def test_run_pairs_strict_continues(self, mock_stdout):
        """Test a rejected pair in strict mode does not stop the batch."""
        cli = CLIWordLadder(Lexicon(["cat", "cot", "frog"]), SearchConfig(strict=True))
        metrics = cli.run_pairs([("cat", "frog"), ("cat", "cot")])

        assert len(metrics) == 2
        assert metrics[0].reason == "invalid"
        assert not metrics[0].found
        assert "differ in length" in metrics[0].custom_metrics["error"]
        assert metrics[1].ladder == ["cat", "cot"]
        assert "Skipping cat -> frog" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_play_strict_continues(self, mock_stdout):
        """Test a rejected pair in strict mode keeps the session going."""
        cli = CLIWordLadder(Lexicon(["cat", "cot", "frog"]), SearchConfig(strict=True))
        cli.play(scripted_input(["cat", "frog", "cat", "cot", ""]))

        output = mock_stdout.getvalue()
        assert "Error: words differ in length" in output
        assert "cat -> cot" in output
        assert output.rstrip().endswith("Thanks for playing!")

    @patch("sys.stdout", new_callable=StringIO)
    def test_get_word_reprompts(self, mock_stdout, cli):
        """Test non-dictionary words are rejected."""
        word = cli.get_word("? ", scripted_input(["xyzzy", "  DOG "]))
        assert word == "dog"
        assert "needs to be an English word" in mock_stdout.getvalue()

    def test_get_word_empty(self, cli):
        """Test an empty response is returned as-is."""
        assert cli.get_word("? ", scripted_input([""])) == ""

    def test_get_word_eof(self, cli):
        """Test end of input counts as an empty response."""
        def raise_eof(prompt):
            raise EOFError

        assert cli.get_word("? ", raise_eof) == ""

    @patch("sys.stdout", new_callable=StringIO)
    def test_play(self, mock_stdout, cli):
        """Test the interactive loop."""
        cli.play(scripted_input(["cat", "dog", "cat", "emu", ""]))
        output = mock_stdout.getvalue()
        assert output.startswith("Welcome to the CS106 word ladder application!")
        assert "cat -> cot -> dot -> dog" in output
        assert "No ladder found" in output
        assert output.rstrip().endswith("Thanks for playing!")

    @patch("sys.stdout", new_callable=StringIO)
    def test_play_quit_on_destination(self, mock_stdout, cli):
        """Test quitting at the destination prompt."""
        cli.play(scripted_input(["cat", ""]))
        assert "Thanks for playing!" in mock_stdout.getvalue()


class TestFormatting:
    """Test cases for output formatting helpers."""

    def test_format_ladder(self):
        """Test ladder formatting."""
        assert format_ladder(["cat", "cot"]) == "cat -> cot"
        assert format_ladder(["cat"]) == "cat"
        assert format_ladder([]) == "No ladder found"

    def test_format_reason(self):
        """Test reason formatting."""
        assert "4 words" in format_reason(SearchResult(ladder=["a", "b", "c", "d"], reason="found"))
        assert "same word" in format_reason(SearchResult(ladder=["a"], reason="trivial"))
        assert "explored 7" in format_reason(SearchResult(reason="exhausted", visited=7))
        assert "not in the dictionary" in format_reason(SearchResult(reason="invalid"))
        assert "Step budget" in format_reason(SearchResult(reason="max_steps", expanded=3))
        assert "Time limit" in format_reason(SearchResult(reason="time_limit"))
        assert "Unknown reason" in format_reason(SearchResult(reason="other"))


class TestReadPairs:
    """Test cases for pair file parsing."""

    def test_read_pairs(self, tmp_path):
        """Test parsing pairs with comments and blank lines."""
        path = tmp_path / "pairs.txt"
        path.write_text("# ladders\ncat dog\n\n  cold   warm  \n")
        assert read_pairs(str(path)) == [("cat", "dog"), ("cold", "warm")]

    def test_read_pairs_malformed(self, tmp_path):
        """Test malformed lines report their line number."""
        path = tmp_path / "pairs.txt"
        path.write_text("cat dog\ncat\n")
        with pytest.raises(ValueError, match=":2:"):
            read_pairs(str(path))


class TestArgumentParsing:
    """Test cases for argument parsing and validation."""

    def test_defaults(self):
        """Test default argument values."""
        args = create_parser().parse_args([])
        assert args.dictionary is None
        assert args.start is None
        assert args.end is None
        assert args.pairs is None
        assert args.max_steps is None
        assert args.time_limit is None
        assert args.strict is False
        assert args.verify is False
        assert args.device == "cpu"
        assert args.verbose is False

    def test_short_options(self):
        """Test short option names."""
        args = create_parser().parse_args(["-d", "w.txt", "-s", "cat", "-e", "dog", "-v"])
        assert args.dictionary == "w.txt"
        assert args.start == "cat"
        assert args.end == "dog"
        assert args.verbose is True

    def test_validate_valid(self):
        """Test valid arguments pass."""
        args = create_parser().parse_args(["-s", "cat", "-e", "dog", "--max-steps", "10"])
        assert validate_args(args)

    @patch("sys.stdout", new_callable=StringIO)
    def test_validate_invalid(self, mock_stdout):
        """Test invalid argument combinations are reported."""
        invalid = [
            ["-s", "cat"],
            ["--max-steps", "0"],
            ["--time-limit", "-1"],
            ["--export", "out.json"],
            ["--pairs", "p.txt", "--export", "out.txt"],
            ["--pairs", "p.txt", "-s", "cat", "-e", "dog"],
        ]
        for argv in invalid:
            assert not validate_args(create_parser().parse_args(argv)), argv
        assert "Error: Invalid arguments:" in mock_stdout.getvalue()

    def test_validate_namespace(self):
        """Test validation on a hand-built namespace."""
        args = argparse.Namespace(
            start=None, end=None, pairs="p.txt", max_steps=None, time_limit=2.0, export="m.csv"
        )
        assert validate_args(args)


class TestMain:
    """Test cases for the main entry point."""

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_single_pair(self, mock_stdout, dictionary_file):
        """Test solving one pair from the command line."""
        with patch("sys.argv", ["wordladder-cli", "-d", dictionary_file, "-s", "cat", "-e", "dog"]):
            result = main()

        assert result == 0
        assert "cat -> cot -> dot -> dog" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_no_ladder(self, mock_stdout, dictionary_file):
        """Test exit code when no ladder exists."""
        with patch("sys.argv", ["wordladder-cli", "-d", dictionary_file, "-s", "cat", "-e", "emu"]):
            result = main()

        assert result == 1
        assert "No ladder found" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_strict_mismatch(self, mock_stdout, dictionary_file):
        """Test strict mode errors are reported."""
        argv = ["wordladder-cli", "-d", dictionary_file, "-s", "cat", "-e", "cats", "--strict"]
        with patch("sys.argv", argv):
            result = main()

        assert result == 1
        assert "Error: words differ in length" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_undecodable_dictionary(self, mock_stdout, tmp_path):
        """Test a dictionary with invalid UTF-8 is reported as an error."""
        path = tmp_path / "words.txt"
        path.write_bytes(b"caf\xe9\ncat\ncot\n")
        with patch("sys.argv", ["wordladder-cli", "-d", str(path), "-s", "cat", "-e", "cot"]):
            result = main()

        assert result == 1
        assert "Error:" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_pairs_strict(self, mock_stdout, dictionary_file, tmp_path):
        """Test batch mode keeps going past a rejected pair."""
        pairs = tmp_path / "pairs.txt"
        pairs.write_text("cat dogs\ncat dog\n")

        argv = ["wordladder-cli", "-d", dictionary_file, "--pairs", str(pairs), "--strict"]
        with patch("sys.argv", argv):
            result = main()

        assert result == 0
        assert "Summary: 1/2 ladders found" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_missing_dictionary(self, mock_stdout, tmp_path):
        """Test a missing dictionary file is reported."""
        argv = ["wordladder-cli", "-d", str(tmp_path / "nope.txt"), "-s", "cat", "-e", "dog"]
        with patch("sys.argv", argv):
            result = main()

        assert result == 1
        assert "Dictionary file not found" in mock_stdout.getvalue()

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_invalid_args(self, mock_stdout):
        """Test main rejects invalid arguments."""
        with patch("sys.argv", ["wordladder-cli", "--start", "cat"]):
            result = main()

        assert result == 1

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_pairs_with_export(self, mock_stdout, dictionary_file, tmp_path):
        """Test batch mode with metrics export."""
        pairs = tmp_path / "pairs.txt"
        pairs.write_text("cat dog\ncat emu\n")
        export = tmp_path / "out.json"

        argv = ["wordladder-cli", "-d", dictionary_file, "--pairs", str(pairs), "--export", str(export), "--verify"]
        with patch("sys.argv", argv):
            result = main()

        assert result == 0
        output = mock_stdout.getvalue()
        assert "Summary: 1/2 ladders found" in output
        assert "Metrics exported to" in output

        data = json.loads(export.read_text())
        assert data["summary"]["total_runs"] == 2

    @patch("sys.stdout", new_callable=StringIO)
    def test_main_pairs_csv(self, mock_stdout, dictionary_file, tmp_path):
        """Test batch mode with CSV export."""
        pairs = tmp_path / "pairs.txt"
        pairs.write_text("cat dog\n")
        export = tmp_path / "out.csv"

        with patch("sys.argv", ["wordladder-cli", "-d", dictionary_file, "--pairs", str(pairs), "--export", str(export)]):
            result = main()

        assert result == 0
        assert export.read_text().startswith("run_id,start,end")

    @patch("wordladder.frontends.cli.CLIWordLadder")
    def test_main_interactive(self, mock_cli_class, dictionary_file):
        """Test main starts the interactive loop with no words given."""
        mock_cli = Mock()
        mock_cli_class.return_value = mock_cli

        with patch("sys.argv", ["wordladder-cli", "-d", dictionary_file]):
            result = main()

        assert result == 0
        mock_cli.play.assert_called_once()

    @patch("sys.stdout", new_callable=StringIO)
    @patch("wordladder.frontends.cli.CLIWordLadder")
    def test_main_keyboard_interrupt(self, mock_cli_class, mock_stdout, dictionary_file):
        """Test interruption is handled."""
        mock_cli = Mock()
        mock_cli.play.side_effect = KeyboardInterrupt
        mock_cli_class.return_value = mock_cli

        with patch("sys.argv", ["wordladder-cli", "-d", dictionary_file]):
            result = main()

        assert result == 1
        assert "interrupted" in mock_stdout.getvalue()

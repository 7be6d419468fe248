"""
CLI tests — argument handling, report format, error reporting and exit codes.
"""
import sys
from unittest import mock
import pytest
from dupcrawl.cli import CLIApplication, main
from dupcrawl.core.models import SortOrder, DigestAlgorithm


def run_cli(argv):
    app = CLIApplication()
    app.run(argv)
    return app


class TestArgumentParsing:

    def test_defaults(self):
        args = CLIApplication.parse_args(["-i", "/data"])

        assert args.max_depth == -1
        assert args.follow_symlinks is False
        assert args.buffer_size == "64K"
        assert args.sample_threshold == "100M"
        assert args.sample_rate == 100
        assert args.batch_size == 32
        assert args.sort == "size"
        assert args.algorithm == "md5"

    def test_create_params(self, temp_dir):
        app = CLIApplication()
        args = app.parse_args([
            "-i", str(temp_dir), "-d", "2", "-L", "-b", "4K", "-t", "1M",
            "-r", "8", "-j", "4", "--sort", "path", "--algorithm", "xxh128"
        ])

        params = app.create_params(args)

        assert params.crawl.max_depth == 2
        assert params.crawl.follow_symlinks is True
        assert params.hashing.read_buffer_size == 4096
        assert params.hashing.sample_threshold == 1024 ** 2
        assert params.hashing.sample_rate == 8
        assert params.hashing.batch_size == 4
        assert params.sort_order == SortOrder.LEXICOGRAPHIC
        assert params.hashing.algorithm == DigestAlgorithm.XXH128

    def test_missing_input_is_usage_error(self):
        with pytest.raises(SystemExit) as exc:
            CLIApplication.parse_args([])
        assert exc.value.code == 2


class TestValidation:

    def test_zero_batch_size_rejected(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli(["-i", str(temp_dir), "-j", "0"])

        assert exc.value.code == 1
        assert "--batch-size" in capsys.readouterr().err

    def test_invalid_buffer_size_rejected(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli(["-i", str(temp_dir), "-b", "huge"])

        assert exc.value.code == 1
        assert "Invalid size format" in capsys.readouterr().err

    def test_zero_buffer_size_rejected(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli(["-i", str(temp_dir), "-b", "0"])

        assert exc.value.code == 1
        assert "Invalid size format for --buffer-size" in capsys.readouterr().err

    def test_overflowing_threshold_rejected(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli(["-i", str(temp_dir), "-t", "1e400K"])

        assert exc.value.code == 1
        assert "Invalid size format for --sample-threshold" in capsys.readouterr().err

    def test_missing_directory(self, temp_dir, capsys):
        with pytest.raises(SystemExit) as exc:
            run_cli(["-i", str(temp_dir / "missing")])

        assert exc.value.code == 1
        assert "Directory not found" in capsys.readouterr().err

    def test_quiet_and_verbose_conflict(self, temp_dir):
        with pytest.raises(SystemExit):
            run_cli(["-i", str(temp_dir), "-q", "-v"])


class TestOutput:

    def test_report_lists_groups(self, alpha_tree, capsys):
        run_cli(["-i", str(alpha_tree["root"]), "-b", "256", "-t", "1K", "-j", "2"])
        out = capsys.readouterr().out

        assert "Found 2 duplicate groups (4 files)" in out
        assert out.index(str(alpha_tree["b"])) < out.index(str(alpha_tree["charlie_d"]))
        assert str(alpha_tree["a"]) not in out
        assert "Size: 280.00B" in out

    def test_quiet_output_is_paths_and_blank_lines(self, alpha_tree, capsys):
        run_cli(["-i", str(alpha_tree["root"]), "-q"])
        out = capsys.readouterr().out

        assert out.split("\n") == [
            str(alpha_tree["b"]),
            str(alpha_tree["charlie_b"]),
            "",
            str(alpha_tree["charlie_d"]),
            str(alpha_tree["bravo_d"]),
            "",
            "",
        ]

    def test_no_duplicates_message(self, temp_dir, capsys):
        (temp_dir / "one").write_bytes(b"1")
        (temp_dir / "two").write_bytes(b"2")

        run_cli(["-i", str(temp_dir)])

        assert "No duplicate groups found." in capsys.readouterr().out

    def test_path_sort_option(self, alpha_tree, capsys):
        run_cli(["-i", str(alpha_tree["root"]), "--sort", "path"])
        out = capsys.readouterr().out

        assert "Found 2 duplicate groups" in out
        assert "Size:" not in out

    def test_verbose_shows_progress_and_stats(self, alpha_tree, capsys):
        run_cli(["-i", str(alpha_tree["root"]), "-v"])
        err = capsys.readouterr().err

        assert "[Crawling] 6 files found" in err
        assert "[Hashing] 6/6 (100.0%)" in err
        assert "Search Statistics" in err

    def test_hash_errors_reported_after_results(self, alpha_tree, capsys):
        with mock.patch("dupcrawl.core.crawler.FileCrawlerImpl.crawl",
                        return_value=[str(alpha_tree["b"]), str(alpha_tree["charlie_b"]),
                                      str(alpha_tree["root"] / "gone")]):
            run_cli(["-i", str(alpha_tree["root"])])

        captured = capsys.readouterr()
        assert "Found 1 duplicate groups" in captured.out
        assert "Could not hash 1 file(s)" in captured.err
        assert str(alpha_tree["root"] / "gone") in captured.err

    def test_crawl_failure_exits_with_error(self, alpha_tree, capsys):
        with mock.patch("dupcrawl.core.crawler.FileCrawlerImpl.crawl",
                        side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(SystemExit) as exc:
                run_cli(["-i", str(alpha_tree["root"])])

        assert exc.value.code == 1
        assert "Cannot crawl" in capsys.readouterr().err


class TestMain:

    def test_keyboard_interrupt_exit_code(self, temp_dir):
        with mock.patch.object(sys, "argv", ["dupcrawl", "-i", str(temp_dir)]):
            with mock.patch.object(CLIApplication, "run_search", side_effect=KeyboardInterrupt):
                with pytest.raises(SystemExit) as exc:
                    main()

        assert exc.value.code == 130

    def test_successful_run_does_not_exit(self, alpha_tree, capsys):
        with mock.patch.object(sys, "argv", ["dupcrawl", "-i", str(alpha_tree["root"])]):
            main()

        assert "Found 2 duplicate groups" in capsys.readouterr().out

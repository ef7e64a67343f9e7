"""
Tests for directory scanning and aggregation.
"""

import logging
import os

import pytest

from complexityscanner import ComplexityScanner, ScanConfig, Summary, analyze
from complexityscanner.core.errors import FileAccessError, FileReadError, ParseFailedError
from complexityscanner.utils.files import is_excluded, iter_source_files


class TestAggregation:
    """Results and summary over a directory tree."""

    def test_sample_tree(self, sample_tree):
        """Three eligible functions, one above threshold 5."""
        result = analyze(str(sample_tree), threshold=5)

        assert sorted(f.name for f in result.functions) == ["complex_function", "nested", "simple"]
        assert result.files_analyzed == 3
        assert result.errors == []

        summary = result.summary
        assert summary is not None
        assert summary.total_functions == 3
        assert summary.max_complexity == 9
        assert summary.functions_above_threshold == 1
        assert summary.mean_complexity == pytest.approx((1 + 9 + 3) / 3)

    def test_summary_matches_recomputation(self, sample_tree):
        """The summary agrees with one recomputed from the returned records."""
        result = analyze(str(sample_tree), threshold=2)
        assert result.summary == Summary.from_records(result.functions, 2)

    def test_threshold_is_strict(self, make_tree):
        """A function exactly at the threshold is not counted above it."""
        root = make_tree({"a.py": "def f(x):\n    if x:\n        pass\n"})

        assert analyze(str(root), threshold=2).summary.functions_above_threshold == 0
        assert analyze(str(root), threshold=1).summary.functions_above_threshold == 1

    def test_file_path_stamped(self, sample_tree):
        """Every record carries the path of the file it came from."""
        result = analyze(str(sample_tree))
        files = {f.name: os.path.relpath(f.file_path, sample_tree) for f in result.functions}

        assert files == {
            "complex_function": "complex.py",
            "simple": "simple.py",
            "nested": os.path.join("subdir", "nested.py"),
        }

    def test_empty_directory(self, tmp_path):
        """No matching files gives no functions and no summary."""
        result = analyze(str(tmp_path))
        assert result.functions == []
        assert result.summary is None

    def test_directory_without_functions(self, make_tree):
        """Python files without definitions give no summary either."""
        root = make_tree({"constants.py": "X = 1\n", "notes.txt": "def f():\n    pass\n"})
        result = analyze(str(root))

        assert result.functions == []
        assert result.summary is None
        assert result.files_analyzed == 1

    def test_summary_can_be_omitted(self, sample_tree):
        """include_summary=False leaves the summary out."""
        result = analyze(str(sample_tree), include_summary=False)
        assert len(result.functions) == 3
        assert result.summary is None

    def test_single_file_root(self, make_tree):
        """A file path is analyzed on its own."""
        root = make_tree({"one.py": "def f():\n    return 1\n", "two.py": "def g():\n    return 2\n"})
        target = root / "one.py"

        result = analyze(str(target))

        assert [f.name for f in result.functions] == ["f"]
        assert result.functions[0].file_path == str(target)

    def test_discovery_order(self, make_tree):
        """Files in a directory come before its subdirectories, each sorted by name."""
        root = make_tree(
            {
                "b.py": "def b():\n    pass\n",
                "a.py": "def a():\n    pass\n",
                "pkg/c.py": "def c():\n    pass\n",
                "pkg/inner/d.py": "def d():\n    pass\n",
            }
        )
        result = analyze(str(root))
        assert [f.name for f in result.functions] == ["a", "b", "c", "d"]

    def test_missing_root(self, tmp_path):
        """A root that does not exist is a fatal error."""
        with pytest.raises(FileAccessError):
            analyze(str(tmp_path / "missing"))

    def test_parallel_matches_sequential(self, make_tree):
        """Worker threads produce the same result in the same order."""
        files = {f"mod{i}.py": f"def func{i}(x):\n    if x:\n        return {i}\n" for i in range(12)}
        files["deep/more.py"] = "def more(a, b):\n    return a or b\n"
        root = make_tree(files)

        sequential = analyze(str(root), max_workers=1)
        parallel = analyze(str(root), max_workers=4)

        assert parallel.to_dict() == sequential.to_dict()


class TestExclusion:
    """Generated and virtual-environment directories are never analyzed."""

    def test_default_exclusions(self, sample_tree):
        """venv and __pycache__ contents are skipped."""
        names = [f.name for f in analyze(str(sample_tree)).functions]
        assert "ignored" not in names
        assert "cached" not in names

    def test_nested_excluded_segment(self, make_tree):
        """An excluded directory is skipped at any depth."""
        root = make_tree(
            {
                "pkg/.venv/lib/site.py": "def site():\n    pass\n",
                "pkg/sub/__pycache__/mod.py": "def mod():\n    pass\n",
                "pkg/real.py": "def real():\n    pass\n",
            }
        )
        assert [f.name for f in analyze(str(root)).functions] == ["real"]

    def test_segments_match_exactly(self, make_tree):
        """Directories that only contain an excluded name are still analyzed."""
        root = make_tree({"venv_tools/helper.py": "def helper():\n    pass\n"})
        assert [f.name for f in analyze(str(root)).functions] == ["helper"]

    def test_root_inside_excluded_directory(self, make_tree):
        """Only segments below the root are considered."""
        root = make_tree({"venv/project/app.py": "def app():\n    pass\n"})
        result = analyze(str(root / "venv" / "project"))
        assert [f.name for f in result.functions] == ["app"]

    def test_extra_exclusions(self, make_tree):
        """Configured directory names are skipped as well."""
        root = make_tree({"build/gen.py": "def gen():\n    pass\n", "src.py": "def src():\n    pass\n"})
        result = analyze(str(root), extra_exclude_dirs=["build"])
        assert [f.name for f in result.functions] == ["src"]

    def test_is_excluded(self, tmp_path):
        """Only directory segments are checked, not the file name."""
        root = str(tmp_path)
        assert is_excluded(os.path.join(root, "venv", "a.py"), root, ["venv"])
        assert not is_excluded(os.path.join(root, "venv.py"), root, ["venv"])

    def test_iter_source_files_filters_extension(self, make_tree):
        """Only .py files are yielded."""
        root = make_tree({"a.py": "", "b.pyc": "", "c.txt": "", "d.pyi": ""})
        files = [os.path.basename(p) for p in iter_source_files(str(root))]
        assert files == ["a.py"]


class TestFailurePolicy:
    """Per-file read and parse failures."""

    @pytest.fixture
    def tree_with_bad_encoding(self, make_tree):
        root = make_tree({"good.py": "def good():\n    return 1\n"})
        (root / "bad.py").write_bytes(b"def bad():\n    return '\xff\xfe'\n")
        return root

    def test_read_errors_collected(self, tree_with_bad_encoding):
        """An undecodable file is recorded and the rest is analyzed."""
        result = analyze(str(tree_with_bad_encoding))

        assert [f.name for f in result.functions] == ["good"]
        assert len(result.errors) == 1
        assert result.errors[0].kind == "read"
        assert result.errors[0].file_path.endswith("bad.py")
        assert result.files_analyzed == 1

    def test_read_error_logged(self, tree_with_bad_encoding, caplog):
        """Skipped files are reported as warnings."""
        with caplog.at_level(logging.WARNING, logger="complexityscanner"):
            analyze(str(tree_with_bad_encoding))
        assert "Skipping" in caplog.text
        assert "bad.py" in caplog.text

    def test_fail_fast_read_error(self, tree_with_bad_encoding):
        """With fail_fast, the first unreadable file aborts the run."""
        with pytest.raises(FileReadError) as exc_info:
            analyze(str(tree_with_bad_encoding), fail_fast=True)
        assert exc_info.value.file_path.endswith("bad.py")

    def test_syntax_errors_tolerated_by_default(self, make_tree):
        """Partial trees are accepted unless strict parsing is on."""
        root = make_tree({"broken.py": "def broken(:\n    pass\n", "ok.py": "def ok():\n    pass\n"})
        result = analyze(str(root))

        assert result.errors == []
        assert "ok" in [f.name for f in result.functions]

    def test_strict_parse_errors_collected(self, make_tree):
        """With strict parsing, broken files are recorded as parse errors."""
        root = make_tree({"broken.py": "def broken(:\n    pass\n", "ok.py": "def ok():\n    pass\n"})
        result = analyze(str(root), strict_parsing=True)

        assert [f.name for f in result.functions] == ["ok"]
        assert [e.kind for e in result.errors] == ["parse"]

    def test_fail_fast_parse_error(self, make_tree):
        """Strict parsing with fail_fast raises ParseFailedError naming the file."""
        root = make_tree({"broken.py": "def broken(:\n    pass\n"})
        with pytest.raises(ParseFailedError) as exc_info:
            analyze(str(root), strict_parsing=True, fail_fast=True)
        assert exc_info.value.file_path.endswith("broken.py")


class TestComplexityScanner:
    """Scanner construction and reuse."""

    def test_default_config(self):
        """A scanner without config uses the defaults."""
        scanner = ComplexityScanner()
        assert scanner.config.threshold == 10
        assert scanner.config.fail_fast is False

    def test_parser_is_reused_per_thread(self):
        """The same thread gets the same parser."""
        scanner = ComplexityScanner(ScanConfig(strict_parsing=True))
        assert scanner.parser() is scanner.parser()
        assert scanner.parser().strict is True

    def test_scan_is_repeatable(self, sample_tree):
        """Scanning twice gives equal results."""
        scanner = ComplexityScanner(ScanConfig(threshold=5))
        assert scanner.scan(str(sample_tree)).to_dict() == scanner.scan(str(sample_tree)).to_dict()

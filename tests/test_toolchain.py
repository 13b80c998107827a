"""
Tests for the Go toolchain hand-off.

subprocess.run and shutil.which are replaced so these tests run without
Go installed. The integration tests at the bottom are skipped unless
gofmt and go are on PATH.
"""

import shutil
import subprocess

import pytest

from basicgo import compile_basic
from basicgo.errors import ToolchainError
from basicgo.toolchain import (
    GO_BUILD_TIMEOUT,
    GOFMT_TIMEOUT,
    build_go_binary,
    find_tool,
    format_go_source,
)


HAS_GOFMT = shutil.which("gofmt") is not None
HAS_GO = shutil.which("go") is not None


# =============================================================================
# Helpers
# =============================================================================

class FakeRun:
    """Records subprocess.run calls and returns a canned result."""

    def __init__(self, returncode=0, stdout="", stderr="", raises=None):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.raises = raises
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append((cmd, kwargs))
        if self.raises is not None:
            raise self.raises
        return subprocess.CompletedProcess(
            cmd, self.returncode, stdout=self.stdout, stderr=self.stderr
        )


@pytest.fixture
def tools_on_path(monkeypatch):
    """Pretend gofmt and go are installed under /usr/local/go/bin."""
    monkeypatch.setattr(
        "basicgo.toolchain.shutil.which",
        lambda name: f"/usr/local/go/bin/{name}",
    )


@pytest.fixture
def no_tools(monkeypatch):
    """Pretend nothing is installed."""
    monkeypatch.setattr("basicgo.toolchain.shutil.which", lambda name: None)


# =============================================================================
# find_tool
# =============================================================================

class TestFindTool:
    """Tests for find_tool()."""

    def test_found(self, tools_on_path):
        """Returns the full path of an installed tool."""
        assert find_tool("go") == "/usr/local/go/bin/go"

    def test_missing(self, no_tools):
        """Returns None for a missing tool."""
        assert find_tool("gofmt") is None


# =============================================================================
# format_go_source
# =============================================================================

class TestFormatGoSource:
    """Tests for format_go_source()."""

    def test_passes_source_on_stdin(self, tools_on_path, monkeypatch):
        """The program is piped to gofmt and its stdout returned."""
        fake = FakeRun(stdout="package main\n")
        monkeypatch.setattr("basicgo.toolchain.subprocess.run", fake)

        assert format_go_source("package  main\n") == "package main\n"

        cmd, kwargs = fake.calls[0]
        assert cmd == ["/usr/local/go/bin/gofmt"]
        assert kwargs["input"] == "package  main\n"
        assert kwargs["text"] is True
        assert kwargs["timeout"] == GOFMT_TIMEOUT

    def test_not_installed(self, no_tools):
        """A missing gofmt is a ToolchainError with a hint."""
        with pytest.raises(ToolchainError) as exc_info:
            format_go_source("package main\n")
        assert "gofmt not found" in str(exc_info.value)
        assert exc_info.value.hint

    def test_rejected(self, tools_on_path, monkeypatch):
        """A non-zero exit carries gofmt's stderr."""
        fake = FakeRun(returncode=2, stderr="<standard input>:1:1: expected 'package'\n")
        monkeypatch.setattr("basicgo.toolchain.subprocess.run", fake)

        with pytest.raises(ToolchainError) as exc_info:
            format_go_source("nonsense")
        assert exc_info.value.return_code == 2
        assert "expected 'package'" in str(exc_info.value)

    def test_timeout(self, tools_on_path, monkeypatch):
        """A hung gofmt is reported as a timeout."""
        fake = FakeRun(raises=subprocess.TimeoutExpired(["gofmt"], GOFMT_TIMEOUT))
        monkeypatch.setattr("basicgo.toolchain.subprocess.run", fake)

        with pytest.raises(ToolchainError) as exc_info:
            format_go_source("package main\n")
        assert "timed out" in str(exc_info.value)


# =============================================================================
# build_go_binary
# =============================================================================

class TestBuildGoBinary:
    """Tests for build_go_binary()."""

    def test_default_output(self, tools_on_path, monkeypatch, tmp_path):
        """The executable defaults to the Go file without its suffix."""
        fake = FakeRun()
        monkeypatch.setattr("basicgo.toolchain.subprocess.run", fake)
        go_file = tmp_path / "fib.go"

        assert build_go_binary(go_file) == tmp_path / "fib"

        cmd, kwargs = fake.calls[0]
        assert cmd == [
            "/usr/local/go/bin/go", "build", "-o", str(tmp_path / "fib"), str(go_file),
        ]
        assert kwargs["timeout"] == GO_BUILD_TIMEOUT

    def test_explicit_output(self, tools_on_path, monkeypatch, tmp_path):
        """An explicit executable path is passed to -o."""
        fake = FakeRun()
        monkeypatch.setattr("basicgo.toolchain.subprocess.run", fake)

        result = build_go_binary(str(tmp_path / "a.go"), tmp_path / "bin" / "prog")
        assert result == tmp_path / "bin" / "prog"
        assert fake.calls[0][0][3] == str(tmp_path / "bin" / "prog")

    def test_not_installed(self, no_tools, tmp_path):
        """A missing go command is a ToolchainError."""
        with pytest.raises(ToolchainError) as exc_info:
            build_go_binary(tmp_path / "fib.go")
        assert "go not found" in str(exc_info.value)

    def test_build_failure(self, tools_on_path, monkeypatch, tmp_path):
        """Compiler diagnostics from go build are kept."""
        fake = FakeRun(returncode=1, stderr="./fib.go:5:2: declared and not used: c\n")
        monkeypatch.setattr("basicgo.toolchain.subprocess.run", fake)

        with pytest.raises(ToolchainError) as exc_info:
            build_go_binary(tmp_path / "fib.go")
        assert exc_info.value.return_code == 1
        assert "declared and not used" in exc_info.value.stderr
        assert "go build failed" in str(exc_info.value)


# =============================================================================
# Integration With Real Go Tools
# =============================================================================

@pytest.mark.skipif(not HAS_GOFMT, reason="gofmt not installed")
class TestGofmtIntegration:
    """Generated programs are already in gofmt layout."""

    def test_output_is_gofmt_clean(self):
        """gofmt leaves the generated text unchanged."""
        go_source = compile_basic(
            "LET a = 0\n"
            "LABEL top\n"
            "IF a < 3 THEN\n"
            "LET a = a + 1\n"
            "GOTO top\n"
            "ELSE\n"
            'PRINT "done"\n'
            "ENDIF\n"
        )
        assert format_go_source(go_source) == go_source


@pytest.mark.skipif(not HAS_GO, reason="go not installed")
class TestGoBuildIntegration:
    """Generated programs build with the real Go compiler."""

    def test_build_and_run(self, tmp_path):
        """A counting program builds and prints its numbers."""
        go_file = tmp_path / "count.go"
        go_file.write_text(compile_basic(
            "LET n = 0\n"
            "WHILE n < 3 REPEAT\n"
            "PRINT n\n"
            "LET n = n + 1\n"
            "ENDWHILE\n"
        ))

        executable = build_go_binary(go_file)
        result = subprocess.run(
            [str(executable)], capture_output=True, text=True, timeout=30
        )
        assert result.stdout == "0\n1\n2\n"

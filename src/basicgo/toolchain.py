"""
Go Toolchain Hand-off
=====================

The compiler itself only produces Go source text. This module passes that
text on to the external Go tools when they are installed:

- gofmt: canonical formatting of the generated program
- go build: compiling the generated program to an executable

Both are optional collaborators; nothing in the compilation pipeline
depends on them. Failures surface as ToolchainError.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from basicgo.errors import ToolchainError


logger = logging.getLogger(__name__)

GOFMT_TIMEOUT = 30
GO_BUILD_TIMEOUT = 300


def find_tool(name: str) -> Optional[str]:
    """Return the full path of an executable on PATH, or None."""
    return shutil.which(name)


def format_go_source(go_source: str) -> str:
    """
    Format Go source text with gofmt.

    Args:
        go_source: Go program text

    Returns:
        The gofmt-formatted program text

    Raises:
        ToolchainError: If gofmt is not installed, rejects the program,
            or times out
    """
    gofmt = find_tool("gofmt")
    if gofmt is None:
        raise ToolchainError(
            "gofmt not found",
            command=["gofmt"],
            hint="install Go (https://go.dev/dl/) or drop --gofmt",
        )

    cmd = [gofmt]
    logger.debug(f"Running {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            input=go_source,
            capture_output=True,
            text=True,
            timeout=GOFMT_TIMEOUT,
        )
    except subprocess.TimeoutExpired:
        raise ToolchainError("gofmt timed out", command=cmd)

    if result.returncode != 0:
        raise ToolchainError(
            "gofmt rejected the generated program",
            command=cmd,
            stderr=result.stderr,
            return_code=result.returncode,
        )

    return result.stdout


def build_go_binary(go_file: str | Path, output: Optional[str | Path] = None) -> Path:
    """
    Compile a generated Go file with go build.

    Args:
        go_file: Path to the Go source file
        output: Executable path (default: go_file without its suffix)

    Returns:
        Path of the built executable

    Raises:
        ToolchainError: If go is not installed, the build fails, or it
            times out
    """
    go_file = Path(go_file)
    output = Path(output) if output else go_file.with_suffix("")

    go = find_tool("go")
    if go is None:
        raise ToolchainError(
            "go not found",
            command=["go", "build"],
            hint="install Go (https://go.dev/dl/) or drop --build",
        )

    cmd = [go, "build", "-o", str(output), str(go_file)]
    logger.debug(f"Running {' '.join(cmd)}")

    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=GO_BUILD_TIMEOUT,
        )
    except subprocess.TimeoutExpired:
        raise ToolchainError(f"go build timed out for {go_file}", command=cmd)

    if result.returncode != 0:
        raise ToolchainError(
            f"go build failed for {go_file}",
            command=cmd,
            stderr=result.stderr,
            return_code=result.returncode,
        )

    logger.info(f"Built {output}")
    return output

"""
basicgo Command-Line Interface
==============================

This package provides the basicgo command-line tool, a Click-based
front end that compiles a BASIC file to Go and optionally hands the
result to gofmt and go build.
"""

__all__ = ["basicgo"]

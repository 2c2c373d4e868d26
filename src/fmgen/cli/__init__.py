"""Command-line interface for fmgen."""

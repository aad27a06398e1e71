"""Command-line shell around the program engine."""

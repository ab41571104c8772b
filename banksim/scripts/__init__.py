"""Command-line scripts for the bank simulation."""

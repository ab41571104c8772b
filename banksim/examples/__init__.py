"""Example bank simulation models."""

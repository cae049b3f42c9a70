"""Shared utilities: logging and command execution."""

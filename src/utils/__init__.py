"""Shared utilities for claude-cleaner."""

"""Shared utilities for the payment monitor."""

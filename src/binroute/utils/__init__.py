"""Shared helpers: logging, timing, data loading and result export."""

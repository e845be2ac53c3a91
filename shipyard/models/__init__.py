"""Data models for deploy runs."""

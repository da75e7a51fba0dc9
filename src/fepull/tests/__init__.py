"""Tests for fepull."""

"""Utility helpers shared by the fepull layers."""

"""Packaged variant tables (``<variant>.data`` property files)."""

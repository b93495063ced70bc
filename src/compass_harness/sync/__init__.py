"""Polling waits, command sequencing and window tracking."""

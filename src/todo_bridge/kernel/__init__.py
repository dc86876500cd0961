"""Kernel – errors, envelopes, backend ports and clock (no I/O)."""

"""Append-only log of medication administration events."""

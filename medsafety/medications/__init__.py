"""Prescription lifecycle: create, update and discontinue medications."""

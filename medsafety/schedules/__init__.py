"""Dosing schedules generated from medication frequency codes."""

"""Adherence statistics over fixed time windows."""

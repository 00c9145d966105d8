"""Medication alerts, severity classification and notification hand-off."""

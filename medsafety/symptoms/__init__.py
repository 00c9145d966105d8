"""Patient symptom reports and their review."""

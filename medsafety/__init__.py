"""
Medication safety and compliance engine.

This package turns prescriptions into dosing schedules and keeps patients safe
around them:
- Prescription lifecycle (create, update, discontinue)
- Drug-drug interaction checks against a reference table
- Append-only dose administration log
- Time-windowed adherence statistics
- Clinical alerts for interactions, missed doses, severe symptoms and discontinuations
"""
__version__ = "1.0.0"

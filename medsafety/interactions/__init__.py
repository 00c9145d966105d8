"""Drug-drug interaction reference data and lookup."""

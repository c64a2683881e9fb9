"""Static reference data: zone CSVs, region catalog, thresholds."""

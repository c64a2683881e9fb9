"""Command line tools: single quote calculator and order file quoting."""

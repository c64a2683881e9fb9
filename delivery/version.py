"""Calculator version, stamped on every calculated order table."""

VERSION = "1.0.0"

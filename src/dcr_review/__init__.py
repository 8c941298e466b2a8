"""Side-by-side review queue for DCR migrations, backed by Google Sheets."""

__version__ = "0.1.0"

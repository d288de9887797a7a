"""Stage work units, one module per pipeline phase."""

"""Loading and exporting assessment catalogs."""

"""Postal label mapper: spreadsheet addresses -> label printing CSV."""

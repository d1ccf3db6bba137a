"""Display formatting and spreadsheet export of document totals."""

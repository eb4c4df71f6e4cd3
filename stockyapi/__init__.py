"""Stocky rewards API: stock reward ledger, corporate-action adjustments and valuation views."""

"""HTTP routes for the letter issuance API."""

"""Letter issuance service — versioned letters, issuance and public verification."""

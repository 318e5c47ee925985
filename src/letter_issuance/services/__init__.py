"""Letter workflow services — versioning, approval, issuance, printing, verification."""

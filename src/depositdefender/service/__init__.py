"""HTTP service for the Deposit Defender engine."""

"""NCAA Four Factors ingestion and standings."""

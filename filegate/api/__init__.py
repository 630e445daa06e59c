"""HTTP layer: versioned flask-restx API and the issuer guard."""

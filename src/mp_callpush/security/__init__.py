"""Security – provider credential minting."""

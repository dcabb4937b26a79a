"""Command line interface for the OKX DEX tooling."""

"""Application services: coaching operations, their prompts and demo data."""

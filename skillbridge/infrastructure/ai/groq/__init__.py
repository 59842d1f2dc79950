"""Groq provider."""

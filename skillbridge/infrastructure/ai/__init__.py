"""AI provider adapters.

Concrete AIModel implementations (Gemini, Groq), the translation of SDK
errors into ApiCallError, and the parser for JSON embedded in model output.
"""

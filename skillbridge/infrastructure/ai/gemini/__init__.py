"""Google Gemini provider."""

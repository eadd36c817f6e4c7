"""Infrastructure layer - configuration and the HTTP-backed Ollama client."""

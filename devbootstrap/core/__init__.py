"""Core — models, services and use cases, independent of the terminal."""

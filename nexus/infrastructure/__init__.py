"""Infrastructure layer for Nexus.

Collaborators behind narrow interfaces:

    storage - Document stores, document decoding, local UI state
    ai - Ollama-backed text generation
    auth - Identity provider interface and an in-memory provider
"""

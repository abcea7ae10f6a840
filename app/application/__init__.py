"""Application layer: DTOs, interfaces, services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, store API client, notifications).
"""

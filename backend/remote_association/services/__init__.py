"""Services Layer — resolvers that combine the registry with a RemoteClient.

Invariants:
    - Resolvers depend on core/ protocols; only RemoteAssociations.from_settings()
      builds a concrete HTTP client
    - Every remote call goes through RemoteClient.fetch
"""

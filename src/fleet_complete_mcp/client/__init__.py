"""Client package for the Fleet Complete MCP server and dashboard.

Provides HTTP plumbing, API backends, and session/token management:
- ``credentials``: In-memory credential store with expiry tracking
- ``token_manager``: Refresh-then-login lifecycle for the stored credential
- ``rpc_client``: JSON-RPC backend with embedded session credentials
- ``graphql_client``: OAuth-style login endpoints and the GraphQL backend
- ``session``: Injectable session tying the pieces together
"""

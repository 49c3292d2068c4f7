"""Fleet Complete MCP package.

This package contains the FastMCP tool server and the HTTP dashboard for
interacting with the Fleet Complete / Geotab fleet-tracking APIs.
"""

# Intentionally do not re-export symbols from submodules to avoid importing
# heavy dependencies and reading the environment at package import time.
# Individual modules (e.g., ``server``) should be imported directly by
# consumers as needed.

__all__: list[str] = []

"""Allow ``python -m mcp_static_registry``."""

from mcp_static_registry.cli import main

if __name__ == "__main__":
    main()

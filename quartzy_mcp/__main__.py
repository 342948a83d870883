"""Entry point for ``python -m quartzy_mcp``."""

from .mcp_server import main

if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()

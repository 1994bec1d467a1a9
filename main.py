#!/usr/bin/env python3
"""gridtext - A server-side text buffer engine.

Usage:
    python main.py [--host HOST] [--port PORT] [--config PATH]
    python main.py --console

Endpoints:
    POST /content             Copy/write/paste and render a viewport
    GET  /document            Current lines as plain text
    GET  /scrollbar/live.png  Scrollbar image (when a renderer is configured)
"""

from gridtext.__main__ import main


if __name__ == "__main__":
    main()

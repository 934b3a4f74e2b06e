#!/usr/bin/env python3
"""
Launch script for the VBOX file service.

Usage:
    python run_server.py [--port PORT] [--host HOST] [--debug]

Examples:
    python run_server.py                    # http://127.0.0.1:8000
    python run_server.py --port 5000        # Run on port 5000
"""

import argparse


def main():
    parser = argparse.ArgumentParser(description="VBOX File Service")
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=8000,
        help="Port to run server on (default: 8000)"
    )
    parser.add_argument(
        "--host", "-H",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1, use 0.0.0.0 for all interfaces)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Run in debug mode"
    )

    args = parser.parse_args()

    print("VBOX File Service")
    print("=" * 40)
    print(f"Server: http://{args.host}:{args.port}")
    print("=" * 40)

    print("\nAPI Endpoints:")
    print("  GET  /                  - Health check")
    print("  GET  /health            - Detailed health")
    print("  POST /documents/render  - Render a VBOX file")
    print("\nStarting server...")

    import uvicorn

    uvicorn.run(
        "vboxfile.main:app",
        host=args.host,
        port=args.port,
        reload=args.debug,
        log_level="debug" if args.debug else "info",
    )


if __name__ == "__main__":
    main()

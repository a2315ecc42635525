import argparse

import uvicorn

from app.core.config import Settings


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="SkyCast Travel Planner API server")
    parser.add_argument(
        "--host", type=str, default="0.0.0.0", help="Interface to bind (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Port to listen on (default: PORT env or {settings.port})",
    )
    parser.add_argument(
        "--reload", action="store_true", help="Restart on code changes (development)"
    )
    return parser


def main(argv=None):
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)

    print(f"--- SkyCast API starting on port {args.port} ---")
    print(f"Health: http://localhost:{args.port}/api/health")

    uvicorn.run("app.main:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()

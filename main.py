# main.py

"""Development server: `python main.py [--host H] [--port P] [--no-reload]`."""

from argparse import ArgumentParser

from uvicorn import run


def main() -> None:
    parser = ArgumentParser(description="Run the Canvas admin API with uvicorn")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--no-reload", dest="reload", action="store_false")
    args = parser.parse_args()

    run(
        "app.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level="info",
        loop="uvloop",
        http="httptools",
    )


if __name__ == "__main__":
    main()

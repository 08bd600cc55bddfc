"""CLI entry point for launching the FastAPI app with uvicorn."""

import uvicorn

from task_tracker.logger import setup_logger

from .dependencies import get_config


def main() -> None:
    """Run the server."""
    config = get_config()
    setup_logger(log_level=config.log_level, log_file=config.log_file)
    uvicorn.run(
        "task_tracker.server.app:create_app",
        host=config.server.host,
        port=config.server.port,
        factory=True,
        log_config=None,
    )


if __name__ == "__main__":
    main()

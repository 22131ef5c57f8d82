"""Server command for running the Circle API."""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

logger = logging.getLogger(__name__)


def register(app: typer.Typer) -> None:
    """Register the serve command."""

    @app.command()
    def serve(
        config: Annotated[
            Path | None,
            typer.Option(
                "--config",
                "-c",
                help="Path to configuration file",
            ),
        ] = None,
        host: Annotated[
            str | None,
            typer.Option(
                "--host",
                "-h",
                help="Host to bind to (default from config)",
            ),
        ] = None,
        port: Annotated[
            int | None,
            typer.Option(
                "--port",
                "-p",
                help="Port to bind to (default from config)",
            ),
        ] = None,
    ) -> None:
        """Start the Circle API server."""
        try:
            asyncio.run(_run_server(config, host, port))
        except KeyboardInterrupt:
            # Use print here since logging may not be configured yet
            print("\nServer stopped")


async def _run_server(
    config_path: Path | None = None,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Run the server asynchronously."""
    from circle.config import load_config
    from circle.logging import configure_logging
    from circle.server import ServerRunner, create_app
    from circle.service import create_social_service

    circle_config = load_config(config_path)
    configure_logging(
        level=circle_config.logging.level,
        use_rich=True,
        log_to_file=circle_config.logging.log_to_file,
    )

    logger.info("opening_store", extra={"store.path": str(circle_config.store.path)})
    service = await create_social_service(circle_config.store.path)

    fastapi_app = create_app(service, config=circle_config)
    runner = ServerRunner(
        fastapi_app,
        host=host or circle_config.server.host,
        port=port or circle_config.server.port,
    )
    await runner.run()

"""Flask application factory."""

import logging

from common.core.flask_app import App
from exporter.config import Settings
from exporter.container import AppContainer

logger = logging.getLogger(__name__)


def create_app(
    settings: "Settings | None" = None, skip_background_services: bool = False
) -> App:
    """Create and configure the Flask application.

    Args:
        settings: Optional settings instance (loaded from the environment if not provided)
        skip_background_services: Skip the startup fetch (for tests)

    Returns:
        Configured Flask application instance
    """
    app = App(__name__)

    # Load configuration
    if settings is None:
        settings = Settings.load()

    # Validate configuration before proceeding
    settings.validate_config()

    app.config.from_object(settings.to_flask_config())

    # Initialize service container
    container = AppContainer()
    container.config.override(settings)
    container.wire(packages=["exporter.api"])

    app.container = container

    from exporter.api.metrics import metrics_bp

    app.register_blueprint(metrics_bp)

    logger.info(
        f"Exporting fuel prices within {settings.radius:g} km of "
        f"({settings.latitude}, {settings.longitude}) from "
        f"{settings.tankerkoenig_url} (apikey: {settings.masked_api_key})"
    )

    if not skip_background_services and settings.prime_on_startup:
        # Populate the gauges before the first scrape arrives
        container.exporter_service().refresh()

    return app

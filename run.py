"""Exporter server entry point."""

import logging
import os
import threading

from waitress import serve

from common.core.shutdown import LifetimeEvent
from exporter import create_app
from exporter.config import Settings


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    settings = Settings.load()

    debug_mode = settings.flask_env in ("development", "testing")

    # Under the reloader only the worker process serves scrapes
    reloader_worker = os.environ.get("WERKZEUG_RUN_MAIN") == "true"

    app = create_app(
        settings, skip_background_services=debug_mode and not reloader_worker
    )

    shutdown_coordinator = app.container.shutdown_coordinator()

    if debug_mode:
        app.logger.info("Running in debug mode")

        if reloader_worker:
            shutdown_coordinator.initialize()

        def signal_shutdown(lifetime_event: LifetimeEvent) -> None:
            if lifetime_event == LifetimeEvent.AFTER_SHUTDOWN:
                os._exit(0)

        shutdown_coordinator.register_lifetime_notification(signal_shutdown)
        app.run(host=settings.host, port=settings.port, debug=True)
    else:
        shutdown_coordinator.initialize()

        def runner() -> None:
            app.logger.info(
                f"Using Waitress WSGI server with {settings.waitress_threads} threads"
            )
            serve(
                app,
                host=settings.host,
                port=settings.port,
                threads=settings.waitress_threads,
            )

        # Server runs in a daemon thread so the shutdown coordinator controls exit
        thread = threading.Thread(target=runner, daemon=True)
        thread.start()

        event = threading.Event()

        def signal_shutdown_prod(lifetime_event: LifetimeEvent) -> None:
            if lifetime_event == LifetimeEvent.AFTER_SHUTDOWN:
                event.set()

        shutdown_coordinator.register_lifetime_notification(signal_shutdown_prod)
        event.wait()


if __name__ == "__main__":
    main()

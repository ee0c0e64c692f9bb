import logging
import signal
from typing import Callable, Optional

from app_config import AppConfigurationError, load_app_config, resolve_config_path
from notifications import (
    ChimePlayer,
    DesktopNotifier,
    NotificationConfig,
    NotificationConfigurationError,
    NotificationService,
)
from pomodoro import PomodoroEngine, Ticker
from runtime import RuntimeBootstrap, RuntimeEngine, RuntimeHooks
from server import ServerConfigurationError, UIServer, UIServerConfig


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("pomodoro_app")


def setup_signal_handlers(stop: Callable[[], None]) -> None:
    """Set up graceful shutdown on SIGTERM and SIGINT."""
    logger = logging.getLogger("pomodoro_app")

    def signal_handler(signum: int, frame) -> None:
        del frame
        logger.info("%s received, stopping...", signal.Signals(signum).name)
        stop()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def build_notification_service(
    config: NotificationConfig,
    logger: logging.Logger,
) -> Optional[NotificationService]:
    """Create the banner/chime notifier and run the one-time authorization step."""
    desktop = DesktopNotifier(config, logger=logging.getLogger("notifications.desktop"))
    # Denial only suppresses banners; the engine runs either way.
    if not desktop.request_authorization():
        logger.warning("Notification permission not granted; banners are disabled.")

    chime: Optional[ChimePlayer] = None
    if config.sound_enabled:
        chime = ChimePlayer(
            output_device_index=config.output_device_index,
            logger=logging.getLogger("notifications.sound"),
        )

    if not desktop.is_authorized and chime is None:
        return None

    return NotificationService(
        banner=desktop,
        chime=chime,
        logger=logging.getLogger("notifications"),
    )


def main() -> int:
    """Run the pomodoro engine with its web UI and notifications."""
    logger = setup_logging(level=logging.INFO)

    try:
        config_path = resolve_config_path()
        app_config = load_app_config(str(config_path))
        logger.info("Loaded runtime config: %s", config_path)
    except AppConfigurationError as error:
        logger.error("App configuration error: %s", error)
        return 1

    logging.getLogger().setLevel(app_config.logging.level)

    try:
        notification_config = NotificationConfig.from_settings(app_config.notifications)
    except NotificationConfigurationError as error:
        logger.error("Notification configuration error: %s", error)
        return 1

    notification_service = build_notification_service(notification_config, logger)

    engine = PomodoroEngine(
        ticker=Ticker(logger=logging.getLogger("ticker")),
        notifiers=[notification_service] if notification_service else [],
        logger=logging.getLogger("pomodoro"),
    )

    # Optional UI server for static page + websocket commands
    ui_server: Optional[UIServer] = None
    ui_server_config: Optional[UIServerConfig] = None
    try:
        ui_server_config = UIServerConfig.from_settings(app_config.ui_server)
    except ServerConfigurationError as error:
        logger.error("UI server configuration error: %s", error)
        logger.warning("Continuing without UI server.")

    if ui_server_config and ui_server_config.enabled:
        try:
            ui_server = UIServer(
                config=ui_server_config,
                logger=logging.getLogger("ui_server"),
            )
            logger.info("Starting UI server...")
            ui_server.start(timeout_seconds=5.0)
            logger.info(
                "UI server ready at http://%s:%d",
                ui_server.host,
                ui_server.port,
            )
        except Exception as error:
            logger.error("UI server startup failed: %s", error)
            ui_server = None

    if ui_server is None:
        logger.warning("No UI server running; the timer cannot receive commands.")

    runtime = RuntimeEngine(
        RuntimeBootstrap(
            logger=logging.getLogger("runtime"),
            engine=engine,
            notification_service=notification_service,
            ui_server=ui_server,
            hooks=RuntimeHooks(setup_signal_handlers=setup_signal_handlers),
        )
    )
    return runtime.run()


if __name__ == "__main__":
    raise SystemExit(main())

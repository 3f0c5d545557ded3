import logging
import sys
from typing import Optional

from app_config import AppConfigurationError, load_app_config
from app_config_parser import log_level_value
from pomodoro import PomodoroConfig, PomodoroConfigurationError
from runtime import RuntimeBootstrap, RuntimeEngine
from server import ServerConfigurationError, UIServer, UIServerConfig


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Configure logging for the application."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    return logging.getLogger("runtime")


def main(argv: Optional[list[str]] = None) -> int:
    """Run the console pomodoro timer."""
    args = sys.argv[1:] if argv is None else argv
    config_path = args[0] if args else None

    logger = setup_logging(level=logging.INFO)

    try:
        app_config = load_app_config(config_path)
        pomodoro_config = PomodoroConfig.from_settings(app_config.pomodoro)
        ui_config = UIServerConfig.from_settings(app_config.ui_server)
    except (
        AppConfigurationError,
        PomodoroConfigurationError,
        ServerConfigurationError,
    ) as error:
        logger.error("Configuration error: %s", error)
        return 1

    logging.getLogger().setLevel(log_level_value(app_config.runtime.log_level))
    if app_config.source_file:
        logger.info("Loaded runtime config: %s", app_config.source_file)
    else:
        logger.info("No config file found, using built-in defaults")

    ui_server = None
    if ui_config.enabled:
        ui_server = UIServer(config=ui_config, logger=logging.getLogger("ui_server"))

    engine = RuntimeEngine(
        RuntimeBootstrap(
            logger=logger,
            app_config=app_config,
            pomodoro_config=pomodoro_config,
            ui_server=ui_server,
        )
    )
    return engine.run()


if __name__ == "__main__":
    raise SystemExit(main())

import logging
import logging.config

def configure_logging(app_config) -> None:
    if app_config.log_to_file:
        app_config.log_dir.mkdir(parents=True, exist_ok=True)
    logging.config.dictConfig(app_config.get_logging_config())

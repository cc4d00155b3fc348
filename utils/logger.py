import logging
import logging.config


def setup_logger(cfg):
    """Apply the configuration's dictConfig and return the root logger"""
    cfg.ensure_directories()
    logging.config.dictConfig(cfg.get_logging_config())
    return logging.getLogger()

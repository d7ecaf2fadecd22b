import logging
import sys
from datetime import datetime
from pathlib import Path

from playgroup_stats.config import Config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name: str) -> logging.Logger:
    """
    Setup a logger for the statistics package.
    
    Console output goes to stderr, leaving stdout to the JSON reports printed
    by the CLI. A daily log file is written under Config.LOG_DIR unless the
    directory is configured as an empty string.
    """
    logger = logging.getLogger(name)
    
    if logger.handlers:
        return logger
    
    log_level = logging.DEBUG if Config.DEBUG else logging.INFO
    logger.setLevel(log_level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S')
    
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)
    
    if Config.LOG_DIR:
        log_dir = Path(Config.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        
        # File always captures DEBUG, regardless of console level
        file_handler = logging.FileHandler(
            log_dir / f'playgroup_stats_{datetime.now().strftime("%Y%m%d")}.log',
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)
    
    return logger

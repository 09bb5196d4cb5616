import logging
from config import LOG_LEVEL, ERROR_LOG_FILE

# Create logger
logger = logging.getLogger('moviedb_logger')
logger.setLevel(LOG_LEVEL)

# Console handler
console_handler = logging.StreamHandler()
console_handler.setLevel(LOG_LEVEL)
console_format = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
console_handler.setFormatter(console_format)
logger.addHandler(console_handler)

# Errors also go to a separate file when one is configured
if ERROR_LOG_FILE:
    error_handler = logging.FileHandler(ERROR_LOG_FILE, encoding="utf-8")
    error_handler.setLevel(logging.ERROR)
    error_format = logging.Formatter('%(levelname)s - %(asctime)s\n\n%(message)s\n')
    error_handler.setFormatter(error_format)
    logger.addHandler(error_handler)

# Function to get logger
def get_logger():
    return logger

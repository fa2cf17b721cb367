# Puzzle limits
MAX_ISLAND_VALUE = 8
MAX_BRIDGE_COUNT = 2

# Solver parameters
VALIDATE_STEPS = True  # re-check every tactic application
MAX_STEPS = None  # no cap; embedding callers may set one

# Logging configuration
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

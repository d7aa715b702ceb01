
CONFIG = {
    "CELL_SIZE": 32,
    "FPS": 60,
    "GRAVITY_BASE_MS": 1000,
    "GRAVITY_STEP_MS": 50,
    "GRAVITY_MIN_MS": 50,
    "CLEAR_HOLD_MS": 500,
    "LINES_PER_LEVEL": 10,
    "RNG_SEED": None,
    "VOLUME": 0.5,
    "START_MUTED": False,
    "LOG_LEVEL": "INFO",
}

"""
Configuration constants for the RC car controller.

All hardware wiring in one place.
"""

# =============================================================================
# HARDWARE PORTS
# =============================================================================

# Arduino servo board
SERVO_BOARD_PORT = "/dev/ttyACM0"
SERVO_BOARD_BAUDRATE = 57600
SERVO_BOARD_POLL_S = 0.1  # How often to drain board status lines
SERVO_BOARD_MAX_LINES = 20  # Status lines read per poll before yielding
SERVO_BOARD_WRITE_TIMEOUT = 0.01  # s, longest a write may block

# =============================================================================
# SERVOS
# =============================================================================

# Throttle (ESC driven as a servo; 90 = stopped)
ACCELERATION_PIN = 9
ACCELERATION_RANGE = (0, 180)
ACCELERATION_TYPE = "standard"
ACCELERATION_START = 90
ACCELERATION_CENTER = False

# Steering
STEERING_PIN = 10
STEERING_RANGE = (40, 100)
STEERING_TYPE = "standard"
STEERING_START = 75
STEERING_CENTER = True  # Overrides STEERING_START with the middle of the range

# =============================================================================
# SAFETY
# =============================================================================

MAX_THROTTLE_MS = 10000  # Longest a single throttle command may run

# =============================================================================
# WEB INTERFACE
# =============================================================================

WEB_HOST = "0.0.0.0"
WEB_PORT = 8080

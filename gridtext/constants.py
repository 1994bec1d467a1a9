"""Constants and configuration for the gridtext engine."""

class EngineConstants:
    """Central configuration constants for the engine."""

    # Tab expansion
    TAB_WIDTH = 8  # Tab stops every 8 cells; must be a power of two
    TAB_GLYPH = "\t"  # Cell that terminates an expanded tab run
    PADDING = ""  # Empty cell reserved for the visual width of a tab

    # Logical key labels accepted by the keystroke editor
    KEY_ENTER = "Enter"
    KEY_DELETE = "Delete"
    KEY_BACKSPACE = "Backspace"
    KEY_TAB = "Tab"

    # Document created at process start
    SEED_LINES = ("Hellocruel", "world")

    # Request limits
    MAX_VIEWPORT_CELLS = 1_000_000  # Width * Height accepted per request

    # HTTP defaults
    DEFAULT_HOST = "127.0.0.1"
    DEFAULT_PORT = 8080
    DEFAULT_LOG_LEVEL = "info"

    # Console frontend
    MIN_TERMINAL_WIDTH = 20
    STATUS_INSERT = "INS"
    STATUS_OVERWRITE = "OVR"

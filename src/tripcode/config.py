# Shared tripcode constants

DEFAULT_FORMAT = "4chan"

# Token emitted by the auto-selecting 2ch/2ch.sc formats for undefined passwords.
ERROR_TRIPCODE = "???"

# Printed in front of tripcodes by the CLI when --prefix is given.
TRIPCODE_PREFIX = "!"

# Passwords this many bytes long or longer take the 2ch "long" paths.
LONG_PASSWORD_THRESHOLD = 12

# --- Nama key (raw key) passwords ---
RAW_KEY_MARKER = b"#"
RAW_KEY_HEX_DIGITS = 16
RAW_KEY_MAX_SALT = 2

# --- 2ch.sc passwords ---
SC_MARKER = b"$"

# --- Environment ---
# These can be set in the shell or monkeypatched in tests.
FORMAT_ENV = "TRIPCODE_TYPE"
LOG_LEVEL_ENV = "TRIPCODE_LOG_LEVEL"
DEBUG_ENV = "TRIPCODE_DEBUG"
DEFAULT_LOG_LEVEL = "WARNING"

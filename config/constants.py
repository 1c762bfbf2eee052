import os

####################################################################################################
# META & VERSIONING
####################################################################################################
APP_NAME = "funscript-kit"
APP_VERSION = "0.1.0"

# --- Component Versions ---
RDP_PLUGIN_VERSION = "1.1.0"


####################################################################################################
# FILE & PATHS
####################################################################################################
FUNSCRIPT_FILE_EXTENSION = ".funscript"
# Suffix of the temporary file written beside the destination during save
SAVE_TEMP_SUFFIX = ".tmp"

# --- Logging Configuration ---
# Maximum size per log file before rotation (bytes) and number of backups to keep
LOG_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
LOG_BACKUP_COUNT = 3


####################################################################################################
# FUNSCRIPT SCHEMA
####################################################################################################
# Numeric widths accepted by the parser
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
# Integer range orjson can write; clip integers outside it are stored as floats
JSON_INT_MIN = INT64_MIN
JSON_INT_MAX = 2 ** 64 - 1
FLOAT32_MAX = 3.4028234663852886e38

# Sentinel used by editors for "unset" numeric state
UNSET_INT = -1
UNSET_FLOAT = -1.0


####################################################################################################
# SIMPLIFICATION
####################################################################################################
# Default RDP tolerance in (ms, position) units when none is given to the plugin
DEFAULT_RDP_EPSILON = 8.0
RDP_EPSILON_MIN = 0.0


####################################################################################################
# VIDEO
####################################################################################################
FFPROBE_PATH = os.environ.get("FUNSCRIPT_FFPROBE", "ffprobe")
FFPROBE_TIMEOUT_SECONDS = 30
# MP4 track ids are 1-based; track 1 is the main video track in editor exports
DEFAULT_SAMPLE_TRACK_INDEX = 1

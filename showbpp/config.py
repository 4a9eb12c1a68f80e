"""
Configuration constants for showbpp.
"""
import os

# --- File Type Definitions ---
VIDEO_EXTS = {
    '.mp4', '.mkv', '.avi', '.mov', '.wmv', '.flv', '.webm', '.m4v', '.ts',
    '.mts', '.m2ts', '.mpg', '.mpeg', '.3gp', '.ogv', '.rmvb', '.vob',
}

# --- Marking ---
# Codecs that are already efficient. Files using them are renamed with the
# marker suffix instead of being measured.
OPTIMAL_CODECS = {
    'AV1': '_AV1',
}

# Stems ending with one of these (case-insensitive) were marked on a previous run
SKIPPED_SUFFIXES = tuple(OPTIMAL_CODECS.values())

UNKNOWN_CODEC = "UNKNOWN"

# --- BPP Thresholds ---
# Below CAUTION is fine, CAUTION..HIGH is borderline, HIGH and above is worth re-encoding
BPP_CAUTION = 0.10
BPP_HIGH = 0.15

# Tag some muxers (mkvmerge) write when the stream has no bit_rate field
BPS_TAG = "BPS"

# --- Probing ---
FFPROBE_ENV_VAR = "SHOWBPP_FFPROBE"
FFPROBE_BIN = os.environ.get(FFPROBE_ENV_VAR, "ffprobe")
FFPROBE_ARGS = ["-v", "quiet", "-print_format", "json", "-show_streams", "-show_format"]

# --- CLI ---
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

# Keeps a drag-and-drop launch window open long enough to read the usage text
USAGE_DELAY_SEC = 600

USAGE_TEXT = (
    "Please pass at least one video file or folder as an argument.\n\n"
    "showbpp computes the BPP (bits per pixel) of each video to help decide "
    "whether it is worth re-encoding. Above 15% it is usually worth "
    "converting to H.265/AV1 to save storage space.\n\n"
    "Drag video files or folders onto the program icon; several can be "
    "dropped at once.\n\n"
    "showbpp needs ffprobe (part of ffmpeg). Put ffprobe next to this "
    "program, add its folder to PATH, or point SHOWBPP_FFPROBE at it.\n\n"
    "ffmpeg builds: https://www.gyan.dev/ffmpeg/builds"
)

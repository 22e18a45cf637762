"""Global configuration: format constants, thresholds, defaults."""

# Trio document grammar
SECTION_SEPARATOR = "---"
COMMENT_PREFIX = "//"
TAB_REPLACEMENT = "  "

# Record tags consumed by point projection
DISPLAY_TAG = "dis"
REFERENCE_TAG = "bacnetCur"
KIND_TAG = "kind"

# File extensions stripped before classification
CLASSIFIABLE_EXTENSIONS = ("trio", "csv", "json", "txt")

UNKNOWN_EQUIPMENT = "Unknown"

# Classifier confidences
VENDOR_MODEL_CONFIDENCE = 0.95
PREFIX_CONFIDENCE = 0.9
MAX_ALTERNATIVES = 3

# Normalization
UNMATCHED_TOKEN_CONFIDENCE = 0.1
EQUIPMENT_CONTEXT_BOOST = 0.10
UNITS_CONTEXT_BOOST = 0.10
VENDOR_CONTEXT_BOOST = 0.05
MANUAL_REVIEW_THRESHOLD = 0.7
SUGGESTION_THRESHOLD = 0.8

# Compliance
MAX_COMPLIANCE_SCORE = 100

# Batch processing defaults
DEFAULT_CONCURRENCY = 5
DEFAULT_MAX_POINTS_PER_EQUIPMENT = 1000
LOW_CLASSIFICATION_CONFIDENCE = 0.5

"""Constants and shared configuration for the readme_builder package."""

# Placeholder token syntax
TOKEN_OPEN = "{{"
TOKEN_CLOSE = "}}"

# Recognized substitution keys
VALUE_KEYS = (
    "CLI_NAME",
    "VERSION",
    "TAGLINE",
    "QUOTE",
    "QUOTE_AUTHOR",
    "BREW_LINK",
    "EMOJI",
)

# Tree block marker
TREE_KEY = "FOLDER_TREE"
TREE_MARKER = TOKEN_OPEN + TREE_KEY + TOKEN_CLOSE

# Template-authoring notes that never reach the output
INTERNAL_COMMENT_MARKER = "# ---"

# Template fragments
FRAGMENT_PREFIX = "readme_"
FRAGMENT_GLOB = FRAGMENT_PREFIX + "*"

CODE_FENCE = "```"

# Tree sources
PREFERRED_TREE_TOOL = "eza"
FALLBACK_TREE_TOOL = "tree"
TREE_UNAVAILABLE_TEXT = "(directory tree unavailable)"
TREE_SCRATCH_FILE = "tree.txt"

# Leading glyphs of informational lines printed by tree tools
NOISE_GLYPHS = ("ℹ", "⚠", "✔", "✖", "💡", "🔍")

# Advisory banners
FALLBACK_BANNER = (
    f"> ⚠️ `{PREFERRED_TREE_TOOL}` was not found, so this tree was generated with `{FALLBACK_TREE_TOOL}`.",
    f"> Install it with `brew install {PREFERRED_TREE_TOOL}` for a cleaner listing.",
)
UNAVAILABLE_BANNER = (
    f"> ⚠️ Neither `{PREFERRED_TREE_TOOL}` nor `{FALLBACK_TREE_TOOL}` is installed, so the directory tree could not be listed.",
)

# Configuration
DEFAULT_CONFIG_FILE = ".readme-builder.yaml"
DEFAULT_TEMPLATE_DIR = "templates"
DEFAULT_OUTPUT_FILE = "README.md"
ENV_PREFIX = "README_BUILDER_"
UNKNOWN_VERSION = "unknown"

# Exit codes
EXIT_SUCCESS = 0  # README written, or in sync (check mode)
EXIT_DIFF_DETECTED = 1  # README out of sync in check mode
EXIT_ERROR = 2  # Configuration error or missing fragments
